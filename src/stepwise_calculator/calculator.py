"""Run an expression through the lexer, the parser and the stepwise evaluator."""
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

from stepwise_calculator.common.errors import InvalidExpressionError
from stepwise_calculator.common.logger import logger
from stepwise_calculator.common.models import OperationRequest, OperationResult
from stepwise_calculator.common.settings import CalculatorSettings
from stepwise_calculator.evaluator.evaluator import StepwiseEvaluator
from stepwise_calculator.lexer.lexer import ExpressionLexer
from stepwise_calculator.lexer.sequence import TokenSequence
from stepwise_calculator.parser.parser import ExpressionParser
from stepwise_calculator.parser.tree import ExpressionNode


class StepwiseCalculator(BaseModel):
    """
    Evaluate one arithmetic expression and expose every intermediate tree.

    Pipeline:
        text -> ExpressionLexer -> TokenSequence -> ExpressionParser -> tree
             -> StepwiseEvaluator -> single literal
    """

    model_config = ConfigDict(frozen=True)

    settings: CalculatorSettings = Field(default_factory=CalculatorSettings, description="Calculator configuration")

    @property
    def evaluator(self) -> StepwiseEvaluator:
        return StepwiseEvaluator.from_settings(self.settings)

    def tokenize(self, expression: str) -> TokenSequence:
        """
        Validate and tokenize an expression.

        :param str expression: Arithmetic expression

        :return: Tokens in lexical order
        :rtype: TokenSequence
        :raises ValidationError: If the expression is blank
        :raises InvalidExpressionError: If the expression is too long or has a stray character
        :raises UnknownFunctionError: If an identifier is not a known function
        """
        request = OperationRequest(expression=expression)
        limit = self.settings.max_expression_length
        if len(request.expression) > limit:
            raise InvalidExpressionError(f"Expression longer than {limit} characters")
        return ExpressionLexer.tokenize(request.expression)

    def parse(self, expression: str) -> ExpressionNode:
        """Tokenize and parse an expression into its tree."""
        return ExpressionParser.parse(self.tokenize(expression))

    def trace(self, expression: str) -> Iterator[str]:
        """
        Yield the rendered parse tree, then the rendered tree after every step.

        :param str expression: Arithmetic expression

        :return: Renderings, the last one being the final literal
        :rtype: Iterator[str]
        """
        root = self.parse(expression)
        yield root.render()
        for step in self.evaluator.steps(root):
            yield step.render()

    def run(self, expression: str) -> OperationResult:
        """
        Evaluate an expression completely.

        :param str expression: Arithmetic expression

        :return: Parsed tree, steps and final result
        :rtype: OperationResult
        """
        logger.info(f"🏁 Evaluating {expression!r}")
        tree, *steps = self.trace(expression)
        result = steps[-1] if steps else tree
        logger.info(f"✅ {expression!r} = {result}")
        return OperationResult(
            expression=expression,
            tree=tree,
            steps=steps,
            result=result,
            value=float(result),
        )
