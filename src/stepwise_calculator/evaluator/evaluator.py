"""Reduce an expression tree one operator at a time."""
import math
import sys
from typing import Callable, Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from stepwise_calculator.common.errors import InvalidExpressionError
from stepwise_calculator.common.logger import logger
from stepwise_calculator.common.settings import CalculatorSettings
from stepwise_calculator.lexer.symbols import TokenKind, apply_operator
from stepwise_calculator.lexer.tokens import Token
from stepwise_calculator.parser.tree import ExpressionNode


class StepwiseEvaluator(BaseModel):
    """
    Evaluate an expression tree step by step.

    Each step finds the next reducible subtree (an operator or function whose
    operands are literals), computes it, and puts a literal holding the
    formatted result in its place. The tree loses one internal node per step,
    so evaluation always ends on a single literal.

    Example: 3 * (5 - 2)

            *           *
           / \\   ->   / \\   ->   9
          3   -       3   3
             / \\
            5   2
    """

    # Make the Pydantic instance immutable (read-only)
    model_config = ConfigDict(frozen=True)

    precision: int = Field(default=15, ge=0, description="Decimals used for non-integral results")
    epsilon: float = Field(default=sys.float_info.epsilon, gt=0, description="Fractional part below which a result is integral")

    @classmethod
    def from_settings(cls, settings: CalculatorSettings) -> "StepwiseEvaluator":
        return cls(precision=settings.precision, epsilon=settings.epsilon)

    @staticmethod
    def find_reducible(root: ExpressionNode) -> Tuple[ExpressionNode, Optional[ExpressionNode]]:
        """
        Locate the next subtree to reduce and its parent.

        Descend from the root, preferring the right child, as long as the child
        taken is itself an operator or function.

        :param ExpressionNode root: Root of a tree with at least one internal node

        :return: Node to reduce and its parent (None when it is the root)
        :rtype: Tuple[ExpressionNode, Optional[ExpressionNode]]
        """
        node, parent = root, None
        while True:
            if node.right is not None and node.right.right is not None:
                parent, node = node, node.right
            elif node.left is not None and node.left.right is not None:
                parent, node = node, node.left
            else:
                return node, parent

    def format_value(self, value: float) -> str:
        """
        Format a result as literal text.

        :param float value: Computed value

        :return: No decimals when the fractional part is below epsilon,
                 ``precision`` decimals otherwise; "inf", "-inf" or "nan" for
                 non-finite values
        :rtype: str
        """
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        if value - math.floor(value) < self.epsilon:
            return f"{value:.0f}"
        return f"{value:.{self.precision}f}"

    def reduce_step(self, root: ExpressionNode) -> ExpressionNode:
        """
        Perform one reduction step.

        :param ExpressionNode root: Root of the tree

        :return: Root of the updated tree (a new node if the root itself was reduced)
        :rtype: ExpressionNode
        :raises InvalidExpressionError: If the tree is malformed
        """
        if root.is_leaf:
            return root

        target, parent = self.find_reducible(root)
        if target.right is None:
            raise InvalidExpressionError(f"Malformed expression tree at '{target.token}'")

        lhs = self._literal_value(target.left) if target.left is not None else 0.0
        rhs = self._literal_value(target.right)

        token = target.token
        if token.is_function:
            value = token.function.apply(lhs, rhs)
        else:
            value = apply_operator(token.kind, lhs, rhs)

        leaf = ExpressionNode.leaf(Token.literal(self.format_value(value)))

        if parent is None:
            return leaf
        if parent.left is target:
            parent.left = leaf
        else:
            parent.right = leaf
        return root

    def steps(self, root: ExpressionNode) -> Iterator[ExpressionNode]:
        """
        Reduce the tree to a single literal.

        :param ExpressionNode root: Root of the tree

        :return: Iterator over the root after every step; empty for a literal
        :rtype: Iterator[ExpressionNode]
        """
        step = 0
        while not root.is_leaf:
            root = self.reduce_step(root)
            step += 1
            logger.debug(f"🧮 Step {step}: {root}")
            yield root

    def evaluate(
        self,
        root: ExpressionNode,
        on_step: Optional[Callable[[ExpressionNode], None]] = None,
    ) -> ExpressionNode:
        """
        Reduce the tree to a single literal.

        :param ExpressionNode root: Root of the tree
        :param on_step: Called with the root after every step

        :return: The final literal node
        :rtype: ExpressionNode
        """
        for root in self.steps(root):
            if on_step is not None:
                on_step(root)
        return root

    @staticmethod
    def _literal_value(node: ExpressionNode) -> float:
        if node.token.kind is not TokenKind.LITERAL:
            raise InvalidExpressionError(f"Malformed expression tree: '{node.token}' is not reduced yet")
        try:
            return float(node.token.text)
        except ValueError as exc:
            raise InvalidExpressionError(f"Invalid literal {node.token.text!r}") from exc
