"""Build an expression tree from tokens with the shunting-yard algorithm."""
from typing import Iterable, Union

from stepwise_calculator.common.errors import InvalidExpressionError, UnmatchedParenthesisError
from stepwise_calculator.common.logger import logger
from stepwise_calculator.lexer.sequence import TokenSequence
from stepwise_calculator.lexer.symbols import TokenKind
from stepwise_calculator.lexer.tokens import Token
from stepwise_calculator.parser.stack import Stack
from stepwise_calculator.parser.tree import ExpressionNode


class ExpressionParser:
    """
    Parse a token sequence into an expression tree.

    The Shunting-yard algorithm usually emits Reverse Polish Notation. Here the
    output stack holds tree nodes instead: every time an operator or function
    leaves the operator stack, it takes its operands off the output stack and
    goes back on it as the root of a subtree.

    While there are tokens to read:
        - literal: push a leaf on the output stack
        - function or "(": push on the operator stack
        - ",": reduce operators until "(" is on top
        - operator: reduce operators that bind at least as tightly
          (strictly tighter for right-associative operators), then push it
        - ")": reduce operators down to "(", drop it, and reduce the function
          owning the parentheses if there is one
    Then reduce everything left on the operator stack.

    Examples:
        - Infix expression: 3 + 4 * 2
        - Tree: (3 + (4 * 2))
    """

    @staticmethod
    def parse(tokens: Union[TokenSequence, Iterable[Token]]) -> ExpressionNode:
        """
        Build the expression tree for a token sequence.

        :param tokens: Tokens in lexical order; a TokenSequence is consumed

        :return: Root of the expression tree
        :rtype: ExpressionNode
        :raises UnmatchedParenthesisError: If parentheses do not pair up
        :raises InvalidExpressionError: If operands are missing or left over
        """
        operands: Stack[ExpressionNode] = Stack()
        operators: Stack[Token] = Stack()

        stream = tokens.consume() if isinstance(tokens, TokenSequence) else iter(tokens)

        for token in stream:
            kind = token.kind
            if kind is TokenKind.LITERAL:
                operands.push(ExpressionNode.leaf(token))
            elif kind is TokenKind.FUNCTION or kind is TokenKind.LPAREN:
                operators.push(token)
            elif kind is TokenKind.ARG_SEPARATOR:
                ExpressionParser._reduce_to_parenthesis(operands, operators)
            elif token.is_operator:
                ExpressionParser._push_operator(token, operands, operators)
            elif kind is TokenKind.RPAREN:
                ExpressionParser._close_parenthesis(operands, operators)

        while not operators.is_empty():
            if operators.top().kind is TokenKind.LPAREN:
                raise UnmatchedParenthesisError()
            ExpressionParser._reduce(operands, operators)

        if operands.is_empty():
            raise InvalidExpressionError("Empty expression")

        root = operands.pop()
        if not operands.is_empty():
            raise InvalidExpressionError()

        logger.debug(f"🌳 Parsed expression tree: {root}")
        return root

    @staticmethod
    def _push_operator(token: Token, operands: Stack[ExpressionNode], operators: Stack[Token]) -> None:
        """
        Reduce the operators that must be applied before ``token``, then push it.

        A prefix operator has no left operand to compete for, so nothing is
        reduced before it.
        """
        if not token.is_unary:
            incoming = token.operator
            while (
                not operators.is_empty()
                and operators.top().is_operator
                and operators.top().operator.yields_to(incoming)
            ):
                ExpressionParser._reduce(operands, operators)
        operators.push(token)

    @staticmethod
    def _reduce_to_parenthesis(operands: Stack[ExpressionNode], operators: Stack[Token]) -> None:
        # Leaves the "(" in place
        while not operators.is_empty() and operators.top().kind is not TokenKind.LPAREN:
            ExpressionParser._reduce(operands, operators)

    @staticmethod
    def _close_parenthesis(operands: Stack[ExpressionNode], operators: Stack[Token]) -> None:
        ExpressionParser._reduce_to_parenthesis(operands, operators)
        if operators.is_empty():
            raise UnmatchedParenthesisError()

        # Discard the "(" marker
        operators.pop()

        # Attach the parenthesized operand(s) to their function
        if not operators.is_empty() and operators.top().is_function:
            ExpressionParser._reduce(operands, operators)

    @staticmethod
    def _reduce(operands: Stack[ExpressionNode], operators: Stack[Token]) -> None:
        """
        Pop the top operator or function and push it back as a subtree root.

        :param Stack operands: Output stack of tree nodes
        :param Stack operators: Operator stack

        :raises InvalidExpressionError: If an operand is missing
        """
        root = operators.pop()

        if operands.is_empty():
            raise InvalidExpressionError(f"Invalid expression: missing operand for '{root}'")
        right = operands.pop()

        if root.is_unary:
            operands.push(ExpressionNode(token=root, right=right))
            return

        if operands.is_empty():
            raise InvalidExpressionError(f"Invalid expression: missing operand for '{root}'")
        left = operands.pop()

        operands.push(ExpressionNode(token=root, left=left, right=right))
