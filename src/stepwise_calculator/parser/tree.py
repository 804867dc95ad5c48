"""Expression tree built by the parser and reduced by the evaluator."""
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from stepwise_calculator.lexer.symbols import TokenKind
from stepwise_calculator.lexer.tokens import Token


class ExpressionNode(BaseModel):
    """
    Node of an expression tree.

    Shape invariants:
        - a literal has no children
        - a unary operator or function has no left child and a right child
        - a binary operator or function has both children

    Children are owned by their parent; the evaluator relinks them in place.
    """

    token: Token = Field(..., description="Literal, operator or function token")
    left: Optional["ExpressionNode"] = Field(default=None, description="Left operand")
    right: Optional["ExpressionNode"] = Field(default=None, description="Right operand")

    @model_validator(mode="after")
    def children_must_match_token(self) -> "ExpressionNode":
        """Enforce the shape invariants."""
        token = self.token
        if token.kind is TokenKind.LITERAL:
            if self.left is not None or self.right is not None:
                raise ValueError("A literal node cannot have children")
        elif token.is_unary:
            if self.left is not None or self.right is None:
                raise ValueError(f"Unary '{token}' needs exactly a right operand")
        elif token.is_operator or token.is_function:
            if self.left is None or self.right is None:
                raise ValueError(f"Binary '{token}' needs two operands")
        else:
            raise ValueError(f"'{token}' cannot appear in an expression tree")
        return self

    @classmethod
    def leaf(cls, token: Token) -> "ExpressionNode":
        return cls(token=token)

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def count_internal(self) -> int:
        """Number of operator and function nodes, i.e. the reduction steps left."""
        if self.is_leaf:
            return 0
        return 1 + sum(child.count_internal() for child in (self.left, self.right) if child is not None)

    def render(self) -> str:
        """
        Render the tree fully parenthesized.

        Examples:
            - 3 * 5 - 2    -> ((3 * 5) - 2)
            - -3 + max(1, 2) -> ((-3) + max(1,2))
        """
        token = self.token
        if token.kind is TokenKind.LITERAL:
            return token.text

        if token.is_function:
            arguments = [child.render() for child in (self.left, self.right) if child is not None]
            return f"{token.text}({','.join(arguments)})"

        if self.left is None:
            return f"({token.text}{self.right.render()})"
        return f"({self.left.render()} {token.text} {self.right.render()})"

    def __str__(self) -> str:
        return self.render()


ExpressionNode.model_rebuild()
