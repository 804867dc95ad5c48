"""Token model flowing from the lexer through the parser into the tree."""
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from stepwise_calculator.lexer.symbols import (
    Arity,
    Function,
    Operator,
    TokenKind,
    lookup_operator,
)

PUNCTUATION_KINDS = frozenset({TokenKind.ARG_SEPARATOR, TokenKind.LPAREN, TokenKind.RPAREN})


class Token(BaseModel):
    """
    A tagged lexical unit.

    The payload variant is fully determined by the kind:
        - LITERAL: the numeric text, e.g. "3.5e2"
        - operator kinds: an Operator record
        - FUNCTION: a Function record
        - parentheses and comma: the character itself

    Tokens are immutable, so the lexer, the parser stacks and the tree can
    hand them over without copying.
    """

    model_config = ConfigDict(frozen=True)

    kind: TokenKind = Field(..., description="Token kind")
    payload: Union[Operator, Function, str] = Field(..., description="Kind-specific value")

    @model_validator(mode="after")
    def payload_must_match_kind(self) -> "Token":
        """Reject payloads of the wrong variant for the kind."""
        if self.kind is TokenKind.MINUS:
            raise ValueError("MINUS must be resolved to UNARY_MINUS or BINARY_MINUS")
        if self.kind.is_operator:
            expected = Operator
        elif self.kind is TokenKind.FUNCTION:
            expected = Function
        else:
            expected = str
        if not isinstance(self.payload, expected):
            raise ValueError(f"{self.kind.name} token needs a {expected.__name__} payload")
        return self

    @classmethod
    def create(cls, kind: TokenKind, lexeme: str) -> "Token":
        """
        Build a token from a kind and the matching lexeme.

        :param TokenKind kind: Resolved token kind
        :param str lexeme: Text of the token

        :return: The new token
        :rtype: Token
        :raises UnknownFunctionError: If a FUNCTION lexeme is not a known function
        """
        if kind.is_operator:
            return cls(kind=kind, payload=lookup_operator(kind, lexeme))
        if kind is TokenKind.FUNCTION:
            return cls(kind=kind, payload=Function.from_name(lexeme))
        return cls(kind=kind, payload=lexeme)

    @classmethod
    def literal(cls, text: str) -> "Token":
        return cls(kind=TokenKind.LITERAL, payload=text)

    @property
    def is_operator(self) -> bool:
        return self.kind.is_operator

    @property
    def is_function(self) -> bool:
        return self.kind is TokenKind.FUNCTION

    @property
    def is_unary(self) -> bool:
        """True for unary minus and one-argument functions."""
        if self.kind is TokenKind.UNARY_MINUS:
            return True
        return self.is_function and self.function.arity is Arity.UNARY

    @property
    def operator(self) -> Operator:
        if not isinstance(self.payload, Operator):
            raise TypeError(f"{self.kind.name} token has no operator")
        return self.payload

    @property
    def function(self) -> Function:
        if not isinstance(self.payload, Function):
            raise TypeError(f"{self.kind.name} token has no function")
        return self.payload

    @property
    def text(self) -> str:
        """Text of the token as it is rendered."""
        if isinstance(self.payload, Operator):
            return self.payload.symbol
        if isinstance(self.payload, Function):
            return self.payload.name
        return self.payload

    def __str__(self) -> str:
        return self.text
