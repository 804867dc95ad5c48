"""Test class Token."""
from pydantic import ValidationError
import pytest

from stepwise_calculator.common.errors import UnknownFunctionError
from stepwise_calculator.lexer.symbols import OPERATORS, Function, TokenKind
from stepwise_calculator.lexer.tokens import Token


def test_create_literal() -> None:
    token = Token.create(TokenKind.LITERAL, "3.5")
    assert token.payload == "3.5"
    assert str(token) == "3.5"


def test_create_operator() -> None:
    """Operator tokens carry their Operator record."""
    token = Token.create(TokenKind.MULTIPLY, "*")
    assert token.operator == OPERATORS["*"]
    assert token.is_operator
    assert not token.is_unary


def test_create_function() -> None:
    token = Token.create(TokenKind.FUNCTION, "Max")
    assert token.function == Function.from_name("max")
    assert token.is_function
    assert not token.is_unary
    assert str(token) == "max"


def test_create_unknown_function() -> None:
    """Function identity is validated as soon as the token is built."""
    with pytest.raises(UnknownFunctionError):
        Token.create(TokenKind.FUNCTION, "sinh")


@pytest.mark.parametrize("kind,lexeme,unary", [
    (TokenKind.UNARY_MINUS, "-", True),
    (TokenKind.BINARY_MINUS, "-", False),
    (TokenKind.FUNCTION, "sqrt", True),
    (TokenKind.FUNCTION, "min", False),
])
def test_is_unary(kind, lexeme, unary) -> None:
    assert Token.create(kind, lexeme).is_unary is unary


def test_payload_must_match_kind() -> None:
    """A payload of the wrong variant is rejected."""
    with pytest.raises(ValidationError):
        Token(kind=TokenKind.PLUS, payload="+")
    with pytest.raises(ValidationError):
        Token(kind=TokenKind.LITERAL, payload=OPERATORS["+"])


def test_unresolved_minus_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Token(kind=TokenKind.MINUS, payload="-")


def test_tokens_are_immutable() -> None:
    token = Token.literal("1")
    with pytest.raises(ValidationError):
        token.payload = "2"


def test_operator_accessor_on_literal() -> None:
    with pytest.raises(TypeError):
        Token.literal("1").operator
