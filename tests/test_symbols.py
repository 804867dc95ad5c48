"""Test operator and function tables."""
import math

import pytest

from stepwise_calculator.common.errors import UnknownFunctionError
from stepwise_calculator.lexer.symbols import (
    MINUS_OPERATORS,
    OPERATORS,
    Arity,
    Associativity,
    Function,
    FunctionId,
    TokenKind,
    apply_operator,
    lookup_operator,
)


@pytest.mark.parametrize("symbol,precedence,associativity", [
    ("^", 4, Associativity.RIGHT),
    ("*", 3, Associativity.LEFT),
    ("/", 3, Associativity.LEFT),
    ("%", 3, Associativity.LEFT),
    ("+", 2, Associativity.LEFT),
])
def test_operator_table(symbol, precedence, associativity) -> None:
    """Each operator symbol has the documented precedence and associativity."""
    op = OPERATORS[symbol]
    assert op.precedence == precedence
    assert op.associativity is associativity
    assert op.symbol == symbol


def test_minus_is_special_cased() -> None:
    """Minus is not in the symbol table and maps to two operators."""
    assert "-" not in OPERATORS
    assert MINUS_OPERATORS[TokenKind.UNARY_MINUS].precedence == 4
    assert MINUS_OPERATORS[TokenKind.BINARY_MINUS].precedence == 2
    assert lookup_operator(TokenKind.UNARY_MINUS, "-") is MINUS_OPERATORS[TokenKind.UNARY_MINUS]


@pytest.mark.parametrize("top,incoming,expected", [
    ("*", "+", True),    # tighter operator on the stack is reduced first
    ("+", "*", False),
    ("+", "+", True),    # left-associative: equal precedence reduces
    ("^", "^", False),   # right-associative: equal precedence waits
    ("^", "*", True),
])
def test_yields_to(top, incoming, expected) -> None:
    """yields_to applies the precedence/associativity tie-breaking rule."""
    assert OPERATORS[top].yields_to(OPERATORS[incoming]) is expected


@pytest.mark.parametrize("kind", [
    TokenKind.EXPONENT,
    TokenKind.MULTIPLY,
    TokenKind.DIVIDE,
    TokenKind.PLUS,
    TokenKind.UNARY_MINUS,
    TokenKind.BINARY_MINUS,
    TokenKind.MODULO,
])
def test_operator_kinds(kind) -> None:
    assert kind.is_operator


@pytest.mark.parametrize("kind", [TokenKind.LITERAL, TokenKind.FUNCTION, TokenKind.LPAREN, TokenKind.ARG_SEPARATOR])
def test_non_operator_kinds(kind) -> None:
    assert not kind.is_operator


@pytest.mark.parametrize("name,arity", [
    ("sin", Arity.UNARY),
    ("cos", Arity.UNARY),
    ("tan", Arity.UNARY),
    ("sqrt", Arity.UNARY),
    ("abs", Arity.UNARY),
    ("ln", Arity.UNARY),
    ("max", Arity.BINARY),
    ("min", Arity.BINARY),
])
def test_function_arity_follows_identity(name, arity) -> None:
    """Arity is derived from the function identity."""
    assert Function.from_name(name).arity is arity


def test_function_names_ignore_case() -> None:
    function = Function.from_name("SqRt")
    assert function.identity is FunctionId.SQRT
    assert function.name == "sqrt"


def test_unknown_function() -> None:
    """Unknown names raise UnknownFunctionError."""
    with pytest.raises(UnknownFunctionError, match="'foo' is not a function"):
        Function.from_name("foo")


@pytest.mark.parametrize("kind,lhs,rhs,expected", [
    (TokenKind.PLUS, 2.0, 3.0, 5.0),
    (TokenKind.BINARY_MINUS, 2.0, 3.0, -1.0),
    (TokenKind.UNARY_MINUS, 0.0, 3.0, -3.0),
    (TokenKind.MULTIPLY, 2.0, 3.0, 6.0),
    (TokenKind.DIVIDE, 3.0, 2.0, 1.5),
    (TokenKind.EXPONENT, 2.0, 10.0, 1024.0),
    (TokenKind.MODULO, 9.0, 4.0, 1.0),
    (TokenKind.MODULO, 7.0, 4.0, -1.0),  # IEEE remainder rounds the quotient to nearest
])
def test_apply_operator(kind, lhs, rhs, expected) -> None:
    assert apply_operator(kind, lhs, rhs) == expected


def test_division_by_zero_follows_ieee() -> None:
    assert apply_operator(TokenKind.DIVIDE, 1.0, 0.0) == math.inf
    assert apply_operator(TokenKind.DIVIDE, -1.0, 0.0) == -math.inf
    assert math.isnan(apply_operator(TokenKind.DIVIDE, 0.0, 0.0))


@pytest.mark.parametrize("name,lhs,rhs,expected", [
    ("sin", 0.0, 0.0, 0.0),
    ("cos", 0.0, 0.0, 1.0),
    ("sqrt", 0.0, 16.0, 4.0),
    ("abs", 0.0, -3.5, 3.5),
    ("ln", 0.0, 1.0, 0.0),
    ("max", 3.0, 5.0, 5.0),
    ("min", 3.0, 5.0, 3.0),
])
def test_function_apply(name, lhs, rhs, expected) -> None:
    assert Function.from_name(name).apply(lhs, rhs) == expected


def test_function_domain_errors_give_nan() -> None:
    assert math.isnan(Function.from_name("sqrt").apply(0.0, -1.0))
    assert math.isnan(Function.from_name("ln").apply(0.0, -1.0))
    assert Function.from_name("ln").apply(0.0, 0.0) == -math.inf
