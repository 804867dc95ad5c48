"""Static knowledge about token kinds, operators and functions."""
from enum import Enum, IntEnum
import math
import operator
from typing import Callable, Dict

from pydantic import BaseModel, ConfigDict, Field

from stepwise_calculator.common.errors import UnknownFunctionError


class TokenKind(IntEnum):
    """
    Kind of a lexical token.

    The values double as the codes stored in the lexer's final-state table.
    MINUS only exists at the lexical level: the lexer resolves it into
    UNARY_MINUS or BINARY_MINUS before building a token.
    """

    LITERAL = 1
    FUNCTION = 2
    ARG_SEPARATOR = 3
    LPAREN = 4
    RPAREN = 5
    EXPONENT = 6
    MULTIPLY = 7
    DIVIDE = 8
    PLUS = 9
    MINUS = 10
    UNARY_MINUS = 11
    BINARY_MINUS = 12
    MODULO = 13

    @property
    def is_operator(self) -> bool:
        """True for every arithmetic operator kind, minus included."""
        return self in OPERATOR_KINDS


OPERATOR_KINDS = frozenset({
    TokenKind.EXPONENT,
    TokenKind.MULTIPLY,
    TokenKind.DIVIDE,
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.UNARY_MINUS,
    TokenKind.BINARY_MINUS,
    TokenKind.MODULO,
})


class Associativity(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Operator(BaseModel):
    """Precedence and associativity of an arithmetic operator."""

    model_config = ConfigDict(frozen=True)

    precedence: int = Field(..., ge=1, description="Higher binds tighter")
    associativity: Associativity = Field(..., description="Grouping of equal-precedence operators")
    symbol: str = Field(..., min_length=1, max_length=1, description="Operator character")

    def yields_to(self, incoming: "Operator") -> bool:
        """
        Tell whether this operator, sitting on the operator stack, must be
        reduced before ``incoming`` is pushed.

        :param Operator incoming: Operator just read from the input

        :return: True if this operator binds at least as tightly (left-associative
                 ``incoming``) or strictly tighter (right-associative ``incoming``)
        :rtype: bool
        """
        if incoming.associativity is Associativity.LEFT:
            return incoming.precedence <= self.precedence
        return incoming.precedence < self.precedence


# Mapping of operator symbols to their properties. Minus is left out on purpose:
# one symbol maps to two operators depending on context.
OPERATORS: Dict[str, Operator] = {
    "^": Operator(precedence=4, associativity=Associativity.RIGHT, symbol="^"),
    "*": Operator(precedence=3, associativity=Associativity.LEFT, symbol="*"),
    "/": Operator(precedence=3, associativity=Associativity.LEFT, symbol="/"),
    "%": Operator(precedence=3, associativity=Associativity.LEFT, symbol="%"),
    "+": Operator(precedence=2, associativity=Associativity.LEFT, symbol="+"),
}

MINUS_OPERATORS: Dict[TokenKind, Operator] = {
    TokenKind.UNARY_MINUS: Operator(precedence=4, associativity=Associativity.LEFT, symbol="-"),
    TokenKind.BINARY_MINUS: Operator(precedence=2, associativity=Associativity.LEFT, symbol="-"),
}


def lookup_operator(kind: TokenKind, symbol: str) -> Operator:
    """
    Return the operator record for a token kind and its symbol.

    :param TokenKind kind: Operator token kind
    :param str symbol: Operator character as lexed

    :return: Operator properties
    :rtype: Operator
    :raises KeyError: If the pair does not name an operator
    """
    if kind in MINUS_OPERATORS:
        return MINUS_OPERATORS[kind]
    return OPERATORS[symbol]


def _ieee(fn: Callable[..., float], *args: float) -> float:
    # Math errors become IEEE special values instead of exceptions
    try:
        return fn(*args)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def _divide(lhs: float, rhs: float) -> float:
    if rhs == 0:
        if lhs == 0 or math.isnan(lhs):
            return math.nan
        return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)
    return lhs / rhs


def _power(base: float, exponent: float) -> float:
    if base == 0 and exponent < 0:
        return math.inf
    try:
        return math.pow(base, exponent)
    except OverflowError:
        odd_integer = exponent.is_integer() and exponent % 2 == 1
        return -math.inf if base < 0 and odd_integer else math.inf


def _negate(lhs: float, rhs: float) -> float:
    return -rhs


def _ln(x: float) -> float:
    if x == 0:
        return -math.inf
    return math.log(x)


def _fmax(lhs: float, rhs: float) -> float:
    if math.isnan(lhs):
        return rhs
    if math.isnan(rhs):
        return lhs
    return max(lhs, rhs)


def _fmin(lhs: float, rhs: float) -> float:
    if math.isnan(lhs):
        return rhs
    if math.isnan(rhs):
        return lhs
    return min(lhs, rhs)


# Operator semantics; unary minus ignores its (absent) left operand
OPERATIONS: Dict[TokenKind, Callable[[float, float], float]] = {
    TokenKind.PLUS: operator.add,
    TokenKind.BINARY_MINUS: operator.sub,
    TokenKind.UNARY_MINUS: _negate,
    TokenKind.MULTIPLY: operator.mul,
    TokenKind.DIVIDE: _divide,
    TokenKind.EXPONENT: _power,
    TokenKind.MODULO: math.remainder,
}


def apply_operator(kind: TokenKind, lhs: float, rhs: float) -> float:
    """
    Compute ``lhs <op> rhs`` for an operator kind.

    :param TokenKind kind: Operator token kind
    :param float lhs: Left operand (0 for unary minus)
    :param float rhs: Right operand

    :return: Result, possibly inf or nan
    :rtype: float
    """
    return _ieee(OPERATIONS[kind], lhs, rhs)


class FunctionId(str, Enum):
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SQRT = "sqrt"
    ABS = "abs"
    LN = "ln"
    MAX = "max"
    MIN = "min"


class Arity(IntEnum):
    UNARY = 1
    BINARY = 2


UNARY_FUNCTIONS: Dict[FunctionId, Callable[[float], float]] = {
    FunctionId.SIN: math.sin,
    FunctionId.COS: math.cos,
    FunctionId.TAN: math.tan,
    FunctionId.SQRT: math.sqrt,
    FunctionId.ABS: math.fabs,
    FunctionId.LN: _ln,
}

BINARY_FUNCTIONS: Dict[FunctionId, Callable[[float, float], float]] = {
    FunctionId.MAX: _fmax,
    FunctionId.MIN: _fmin,
}


class Function(BaseModel):
    """A known mathematical function; its arity follows from its identity."""

    model_config = ConfigDict(frozen=True)

    identity: FunctionId = Field(..., description="Which function this is")

    @classmethod
    def from_name(cls, name: str) -> "Function":
        """
        Build a function from its name, ignoring case.

        :param str name: Identifier as lexed

        :return: The matching function
        :rtype: Function
        :raises UnknownFunctionError: If the name is not a known function
        """
        try:
            return cls(identity=FunctionId(name.lower()))
        except ValueError as exc:
            raise UnknownFunctionError(name) from exc

    @property
    def name(self) -> str:
        return self.identity.value

    @property
    def arity(self) -> Arity:
        if self.identity in UNARY_FUNCTIONS:
            return Arity.UNARY
        return Arity.BINARY

    def apply(self, lhs: float, rhs: float) -> float:
        """
        Evaluate the function. Unary functions only look at ``rhs``.

        :param float lhs: First argument of a binary function
        :param float rhs: Sole argument of a unary function, second of a binary one

        :return: Result, possibly inf or nan
        :rtype: float
        """
        if self.arity is Arity.UNARY:
            return _ieee(UNARY_FUNCTIONS[self.identity], rhs)
        return _ieee(BINARY_FUNCTIONS[self.identity], lhs, rhs)
