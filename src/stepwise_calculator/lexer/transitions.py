"""
Tables driving the lexer's deterministic finite automaton.

The automaton recognizes:
    - function names (identifiers): [A-Za-z][A-Za-z0-9]*
    - numbers such as 3.12, 5, .5 or 6.23e12:
        ([0-9]+(\\.[0-9]*)? | \\.[0-9]+)([eE][+-]?[0-9]+)?
    - arithmetic operators: ^ * / + - %
    - parentheses and the function argument separator ","

Each final state carries a signed token code. A positive code means the
character that reached the state belongs to the lexeme. A negative code means
the automaton read one character past the lexeme: that character must be
pushed back. The token kind is the absolute value of the code.
"""
from enum import IntEnum
import string
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from stepwise_calculator.lexer.symbols import TokenKind


class SymbolClass(IntEnum):
    LETTER = 0
    EXPONENT_MARK = 1
    DIGIT = 2
    DOT = 3
    LPAREN = 4
    RPAREN = 5
    CARET = 6
    STAR = 7
    SLASH = 8
    PLUS = 9
    MINUS = 10
    PERCENT = 11
    COMMA = 12
    END = 13
    OTHER = 14


class State(IntEnum):
    START = 0
    LPAREN = 1
    RPAREN = 2
    CARET = 3
    STAR = 4
    SLASH = 5
    PLUS = 6
    MINUS = 7
    PERCENT = 8
    COMMA = 9
    IDENTIFIER = 10
    IDENTIFIER_END = 11
    INTEGER = 12
    INTEGER_END = 13
    FRACTION = 14
    EXPONENT_MARK = 15
    EXPONENT_SIGN = 16
    EXPONENT_DIGITS = 17
    REAL_END = 18
    LEADING_DOT = 19


_PUNCTUATION: Dict[str, SymbolClass] = {
    ".": SymbolClass.DOT,
    "(": SymbolClass.LPAREN,
    ")": SymbolClass.RPAREN,
    "^": SymbolClass.CARET,
    "*": SymbolClass.STAR,
    "/": SymbolClass.SLASH,
    "+": SymbolClass.PLUS,
    "-": SymbolClass.MINUS,
    "%": SymbolClass.PERCENT,
    ",": SymbolClass.COMMA,
}

# Single-character tokens reachable straight from START
_SINGLE_CHARACTER_STATES: Dict[SymbolClass, State] = {
    SymbolClass.LPAREN: State.LPAREN,
    SymbolClass.RPAREN: State.RPAREN,
    SymbolClass.CARET: State.CARET,
    SymbolClass.STAR: State.STAR,
    SymbolClass.SLASH: State.SLASH,
    SymbolClass.PLUS: State.PLUS,
    SymbolClass.MINUS: State.MINUS,
    SymbolClass.PERCENT: State.PERCENT,
    SymbolClass.COMMA: State.COMMA,
}


def classify(char: str) -> SymbolClass:
    """
    Map a character to its symbol class. The empty string stands for end of input.

    :param str char: One character, or "" at end of input

    :return: Symbol class used to index the transition table
    :rtype: SymbolClass
    """
    if not char:
        return SymbolClass.END
    if char in "eE":
        return SymbolClass.EXPONENT_MARK
    if char in string.ascii_letters:
        return SymbolClass.LETTER
    if char in string.digits:
        return SymbolClass.DIGIT
    return _PUNCTUATION.get(char, SymbolClass.OTHER)


def _build_transitions() -> Mapping[Tuple[State, SymbolClass], State]:
    table: Dict[Tuple[State, SymbolClass], State] = {}

    for symbol, state in _SINGLE_CHARACTER_STATES.items():
        table[State.START, symbol] = state
    table[State.START, SymbolClass.DOT] = State.LEADING_DOT
    table[State.START, SymbolClass.LETTER] = State.IDENTIFIER
    table[State.START, SymbolClass.EXPONENT_MARK] = State.IDENTIFIER
    table[State.START, SymbolClass.DIGIT] = State.INTEGER

    # Any symbol outside the lexeme ends it; overridden below for symbols inside it
    for symbol in SymbolClass:
        table[State.IDENTIFIER, symbol] = State.IDENTIFIER_END
        table[State.INTEGER, symbol] = State.INTEGER_END
        table[State.FRACTION, symbol] = State.REAL_END
        table[State.EXPONENT_DIGITS, symbol] = State.REAL_END

    for symbol in (SymbolClass.LETTER, SymbolClass.EXPONENT_MARK, SymbolClass.DIGIT):
        table[State.IDENTIFIER, symbol] = State.IDENTIFIER

    table[State.INTEGER, SymbolClass.DIGIT] = State.INTEGER
    table[State.INTEGER, SymbolClass.DOT] = State.FRACTION
    table[State.INTEGER, SymbolClass.EXPONENT_MARK] = State.EXPONENT_MARK
    table[State.LEADING_DOT, SymbolClass.DIGIT] = State.FRACTION
    table[State.FRACTION, SymbolClass.DIGIT] = State.FRACTION
    table[State.FRACTION, SymbolClass.EXPONENT_MARK] = State.EXPONENT_MARK
    table[State.EXPONENT_MARK, SymbolClass.PLUS] = State.EXPONENT_SIGN
    table[State.EXPONENT_MARK, SymbolClass.MINUS] = State.EXPONENT_SIGN
    table[State.EXPONENT_MARK, SymbolClass.DIGIT] = State.EXPONENT_DIGITS
    table[State.EXPONENT_SIGN, SymbolClass.DIGIT] = State.EXPONENT_DIGITS
    table[State.EXPONENT_DIGITS, SymbolClass.DIGIT] = State.EXPONENT_DIGITS

    return MappingProxyType(table)


TRANSITIONS: Mapping[Tuple[State, SymbolClass], State] = _build_transitions()

FINALS: Mapping[State, int] = MappingProxyType({
    State.LPAREN: TokenKind.LPAREN,
    State.RPAREN: TokenKind.RPAREN,
    State.CARET: TokenKind.EXPONENT,
    State.STAR: TokenKind.MULTIPLY,
    State.SLASH: TokenKind.DIVIDE,
    State.PLUS: TokenKind.PLUS,
    State.MINUS: TokenKind.MINUS,
    State.PERCENT: TokenKind.MODULO,
    State.COMMA: TokenKind.ARG_SEPARATOR,
    State.IDENTIFIER_END: -TokenKind.FUNCTION,
    State.INTEGER_END: -TokenKind.LITERAL,
    State.REAL_END: -TokenKind.LITERAL,
})


def next_state(state: State, char: str) -> Optional[State]:
    """Return the state reached from ``state`` on ``char``, or None if there is no transition."""
    return TRANSITIONS.get((state, classify(char)))


def final_code(state: State) -> int:
    """Return the signed token code of ``state``, 0 if the state is not final."""
    return FINALS.get(state, 0)
