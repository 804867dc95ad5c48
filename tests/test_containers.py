"""Test classes TokenSequence and Stack."""
import pytest

from stepwise_calculator.lexer.sequence import TokenSequence
from stepwise_calculator.lexer.symbols import TokenKind
from stepwise_calculator.lexer.tokens import Token
from stepwise_calculator.parser.stack import Stack


def test_sequence_keeps_insertion_order() -> None:
    tokens = TokenSequence()
    tokens.append(Token.literal("1"))
    tokens.append(Token.create(TokenKind.PLUS, "+"))
    tokens.append(Token.literal("2"))
    assert len(tokens) == 3
    assert tokens.kinds() == [TokenKind.LITERAL, TokenKind.PLUS, TokenKind.LITERAL]
    assert str(tokens) == "1 + 2"


def test_sequence_is_consumed_once() -> None:
    """Consuming hands every token over and empties the sequence."""
    tokens = TokenSequence([Token.literal("1"), Token.literal("2")])
    assert [token.text for token in tokens.consume()] == ["1", "2"]
    assert tokens.consumed
    assert len(tokens) == 0

    with pytest.raises(RuntimeError):
        tokens.consume()
    with pytest.raises(RuntimeError):
        tokens.append(Token.literal("3"))


def test_sequence_iteration_does_not_consume() -> None:
    tokens = TokenSequence([Token.literal("7")])
    assert [token.text for token in tokens] == ["7"]
    assert not tokens.consumed
    assert len(tokens) == 1


def test_stack_is_lifo() -> None:
    stack: Stack[int] = Stack()
    assert stack.is_empty()
    assert stack.top() is None

    for item in (1, 2, 3):
        stack.push(item)

    assert len(stack) == 3
    assert list(stack) == [3, 2, 1]
    assert stack.top() == 3
    assert stack.pop() == 3
    assert stack.pop() == 2
    assert stack.top() == 1
    assert not stack.is_empty()


def test_stack_pop_empty() -> None:
    with pytest.raises(IndexError):
        Stack().pop()
