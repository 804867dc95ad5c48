"""Ordered token container handed from the lexer to the parser."""
from collections import deque
from typing import Deque, Iterable, Iterator, List

from stepwise_calculator.lexer.symbols import TokenKind
from stepwise_calculator.lexer.tokens import Token


class TokenSequence:
    """
    Append-only sequence of tokens in lexical order.

    The parser consumes the sequence exactly once: consuming hands every token
    over and leaves the sequence empty.
    """

    def __init__(self, tokens: Iterable[Token] = ()):
        self._tokens: Deque[Token] = deque(tokens)
        self._consumed: bool = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def append(self, token: Token) -> None:
        """
        Add a token at the end of the sequence.

        :param Token token: Token to add

        :raises RuntimeError: If the sequence was already consumed
        """
        if self._consumed:
            raise RuntimeError("Cannot append to a consumed token sequence")
        self._tokens.append(token)

    def consume(self) -> Iterator[Token]:
        """
        Hand the tokens over, first to last.

        :return: Iterator removing each token from the sequence as it is yielded
        :rtype: Iterator[Token]
        :raises RuntimeError: If the sequence was already consumed
        """
        if self._consumed:
            raise RuntimeError("Token sequence already consumed")
        self._consumed = True
        return self._drain()

    def _drain(self) -> Iterator[Token]:
        while self._tokens:
            yield self._tokens.popleft()

    def kinds(self) -> List[TokenKind]:
        return [token.kind for token in self._tokens]

    def __iter__(self) -> Iterator[Token]:
        return iter(tuple(self._tokens))

    def __len__(self) -> int:
        return len(self._tokens)

    def __str__(self) -> str:
        return " ".join(token.text for token in self._tokens)

    def __repr__(self) -> str:
        return f"TokenSequence({list(self._tokens)!r})"
