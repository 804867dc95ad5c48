"""Turn expression text into tokens with a table-driven finite automaton."""
from typing import List, Optional, Tuple

from stepwise_calculator.common.errors import UnexpectedCharacterError
from stepwise_calculator.common.logger import logger
from stepwise_calculator.lexer.sequence import TokenSequence
from stepwise_calculator.lexer.symbols import TokenKind
from stepwise_calculator.lexer.tokens import Token
from stepwise_calculator.lexer.transitions import State, final_code, next_state

# Tokens after which a minus sign can only be a negation
_UNARY_CONTEXT = frozenset({TokenKind.LPAREN, TokenKind.ARG_SEPARATOR})


class CharacterCursor:
    """Forward cursor over the expression with one character of pushback."""

    def __init__(self, text: str):
        self._text = text
        self._position = 0
        self._last = ""

    @property
    def position(self) -> int:
        """Index of the next character to read."""
        return self._position

    def advance(self) -> str:
        """
        Read the next character.

        :return: The character, or "" once the text is exhausted
        :rtype: str
        """
        if self._position >= len(self._text):
            self._last = ""
            return ""
        self._last = self._text[self._position]
        self._position += 1
        return self._last

    def push_back(self) -> None:
        """Return the last character read to the input. Only one character can be pushed back."""
        if self._last:
            self._position -= 1
            self._last = ""

    def skip_whitespace(self) -> str:
        """
        Read past whitespace.

        :return: The first non-whitespace character, or "" at end of input
        :rtype: str
        """
        char = self.advance()
        while char and char.isspace():
            char = self.advance()
        return char


class ExpressionLexer:
    """
    Tokenize arithmetic expressions.

    Algorithm, for each token:
        1. Skip whitespace
        2. Follow the transition table one character at a time until a final state
        3. On a negative final code, push the last character back (maximal munch)
        4. Resolve "-" into unary or binary minus from the previous token

    Examples:
        - "3 * (5 - 2)" -> 3, *, (, 5, binary -, 2, )
        - "-max(1, -2)" -> unary -, max, (, 1, ",", unary -, 2, )
    """

    @staticmethod
    def tokenize(expression: str) -> TokenSequence:
        """
        Split an arithmetic expression into tokens.

        :param str expression: Arithmetic expression as a string

        :return: Tokens in lexical order
        :rtype: TokenSequence
        :raises UnknownFunctionError: If an identifier is not a known function
        :raises UnexpectedCharacterError: If a character cannot start or continue a token
        """
        cursor = CharacterCursor(expression)
        tokens = TokenSequence()
        previous: Optional[TokenKind] = None

        while True:
            char = cursor.skip_whitespace()
            if not char:
                break

            kind, lexeme = ExpressionLexer._scan(cursor, char)
            if kind is TokenKind.MINUS:
                kind = ExpressionLexer.resolve_minus(previous)

            tokens.append(Token.create(kind, lexeme))
            previous = kind

        logger.debug(f"🔤 Lexed {len(tokens)} tokens from {expression!r}: {tokens}")
        return tokens

    @staticmethod
    def resolve_minus(previous: Optional[TokenKind]) -> TokenKind:
        """
        Decide whether a minus sign negates or subtracts.

        :param previous: Kind of the previously emitted token, None at the start

        :return: UNARY_MINUS after nothing, an operator, "(" or ","; BINARY_MINUS otherwise
        :rtype: TokenKind
        """
        if previous is None or previous.is_operator or previous in _UNARY_CONTEXT:
            return TokenKind.UNARY_MINUS
        return TokenKind.BINARY_MINUS

    @staticmethod
    def _scan(cursor: CharacterCursor, char: str) -> Tuple[TokenKind, str]:
        """
        Run the automaton from the start state over ``char`` and what follows.

        :param CharacterCursor cursor: Cursor positioned after ``char``
        :param str char: First character of the lexeme

        :return: Token kind (possibly the lexical MINUS) and lexeme
        :rtype: Tuple[TokenKind, str]
        :raises UnexpectedCharacterError: If the automaton has no transition
        """
        state = State.START
        lexeme: List[str] = []

        while True:
            following = next_state(state, char)
            if following is None:
                position = cursor.position - 1 if char else cursor.position
                raise UnexpectedCharacterError(char, position)

            state = following
            lexeme.append(char)
            code = final_code(state)
            if code:
                break
            char = cursor.advance()

        if code < 0:
            # Overshot by one character: it starts the next token
            cursor.push_back()
            lexeme.pop()

        return TokenKind(abs(code)), "".join(lexeme)
