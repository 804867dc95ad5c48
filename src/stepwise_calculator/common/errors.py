"""Exceptions raised while lexing, parsing and evaluating an expression."""


class CalculatorError(ValueError):
    """Base exception for all calculator errors."""


class UnknownFunctionError(CalculatorError):
    """Raised when an identifier is not one of the known function names."""

    def __init__(self, name: str):
        super().__init__(f"'{name}' is not a function")
        self.name = name


class UnmatchedParenthesisError(CalculatorError):
    """Raised when a parenthesis has no matching counterpart."""

    def __init__(self, message: str = "Unmatched parenthesis"):
        super().__init__(message)


class InvalidExpressionError(CalculatorError):
    """Raised when an operator is missing an operand or operands are left over."""

    def __init__(self, message: str = "Invalid expression"):
        super().__init__(message)


class UnexpectedCharacterError(InvalidExpressionError):
    """Raised when the lexer meets a character it has no transition for."""

    def __init__(self, character: str, position: int):
        shown = repr(character) if character else "end of input"
        super().__init__(f"Unexpected {shown} at position {position}")
        self.character = character
        self.position = position


class InputUnreadableError(CalculatorError):
    """Raised when no expression could be read from the input."""

    def __init__(self, message: str = "Can't read your input!"):
        super().__init__(message)
