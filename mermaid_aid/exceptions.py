"""Package-specific exception types."""

from __future__ import annotations

from .models import Token, TokenKind


class TranslationError(ValueError):
    """Base class for translation-related errors.

    Represents errors encountered while tokenizing, parsing, or generating
    a diagram.
    """


class UnterminatedLiteralError(TranslationError):
    """Raised when a quoted literal is never closed.

    Args:
        line: One-based line of the opening quote.
        column: One-based column of the opening quote.
        quote: Quote character that opened the literal.
    """

    def __init__(self, line: int, column: int, quote: str = '"'):
        self.line = line
        self.column = column
        self.quote = quote
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Unterminated string starting with {self.quote} "
            f"at line {self.line}, column {self.column}"
        )


UnterminatedStringError = UnterminatedLiteralError


class DiagramSyntaxError(TranslationError):
    """Raised when the token stream does not match the grammar.

    Args:
        token: Offending token.
        expected: Human-readable description of what the grammar required.
    """

    def __init__(self, token: Token, expected: str):
        self.token = token
        self.expected = expected
        super().__init__(self._build_message())

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def column(self) -> int:
        return self.token.column

    def _build_message(self) -> str:
        return (
            f"Expected {self.expected}, got {self.token.kind.name} "
            f"at line {self.line}, column {self.column}"
        )


class UnexpectedTokenError(DiagramSyntaxError):
    """Raised when a different token class is found where a specific one is required."""


class MissingTokenError(DiagramSyntaxError):
    """Raised when a statement or the input ends before a required token.

    `token` is the last token present before the gap, or the ``EOF`` token
    when nothing precedes it.
    """

    def _build_message(self) -> str:
        if self.token.kind is TokenKind.EOF:
            return super()._build_message()
        return (
            f"Expected {self.expected} after {self.token.kind.name} "
            f"at line {self.line}, column {self.column}"
        )


class UnsupportedDialectError(TranslationError):
    """Raised when the generator receives a dialect it cannot render.

    Args:
        dialect: The unrecognized dialect tag.
    """

    def __init__(self, dialect: object):
        self.dialect = dialect
        super().__init__(f"Unsupported diagram type: {dialect}")
