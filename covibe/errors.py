"""Errors raised while parsing."""

from __future__ import annotations

from covibe.span import Span


class ParseError(Exception):
    """A parse failure with the span where it occurred."""

    def __init__(self, message: str, span: Span = Span.INVALID) -> None:
        super().__init__(message)
        self.message = message
        self.span = span

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ParseError(message={self.message!r}, span={self.span!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.message == other.message and self.span == other.span

    def __hash__(self) -> int:
        return hash((self.message, self.span))