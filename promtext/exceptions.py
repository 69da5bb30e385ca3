"""Custom exceptions for promtext."""

from typing import Any


class PromTextError(Exception):
    """Base exception for all promtext errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ParseError(PromTextError):
    """Base class for exposition parsing errors."""

    pass


class InvalidLineError(ParseError):
    """A line of exposition text does not follow the format.

    Raised for sample lines rejected by the line grammar, ``# TYPE`` lines
    whose value contains whitespace, and ``# HELP``/``# TYPE`` lines that
    lack the metric name token.
    """

    def __init__(self, line: str, reason: str | None = None) -> None:
        context: dict[str, Any] = {"line": line}
        if reason:
            context["reason"] = reason
        super().__init__(f"Encountered invalid line: {line}", **context)
        self.line = line
        self.reason = reason


class InputTooLargeError(PromTextError):
    """Input exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"Input too large: {size} bytes (max: {limit} bytes)",
            size=size,
            limit=limit,
        )
