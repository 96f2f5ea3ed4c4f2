"""
Error types for outline scanning, parsing, configuration and rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .lexer import Token


class OutlineError(Exception):
    """Base exception for all outline errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class OutlineParseError(OutlineError):
    """
    Raised when an outline stream is structurally inconsistent.

    Only two situations are fatal:
    - a document keyword nested inside another document
    - an unrecognized token inside a type body

    Attributes:
        token: The offending token, when known
        documents: Documents completed before the failure
    """

    def __init__(
        self,
        message: str,
        context: Optional["ErrorContext"] = None,
        token: Optional["Token"] = None,
    ):
        self.token = token
        self.documents: list[Any] = []
        super().__init__(message, context)


class ConfigError(OutlineError):
    """
    Raised when an outline configuration file is invalid.

    Examples:
    - Unknown keys in [tool.outline]
    - A sort flag that is not a boolean
    - Malformed TOML
    """

    pass


class RenderError(OutlineError):
    """
    Raised when a document tree cannot be rendered through a template.

    Examples:
    - Template file not found
    - Template syntax errors
    - Undefined variables under the strict environment
    """

    pass


class ExtractionError(OutlineError):
    """Raised when comments cannot be extracted from a Python source file."""

    pass


@dataclass
class ErrorContext:
    """
    Source location for an error.

    Attributes:
        source: Name of the input (file path or "<string>")
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    source: str
    line: int
    column: int

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "time.outline:10:5"
        """
        return f"{self.source}:{self.line}:{self.column}"


def make_parse_error(
    message: str,
    source: str,
    token: "Token",
) -> OutlineParseError:
    """
    Helper to create an OutlineParseError positioned at a token.

    Args:
        message: Error description
        source: Input name
        token: Token the error refers to

    Returns:
        OutlineParseError with context attached
    """
    context = ErrorContext(source=source, line=token.pos.line, column=token.pos.column)
    return OutlineParseError(message, context, token=token)
