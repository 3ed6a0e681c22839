"""
Error types for grammar parsing and configuration loading.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class MdspecError(Exception):
    """Base exception for all mdspec errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class GrammarSyntaxError(MdspecError):
    """
    Raised when grammar notation cannot be parsed.

    Examples:
    - Unterminated or multi-line terminal
    - Mismatched parentheses
    - Illegal characters or escapes in a terminal
    - A production name not followed by ':'
    """

    pass


class ConfigError(MdspecError):
    """
    Raised when mdspec.toml cannot be loaded.

    Examples:
    - Invalid TOML syntax
    - A setting with the wrong value type
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Name or path of the text the error occurred in
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line(s) around the error location
    """

    file: Path | str
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "grammar.g4:10:5"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format snippet with line numbers and an error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # The snippet starts at the error line
        for i, line in enumerate(lines):
            line_num = self.line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def make_grammar_error(
    message: str,
    file: Path | str,
    line: int,
    column: int,
    snippet: str | None = None,
) -> GrammarSyntaxError:
    """
    Helper to create a GrammarSyntaxError with context.

    Args:
        message: Error description
        file: Grammar source name
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line

    Returns:
        GrammarSyntaxError with context attached
    """
    context = ErrorContext(file=file, line=line, column=column, snippet=snippet)
    return GrammarSyntaxError(message, context)


def make_config_error(message: str, file: Path | None = None) -> ConfigError:
    """Helper to create a ConfigError, located at the top of ``file`` if given."""
    if file:
        return ConfigError(message, ErrorContext(file=file, line=1, column=1))
    return ConfigError(message)
