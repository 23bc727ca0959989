"""
Error types for numderive type description, validation, and generation.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass


class NumDeriveError(Exception):
    """Base exception for all numderive errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class DescriptorError(NumDeriveError):
    """
    Raised when a syntax-tree node cannot be described as a type.

    Examples:
    - Node is a function or an ordinary assignment
    - Source text contains no type declaration
    - Member declared with an unpacking target
    """

    pass


class ValidationError(NumDeriveError):
    """
    Raised when a type definition cannot carry the requested capability.

    Examples:
    - Type is a structure or a union, not an enumeration
    - Variant carries positional or named data
    - Explicit discriminant is a non-integer literal
    """

    pass


class GenerationError(NumDeriveError):
    """
    Raised when a generator cannot be selected or registered.

    Examples:
    - Unknown capability name
    - Duplicate capability registration
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Name of the source file where the error occurred
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source lines around the error location
    """

    file: str
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "colors.py:10:5"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet starts up to 2 lines before the error line
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def extract_snippet(source: str, line: int, radius: int = 2) -> str:
    """
    Cut the lines around ``line`` out of ``source``.

    Args:
        source: Full source text
        line: Line number (1-indexed) to center on
        radius: Lines to keep before and after

    Returns:
        Snippet text, starting at ``max(1, line - radius)``
    """
    lines = source.splitlines()
    start = max(1, line - radius)
    end = min(len(lines), line + radius)
    return "\n".join(lines[start - 1 : end])


def context_for_node(
    node: ast.AST | None,
    file: str | None = None,
    source: str | None = None,
    line: int | None = None,
    column: int | None = None,
) -> ErrorContext | None:
    """
    Build an ErrorContext from an ast node or explicit coordinates.

    ast columns are 0-indexed; the context stores them 1-indexed.

    Returns:
        ErrorContext, or None when no location is known
    """
    if node is not None and hasattr(node, "lineno"):
        line = node.lineno
        column = node.col_offset + 1
    if not line:
        return None

    snippet = extract_snippet(source, line) if source else None
    return ErrorContext(
        file=file or "<unknown>",
        line=line,
        column=column or 1,
        snippet=snippet,
    )


def make_descriptor_error(
    message: str,
    node: ast.AST | None = None,
    file: str | None = None,
    source: str | None = None,
) -> DescriptorError:
    """
    Helper to create a DescriptorError with optional context.

    Args:
        message: Error description
        node: Optional offending ast node
        file: Optional source file name
        source: Optional source text for the snippet

    Returns:
        DescriptorError with context if a location is known
    """
    return DescriptorError(message, context_for_node(node, file, source))


def make_validation_error(
    message: str,
    file: str | None = None,
    line: int | None = None,
    column: int | None = None,
    source: str | None = None,
) -> ValidationError:
    """
    Helper to create a ValidationError with optional context.

    Args:
        message: Error description
        file: Optional source file name
        line: Optional line number
        column: Optional column number
        source: Optional source text for the snippet

    Returns:
        ValidationError with context if location provided
    """
    return ValidationError(
        message,
        context_for_node(None, file, source, line=line, column=column),
    )
