"""
C Scanner Error Hierarchy
=========================

This module defines the exception hierarchy for the C scanner.
All exceptions inherit from ScannerError, allowing callers to catch all
scanner-related errors with a single except clause if desired.

The scanner itself never raises: malformed input comes back as ILLEGAL
tokens. These exceptions are built on demand when a caller decides that
an illegal token should stop processing (``tokenize(strict=True)``,
``Scanner.error_for()`` or ``cscan --strict``).

Exception Hierarchy
-------------------
ScannerError (base)
└── CSyntaxError - illegal input in C source
    ├── IllegalCharacterError - unexpected character
    └── UnterminatedCommentError - block comment without closing */

Error Message Format
--------------------
All errors include source location information and follow this format:

    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing

Example:
    hello.c:2:3: error: illegal character '@' (0x40)
        x @
          ^
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Base Exception Class
# =============================================================================

class ScannerError(Exception):
    """
    Base exception for all C scanner errors.

    This class provides common functionality for error messages including
    source location tracking, source line context, and helpful hints.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    # Indent of the quoted source line under the headline
    CONTEXT_INDENT = 4

    def _format_message(self) -> str:
        """
        Build the report: headline, then the offending line with a caret
        under the column the scanner stopped at, then the hint.

            hello.c:1:1: error: unterminated block comment
                /* never closed
                ^
            hint: add closing */ to terminate the comment

        Without a location only the ``error: ...`` headline and hint remain.
        """
        prefix = f"{self.location}: " if self.location else ""
        lines = [f"{prefix}error: {self.message}"]

        if self.location is not None and self.source_line is not None:
            lines.append(" " * self.CONTEXT_INDENT + self.source_line)
            lines.append(self._caret_line(self.location.column))

        if self.hint:
            lines.append(f"hint: {self.hint}")

        return "\n".join(line for line in lines if line)

    def _caret_line(self, column: int) -> str:
        """Caret under a 1-based column; empty when the column is unknown."""
        if column < 1:
            return ""
        return " " * (self.CONTEXT_INDENT + column - 1) + "^"


# =============================================================================
# Syntax Errors
# =============================================================================

class CSyntaxError(ScannerError):
    """
    Illegal input in C source code.

    Examples:
        - A character that starts no token (``@``, ``$``, a backtick)
        - A block comment that runs to the end of the file
    """
    pass


class IllegalCharacterError(CSyntaxError):
    """
    Invalid character in source code.

    Raised for a character that does not start any C token.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"illegal character '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


class UnterminatedCommentError(CSyntaxError):
    """
    Unterminated block comment.

    Example:
        /* this comment never ends
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated block comment",
            location=location,
            hint="add closing */ to terminate the comment",
            source_line=source_line,
        )
