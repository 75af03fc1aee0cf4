"""
qscript Error Hierarchy
=======================

This module defines the exception hierarchy for the qscript front end.
All exceptions inherit from QScriptError, allowing callers to catch every
qscript-related error with a single except clause if desired.

Exception Hierarchy
-------------------
QScriptError (base)
└── LexicalError - the scanner could not produce a token
    ├── UnrecognizedCharacterError - character matches no scanning rule
    ├── UnterminatedStringError - string literal runs to end of input
    └── UnterminatedCommentError - (* comment *) runs to end of input

Together with the ordinary end-of-input token, these three variants tell a
caller exactly why scanning stopped: a returned Token is success, a raised
LexicalError names the failure.

Error Message Format
--------------------
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class QScriptError(Exception):
    """
    Base exception for all qscript errors.

        try:
            tokens = tokenize(source)
        except QScriptError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

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
# Lexical Errors
# =============================================================================

class LexicalError(QScriptError):
    """
    Base exception for errors raised by the scanner.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text of the offending line (optional)
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

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            orders.qs:3:14: error: unrecognized character '@' (0x40)
                let total = @amount;
                            ^
            hint: remove the character or place it inside a string literal
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnrecognizedCharacterError(LexicalError):
    """
    Character that no scanning rule accepts.

    The scanner has already moved past the character when this is raised,
    so catching it and calling next_token() again resumes scanning.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unrecognized character {char!r} (0x{ord(char):02X})",
            location=location,
            hint="remove the character or place it inside a string literal",
            source_line=source_line,
        )


class UnterminatedStringError(LexicalError):
    """
    String literal with no closing quote before end of input.

    Example:
        let name = "Alice;     (* missing closing quote *)
    """

    def __init__(
        self,
        quote: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.quote = quote
        super().__init__(
            "unterminated string literal",
            location=location,
            hint=f"add closing {quote!r} to complete the string",
            source_line=source_line,
        )


class UnterminatedCommentError(LexicalError):
    """Block comment opened with '(*' but never closed with '*)'."""

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated block comment",
            location=location,
            hint="add closing *) to terminate the comment",
            source_line=source_line,
        )
