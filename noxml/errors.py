"""Error types raised by the .nox compilation pipeline.

Every error carries the line and column of the offending token so the
command line layer can report it unmodified.
"""

from __future__ import annotations


class CompileError(Exception):
    kind = "CompileError"

    def __init__(self, message: str, line: int, column: int):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"{message} at line {line}, column {column}")


class LexerError(CompileError):
    """Indentation problems: mixed tabs/spaces, bad unit, invalid dedent."""

    kind = "LexError"


class ParseException(CompileError):
    """Malformed element or property headers and illegal nesting."""

    kind = "SyntaxError"


class ValueClassificationError(CompileError):
    """A property value that matches no classification rule."""

    kind = "ValueError"


class EscapeError(ValueClassificationError):
    kind = "EscapeError"


class ExpressionError(ValueClassificationError):
    kind = "ExpressionError"


__all__ = [
    "CompileError",
    "LexerError",
    "ParseException",
    "ValueClassificationError",
    "EscapeError",
    "ExpressionError",
]
