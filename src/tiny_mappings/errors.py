"""Errors raised while parsing tiny mappings and type descriptors."""

from __future__ import annotations


class MappingSyntaxError(SyntaxError):
    """Base class for every parse failure.

    ``line`` is 1-based and ``column`` is a 0-based offset into that line.
    Either may be None when the position is unknown, e.g. a descriptor parsed
    on its own has a column but no line.
    """

    kind = "syntax_error"

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column

    def locate(self, line: int | None, column_offset: int = 0) -> MappingSyntaxError:
        """Move this error into a document: set its line, shift its column."""
        self.line = line
        if self.column is not None:
            self.column += column_offset
        else:
            self.column = column_offset
        return self

    def __str__(self) -> str:
        if self.line is not None and self.column is not None:
            return f"{self.msg} (line {self.line}, column {self.column})"
        if self.line is not None:
            return f"{self.msg} (line {self.line})"
        if self.column is not None:
            return f"{self.msg} (position {self.column})"
        return self.msg


class UnexpectedEofError(MappingSyntaxError):
    """Input ended while a rule still expected more."""

    kind = "unexpected_eof"


class InvalidTypeError(MappingSyntaxError):
    """A type descriptor starts with a character no rule accepts."""

    kind = "invalid_type"


class VoidArrayError(MappingSyntaxError):
    """An array of void was written, e.g. ``[V``."""

    kind = "void_array"


class InvalidHeaderError(MappingSyntaxError):
    kind = "invalid_header"


class InvalidVersionError(MappingSyntaxError):
    kind = "invalid_version"


class UnknownEntryTypeError(MappingSyntaxError):
    """A record line starts with something other than ``#``, CLASS, FIELD or METHOD."""

    kind = "unknown_entry_type"

    def __init__(self, token: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(f"Unknown entry type: '{token}'", line, column)
        self.token = token


class MalformedRecordError(MappingSyntaxError):
    """A record has the right kind but the wrong shape (stray text, name count, ...)."""

    kind = "malformed_record"


class EncodingError(MappingSyntaxError):
    """Input bytes are not valid UTF-8. ``column`` is a byte offset."""

    kind = "encoding_error"
