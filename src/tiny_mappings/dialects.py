"""Field separation rules for the two accepted tiny v1 layouts."""

from __future__ import annotations

from enum import Enum


class Dialect(Enum):
    """How fields on a line are separated.

    ``TAB`` is the original layout: exactly one tab between fields, no other
    whitespace anywhere on a record line. ``WHITESPACE`` accepts any run of
    spaces and tabs and ignores whitespace at either end of a line.
    """

    TAB = "tab"
    WHITESPACE = "whitespace"

    @property
    def separator_pattern(self) -> str:
        """Regex matching one field separator."""
        if self is Dialect.TAB:
            return r"\t"
        return r"[ \t]+"

    @property
    def canonical_separator(self) -> str:
        return "\t" if self is Dialect.TAB else " "

    @property
    def trims_lines(self) -> bool:
        return self is Dialect.WHITESPACE

    @classmethod
    def from_name(cls, name: str) -> Dialect:
        try:
            return cls(name.lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown dialect '{name}' (expected one of: {choices})") from None
