"""Lexer for single lines of a tiny v1 document."""

import ply.lex as lex

from tiny_mappings.dialects import Dialect
from tiny_mappings.errors import MalformedRecordError


class RecordLexer:
    """Lexer for tokenizing one tiny v1 line (header or record).

    Lines are fed one at a time without their terminator. Keywords are only
    recognised as the first token of a line, so a class may be named ``FIELD``
    without confusing the grammar.
    """

    # Reserved keywords (first token only)
    reserved = {
        "v1": "VERSION",
        "CLASS": "CLASS",
        "FIELD": "FIELD",
        "METHOD": "METHOD",
    }

    tokens = [
        "WORD",
        "SEP",
    ] + list(reserved.values())

    def __init__(self, dialect: Dialect = Dialect.TAB) -> None:
        self.dialect = dialect
        # ply reads rules from the instance, so the separator follows the dialect
        self.t_SEP = dialect.separator_pattern
        self.lexer: lex.Lexer = None  # type: ignore

    def t_WORD(self, t: lex.LexToken) -> lex.LexToken:
        r"[^\s]+"
        if t.lexpos == 0:
            t.type = self.reserved.get(t.value, "WORD")
        return t

    def t_error(self, t: lex.LexToken) -> None:
        raise MalformedRecordError(
            f"Illegal character {t.value[0]!r} in {self.dialect.value}-separated line",
            column=t.lexpos,
        )

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the line to tokenize."""
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize a line and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
