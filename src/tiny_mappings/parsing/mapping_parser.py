"""Parser for tiny v1 mapping documents."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, TypeVar, Union

import ply.yacc as yacc

from tiny_mappings.dialects import Dialect
from tiny_mappings.errors import (
    EncodingError,
    InvalidHeaderError,
    InvalidVersionError,
    MalformedRecordError,
    MappingSyntaxError,
    UnexpectedEofError,
    UnknownEntryTypeError,
)
from tiny_mappings.parsing.descriptor_parser import (
    parse_field_descriptor,
    parse_method_descriptor,
)
from tiny_mappings.parsing.record_lexer import RecordLexer
from tiny_mappings.types import (
    ClassRecord,
    Comment,
    FieldRecord,
    MappingRecord,
    MethodRecord,
    TinyMapping,
)

logger = logging.getLogger(__name__)

MappingSource = Union[str, bytes, Iterable[Union[str, bytes]]]

T = TypeVar("T")

COMMENT_MARKER = "#"

# Leading tokens of headers written for other format versions
_OTHER_VERSION_RE = re.compile(r"v\d+|tiny")


@dataclass
class HeaderLine:
    """The parsed ``v1`` line before it is checked against the document."""

    namespaces: list[tuple[str, int]]  # (name, column)


@dataclass
class RecordLine:
    """The tokens of a CLASS, FIELD or METHOD line, before descriptors are read.

    Rule actions only collect tokens: ply treats a ``SyntaxError`` raised
    from an action as a request for error recovery, so every check that can
    fail runs after the grammar has matched the line.
    """

    keyword: str
    names: list[tuple[str, int]]  # (name, column)
    owner: str | None = None
    descriptor: tuple[str, int] | None = None  # (token, column)


class MappingParser:
    """Parser for tiny v1 documents.

    The outer loop walks the document line by line: the first line must be
    the header, every later line is one record. Comment lines are recognised
    up front; all other lines go through a small LALR grammar whose tokens
    come from a dialect-specific :class:`RecordLexer`. Embedded type
    descriptors are handed to the recursive-descent descriptor parser.

    One instance may parse any number of documents, one at a time.
    """

    tokens = RecordLexer.tokens

    def __init__(self, dialect: Dialect = Dialect.TAB) -> None:
        self.dialect = dialect
        self._lexer = RecordLexer(dialect)
        self._parser: yacc.LRParser | None = None
        self._namespace_count: int | None = None
        self._line_length = 0

    def build(self, **kwargs: Any) -> None:
        """Build the lexer and parser tables."""
        self._lexer.build(debug=False, errorlog=yacc.NullLogger())
        kwargs.setdefault("debug", False)
        kwargs.setdefault("write_tables", False)
        kwargs.setdefault("errorlog", yacc.NullLogger())
        self._parser = yacc.yacc(module=self, start="line", **kwargs)

    # ---- Grammar rules ----

    def p_line_header(self, p: yacc.YaccProduction) -> None:
        """line : header"""
        p[0] = p[1]

    def p_line_record(self, p: yacc.YaccProduction) -> None:
        """line : record"""
        p[0] = p[1]

    def p_header(self, p: yacc.YaccProduction) -> None:
        """header : VERSION SEP name_list"""
        p[0] = HeaderLine(namespaces=p[3])

    def p_record_class(self, p: yacc.YaccProduction) -> None:
        """record : CLASS SEP name_list"""
        p[0] = RecordLine(keyword=p[1], names=p[3])

    def p_record_member(self, p: yacc.YaccProduction) -> None:
        """record : FIELD SEP WORD SEP WORD SEP name_list
                  | METHOD SEP WORD SEP WORD SEP name_list"""
        p[0] = RecordLine(
            keyword=p[1],
            names=p[7],
            owner=p[3],
            descriptor=(p[5], p.lexpos(5)),
        )

    def p_name_list_single(self, p: yacc.YaccProduction) -> None:
        """name_list : WORD"""
        p[0] = [(p[1], p.lexpos(1))]

    def p_name_list_multiple(self, p: yacc.YaccProduction) -> None:
        """name_list : name_list SEP WORD"""
        p[0] = p[1] + [(p[3], p.lexpos(3))]

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p is None:
            raise UnexpectedEofError("Unexpected end of line", column=self._line_length)
        if p.lexpos == 0 and p.type == "WORD":
            raise UnknownEntryTypeError(p.value, column=0)
        if p.type == "SEP":
            raise MalformedRecordError("Empty field or misplaced separator", column=p.lexpos)
        raise MalformedRecordError(f"Unexpected '{p.value}'", column=p.lexpos)

    # ---- Record building ----

    def _build_record(self, line: RecordLine) -> MappingRecord:
        """Read the descriptor and check the names of a matched record line."""
        if line.keyword == "CLASS":
            return ClassRecord(names=self._names(line.names))

        token, column = line.descriptor
        if line.keyword == "FIELD":
            field_type = self._descriptor(parse_field_descriptor, token, column)
            return FieldRecord(owner=line.owner, type=field_type, names=self._names(line.names))

        params, return_type = self._descriptor(parse_method_descriptor, token, column)
        return MethodRecord(
            owner=line.owner,
            parameter_types=params,
            return_type=return_type,
            names=self._names(line.names),
        )

    def _names(self, items: list[tuple[str, int]]) -> tuple[str, ...]:
        """Check a record's name list against the declared namespace count."""
        expected = self._namespace_count
        if expected is not None and len(items) != expected:
            message = f"Expected {expected} names (one per namespace), found {len(items)}"
            if len(items) < expected:
                raise UnexpectedEofError(message, column=self._line_length)
            raise MalformedRecordError(message, column=items[expected][1])
        return tuple(name for name, _ in items)

    def _descriptor(self, parse: Callable[[str], T], token: str, column: int) -> T:
        try:
            return parse(token)
        except MappingSyntaxError as exc:
            raise exc.locate(None, column)

    # ---- Driver ----

    def parse(self, source: MappingSource) -> TinyMapping:
        """Parse a whole document and return the mapping.

        The first error aborts the parse; no partial mapping is returned.
        """
        if self._parser is None:
            self.build()

        lines = _read_lines(source)
        first = next(lines, None)
        if first is None:
            raise InvalidHeaderError("Empty input: missing 'v1' header", line=1, column=0)

        namespaces = self._parse_header(*first)
        logger.debug("tiny v1 header declares namespaces %s", namespaces)

        self._namespace_count = len(namespaces)
        try:
            records = [self._parse_record(lineno, text) for lineno, text in lines]
        finally:
            self._namespace_count = None

        logger.debug("Parsed %d records", len(records))
        return TinyMapping(namespaces=namespaces, records=tuple(records))

    def parse_record(self, text: str, namespace_count: int | None = None) -> MappingRecord:
        """Parse a single record line outside of a document."""
        if self._parser is None:
            self.build()
        self._namespace_count = namespace_count
        try:
            return self._parse_record(1, text)
        finally:
            self._namespace_count = None

    def _parse_header(self, lineno: int, text: str) -> tuple[str, ...]:
        if text.startswith("\ufeff"):
            text = text[1:]
        text, lead = self._trim(text)
        try:
            result = self._parse_line(lineno, text, lead)
        except UnknownEntryTypeError as exc:
            if _OTHER_VERSION_RE.fullmatch(exc.token):
                raise InvalidVersionError(
                    f"Unsupported format version '{exc.token}', only v1 is supported",
                    line=lineno,
                    column=exc.column,
                ) from exc
            raise InvalidHeaderError(
                f"Expected 'v1' header, found '{exc.token}'", line=lineno, column=exc.column
            ) from exc
        except MappingSyntaxError as exc:
            raise InvalidHeaderError(
                f"Malformed header: {exc.msg}", line=lineno, column=exc.column
            ) from exc

        if not isinstance(result, HeaderLine):
            raise InvalidHeaderError(
                "Expected 'v1' header before any record", line=lineno, column=lead
            )

        seen: set[str] = set()
        for name, column in result.namespaces:
            if name in seen:
                raise InvalidHeaderError(
                    f"Duplicate namespace '{name}'", line=lineno, column=lead + column
                )
            seen.add(name)
        return tuple(name for name, _ in result.namespaces)

    def _parse_record(self, lineno: int, text: str) -> MappingRecord:
        text, lead = self._trim(text)
        if text.startswith(COMMENT_MARKER):
            return Comment(text=text[len(COMMENT_MARKER):].strip())
        if not text:
            raise UnknownEntryTypeError("", line=lineno, column=lead)

        result = self._parse_line(lineno, text, lead)
        if isinstance(result, HeaderLine):
            raise UnknownEntryTypeError("v1", line=lineno, column=lead)
        try:
            return self._build_record(result)
        except MappingSyntaxError as exc:
            raise exc.locate(lineno, lead)

    def _trim(self, text: str) -> tuple[str, int]:
        """Drop outer whitespace where the dialect allows it; return the new text and its offset."""
        if not self.dialect.trims_lines:
            return text, 0
        stripped = text.lstrip(" \t")
        return stripped.rstrip(" \t"), len(text) - len(stripped)

    def _parse_line(self, lineno: int, text: str, lead: int = 0) -> HeaderLine | RecordLine:
        """Run the line grammar, placing any error at ``lineno``."""
        self._line_length = len(text)
        try:
            return self._parser.parse(text, lexer=self._lexer.lexer)
        except MappingSyntaxError as exc:
            raise exc.locate(lineno, lead)


def _read_lines(source: MappingSource) -> Iterator[tuple[int, str]]:
    """Yield ``(lineno, text)`` for each line, without line terminators.

    Accepts a whole document as ``str``/``bytes``, an iterable of ``str``
    lines (a list, an open text file) or an iterable of ``bytes`` chunks
    (an open binary file, ``iter(lambda: f.read(4096), b"")``). Bytes are
    decoded as UTF-8 one line at a time.
    """
    if isinstance(source, (str, bytes)):
        chunks: Iterable[Union[str, bytes]] = _split(source)
    else:
        chunks = _rejoin(source)

    for lineno, chunk in enumerate(chunks, start=1):
        if isinstance(chunk, bytes):
            chunk = _decode(chunk, lineno)
        if chunk.endswith("\n"):
            chunk = chunk[:-1]
        if chunk.endswith("\r"):
            chunk = chunk[:-1]
        yield lineno, chunk


def _split(document: Union[str, bytes]) -> list[Union[str, bytes]]:
    newline = b"\n" if isinstance(document, bytes) else "\n"
    lines = document.split(newline)  # type: ignore[arg-type]
    if not lines[-1]:
        # Trailing newline (or empty input) does not start another line
        lines.pop()
    return lines


def _rejoin(source: Iterable[Union[str, bytes]]) -> Iterator[Union[str, bytes]]:
    """Pass ``str`` lines through; re-split ``bytes`` chunks into lines.

    A byte chunk may end anywhere, even inside a multi-byte character, so
    bytes are buffered until a newline completes the line.
    """
    pending = bytearray()
    for chunk in source:
        if isinstance(chunk, str):
            if pending:
                yield bytes(pending)
                pending.clear()
            yield chunk
            continue
        pending += chunk
        *complete, rest = bytes(pending).split(b"\n")
        yield from complete
        pending[:] = rest
    if pending:
        yield bytes(pending)


def _decode(raw: bytes, lineno: int) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(
            f"Invalid UTF-8 byte 0x{raw[exc.start]:02x}", line=lineno, column=exc.start
        ) from exc


def parse_mapping(source: MappingSource, dialect: Dialect = Dialect.TAB) -> TinyMapping:
    """Parse a tiny v1 document with the given dialect."""
    parser = MappingParser(dialect)
    parser.build()
    return parser.parse(source)
