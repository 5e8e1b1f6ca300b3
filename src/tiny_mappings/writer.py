"""Render parsed mappings back to canonical tiny v1 text."""

from __future__ import annotations

from typing import TextIO

from tiny_mappings.dialects import Dialect
from tiny_mappings.types import (
    ClassRecord,
    Comment,
    FieldRecord,
    MappingRecord,
    MethodRecord,
    TinyMapping,
    TypeDescriptor,
)


def format_type(descriptor: TypeDescriptor) -> str:
    """Return the JVM descriptor text for a type."""
    return descriptor.descriptor


def format_record(record: MappingRecord, dialect: Dialect = Dialect.TAB) -> str:
    """Return one record as a line of text, without the line terminator."""
    sep = dialect.canonical_separator
    if isinstance(record, Comment):
        return f"# {record.text}" if record.text else "#"
    if isinstance(record, ClassRecord):
        fields = ["CLASS", *record.names]
    elif isinstance(record, FieldRecord):
        fields = ["FIELD", record.owner, format_type(record.type), *record.names]
    elif isinstance(record, MethodRecord):
        fields = ["METHOD", record.owner, record.descriptor, *record.names]
    else:
        raise TypeError(f"Not a mapping record: {type(record).__name__}")
    return sep.join(fields)


def format_header(namespaces: tuple[str, ...], dialect: Dialect = Dialect.TAB) -> str:
    return dialect.canonical_separator.join(["v1", *namespaces])


def write_mapping(mapping: TinyMapping, stream: TextIO, dialect: Dialect = Dialect.TAB) -> None:
    """Write ``mapping`` to ``stream``, one newline-terminated line per record."""
    stream.write(format_header(mapping.namespaces, dialect) + "\n")
    for record in mapping.records:
        stream.write(format_record(record, dialect) + "\n")


def format_mapping(mapping: TinyMapping, dialect: Dialect = Dialect.TAB) -> str:
    """Return the whole document as a string."""
    lines = [format_header(mapping.namespaces, dialect)]
    lines.extend(format_record(record, dialect) for record in mapping.records)
    return "\n".join(lines) + "\n"
