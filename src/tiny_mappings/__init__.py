"""Tiny Mappings - A parser for the tiny v1 symbol mapping format."""

from tiny_mappings.dialects import Dialect
from tiny_mappings.errors import (
    EncodingError,
    InvalidHeaderError,
    InvalidTypeError,
    InvalidVersionError,
    MalformedRecordError,
    MappingSyntaxError,
    UnexpectedEofError,
    UnknownEntryTypeError,
    VoidArrayError,
)
from tiny_mappings.parsing import MappingParser, parse_mapping, parse_type_descriptor
from tiny_mappings.types import (
    ArrayOf,
    ClassRecord,
    ClassRef,
    Comment,
    FieldRecord,
    MappingRecord,
    MethodRecord,
    PrimitiveType,
    TinyMapping,
    TypeDescriptor,
)
from tiny_mappings.writer import format_mapping, format_record, write_mapping

__all__ = [
    # Main API
    "parse_mapping",
    "parse_type_descriptor",
    "MappingParser",
    "Dialect",
    "format_mapping",
    "format_record",
    "write_mapping",
    # Type descriptors
    "TypeDescriptor",
    "PrimitiveType",
    "ClassRef",
    "ArrayOf",
    # Records
    "TinyMapping",
    "MappingRecord",
    "Comment",
    "ClassRecord",
    "FieldRecord",
    "MethodRecord",
    # Errors
    "MappingSyntaxError",
    "UnexpectedEofError",
    "InvalidTypeError",
    "VoidArrayError",
    "InvalidHeaderError",
    "InvalidVersionError",
    "UnknownEntryTypeError",
    "MalformedRecordError",
    "EncodingError",
]

__version__ = "0.1.0"
