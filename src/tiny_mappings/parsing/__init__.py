"""Parsing module for tiny mappings and JVM type descriptors."""

from tiny_mappings.parsing.descriptor_parser import (
    parse_field_descriptor,
    parse_method_descriptor,
    parse_type_descriptor,
)
from tiny_mappings.parsing.mapping_parser import MappingParser, parse_mapping
from tiny_mappings.parsing.record_lexer import RecordLexer

__all__ = [
    "MappingParser",
    "RecordLexer",
    "parse_field_descriptor",
    "parse_mapping",
    "parse_method_descriptor",
    "parse_type_descriptor",
]
