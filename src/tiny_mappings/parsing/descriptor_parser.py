"""Recursive-descent parser for JVM type descriptors.

Every function works on a string plus an index and returns the parsed value
together with the index just past it, so descriptors can be read back to
back (method parameter lists have no separators). Error columns are indices
into the string that was passed in.
"""

from __future__ import annotations

from tiny_mappings.errors import (
    InvalidTypeError,
    MalformedRecordError,
    UnexpectedEofError,
    VoidArrayError,
)
from tiny_mappings.types import (
    PRIMITIVE_CODES,
    ArrayOf,
    ClassRef,
    PrimitiveType,
    TypeDescriptor,
)


def parse_type_descriptor(text: str, pos: int = 0) -> tuple[TypeDescriptor, int]:
    """Parse one descriptor starting at ``text[pos]``.

    Returns ``(descriptor, end)`` where ``end`` is the index of the first
    character not consumed. On an unrecognised leading character the error's
    column is ``pos`` itself; nothing is consumed.
    """
    if pos >= len(text):
        raise UnexpectedEofError("Expected a type descriptor, found end of input", column=pos)

    ch = text[pos]
    if ch == "[":
        return _parse_array(text, pos)
    if ch == "L":
        return _parse_class(text, pos)

    primitive = PRIMITIVE_CODES.get(ch)
    if primitive is None:
        raise InvalidTypeError(f"Invalid type descriptor character '{ch}'", column=pos)
    return primitive, pos + 1


def _parse_class(text: str, pos: int) -> tuple[ClassRef, int]:
    """classref := 'L' name ';'"""
    end = text.find(";", pos + 1)
    if end == -1:
        raise UnexpectedEofError(
            f"Unterminated class descriptor '{text[pos:]}', expected ';'",
            column=len(text),
        )
    if end == pos + 1:
        raise InvalidTypeError("Empty class name in descriptor 'L;'", column=pos)
    return ClassRef(text[pos + 1:end]), end + 1


def _parse_array(text: str, pos: int) -> tuple[ArrayOf, int]:
    """arraytype := '['+ descriptor"""
    start = pos
    while pos < len(text) and text[pos] == "[":
        pos += 1
    dimensions = pos - start

    if pos < len(text) and text[pos] == PrimitiveType.VOID.value:
        raise VoidArrayError(f"Array of void '{text[start:pos + 1]}' is not allowed", column=pos)

    # All '[' are consumed above, so the element is never another array.
    element, end = parse_type_descriptor(text, pos)
    return ArrayOf(dimensions, element), end


def parse_field_descriptor(text: str) -> TypeDescriptor:
    """Parse ``text`` as exactly one descriptor with nothing after it."""
    descriptor, end = parse_type_descriptor(text, 0)
    if end != len(text):
        raise MalformedRecordError(
            f"Unexpected '{text[end:]}' after type descriptor '{text[:end]}'",
            column=end,
        )
    return descriptor


def parse_method_descriptor(text: str) -> tuple[tuple[TypeDescriptor, ...], TypeDescriptor]:
    """Parse ``(<params>)<return>`` and return ``(parameter_types, return_type)``."""
    if not text:
        raise UnexpectedEofError("Expected a method descriptor, found end of input", column=0)
    if text[0] != "(":
        raise MalformedRecordError(
            f"Method descriptor must start with '(', got '{text[0]}'", column=0
        )

    params: list[TypeDescriptor] = []
    pos = 1
    while True:
        if pos >= len(text):
            raise UnexpectedEofError("Unterminated parameter list, expected ')'", column=pos)
        if text[pos] == ")":
            pos += 1
            break
        param, pos = parse_type_descriptor(text, pos)
        params.append(param)

    return_type, pos = parse_type_descriptor(text, pos)
    if pos != len(text):
        raise MalformedRecordError(
            f"Unexpected '{text[pos:]}' after method return type", column=pos
        )
    return tuple(params), return_type
