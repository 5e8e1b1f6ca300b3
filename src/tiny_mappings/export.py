"""Convert parsed mappings to and from plain JSON-compatible data.

Every value becomes a dict tagged with ``kind``:

    {"kind": "array", "dimensions": 2, "element": {"kind": "primitive", "code": "I"}}
    {"kind": "field", "owner": "a", "type": {...}, "names": ["b", "c"]}
"""

from __future__ import annotations

import json
from typing import Any

from tiny_mappings.types import (
    PRIMITIVE_CODES,
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


def type_to_dict(descriptor: TypeDescriptor) -> dict[str, Any]:
    if isinstance(descriptor, PrimitiveType):
        return {"kind": "primitive", "code": descriptor.value, "name": descriptor.java_name}
    if isinstance(descriptor, ClassRef):
        return {"kind": "class", "name": descriptor.name}
    if isinstance(descriptor, ArrayOf):
        return {
            "kind": "array",
            "dimensions": descriptor.dimensions,
            "element": type_to_dict(descriptor.element),
        }
    raise TypeError(f"Not a type descriptor: {type(descriptor).__name__}")


def type_from_dict(data: dict[str, Any]) -> TypeDescriptor:
    kind = data.get("kind")
    if kind == "primitive":
        try:
            return PRIMITIVE_CODES[data["code"]]
        except KeyError:
            raise ValueError(f"Unknown primitive code: {data.get('code')!r}") from None
    if kind == "class":
        return ClassRef(data["name"])
    if kind == "array":
        return ArrayOf(int(data["dimensions"]), type_from_dict(data["element"]))
    raise ValueError(f"Unknown type kind: {kind!r}")


def record_to_dict(record: MappingRecord) -> dict[str, Any]:
    if isinstance(record, Comment):
        return {"kind": "comment", "text": record.text}
    if isinstance(record, ClassRecord):
        return {"kind": "class", "names": list(record.names)}
    if isinstance(record, FieldRecord):
        return {
            "kind": "field",
            "owner": record.owner,
            "type": type_to_dict(record.type),
            "names": list(record.names),
        }
    if isinstance(record, MethodRecord):
        return {
            "kind": "method",
            "owner": record.owner,
            "parameter_types": [type_to_dict(t) for t in record.parameter_types],
            "return_type": type_to_dict(record.return_type),
            "names": list(record.names),
        }
    raise TypeError(f"Not a mapping record: {type(record).__name__}")


def record_from_dict(data: dict[str, Any]) -> MappingRecord:
    kind = data.get("kind")
    if kind == "comment":
        return Comment(text=data["text"])
    if kind == "class":
        return ClassRecord(names=tuple(data["names"]))
    if kind == "field":
        return FieldRecord(
            owner=data["owner"],
            type=type_from_dict(data["type"]),
            names=tuple(data["names"]),
        )
    if kind == "method":
        return MethodRecord(
            owner=data["owner"],
            parameter_types=tuple(type_from_dict(t) for t in data["parameter_types"]),
            return_type=type_from_dict(data["return_type"]),
            names=tuple(data["names"]),
        )
    raise ValueError(f"Unknown record kind: {kind!r}")


def to_dict(mapping: TinyMapping) -> dict[str, Any]:
    """Convert a whole mapping to JSON-compatible data."""
    return {
        "version": "v1",
        "namespaces": list(mapping.namespaces),
        "records": [record_to_dict(r) for r in mapping.records],
    }


def from_dict(data: dict[str, Any]) -> TinyMapping:
    if data.get("version", "v1") != "v1":
        raise ValueError(f"Unsupported mapping version: {data['version']!r}")
    return TinyMapping(
        namespaces=tuple(data["namespaces"]),
        records=tuple(record_from_dict(r) for r in data.get("records", [])),
    )


def dumps(mapping: TinyMapping, indent: int | None = 2) -> str:
    return json.dumps(to_dict(mapping), indent=indent, ensure_ascii=False)


def loads(text: str) -> TinyMapping:
    return from_dict(json.loads(text))
