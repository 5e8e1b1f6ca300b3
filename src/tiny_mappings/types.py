"""Value types for parsed tiny mappings and JVM type descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class PrimitiveType(Enum):
    """JVM primitive types, keyed by their one-letter descriptor code."""

    VOID = "V"
    CHAR = "C"
    BYTE = "B"
    SHORT = "S"
    INT = "I"
    LONG = "J"
    BOOLEAN = "Z"
    FLOAT = "F"
    DOUBLE = "D"

    @property
    def descriptor(self) -> str:
        return self.value

    @property
    def java_name(self) -> str:
        """Return the Java source keyword for this primitive (e.g. ``int``)."""
        return self.name.lower()

    def __repr__(self) -> str:
        return f"PrimitiveType.{self.name}"


# Mapping from descriptor codes to PrimitiveType enum values
PRIMITIVE_CODES: dict[str, PrimitiveType] = {pt.value: pt for pt in PrimitiveType}


@dataclass(frozen=True)
class ClassRef:
    """Reference to a class by its internal (slash-separated) name."""

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("ClassRef name must not be empty")
        if ";" in self.name:
            raise ValueError(f"ClassRef name must not contain ';': {self.name!r}")

    @property
    def descriptor(self) -> str:
        return f"L{self.name};"

    @property
    def java_name(self) -> str:
        return self.name.replace("/", ".")


@dataclass(frozen=True)
class ArrayOf:
    """An array of ``dimensions`` dimensions over a non-array element type.

    Consecutive ``[`` prefixes collapse into a single dimension count, so the
    element is never itself an ``ArrayOf``. Arrays of void do not exist.
    """

    dimensions: int
    element: Union[PrimitiveType, ClassRef]

    def __post_init__(self) -> None:
        if self.dimensions < 1:
            raise ValueError(f"Array dimensions must be >= 1, got {self.dimensions}")
        if self.element is PrimitiveType.VOID:
            raise ValueError("Arrays of void are not representable")
        if isinstance(self.element, ArrayOf):
            raise ValueError("Array element must not itself be an array")

    @property
    def descriptor(self) -> str:
        return "[" * self.dimensions + self.element.descriptor

    @property
    def java_name(self) -> str:
        return self.element.java_name + "[]" * self.dimensions


TypeDescriptor = Union[PrimitiveType, ClassRef, ArrayOf]


# ---- Mapping records ----


@dataclass(frozen=True)
class Comment:
    """A ``#`` comment line; ``text`` excludes the marker and outer whitespace."""

    text: str


@dataclass(frozen=True)
class ClassRecord:
    """A class entry: one name per namespace, in namespace order."""

    names: tuple[str, ...]

    @property
    def primary_name(self) -> str:
        return self.names[0]


@dataclass(frozen=True)
class FieldRecord:
    """A field entry. ``owner`` and ``type`` use primary-namespace names."""

    owner: str
    type: TypeDescriptor
    names: tuple[str, ...]

    @property
    def primary_name(self) -> str:
        return self.names[0]


@dataclass(frozen=True)
class MethodRecord:
    """A method entry. ``owner`` and the signature use primary-namespace names."""

    owner: str
    parameter_types: tuple[TypeDescriptor, ...]
    return_type: TypeDescriptor
    names: tuple[str, ...]

    @property
    def primary_name(self) -> str:
        return self.names[0]

    @property
    def descriptor(self) -> str:
        """Return the JVM method descriptor, e.g. ``(I[Ljava/lang/Object;)V``."""
        params = "".join(t.descriptor for t in self.parameter_types)
        return f"({params}){self.return_type.descriptor}"


MappingRecord = Union[Comment, ClassRecord, FieldRecord, MethodRecord]


@dataclass(frozen=True)
class TinyMapping:
    """Root value of a parsed document: namespaces plus records in input order."""

    namespaces: tuple[str, ...]
    records: tuple[MappingRecord, ...] = ()

    def __post_init__(self) -> None:
        if not self.namespaces:
            raise ValueError("A mapping must declare at least one namespace")
        if len(set(self.namespaces)) != len(self.namespaces):
            raise ValueError(f"Duplicate namespace names: {list(self.namespaces)}")

    def namespace_index(self, name: str) -> int:
        """Return the column index of namespace ``name``."""
        try:
            return self.namespaces.index(name)
        except ValueError:
            raise KeyError(f"Unknown namespace '{name}'") from None

    @property
    def comments(self) -> list[Comment]:
        return [r for r in self.records if isinstance(r, Comment)]

    @property
    def classes(self) -> list[ClassRecord]:
        return [r for r in self.records if isinstance(r, ClassRecord)]

    @property
    def fields(self) -> list[FieldRecord]:
        return [r for r in self.records if isinstance(r, FieldRecord)]

    @property
    def methods(self) -> list[MethodRecord]:
        return [r for r in self.records if isinstance(r, MethodRecord)]
