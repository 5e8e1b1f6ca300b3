"""Tests for the value types."""

import pytest

from tiny_mappings.types import (
    PRIMITIVE_CODES,
    ArrayOf,
    ClassRecord,
    ClassRef,
    Comment,
    FieldRecord,
    MethodRecord,
    PrimitiveType,
    TinyMapping,
)


class TestPrimitiveType:
    def test_codes(self):
        assert PRIMITIVE_CODES["J"] is PrimitiveType.LONG
        assert PRIMITIVE_CODES["Z"] is PrimitiveType.BOOLEAN
        assert len(PRIMITIVE_CODES) == 9

    def test_java_name(self):
        assert PrimitiveType.INT.java_name == "int"
        assert PrimitiveType.BOOLEAN.java_name == "boolean"
        assert PrimitiveType.VOID.descriptor == "V"


class TestClassRef:
    def test_descriptor(self):
        ref = ClassRef("java/lang/String")
        assert ref.descriptor == "Ljava/lang/String;"
        assert ref.java_name == "java.lang.String"

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            ClassRef("")

    def test_semicolon_rejected(self):
        with pytest.raises(ValueError):
            ClassRef("a;b")


class TestArrayOf:
    def test_descriptor(self):
        array = ArrayOf(2, PrimitiveType.INT)
        assert array.descriptor == "[[I"
        assert array.java_name == "int[][]"

    def test_class_element(self):
        array = ArrayOf(1, ClassRef("java/lang/Object"))
        assert array.descriptor == "[Ljava/lang/Object;"
        assert array.java_name == "java.lang.Object[]"

    def test_zero_dimensions_rejected(self):
        with pytest.raises(ValueError):
            ArrayOf(0, PrimitiveType.INT)

    def test_void_element_rejected(self):
        with pytest.raises(ValueError):
            ArrayOf(1, PrimitiveType.VOID)

    def test_nested_array_rejected(self):
        with pytest.raises(ValueError):
            ArrayOf(1, ArrayOf(1, PrimitiveType.INT))

    def test_equality_and_hash(self):
        assert ArrayOf(1, PrimitiveType.BYTE) == ArrayOf(1, PrimitiveType.BYTE)
        assert ArrayOf(1, PrimitiveType.BYTE) != ArrayOf(1, PrimitiveType.CHAR)
        assert len({ArrayOf(1, PrimitiveType.BYTE), ArrayOf(1, PrimitiveType.BYTE)}) == 1


class TestRecords:
    def test_method_descriptor(self):
        record = MethodRecord(
            owner="a",
            parameter_types=(PrimitiveType.INT, ArrayOf(1, ClassRef("java/lang/Object"))),
            return_type=PrimitiveType.VOID,
            names=("b", "c"),
        )
        assert record.descriptor == "(I[Ljava/lang/Object;)V"
        assert record.primary_name == "b"

    def test_records_are_frozen(self):
        record = ClassRecord(names=("a", "b"))
        with pytest.raises(AttributeError):
            record.names = ("c",)


class TestTinyMapping:
    def test_requires_namespace(self):
        with pytest.raises(ValueError):
            TinyMapping(namespaces=())

    def test_rejects_duplicate_namespaces(self):
        with pytest.raises(ValueError):
            TinyMapping(namespaces=("a", "a"))

    def test_namespace_index(self):
        mapping = TinyMapping(namespaces=("official", "named"))
        assert mapping.namespace_index("named") == 1
        with pytest.raises(KeyError):
            mapping.namespace_index("intermediary")

    def test_views(self):
        mapping = TinyMapping(
            namespaces=("a", "b"),
            records=(
                Comment("hi"),
                ClassRecord(("x", "y")),
                FieldRecord("x", PrimitiveType.INT, ("f", "g")),
                MethodRecord("x", (), PrimitiveType.VOID, ("m", "n")),
            ),
        )
        assert mapping.comments == [Comment("hi")]
        assert [c.names for c in mapping.classes] == [("x", "y")]
        assert [f.names for f in mapping.fields] == [("f", "g")]
        assert [m.names for m in mapping.methods] == [("m", "n")]
