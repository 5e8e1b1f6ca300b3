"""Tests for canonical tiny v1 output."""

import io

import pytest

from tiny_mappings.dialects import Dialect
from tiny_mappings.parsing import MappingParser
from tiny_mappings.types import (
    ArrayOf,
    ClassRecord,
    ClassRef,
    Comment,
    FieldRecord,
    MethodRecord,
    PrimitiveType,
    TinyMapping,
)
from tiny_mappings.writer import format_mapping, format_record, write_mapping

SAMPLE = TinyMapping(
    namespaces=("official", "named"),
    records=(
        Comment("generated"),
        ClassRecord(("a", "net/minecraft/Block")),
        FieldRecord("a", ArrayOf(2, PrimitiveType.INT), ("b", "grid")),
        MethodRecord(
            "a",
            (PrimitiveType.INT, ArrayOf(1, ClassRef("java/lang/Object"))),
            PrimitiveType.VOID,
            ("c", "update"),
        ),
        Comment(""),
    ),
)


def _parser(dialect):
    p = MappingParser(dialect)
    p.build(debug=False, write_tables=False)
    return p


class TestFormatRecord:
    def test_class_tab(self):
        assert format_record(ClassRecord(("a", "b"))) == "CLASS\ta\tb"

    def test_field_whitespace(self):
        record = FieldRecord("a", PrimitiveType.INT, ("b", "c"))
        assert format_record(record, Dialect.WHITESPACE) == "FIELD a I b c"

    def test_method(self):
        record = SAMPLE.records[3]
        assert format_record(record) == "METHOD\ta\t(I[Ljava/lang/Object;)V\tc\tupdate"

    def test_comment(self):
        assert format_record(Comment("hello")) == "# hello"
        assert format_record(Comment("")) == "#"

    def test_not_a_record(self):
        with pytest.raises(TypeError):
            format_record("CLASS\ta")


class TestFormatMapping:
    def test_tab_document(self):
        text = format_mapping(SAMPLE)
        lines = text.split("\n")
        assert lines[0] == "v1\tofficial\tnamed"
        assert lines[1] == "# generated"
        assert text.endswith("\n")

    def test_write_matches_format(self):
        stream = io.StringIO()
        write_mapping(SAMPLE, stream, Dialect.WHITESPACE)
        assert stream.getvalue() == format_mapping(SAMPLE, Dialect.WHITESPACE)


class TestRoundTrip:
    @pytest.mark.parametrize("dialect", list(Dialect))
    def test_sample_round_trip(self, dialect):
        parser = _parser(dialect)
        assert parser.parse(format_mapping(SAMPLE, dialect)) == SAMPLE

    @pytest.mark.parametrize("dialect", list(Dialect))
    def test_reformat_is_idempotent(self, dialect):
        parser = _parser(Dialect.WHITESPACE)
        messy = "  v1   official\tnamed \n#   note   \nMETHOD a  ([[JLx;)Z  b   c\n"
        once = format_mapping(parser.parse(messy), dialect)
        twice = format_mapping(_parser(dialect).parse(once), dialect)
        assert once == twice
