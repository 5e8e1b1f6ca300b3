"""Tests for the tiny language server helper functions."""

from lsprotocol import types

from tiny_mappings.dialects import Dialect
from tiny_mappings.errors import InvalidTypeError, UnexpectedEofError
from tiny_mappings.lsp.server import (
    completion_items,
    describe_descriptor,
    describe_token,
    detect_dialect,
    error_to_range,
    token_at_position,
)


# ---------------------------------------------------------------------------
# detect_dialect
# ---------------------------------------------------------------------------


class TestDetectDialect:
    def test_tab_header(self):
        assert detect_dialect("v1\ta\tb\nCLASS\tx\ty\n") is Dialect.TAB

    def test_space_header(self):
        assert detect_dialect("v1 a b\nCLASS x y\n") is Dialect.WHITESPACE

    def test_empty(self):
        assert detect_dialect("") is Dialect.WHITESPACE


# ---------------------------------------------------------------------------
# error_to_range
# ---------------------------------------------------------------------------


class TestErrorToRange:
    def test_located_error(self):
        error = InvalidTypeError("bad", line=3, column=8)
        rng = error_to_range(error)
        assert rng.start == types.Position(line=2, character=8)
        assert rng.end == types.Position(line=2, character=9)

    def test_unlocated_error(self):
        rng = error_to_range(UnexpectedEofError("eof"))
        assert rng.start == types.Position(line=0, character=0)


# ---------------------------------------------------------------------------
# token_at_position
# ---------------------------------------------------------------------------


class TestTokenAtPosition:
    def test_first_token(self):
        assert token_at_position("CLASS\ta\tb", 2) == (0, "CLASS")

    def test_later_token(self):
        assert token_at_position("FIELD\ta\t[I\tb\tc", 9) == (2, "[I")

    def test_on_separator(self):
        assert token_at_position("CLASS\ta\tb", 5) is None

    def test_past_end(self):
        assert token_at_position("CLASS", 10) is None


# ---------------------------------------------------------------------------
# describe_descriptor / describe_token
# ---------------------------------------------------------------------------


class TestDescribe:
    def test_field_descriptor(self):
        assert describe_descriptor("FIELD", "[[Ljava/lang/String;") == "java.lang.String[][]"

    def test_method_descriptor(self):
        assert describe_descriptor("METHOD", "(IJ)V") == "(int, long) → void"

    def test_invalid_descriptor(self):
        assert describe_descriptor("FIELD", "Q") is None

    def test_other_kind(self):
        assert describe_descriptor("CLASS", "I") is None

    def test_hover_keyword(self):
        assert describe_token("CLASS\ta\tb", 0).startswith("**CLASS**")

    def test_hover_comment(self):
        assert describe_token("# hello", 0).startswith("**#**")

    def test_hover_field_type(self):
        assert describe_token("FIELD\ta\t[I\tb\tc", 8) == "`[I` — int[]"

    def test_hover_name(self):
        assert describe_token("FIELD\ta\tI\tb\tc", 10) is None

    def test_hover_class_names_not_descriptors(self):
        assert describe_token("CLASS\ta\tI", 8) is None


# ---------------------------------------------------------------------------
# completion_items
# ---------------------------------------------------------------------------


class TestCompletionItems:
    def test_empty_line_offers_keywords(self):
        labels = [item.label for item in completion_items("")]
        assert labels == ["CLASS", "FIELD", "METHOD", "#"]

    def test_keyword_prefix(self):
        labels = [item.label for item in completion_items("ME")]
        assert labels == ["METHOD"]

    def test_comment_marker_prefix(self):
        labels = [item.label for item in completion_items("#")]
        assert labels == ["#"]

    def test_after_keyword(self):
        assert completion_items("CLASS ") == []

    def test_descriptor_offers_primitives(self):
        labels = [item.label for item in completion_items("METHOD\ta\t(I")]
        assert "I" in labels
        assert len(labels) == 9

    def test_array_prefix_offers_primitives(self):
        items = completion_items("FIELD\ta\t[")
        assert any(item.detail == "boolean" for item in items)
