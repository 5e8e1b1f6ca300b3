"""Tiny Mappings Language Server — diagnostics, completion, hover via pygls."""

from __future__ import annotations

import re

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from tiny_mappings.dialects import Dialect
from tiny_mappings.errors import MappingSyntaxError
from tiny_mappings.parsing import (
    MappingParser,
    parse_field_descriptor,
    parse_method_descriptor,
)
from tiny_mappings.types import PrimitiveType

# ---------------------------------------------------------------------------
# Static data
# ---------------------------------------------------------------------------

KEYWORDS: dict[str, str] = {
    "v1": "Header — format version followed by the namespace names",
    "CLASS": "Class entry — one class name per namespace",
    "FIELD": "Field entry — owner, type descriptor, one name per namespace",
    "METHOD": "Method entry — owner, method descriptor, one name per namespace",
    "#": "Comment — the rest of the line is free text",
}

# Column of the type descriptor on FIELD and METHOD lines
_DESCRIPTOR_COLUMN = 2

_TOKEN_RE = re.compile(r"\S+")

# ---------------------------------------------------------------------------
# Helpers (module-level so they are easy to unit-test)
# ---------------------------------------------------------------------------


def detect_dialect(source: str) -> Dialect:
    """Pick the dialect for a document from its header line."""
    header = source.split("\n", 1)[0]
    return Dialect.TAB if "\t" in header else Dialect.WHITESPACE


def error_to_range(error: MappingSyntaxError) -> types.Range:
    """Convert a parse error's line/column into a one-character LSP range."""
    line = max((error.line or 1) - 1, 0)
    character = max(error.column or 0, 0)
    return types.Range(
        start=types.Position(line=line, character=character),
        end=types.Position(line=line, character=character + 1),
    )


def token_at_position(line_text: str, character: int) -> tuple[int, str] | None:
    """Return ``(field_index, token)`` for the whitespace-delimited token under *character*."""
    for index, m in enumerate(_TOKEN_RE.finditer(line_text)):
        if m.start() <= character < m.end():
            return index, m.group(0)
    return None


def describe_descriptor(kind: str, token: str) -> str | None:
    """Return the Java spelling of a FIELD or METHOD descriptor token, or None."""
    try:
        if kind == "FIELD":
            return parse_field_descriptor(token).java_name
        if kind == "METHOD":
            params, return_type = parse_method_descriptor(token)
            args = ", ".join(t.java_name for t in params)
            return f"({args}) → {return_type.java_name}"
    except MappingSyntaxError:
        return None
    return None


def describe_token(line_text: str, character: int) -> str | None:
    """Return hover markdown for the token under *character*, or None."""
    found = token_at_position(line_text, character)
    if found is None:
        return None
    index, token = found

    if index == 0:
        if token.startswith("#"):
            return f"**#** — {KEYWORDS['#']}"
        if token in KEYWORDS:
            return f"**{token}** — {KEYWORDS[token]}"
        return None

    if index == _DESCRIPTOR_COLUMN:
        kind = line_text.split(None, 1)[0]
        described = describe_descriptor(kind, token)
        if described is not None:
            return f"`{token}` — {described}"
    return None


def completion_items(line_prefix: str) -> list[types.CompletionItem]:
    """Return completion items for the text before the cursor on one line."""
    items: list[types.CompletionItem] = []
    stripped = line_prefix.lstrip()

    if not stripped or (len(stripped.split()) == 1 and not line_prefix[-1:].isspace()):
        for keyword in ("CLASS", "FIELD", "METHOD", "#"):
            if keyword.startswith(stripped):
                items.append(
                    types.CompletionItem(
                        label=keyword,
                        kind=types.CompletionItemKind.Keyword,
                        detail=KEYWORDS[keyword],
                    )
                )
        return items

    current = line_prefix.split()[-1] if not line_prefix[-1:].isspace() else ""
    if current.startswith(("(", "[")) or current.endswith(")"):
        for primitive in PrimitiveType:
            items.append(
                types.CompletionItem(
                    label=primitive.value,
                    kind=types.CompletionItemKind.TypeParameter,
                    detail=primitive.java_name,
                )
            )
    return items


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------

server = LanguageServer("tiny-language-server", "0.1.0")
_parsers: dict[Dialect, MappingParser] = {}


def _parser_for(dialect: Dialect) -> MappingParser:
    if dialect not in _parsers:
        parser = MappingParser(dialect)
        parser.build()
        _parsers[dialect] = parser
    return _parsers[dialect]


@server.feature(types.TEXT_DOCUMENT_DID_OPEN)
def did_open(params: types.DidOpenTextDocumentParams) -> None:
    _validate_document(params.text_document.uri)


@server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: types.DidChangeTextDocumentParams) -> None:
    _validate_document(params.text_document.uri)


def _validate_document(uri: str) -> None:
    doc = server.workspace.get_text_document(uri)
    source = doc.source
    diagnostics: list[types.Diagnostic] = []
    try:
        _parser_for(detect_dialect(source)).parse(source)
    except MappingSyntaxError as exc:
        diagnostics.append(
            types.Diagnostic(
                range=error_to_range(exc),
                severity=types.DiagnosticSeverity.Error,
                source="tiny",
                code=exc.kind,
                message=exc.msg,
            )
        )
    server.text_document_publish_diagnostics(
        types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(
    types.TEXT_DOCUMENT_COMPLETION,
    types.CompletionOptions(trigger_characters=["(", "[", ")"]),
)
def completions(params: types.CompletionParams) -> types.CompletionList:
    doc = server.workspace.get_text_document(params.text_document.uri)
    line_text = doc.lines[params.position.line] if params.position.line < len(doc.lines) else ""
    prefix = line_text[: params.position.character]
    if params.position.line == 0:
        return types.CompletionList(is_incomplete=False, items=[])
    return types.CompletionList(is_incomplete=False, items=completion_items(prefix))


@server.feature(types.TEXT_DOCUMENT_HOVER)
def hover(params: types.HoverParams) -> types.Hover | None:
    doc = server.workspace.get_text_document(params.text_document.uri)
    if params.position.line >= len(doc.lines):
        return None
    line_text = doc.lines[params.position.line].rstrip("\r\n")
    content = describe_token(line_text, params.position.character)
    if content is None:
        return None
    return types.Hover(
        contents=types.MarkupContent(
            kind=types.MarkupKind.Markdown,
            value=content,
        )
    )


def main() -> None:
    server.start_io()


if __name__ == "__main__":
    main()
