"""Command-line tool to parse a tiny v1 file and print its contents."""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path

from tiny_mappings import export
from tiny_mappings.dialects import Dialect
from tiny_mappings.errors import MappingSyntaxError
from tiny_mappings.parsing import MappingParser
from tiny_mappings.types import (
    ClassRecord,
    Comment,
    FieldRecord,
    MappingRecord,
    MethodRecord,
    TinyMapping,
)


def describe_record(record: MappingRecord) -> str:
    """Return a one-line human readable description of a record."""
    if isinstance(record, Comment):
        return f"# {record.text}"
    if isinstance(record, ClassRecord):
        return f"CLASS   {' -> '.join(record.names)}"
    if isinstance(record, FieldRecord):
        renamed = " -> ".join(record.names)
        return f"FIELD   {record.owner}.{renamed} : {record.type.java_name}"
    if isinstance(record, MethodRecord):
        params = ", ".join(t.java_name for t in record.parameter_types)
        renamed = " -> ".join(record.names)
        return f"METHOD  {record.owner}.{renamed}({params}) : {record.return_type.java_name}"
    raise TypeError(f"Not a mapping record: {type(record).__name__}")


def dump_listing(mapping: TinyMapping, limit: int | None = None) -> None:
    """Print the namespaces and each record."""
    print(f"Namespaces: {', '.join(mapping.namespaces)}")
    records = mapping.records if limit is None else mapping.records[:limit]
    for record in records:
        print(f"  {describe_record(record)}")
    if limit is not None and len(mapping.records) > limit:
        print(f"  ... ({len(mapping.records) - limit} more)")


def dump_summary(mapping: TinyMapping) -> None:
    """Print per-kind record counts."""
    counts = Counter(type(r).__name__ for r in mapping.records)
    print(f"Namespaces: {', '.join(mapping.namespaces)}")
    for kind, label in (
        ("ClassRecord", "classes"),
        ("FieldRecord", "fields"),
        ("MethodRecord", "methods"),
        ("Comment", "comments"),
    ):
        print(f"  {label:<10} {counts.get(kind, 0):>8}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Parse a tiny v1 mapping file and print its contents"
    )
    parser.add_argument(
        "file",
        type=Path,
        help="Path to the .tiny mapping file",
    )
    parser.add_argument(
        "-d", "--dialect",
        choices=[d.value for d in Dialect],
        default=Dialect.TAB.value,
        help="Field separator rules (default: tab)",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "-j", "--json",
        action="store_true",
        help="Output as JSON",
    )
    output.add_argument(
        "-s", "--summary",
        action="store_true",
        help="Only print record counts",
    )
    parser.add_argument(
        "-n", "--limit",
        type=int,
        default=None,
        help="Limit number of records to display",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.file.exists():
        print(f"Error: Mapping file not found: {args.file}", file=sys.stderr)
        return 1

    mapping_parser = MappingParser(Dialect.from_name(args.dialect))
    try:
        with open(args.file, "rb") as f:
            mapping = mapping_parser.parse(f)
    except MappingSyntaxError as e:
        print(f"Error: {args.file}: {e}", file=sys.stderr)
        return 1

    if args.json:
        if args.limit is not None:
            mapping = TinyMapping(mapping.namespaces, mapping.records[:args.limit])
        print(export.dumps(mapping))
    elif args.summary:
        dump_summary(mapping)
    else:
        dump_listing(mapping, args.limit)

    return 0


if __name__ == "__main__":
    sys.exit(main())
