"""Command-line tool for inspecting and editing records files.

Usage:
    textrecords -t people.types show people.txt
    textrecords -t people.types find people.txt id 100 -n 0
    textrecords -t people.types insert people.txt "Utada Hikaru" 111
    textrecords -t people.types --type Person remove people.txt id 100
    textrecords -t people.types format people.txt -o clean.txt
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any

from textrecords.coercion import coerce_value
from textrecords.errors import TextRecordsError
from textrecords.schema import Schema
from textrecords.serializer import serialize
from textrecords.store import RecordStore
from textrecords.types import RecordType

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "TEXTRECORDS_LOG_LEVEL"


def _select_type(schema: Schema, type_name: str | None) -> RecordType:
    """Pick the record type to use; the name may be omitted if there is only one."""
    if type_name is not None:
        return schema.get_type(type_name)
    names = schema.list_types()
    if len(names) != 1:
        raise ValueError(
            f"--type is required when the schema declares {len(names)} types "
            f"({', '.join(names) or 'none'})"
        )
    return schema.get_type(names[0])


def _open_store(record_type: RecordType, data: Path, must_exist: bool = True) -> RecordStore:
    if must_exist and not data.exists():
        raise FileNotFoundError(f"Records file not found: {data}")
    store = RecordStore(record_type)
    store.parse_file(data)
    return store


def _field_value(record_type: RecordType, field_name: str, text: str) -> Any:
    field_def = record_type.get_field_or_raise(field_name)
    return coerce_value(text, field_def.scalar)


def cmd_show(args: argparse.Namespace, record_type: RecordType) -> int:
    store = _open_store(record_type, args.data)
    records = store.get_records()
    if args.limit:
        records = records[: args.limit]
    sys.stdout.write(serialize(records, record_type))
    return 0


def cmd_find(args: argparse.Namespace, record_type: RecordType) -> int:
    store = _open_store(record_type, args.data)
    value = _field_value(record_type, args.field, args.value)
    found = store.find(args.field, value, limit=args.limit)
    sys.stdout.write(serialize(found, record_type))
    print(f"({len(found)} records)", file=sys.stderr)
    return 0


def cmd_count(args: argparse.Namespace, record_type: RecordType) -> int:
    store = _open_store(record_type, args.data)
    print(len(store))
    return 0


def cmd_format(args: argparse.Namespace, record_type: RecordType) -> int:
    store = _open_store(record_type, args.data)
    if args.output:
        store.save(args.output)
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(store.serialize())
    return 0


def cmd_insert(args: argparse.Namespace, record_type: RecordType) -> int:
    store = _open_store(record_type, args.data, must_exist=False)
    if len(args.values) > len(record_type.fields):
        raise ValueError(
            f"{record_type.name} has {len(record_type.fields)} fields, "
            f"got {len(args.values)} values"
        )
    values = [
        coerce_value(text, field_def.scalar)
        for field_def, text in zip(record_type.fields, args.values)
    ]
    store.insert(*values)
    store.save(args.data)
    print(f"Inserted record {len(store) - 1}", file=sys.stderr)
    return 0


def cmd_remove(args: argparse.Namespace, record_type: RecordType) -> int:
    store = _open_store(record_type, args.data)
    value = _field_value(record_type, args.field, args.value)
    removed = store.remove(args.field, value, count=args.count)
    if removed:
        store.save(args.data)
    print(f"Removed {removed} records", file=sys.stderr)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textrecords",
        description="Inspect and edit brace-delimited records files",
    )
    parser.add_argument(
        "-t", "--types",
        type=Path,
        required=True,
        help="Record type definitions file",
    )
    parser.add_argument(
        "--type",
        dest="type_name",
        default=None,
        help="Record type to use (optional if the definitions declare one type)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or WARNING)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("show", help="Print records")
    show.add_argument("data", type=Path, help="Records file")
    show.add_argument("-n", "--limit", type=int, default=0, help="Print at most N records")
    show.set_defaults(handler=cmd_show)

    find = commands.add_parser("find", help="Print records whose field equals a value")
    find.add_argument("data", type=Path, help="Records file")
    find.add_argument("field", help="Field name")
    find.add_argument("value", help="Value to match")
    find.add_argument("-n", "--limit", type=int, default=0, help="Match at most N records (0 = all)")
    find.set_defaults(handler=cmd_find)

    count = commands.add_parser("count", help="Print the number of records")
    count.add_argument("data", type=Path, help="Records file")
    count.set_defaults(handler=cmd_count)

    fmt = commands.add_parser("format", help="Rewrite records in canonical form")
    fmt.add_argument("data", type=Path, help="Records file")
    fmt.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    fmt.set_defaults(handler=cmd_format)

    insert = commands.add_parser("insert", help="Append a record given its field values")
    insert.add_argument("data", type=Path, help="Records file (created if missing)")
    insert.add_argument("values", nargs="+", help="Field values in declared order")
    insert.set_defaults(handler=cmd_insert)

    remove = commands.add_parser("remove", help="Remove records whose field equals a value")
    remove.add_argument("data", type=Path, help="Records file")
    remove.add_argument("field", help="Field name")
    remove.add_argument("value", help="Value to match")
    remove.add_argument("-n", "--count", type=int, default=1, help="Remove at most N records (0 = all)")
    remove.set_defaults(handler=cmd_remove)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.types.exists():
        print(f"Error: Type definitions not found: {args.types}", file=sys.stderr)
        return 1

    try:
        schema = Schema.load(args.types)
        record_type = _select_type(schema, args.type_name)
        return args.handler(args, record_type)
    except (TextRecordsError, SyntaxError, ValueError, KeyError, OSError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
