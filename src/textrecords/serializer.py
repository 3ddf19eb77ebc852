"""Render records back into the brace-delimited text format."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from textrecords.coercion import format_value
from textrecords.types import RecordType

logger = logging.getLogger(__name__)

# Characters str.splitlines() breaks on
_LINE_BREAKS = frozenset("\n\r\v\f\x1c\x1d\x1e\x85\u2028\u2029")


def reload_hazard(value: str) -> str | None:
    """Describe why a string value would not read back unchanged, if it would not."""
    if '"' in value:
        return "quote characters are not escaped"
    if "{" in value or "}" in value:
        return "brace characters are read as block markers"
    if not _LINE_BREAKS.isdisjoint(value):
        return "line breaks split the field line"
    return None


def format_record(record: Any, record_type: RecordType, indent: str = "\t") -> str:
    """Format one record as a block, without the trailing blank line."""
    lines = ["{"]
    for field_def in record_type.fields:
        text = format_value(record_type.get_value(record, field_def), field_def.scalar)
        lines.append(f'{indent}{field_def.name} "{text}"')
    lines.append("}")
    return "\n".join(lines)


def serialize(records: Iterable[Any], record_type: RecordType, indent: str = "\t") -> str:
    """Serialize records in order, one block per record, blank line between.

    Values are written as-is, without escaping. A string containing a quote
    character, a brace or a line break does not read back unchanged; each
    such field is logged at WARNING.
    """
    blocks = []
    for position, record in enumerate(records):
        for field_def in record_type.fields:
            value = record_type.get_value(record, field_def)
            hazard = reload_hazard(value) if isinstance(value, str) else None
            if hazard is not None:
                logger.warning(
                    "Record %d, field '%s': %s and the value may not survive a reload",
                    position, field_def.name, hazard,
                )
        blocks.append(format_record(record, record_type, indent) + "\n\n")
    return "".join(blocks)
