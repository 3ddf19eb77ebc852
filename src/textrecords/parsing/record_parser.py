"""Parser for the brace-delimited records text format.

The format is line oriented::

    {
        name "Albert Einstein"
        id "100"
    }

A line containing ``{`` opens a block and a line containing ``}`` closes it.
Every line in between that looks like ``key value`` sets the field named
``key``. Parsing is lenient: unknown keys, malformed lines, stray closing
braces and text outside blocks are skipped without error. Only a value that
cannot be converted to its field's type is a hard error.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from textrecords.coercion import coerce_value
from textrecords.errors import CoercionError, RecordParseError
from textrecords.types import RecordType

logger = logging.getLogger(__name__)

BLOCK_OPEN = "{"
BLOCK_CLOSE = "}"

FIELD_LINE_RE = re.compile(r'\s*"?(?P<key>[A-Za-z0-9_]+)"?\s(?P<value>.*)')


def split_field_line(line: str) -> tuple[str, str] | None:
    """Split a content line into (key, value) with surrounding quotes removed.

    Returns None for lines that do not look like a field.
    """
    match = FIELD_LINE_RE.fullmatch(line)
    if match is None:
        return None
    return match.group("key"), match.group("value").strip('"')


class RecordParser:
    """Turns records text into instances of a record type."""

    def __init__(self, record_type: RecordType) -> None:
        self.record_type = record_type

    def parse(self, text: str) -> list[Any]:
        """Parse text and return the records in block order.

        Raises:
            RecordParseError: If a field value cannot be coerced. Nothing is
                returned for the batch in that case.
        """
        records: list[Any] = []
        # Raw line group: (line_number, line) pairs for the open block
        group: list[tuple[int, str]] = []
        in_block = False

        for line_number, line in enumerate(text.splitlines(), start=1):
            if BLOCK_OPEN in line:
                if in_block and group:
                    logger.debug(
                        "Line %d: block reopened, discarding %d lines", line_number, len(group)
                    )
                group = []
                in_block = True
            elif BLOCK_CLOSE in line:
                if not in_block:
                    logger.debug("Line %d: closing brace outside a block ignored", line_number)
                    continue
                records.append(self._convert(group, len(records)))
                group = []
                in_block = False
            elif in_block:
                group.append((line_number, line))

        if in_block:
            logger.debug("Unclosed block at end of input discarded (%d lines)", len(group))

        logger.debug("Parsed %d %s records", len(records), self.record_type.name)
        return records

    def _convert(self, group: list[tuple[int, str]], record_index: int) -> Any:
        """Build one record from the lines of a block."""
        values: dict[str, Any] = {}

        for line_number, line in group:
            pair = split_field_line(line)
            if pair is None:
                if line.strip():
                    logger.debug("Line %d: not a field line, skipped", line_number)
                continue

            key, raw = pair
            field_def = self.record_type.get_field(key)
            if field_def is None:
                logger.debug("Line %d: unknown field '%s' skipped", line_number, key)
                continue

            try:
                values[key] = coerce_value(raw, field_def.scalar)
            except CoercionError as e:
                raise RecordParseError(
                    e.text, e.scalar, record_index, key, line_number
                ) from e

        return self.record_type.new_record(**values)
