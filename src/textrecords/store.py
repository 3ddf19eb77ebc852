"""RecordStore: a records file loaded into memory."""

from __future__ import annotations

import re
import sys
from functools import partial
from pathlib import Path
from typing import IO, Any, Callable, Iterator

from textrecords.collection import RecordCollection
from textrecords.engine import QueryEngine
from textrecords.files import load_text, save_text
from textrecords.parsing.record_parser import RecordParser
from textrecords.serializer import serialize
from textrecords.types import RecordType, as_record_type

# Per-field shortcuts: method prefix -> engine method
_SHORTCUTS: dict[str, str] = {
    "find_all_by_": "find_all",
    "find_by_": "find",
    "has_": "has_value",
    "count_by_": "count",
    "update_all_by_": "update_all",
    "update_by_": "update",
    "remove_all_by_": "remove_all",
    "remove_by_": "remove",
}
_SHORTCUT_RE = re.compile(
    "^(" + "|".join(re.escape(p) for p in sorted(_SHORTCUTS, key=len, reverse=True)) + ")(.+)$"
)


class RecordStore(QueryEngine):
    """Records of one type, parsed from and saved to the records text format.

    Example:
        @dataclass
        class Person:
            name: str = ""
            id: int = 0

        store = RecordStore(Person)
        store.parse_file("people.txt")
        store.find_all_by_id(100)
        store.insert("Utada Hikaru", 111)
        store.save("people.txt")

    Besides the generic operations, every field ``f`` gets shortcuts:
    ``find_by_f``, ``find_all_by_f``, ``has_f``, ``count_by_f``,
    ``update_by_f``, ``update_all_by_f``, ``remove_by_f`` and
    ``remove_all_by_f``.
    """

    def __init__(self, record_type: RecordType | type) -> None:
        record_type = as_record_type(record_type)
        super().__init__(RecordCollection(record_type))
        self._parser = RecordParser(record_type)

    @property
    def records(self) -> RecordCollection:
        return self.collection

    def get_records(self) -> list[Any]:
        """Return copies of all records."""
        return self.collection.to_list()

    # Text round trip

    def parse(self, text: str) -> list[Any]:
        """Parse records text and append the records to this store.

        Returns:
            The newly parsed records.

        Raises:
            RecordParseError: If a value cannot be coerced; the store is
                left unchanged.
        """
        records = self._parser.parse(text)
        self.collection.extend(records)
        return records

    def parse_file(self, path: Path | str) -> list[Any]:
        """Parse a records file; a missing or unreadable file adds nothing."""
        text = load_text(path)
        if text is None:
            return []
        return self.parse(text)

    def serialize(self) -> str:
        return serialize(self.collection, self.record_type)

    def save(self, path: Path | str) -> None:
        """Write all records to path in the records text format."""
        save_text(path, self.serialize())

    def dump(self, file: IO[str] | None = None) -> None:
        """Print every record, one per line."""
        out = file if file is not None else sys.stdout
        for record in self.collection:
            print(repr(record), file=out)

    # Sequence access

    def __len__(self) -> int:
        return len(self.collection)

    def __getitem__(self, index: int | slice) -> Any:
        return self.collection[index]

    def __iter__(self) -> Iterator[Any]:
        return iter(self.collection)

    def front(self) -> Any:
        return self.collection.front()

    def back(self) -> Any:
        return self.collection.back()

    def close(self) -> None:
        """Drop all records."""
        self.collection.clear()

    def __enter__(self) -> RecordStore:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RecordStore({self.record_type.name!r}, {len(self)} records)"

    # Per-field shortcuts

    def __getattr__(self, name: str) -> Callable[..., Any]:
        match = _SHORTCUT_RE.match(name)
        if match is not None and "collection" in self.__dict__:
            prefix, field_name = match.groups()
            if self.record_type.get_field(field_name) is not None:
                return partial(getattr(self, _SHORTCUTS[prefix]), field_name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __dir__(self) -> list[str]:
        names = set(super().__dir__())
        for prefix in _SHORTCUTS:
            names.update(prefix + f for f in self.record_type.field_names)
        return sorted(names)
