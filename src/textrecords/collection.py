"""Ordered in-memory collection of typed records."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from textrecords.types import RecordType


class RecordCollection:
    """Insertion-ordered sequence of records of one record type.

    Records are copied on the way in and on the way out, so callers never
    hold a reference to a stored record.
    """

    def __init__(self, record_type: RecordType, records: Iterable[Any] = ()) -> None:
        self.record_type = record_type
        self._records: list[Any] = []
        self.extend(records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return [self.record_type.copy_record(r) for r in self._records[index]]
        return self.record_type.copy_record(self._records[index])

    def __iter__(self) -> Iterator[Any]:
        for record in list(self._records):
            yield self.record_type.copy_record(record)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RecordCollection):
            return self._records == other._records
        if isinstance(other, list):
            return self._records == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"RecordCollection({self.record_type.name!r}, {len(self._records)} records)"

    def front(self) -> Any:
        """Return a copy of the first record."""
        if not self._records:
            raise IndexError("front() on an empty collection")
        return self[0]

    def back(self) -> Any:
        """Return a copy of the last record."""
        if not self._records:
            raise IndexError("back() on an empty collection")
        return self[-1]

    def append(self, record: Any) -> int:
        """Append a copy of record and return its index."""
        if not self.record_type.is_record(record):
            raise TypeError(
                f"Expected a {self.record_type.name} record, got {type(record).__name__}"
            )
        self._records.append(self.record_type.copy_record(record))
        return len(self._records) - 1

    def extend(self, records: Iterable[Any]) -> None:
        for record in records:
            self.append(record)

    def remove_indices(self, indices: Iterable[int]) -> int:
        """Remove the records at the given positions and return how many went.

        Later records shift down; the survivors keep their relative order.
        """
        size = len(self._records)
        doomed: set[int] = set()
        for index in indices:
            if index < -size or index >= size:
                raise IndexError(f"Index {index} out of range [0, {size})")
            doomed.add(index % size)
        if doomed:
            self._records = [r for i, r in enumerate(self._records) if i not in doomed]
        return len(doomed)

    def remove_at(self, index: int, count: int = 1) -> int:
        """Remove up to count consecutive records starting at index."""
        if count < 0:
            raise ValueError("count must be >= 0")
        size = len(self._records)
        if index < -size or index >= size:
            raise IndexError(f"Index {index} out of range [0, {size})")
        start = index % size
        stop = min(start + count, size)
        del self._records[start:stop]
        return stop - start

    def clear(self) -> None:
        self._records.clear()

    def to_list(self) -> list[Any]:
        """Return copies of all records."""
        return list(self)

    # Engine access: the stored objects themselves, without copying

    def _scan(self) -> Iterator[tuple[int, Any]]:
        return enumerate(self._records)

    def _stored(self, index: int) -> Any:
        return self._records[index]

    def _replace(self, index: int, record: Any) -> None:
        self._records[index] = record
