"""Query and mutation operations over a record collection.

Operations select records either by a field and a value or by a
predicate. A field is given as its name or as a FieldDescriptor; a
predicate is any callable that takes a record and returns a truth value.
Predicates receive a copy, so they cannot change stored records.

``limit``/``count`` arguments cap how many matches an operation takes from
the front of the collection; 0 means all of them.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Union

from textrecords.collection import RecordCollection
from textrecords.types import FieldDefinition, FieldDescriptor, RecordType

logger = logging.getLogger(__name__)

Selector = Union[str, FieldDescriptor]
Predicate = Callable[[Any], Any]

_UNSET = object()


def _check_limit(limit: int) -> None:
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")


def _limit_reached(matched: int, limit: int) -> bool:
    """Stop once exactly `limit` matches were taken (0 = never stop)."""
    return limit != 0 and matched >= limit


class QueryEngine:
    """Linear-scan find/update/remove/insert over a RecordCollection."""

    def __init__(self, collection: RecordCollection) -> None:
        self.collection = collection

    @property
    def record_type(self) -> RecordType:
        return self.collection.record_type

    # Matching

    def _field_matcher(self, selector: Selector, value: Any) -> Callable[[Any], bool] | None:
        """Build a matcher for field == value, or None if nothing can match."""
        field_def = self.record_type.resolve(selector)
        if field_def is None:
            logger.debug("Field %r does not have the requested type; no matches", selector)
            return None
        if not field_def.scalar.accepts(value):
            logger.debug(
                "%r is not a %s value for field '%s'; no matches",
                value, field_def.scalar.value, field_def.name,
            )
            return None
        name = field_def.name
        return lambda record: getattr(record, name) == value

    def _predicate_matcher(self, predicate: Predicate) -> Callable[[Any], bool]:
        copy_record = self.record_type.copy_record
        return lambda record: bool(predicate(copy_record(record)))

    def _matcher(
        self, selector: Selector | Predicate, value: Any, operation: str
    ) -> Callable[[Any], bool] | None:
        if callable(selector):
            if value is not _UNSET:
                raise TypeError(f"{operation}() takes no value when given a predicate")
            return self._predicate_matcher(selector)
        if value is _UNSET:
            raise TypeError(f"{operation}() requires a value when given a field")
        return self._field_matcher(selector, value)

    def _matching_indices(self, matcher: Callable[[Any], bool] | None, limit: int) -> Iterator[int]:
        if matcher is None:
            return
        matched = 0
        for index, record in self.collection._scan():
            if _limit_reached(matched, limit):
                return
            if matcher(record):
                matched += 1
                yield index

    # Find

    def find(self, selector: Selector | Predicate, value: Any = _UNSET, *, limit: int = 1) -> list[Any]:
        """Return up to `limit` matching records in collection order.

        Examples:
            store.find("id", 100)                 # first record with id 100
            store.find("id", 100, limit=0)        # every record with id 100
            store.find(lambda r: r.id > 100, limit=5)
        """
        _check_limit(limit)
        matcher = self._matcher(selector, value, "find")
        found = [self.collection[i] for i in self._matching_indices(matcher, limit)]
        logger.debug("find(%r) matched %d records", selector, len(found))
        return found

    def find_all(self, selector: Selector | Predicate, value: Any = _UNSET) -> list[Any]:
        """Return every matching record in collection order."""
        return self.find(selector, value, limit=0)

    def has_value(self, selector: Selector | Predicate, value: Any = _UNSET) -> bool:
        """Return whether at least one record matches."""
        matcher = self._matcher(selector, value, "has_value")
        return next(self._matching_indices(matcher, 1), None) is not None

    def count(self, selector: Selector | Predicate, value: Any = _UNSET) -> int:
        """Return how many records match."""
        matcher = self._matcher(selector, value, "count")
        return sum(1 for _ in self._matching_indices(matcher, 0))

    # Update

    def _update_matching(
        self, field_def: FieldDefinition, new_value: Any,
        matcher: Callable[[Any], bool] | None, limit: int,
    ) -> int:
        self.record_type.check_value(field_def, new_value)
        indices = list(self._matching_indices(matcher, limit))
        for index in indices:
            record = self.collection._stored(index)
            self.collection._replace(index, self.record_type.with_value(record, field_def, new_value))
        logger.debug("Updated %d records: %s = %r", len(indices), field_def.name, new_value)
        return len(indices)

    def update(self, selector: Selector, match_value: Any, new_value: Any, *, limit: int = 1) -> int:
        """Set the field to new_value on up to `limit` records where it equals match_value.

        Returns:
            The number of records updated.

        Raises:
            FieldTypeError: If new_value is not of the field's type.
        """
        _check_limit(limit)
        field_def = self.record_type.resolve(selector)
        if field_def is None:
            return 0
        matcher = self._field_matcher(selector, match_value)
        return self._update_matching(field_def, new_value, matcher, limit)

    def update_all(self, selector: Selector, match_value: Any, new_value: Any) -> int:
        return self.update(selector, match_value, new_value, limit=0)

    def update_where(
        self, selector: Selector, new_value: Any, predicate: Predicate, *, limit: int = 1
    ) -> int:
        """Set the field to new_value on up to `limit` records the predicate accepts."""
        _check_limit(limit)
        field_def = self.record_type.resolve(selector)
        if field_def is None:
            return 0
        return self._update_matching(
            field_def, new_value, self._predicate_matcher(predicate), limit
        )

    def update_all_where(self, selector: Selector, new_value: Any, predicate: Predicate) -> int:
        return self.update_where(selector, new_value, predicate, limit=0)

    # Remove

    def remove(self, selector: Selector | Predicate, value: Any = _UNSET, *, count: int = 1) -> int:
        """Remove up to `count` matching records and return how many were removed.

        The remaining records keep their order.
        """
        _check_limit(count)
        matcher = self._matcher(selector, value, "remove")
        indices = list(self._matching_indices(matcher, count))
        removed = self.collection.remove_indices(indices)
        logger.debug("remove(%r) removed %d records", selector, removed)
        return removed

    def remove_all(self, selector: Selector | Predicate, value: Any = _UNSET) -> int:
        return self.remove(selector, value, count=0)

    # Insert

    def insert(self, *args: Any) -> int:
        """Append a record and return its index.

        Accepts either one record, or field values in declared order::

            store.insert(Person(name="Utada Hikaru", id=111))
            store.insert("Utada Hikaru", 111)
        """
        if len(args) == 1 and self.record_type.is_record(args[0]):
            record = args[0]
        else:
            record = self.record_type.from_values(*args)
        return self.collection.append(record)
