"""Exceptions for the textrecords library."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from textrecords.types import ScalarType


class TextRecordsError(Exception):
    """Base exception for all textrecords errors."""

    pass


class CoercionError(TextRecordsError, ValueError):
    """A raw text value cannot be converted to a field's scalar type."""

    def __init__(self, text: str, scalar: ScalarType) -> None:
        self.text = text
        self.scalar = scalar
        super().__init__(f"Cannot convert {text!r} to {scalar.value}")


class RecordParseError(CoercionError):
    """A coercion failure while parsing a block of records text."""

    def __init__(
        self,
        text: str,
        scalar: ScalarType,
        record_index: int,
        field_name: str,
        line_number: int,
    ) -> None:
        super().__init__(text, scalar)
        self.record_index = record_index
        self.field_name = field_name
        self.line_number = line_number
        self.args = (
            f"Record {record_index}, field '{field_name}' (line {line_number}): "
            f"cannot convert {text!r} to {scalar.value}",
        )


class UnknownFieldError(TextRecordsError, KeyError):
    """A query names a field the record type does not have."""

    def __init__(self, field_name: str, type_name: str) -> None:
        self.field_name = field_name
        self.type_name = type_name
        super().__init__(f"Field '{field_name}' not found in type '{type_name}'")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class FieldTypeError(TextRecordsError, TypeError):
    """A value cannot be stored in a field of a different scalar type."""

    def __init__(self, field_name: str, expected: ScalarType, value: Any) -> None:
        self.field_name = field_name
        self.expected = expected
        self.value = value
        super().__init__(
            f"Field '{field_name}' expects {expected.value}, "
            f"got {type(value).__name__} {value!r}"
        )
