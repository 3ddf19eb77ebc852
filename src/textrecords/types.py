"""Type definitions for the textrecords library."""

from __future__ import annotations

import copy
import dataclasses
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from textrecords.errors import FieldTypeError, UnknownFieldError


class ScalarType(Enum):
    """Scalar types a record field may hold."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"

    @property
    def python_type(self) -> type:
        """Return the Python type values of this scalar have."""
        types = {
            ScalarType.STRING: str,
            ScalarType.INTEGER: int,
            ScalarType.FLOAT: float,
            ScalarType.BOOLEAN: bool,
        }
        return types[self]

    @property
    def zero_value(self) -> Any:
        """Return the value a field of this type holds when nothing set it."""
        return self.python_type()

    def accepts(self, value: Any) -> bool:
        """Return whether value is exactly of this scalar's Python type.

        bool is a subclass of int, so True is not an INTEGER and 1 is not
        a FLOAT.
        """
        return type(value) is self.python_type

    @classmethod
    def from_python_type(cls, py_type: Any) -> ScalarType:
        """Map a Python annotation to a scalar type."""
        for scalar in cls:
            if scalar.python_type is py_type:
                return scalar
        raise TypeError(f"Unsupported field type: {py_type!r}")


# Mapping from DSL type names to ScalarType values
SCALAR_TYPE_NAMES: dict[str, ScalarType] = {
    "string": ScalarType.STRING,
    "str": ScalarType.STRING,
    "integer": ScalarType.INTEGER,
    "int": ScalarType.INTEGER,
    "float": ScalarType.FLOAT,
    "double": ScalarType.FLOAT,
    "boolean": ScalarType.BOOLEAN,
    "bool": ScalarType.BOOLEAN,
}


@dataclass(frozen=True)
class FieldDescriptor:
    """Addresses one field of a record type by name and scalar type."""

    name: str
    scalar: ScalarType


@dataclass
class FieldDefinition:
    """Definition of a field within a record type."""

    name: str
    scalar: ScalarType
    default: Any = None  # None = the scalar's zero value

    @property
    def descriptor(self) -> FieldDescriptor:
        return FieldDescriptor(self.name, self.scalar)

    def default_value(self) -> Any:
        if self.default is None:
            return self.scalar.zero_value
        return self.default


@dataclass
class RecordType:
    """A named, ordered set of scalar fields backed by a dataclass.

    Records are instances of ``record_class``. The field order is the
    dataclass field order and never changes after construction.
    """

    name: str
    record_class: type
    fields: list[FieldDefinition] = field(default_factory=list)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for f in self.fields:
            if f.name in seen:
                raise ValueError(f"Duplicate field '{f.name}' in record type '{self.name}'")
            seen.add(f.name)

    @classmethod
    def from_dataclass(cls, record_class: type, name: str | None = None) -> RecordType:
        """Build a record type from a dataclass.

        Every init field must be annotated with str, int, float or bool.
        Fields declared with init=False are not part of the record type.
        """
        if not (isinstance(record_class, type) and dataclasses.is_dataclass(record_class)):
            raise TypeError(f"{record_class!r} is not a dataclass")

        hints = typing.get_type_hints(record_class)
        fields: list[FieldDefinition] = []
        for dc_field in dataclasses.fields(record_class):
            if not dc_field.init:
                continue
            scalar = ScalarType.from_python_type(hints.get(dc_field.name))
            if dc_field.default is not dataclasses.MISSING:
                default = dc_field.default
            elif dc_field.default_factory is not dataclasses.MISSING:
                default = dc_field.default_factory()
            else:
                default = None
            fields.append(FieldDefinition(name=dc_field.name, scalar=scalar, default=default))

        return cls(name=name or record_class.__name__, record_class=record_class, fields=fields)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> FieldDefinition | None:
        """Get a field by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def get_field_or_raise(self, name: str) -> FieldDefinition:
        """Get a field by name, raising if the record type has no such field."""
        f = self.get_field(name)
        if f is None:
            raise UnknownFieldError(name, self.name)
        return f

    def resolve(self, selector: str | FieldDescriptor) -> FieldDefinition | None:
        """Resolve a field name or descriptor against this record type.

        Returns None when a descriptor names an existing field with a
        different scalar type. An unknown name raises UnknownFieldError.
        """
        if isinstance(selector, FieldDescriptor):
            f = self.get_field_or_raise(selector.name)
            if f.scalar is not selector.scalar:
                return None
            return f
        return self.get_field_or_raise(selector)

    def check_value(self, field_def: FieldDefinition, value: Any) -> None:
        """Raise FieldTypeError unless value may be stored in field_def."""
        if not field_def.scalar.accepts(value):
            raise FieldTypeError(field_def.name, field_def.scalar, value)

    def new_record(self, **values: Any) -> Any:
        """Create a record with defaults, overridden by values."""
        kwargs = {f.name: f.default_value() for f in self.fields}
        for name, value in values.items():
            self.check_value(self.get_field_or_raise(name), value)
            kwargs[name] = value
        return self.record_class(**kwargs)

    def from_values(self, *values: Any) -> Any:
        """Create a record from positional values in declared field order."""
        if len(values) > len(self.fields):
            raise TypeError(
                f"{self.name} has {len(self.fields)} fields, got {len(values)} values"
            )
        return self.new_record(**{f.name: v for f, v in zip(self.fields, values)})

    def is_record(self, obj: Any) -> bool:
        return isinstance(obj, self.record_class)

    def copy_record(self, record: Any) -> Any:
        return copy.copy(record)

    def get_value(self, record: Any, field_def: FieldDefinition) -> Any:
        return getattr(record, field_def.name)

    def with_value(self, record: Any, field_def: FieldDefinition, value: Any) -> Any:
        """Return a copy of record with one field replaced."""
        return dataclasses.replace(record, **{field_def.name: value})

    def as_dict(self, record: Any) -> dict[str, Any]:
        return {f.name: getattr(record, f.name) for f in self.fields}


def make_record_type(name: str, fields: list[FieldDefinition]) -> RecordType:
    """Generate a dataclass for fields and wrap it in a RecordType."""
    dc_fields = [
        (f.name, f.scalar.python_type, dataclasses.field(default=f.default_value()))
        for f in fields
    ]
    record_class = dataclasses.make_dataclass(name, dc_fields)
    return RecordType(name=name, record_class=record_class, fields=list(fields))


def as_record_type(record_type: RecordType | type) -> RecordType:
    """Accept either a RecordType or a dataclass."""
    if isinstance(record_type, RecordType):
        return record_type
    return RecordType.from_dataclass(record_type)


class RecordTypeRegistry:
    """Registry of all defined record types."""

    def __init__(self) -> None:
        self._types: dict[str, RecordType] = {}

    def register(self, record_type: RecordType) -> None:
        """Register a record type."""
        if record_type.name in self._types:
            raise ValueError(f"Type '{record_type.name}' is already defined")
        self._types[record_type.name] = record_type

    def get(self, name: str) -> RecordType | None:
        """Get a record type by name."""
        return self._types.get(name)

    def get_or_raise(self, name: str) -> RecordType:
        """Get a record type by name, raising if not found."""
        record_type = self._types.get(name)
        if record_type is None:
            raise KeyError(f"Type '{name}' not found")
        return record_type

    def list_types(self) -> list[str]:
        """List all registered type names."""
        return list(self._types.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)
