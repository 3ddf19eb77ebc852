"""textrecords - An in-memory record store over a brace-delimited text format."""

from textrecords.coercion import coerce_value, format_value
from textrecords.collection import RecordCollection
from textrecords.engine import QueryEngine
from textrecords.errors import (
    CoercionError,
    FieldTypeError,
    RecordParseError,
    TextRecordsError,
    UnknownFieldError,
)
from textrecords.files import load_text, save_text
from textrecords.parsing import RecordParser, TypeParser
from textrecords.schema import Schema
from textrecords.serializer import format_record, serialize
from textrecords.store import RecordStore
from textrecords.types import (
    FieldDefinition,
    FieldDescriptor,
    RecordType,
    RecordTypeRegistry,
    ScalarType,
)

__all__ = [
    # Main API
    "RecordStore",
    "Schema",
    "RecordType",
    "FieldDescriptor",
    # Engine
    "QueryEngine",
    "RecordCollection",
    # Parsing and serialization
    "RecordParser",
    "TypeParser",
    "serialize",
    "format_record",
    "coerce_value",
    "format_value",
    # Files
    "load_text",
    "save_text",
    # Type definitions
    "FieldDefinition",
    "ScalarType",
    "RecordTypeRegistry",
    # Exceptions
    "TextRecordsError",
    "CoercionError",
    "RecordParseError",
    "UnknownFieldError",
    "FieldTypeError",
]

__version__ = "0.1.0"
