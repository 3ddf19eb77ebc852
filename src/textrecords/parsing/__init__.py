"""Parsing module for records text and record type definitions."""

from textrecords.parsing.record_parser import RecordParser, split_field_line
from textrecords.parsing.type_parser import TypeParser

__all__ = [
    "RecordParser",
    "TypeParser",
    "split_field_line",
]
