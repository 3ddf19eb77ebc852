"""Conversion between field text and scalar values."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

from textrecords.errors import CoercionError
from textrecords.types import ScalarType

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)
_BOOLEANS = {"true": True, "false": False}


def coerce_value(text: str, scalar: ScalarType) -> Any:
    """Convert raw field text (quotes already stripped) to a scalar value.

    Raises:
        CoercionError: If text is not a valid literal of the scalar type.
    """
    if scalar is ScalarType.STRING:
        return text
    if scalar is ScalarType.INTEGER:
        if _INTEGER_RE.fullmatch(text) is None:
            raise CoercionError(text, scalar)
        return int(text)
    if scalar is ScalarType.FLOAT:
        if _FLOAT_RE.fullmatch(text) is None:
            raise CoercionError(text, scalar)
        return float(text)
    if scalar is ScalarType.BOOLEAN:
        try:
            return _BOOLEANS[text.lower()]
        except KeyError:
            raise CoercionError(text, scalar) from None
    raise CoercionError(text, scalar)


def format_value(value: Any, scalar: ScalarType) -> str:
    """Format a value as the canonical text coerce_value reads back."""
    if scalar is ScalarType.BOOLEAN:
        return "true" if value else "false"
    if scalar is ScalarType.FLOAT:
        value = float(value)
        if not math.isfinite(value):
            return repr(value)
        # Shortest round-tripping digits, written without an exponent
        return format(Decimal(repr(value)), "f")
    return str(value)
