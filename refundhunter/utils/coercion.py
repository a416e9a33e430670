"""Numeric coercion helpers for spreadsheet cells and untrusted payloads."""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENTS = Decimal("0.01")

# Largest decimal exponent accepted, either way, for a non-zero value
MAX_EXPONENT = 18

# Currency symbols and grouping characters vendors leave in numeric cells
_NUMERIC_NOISE = re.compile(r"[\s$€£,]")


def parse_decimal(value: Any) -> Decimal | None:
    """Coerce a cell or payload value to a finite Decimal.

    Handles currency symbols, thousands separators, explicit signs and
    accounting-style negatives such as "(3)".

    Args:
        value: String, int, float, Decimal, or anything else

    Returns:
        Finite Decimal within 1e-18..1e18 in magnitude (or zero), or None
        if the value is missing, not numeric or out of range
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        # str() keeps the shortest repr, so 12.345 stays 12.345
        result = _to_decimal(str(value))
    elif isinstance(value, str):
        result = _parse_numeric_text(value)
    else:
        return None

    if result is None or not in_range(result):
        return None
    return result


def in_range(value: Decimal) -> bool:
    """True for zero and for finite values with a bounded exponent."""
    if not value.is_finite():
        return False
    return value.is_zero() or abs(value.adjusted()) <= MAX_EXPONENT


def _parse_numeric_text(text: str) -> Decimal | None:
    cleaned = _NUMERIC_NOISE.sub("", text.strip())
    if not cleaned:
        return None

    negative = False
    if cleaned.startswith("(") and cleaned.endswith(")"):
        negative = True
        cleaned = cleaned[1:-1]

    parsed = _to_decimal(cleaned)
    # Negating an out-of-range value can overflow the context
    if parsed is None or not in_range(parsed):
        return None
    return -parsed if negative else parsed


def _to_decimal(text: str) -> Decimal | None:
    try:
        return Decimal(text)
    except (InvalidOperation, ValueError):
        return None


def round_money(amount: Decimal) -> Decimal:
    """Round a monetary amount to cents, half-up."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_json_number(value: Decimal) -> int | float:
    """Render a Decimal as an int when integral, otherwise a float."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after trimming."""
    return value is None or (isinstance(value, str) and not value.strip())
