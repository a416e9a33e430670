"""Shared utility functions for the RefundHunter backend."""

from .coercion import (
    CENTS,
    MAX_EXPONENT,
    in_range,
    is_blank,
    parse_decimal,
    round_money,
    to_json_number,
)
from .sanitization import sanitize_filename, sanitize_text

__all__ = [
    "CENTS",
    "MAX_EXPONENT",
    "in_range",
    "is_blank",
    "parse_decimal",
    "round_money",
    "to_json_number",
    "sanitize_filename",
    "sanitize_text",
]
