"""Parsers for vendor inventory exports.

Provides parsing capabilities for:
- Comma- and tab-separated text with arbitrary header spellings
"""

from .delimited import (
    UNKNOWN_SKU_PREFIX,
    CanonicalRow,
    IngestResult,
    RowNormalizer,
    clean_cell,
    normalize_rows,
)

__all__ = [
    "UNKNOWN_SKU_PREFIX",
    "CanonicalRow",
    "IngestResult",
    "RowNormalizer",
    "clean_cell",
    "normalize_rows",
]
