"""Header resolver for vendor inventory-adjustment exports.

Maps an arbitrary header row onto canonical row fields using the
priority-ordered alias table from ``inventory_schema``.

Usage:
    resolver = HeaderResolver()
    mapping = resolver.resolve(["Seller-SKU", "Qty", "Reason"])
    mapping.columns  # {0: "sku", 1: "quantity", 2: "reason"}
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Any, Mapping

from .inventory_schema import DEFAULT_ALIAS_TABLE, normalize_header_text

logger = logging.getLogger(__name__)


def detect_delimiter(text: str) -> str:
    """Tab wins if it appears anywhere in the text, otherwise comma."""
    return "\t" if "\t" in text else ","


class HeaderMapping:
    """Result of resolving one header row."""

    def __init__(self, headers: list[str] | None = None) -> None:
        self.headers: list[str] = headers or []
        self.columns: dict[int, str] = {}  # column index -> canonical
        self.sources: dict[str, str] = {}  # canonical -> source header

    def bind(self, index: int, canonical: str) -> None:
        self.columns[index] = canonical
        self.sources[canonical] = self.headers[index]

    def index_of(self, canonical: str) -> int | None:
        for index, name in self.columns.items():
            if name == canonical:
                return index
        return None

    @property
    def unmapped_headers(self) -> list[str]:
        return [h for i, h in enumerate(self.headers) if i not in self.columns]

    def is_empty(self) -> bool:
        return not self.columns

    def to_dict(self) -> dict[str, Any]:
        return {
            "fields": dict(self.sources),
            "unmapped": self.unmapped_headers,
        }


class HeaderResolver:
    """Resolves header rows to canonical fields.

    For each canonical field, in alias-table order, headers are scanned in
    their original order and the first header whose normalized text contains
    any alias for that field is bound. A header is consumed by at most one
    canonical field; fields with no matching header stay unbound.

    Attributes:
        alias_table: Ordered mapping of canonical field -> header substrings
    """

    def __init__(self, alias_table: Mapping[str, tuple[str, ...] | list[str]] | None = None) -> None:
        """Initialize the resolver.

        Args:
            alias_table: Optional table overriding the packaged aliases.
                         Example: {"sku": ["sku", "article"], "quantity": ["qty"]}
        """
        table = alias_table if alias_table is not None else DEFAULT_ALIAS_TABLE
        # Pre-normalize aliases once; empty aliases would match every header
        self._normalized: list[tuple[str, tuple[str, ...]]] = []
        for canonical, aliases in table.items():
            folded = tuple(
                a for a in (normalize_header_text(str(alias)) for alias in aliases) if a
            )
            self._normalized.append((canonical, folded))

    @property
    def canonical_fields(self) -> list[str]:
        return [canonical for canonical, _ in self._normalized]

    def resolve(self, headers: list[str]) -> HeaderMapping:
        """Resolve a list of header cells.

        Args:
            headers: Header cells in their original column order

        Returns:
            HeaderMapping; empty when no header matches
        """
        mapping = HeaderMapping([h.strip() for h in headers])
        folded_headers = [normalize_header_text(h) for h in headers]
        claimed: set[int] = set()

        for canonical, aliases in self._normalized:
            for index, header in enumerate(folded_headers):
                if index in claimed or not header:
                    continue
                if any(alias in header for alias in aliases):
                    mapping.bind(index, canonical)
                    claimed.add(index)
                    break

        if mapping.unmapped_headers:
            logger.debug(
                "Unmapped headers: %s", ", ".join(mapping.unmapped_headers[:10])
            )
        return mapping

    def resolve_text(self, text: str) -> tuple[str, HeaderMapping]:
        """Detect the delimiter and resolve the first line of raw text.

        Fails soft: empty text or an empty header line yields an empty mapping.

        Returns:
            Tuple of (delimiter, HeaderMapping)
        """
        delimiter = detect_delimiter(text or "")
        if not text or not text.strip():
            return delimiter, HeaderMapping()

        first_line = text.splitlines()[0]
        if not first_line.strip():
            return delimiter, HeaderMapping()

        reader = csv.reader(io.StringIO(first_line), delimiter=delimiter, skipinitialspace=True)
        headers = next(reader, [])
        return delimiter, self.resolve(headers)
