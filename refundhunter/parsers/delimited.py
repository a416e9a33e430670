"""Delimited text parser for inventory-adjustment exports.

Turns raw comma- or tab-separated text into CanonicalRow records:
- Delimiter detection (tab wins when present)
- RFC-4180 quoting (embedded delimiters, doubled quotes)
- Header alias resolution
- Numeric coercion and SKU placeholders
- A hard row cap so downstream payloads stay bounded
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ..config import DEFAULT_MAX_ROWS
from ..mapping import HeaderMapping, HeaderResolver
from ..utils import parse_decimal, sanitize_text, to_json_number

logger = logging.getLogger(__name__)

UNKNOWN_SKU_PREFIX = "UNKNOWN-SKU-"


@dataclass
class CanonicalRow:
    """A normalized inventory-adjustment row."""

    sku: str
    quantity: Decimal
    reason: str = ""
    unit_cost: Decimal | None = None
    transaction_id: str | None = None
    disposition: str | None = None
    event_type: str | None = None
    row_index: int = 0
    quantity_missing: bool = False

    @property
    def has_placeholder_sku(self) -> bool:
        return self.sku == f"{UNKNOWN_SKU_PREFIX}{self.row_index}"

    def to_payload(self) -> dict[str, Any]:
        """Plain record handed to external collaborators."""
        return {
            "sku": self.sku,
            "quantity": to_json_number(self.quantity),
            "reason": self.reason,
            "amazonTransactionId": self.transaction_id,
        }


@dataclass
class IngestResult:
    """Result of normalizing one piece of delimited text."""

    rows: list[CanonicalRow] = field(default_factory=list)
    mapping: HeaderMapping = field(default_factory=HeaderMapping)
    delimiter: str = ","
    truncated: bool = False
    message: str = "No valid rows found"

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": [row.to_payload() for row in self.rows],
            "message": self.message,
            "truncated": self.truncated,
            "mapping": self.mapping.to_dict(),
        }


def clean_cell(value: str | None) -> str:
    """Strip whitespace and any quotes the csv reader left in place."""
    if value is None:
        return ""
    cell = value.strip()
    if len(cell) >= 2 and cell[0] == '"' and cell[-1] == '"':
        cell = cell[1:-1].replace('""', '"').strip()
    return cell


class RowNormalizer:
    """Normalizes delimited text into CanonicalRow records.

    Attributes:
        resolver: HeaderResolver used for the header line
        max_rows: Maximum number of data rows emitted per call
    """

    def __init__(
        self,
        resolver: HeaderResolver | None = None,
        max_rows: int = DEFAULT_MAX_ROWS,
    ) -> None:
        self.resolver = resolver or HeaderResolver()
        self.max_rows = max_rows

    def normalize(self, text: Any) -> IngestResult:
        """Normalize raw delimited text.

        Never raises for bad input: non-text, empty or header-only input
        produces an empty result.

        Args:
            text: Raw file contents, header line first

        Returns:
            IngestResult with rows in file order
        """
        if not isinstance(text, str):
            logger.info("Ingest skipped: input is not text")
            return IngestResult(message="Input is not text")

        text = text.lstrip("\ufeff")
        if len(text.strip().splitlines()) < 2:
            return IngestResult()

        delimiter, mapping = self.resolver.resolve_text(text)
        if mapping.is_empty():
            logger.info("Ingest skipped: no recognizable columns in header")
            return IngestResult(
                mapping=mapping,
                delimiter=delimiter,
                message="No recognizable columns found",
            )

        rows, truncated = self._read_rows(text, delimiter, mapping)

        message = f"Extracted {len(rows)} rows"
        if truncated:
            message += f" (capped at {self.max_rows})"
            logger.warning(f"Row cap of {self.max_rows} reached, remaining rows discarded")

        logger.info(
            f"Normalized {len(rows)} rows using {mapping.sources} "
            f"(delimiter={delimiter!r})"
        )
        return IngestResult(
            rows=rows,
            mapping=mapping,
            delimiter=delimiter,
            truncated=truncated,
            message=message,
        )

    def _read_rows(
        self,
        text: str,
        delimiter: str,
        mapping: HeaderMapping,
    ) -> tuple[list[CanonicalRow], bool]:
        field_index = {canonical: idx for idx, canonical in mapping.columns.items()}
        reader = csv.reader(io.StringIO(text), delimiter=delimiter, skipinitialspace=True)
        rows: list[CanonicalRow] = []
        truncated = False

        try:
            next(reader, None)  # header
            for cells in reader:
                cleaned = [clean_cell(c) for c in cells]
                if not any(cleaned):
                    continue
                if len(rows) >= self.max_rows:
                    truncated = True
                    break
                rows.append(self._build_row(cleaned, field_index, len(rows) + 1))
        except csv.Error as e:
            logger.warning(f"Stopped parsing at line {reader.line_num}: {e}")

        return rows, truncated

    def _build_row(
        self,
        cells: list[str],
        field_index: dict[str, int],
        row_index: int,
    ) -> CanonicalRow:
        def cell(canonical: str) -> str:
            idx = field_index.get(canonical)
            if idx is None or idx >= len(cells):
                return ""
            return cells[idx]

        quantity = parse_decimal(cell("quantity"))
        quantity_missing = quantity is None
        if quantity is None or quantity == 0:
            quantity = Decimal(0)

        return CanonicalRow(
            sku=cell("sku") or f"{UNKNOWN_SKU_PREFIX}{row_index}",
            quantity=quantity,
            reason=sanitize_text(cell("reason")),
            unit_cost=parse_decimal(cell("unit_cost")),
            transaction_id=cell("transaction_id") or None,
            disposition=cell("disposition") or None,
            event_type=cell("event_type") or None,
            row_index=row_index,
            quantity_missing=quantity_missing,
        )


def normalize_rows(
    text: Any,
    resolver: HeaderResolver | None = None,
    max_rows: int = DEFAULT_MAX_ROWS,
) -> IngestResult:
    """Convenience function to normalize delimited text."""
    return RowNormalizer(resolver=resolver, max_rows=max_rows).normalize(text)
