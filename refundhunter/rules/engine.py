"""Eligibility classifier for normalized inventory rows."""
from __future__ import annotations

import logging
from decimal import Decimal, DecimalException

from ..config import PipelineConfig
from ..parsers import CanonicalRow
from ..utils import in_range, round_money
from .labels import refine_label
from .models import Candidate, EligibilityContext, Signal
from .registry import SignalRegistry
from .signals import register_default_signals

logger = logging.getLogger(__name__)


class EligibilityClassifier:
    """Decides which rows are reimbursement candidates.

    A row qualifies when any registered signal rule fires and it has a
    non-zero quantity. Qualifying rows become Candidates with a positive
    quantity, a reason and a provisional estimated value.

    Attributes:
        config: Pipeline policy (keywords, unit value, quantity default)
        registry: Signal rules evaluated for each row
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        registry: SignalRegistry | None = None,
    ) -> None:
        self.config = config or PipelineConfig()
        if registry is None:
            registry = SignalRegistry()
            register_default_signals(registry)
        self.registry = registry

    def evaluate(self, row: CanonicalRow) -> Candidate | None:
        """Evaluate a single row.

        Returns:
            Candidate when the row qualifies, otherwise None
        """
        if not in_range(row.quantity) or (
            row.unit_cost is not None and not in_range(row.unit_cost)
        ):
            logger.debug(f"Row {row.row_index} ({row.sku}) skipped: number out of range")
            return None

        context = EligibilityContext(row=row, config=self.config)
        signals: list[Signal] = []
        for rule in self.registry.active_rules():
            signals.extend(rule(context) or [])

        if not signals:
            return None

        quantity = abs(row.quantity)
        if quantity == 0:
            if not self._assume_single_unit(row, signals):
                logger.debug(f"Row {row.row_index} ({row.sku}) skipped: zero quantity")
                return None
            quantity = Decimal(1)

        try:
            estimated_value = self.estimate_value(quantity, row.unit_cost)
        except DecimalException:
            logger.debug(f"Row {row.row_index} ({row.sku}) skipped: value out of range")
            return None

        label = refine_label(row)
        return Candidate(
            sku=row.sku,
            quantity=quantity,
            reason=row.reason or label or row.disposition or self.config.default_reason,
            estimated_value=estimated_value,
            transaction_id=row.transaction_id,
            label=label,
            signals=signals,
            row_index=row.row_index,
        )

    def classify(self, rows: list[CanonicalRow]) -> list[Candidate]:
        """Evaluate rows in order and return the qualifying candidates."""
        candidates = [c for c in (self.evaluate(row) for row in rows) if c is not None]
        logger.info(f"Classified {len(rows)} rows, {len(candidates)} candidates")
        return candidates

    def estimate_value(self, quantity: Decimal, unit_cost: Decimal | None) -> Decimal:
        """Value the units at their cost, or at the per-unit fallback."""
        unit_value = self.config.unit_value_constant
        if unit_cost is not None and unit_cost > 0:
            unit_value = unit_cost
        return round_money(quantity * unit_value)

    def _assume_single_unit(self, row: CanonicalRow, signals: list[Signal]) -> bool:
        return (
            self.config.assume_single_unit_on_missing_quantity
            and row.quantity_missing
            and any(s.flag == "keyword_match" for s in signals)
        )


def classify_rows(
    rows: list[CanonicalRow],
    config: PipelineConfig | None = None,
) -> list[Candidate]:
    """Convenience function to classify rows with the default rules."""
    return EligibilityClassifier(config=config).classify(rows)
