"""Data models for the eligibility rules."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ..config import PipelineConfig
from ..parsers import CanonicalRow
from ..utils import to_json_number


@dataclass(frozen=True)
class Signal:
    """A single reason a row looks reimbursable."""

    rule_id: str
    description: str
    flag: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EligibilityContext:
    """Inputs required to evaluate eligibility signals."""

    row: CanonicalRow
    config: PipelineConfig


@dataclass
class Candidate:
    """Claim-shaped output of the classifier, not yet validated."""

    sku: str
    quantity: Decimal
    reason: str
    estimated_value: Decimal
    transaction_id: str | None = None
    label: str | None = None
    signals: list[Signal] = field(default_factory=list)
    row_index: int = 0

    @property
    def flags(self) -> list[str]:
        return [s.flag for s in self.signals]

    def to_payload(self) -> dict[str, Any]:
        """Plain record in the shape the claim validator and classifier accept."""
        payload: dict[str, Any] = {
            "sku": self.sku,
            "quantity": to_json_number(self.quantity),
            "reason": self.reason,
            "estimatedValue": float(self.estimated_value),
            "amazonTransactionId": self.transaction_id,
        }
        if self.label:
            payload["label"] = self.label
        return payload
