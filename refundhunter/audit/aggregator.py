"""Totals and reimbursement message drafts for validated claims."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ..validation import Claim

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATE = (
    "Hello Seller Support, I am requesting a reimbursement review for SKU {sku}. "
    "Our inventory records show {quantity} unit(s) affected under transaction "
    "{transaction_id}, with an estimated value of ${estimated_value}. "
    "Please investigate and reimburse the eligible amount."
)


@dataclass(frozen=True)
class ClaimMessage:
    """A message draft for one claim."""

    sku: str
    reason: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"sku": self.sku, "reason": self.reason, "message": self.message}


@dataclass
class AuditResult:
    """Validated claims with their total and optional message drafts."""

    claims: list[Claim] = field(default_factory=list)
    total_estimated_value: Decimal = Decimal("0")
    messages: list[ClaimMessage] = field(default_factory=list)

    def breakdown(self) -> dict[str, dict[str, Any]]:
        """Claim count and value per claim reason, in first-seen order."""
        groups: dict[str, dict[str, Any]] = {}
        for claim in self.claims:
            group = groups.setdefault(claim.claim_reason, {"claims": 0, "value": Decimal("0")})
            group["claims"] += 1
            group["value"] += claim.estimated_value
        return {
            reason: {"claims": g["claims"], "estimatedValue": float(g["value"])}
            for reason, g in groups.items()
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "claims": [claim.to_dict() for claim in self.claims],
            "totalEstimatedValue": float(self.total_estimated_value),
            "messages": [message.to_dict() for message in self.messages],
            "summary": {
                "totalClaims": len(self.claims),
                "breakdown": self.breakdown(),
            },
        }


class AuditAggregator:
    """Combines validated claims into an AuditResult.

    Attributes:
        include_messages: Whether to draft one message per claim
        template: str.format template with sku, quantity, estimated_value,
            transaction_id and reason placeholders
    """

    def __init__(self, include_messages: bool = True, template: str = MESSAGE_TEMPLATE) -> None:
        self.include_messages = include_messages
        self.template = template

    def aggregate(self, claims: list[Claim]) -> AuditResult:
        # Exact sum; per-claim values are already rounded to cents
        total = sum((claim.estimated_value for claim in claims), Decimal("0"))
        messages = self.draft_messages(claims) if self.include_messages else []
        return AuditResult(claims=list(claims), total_estimated_value=total, messages=messages)

    def draft_message(self, claim: Claim) -> str:
        return self.template.format(
            sku=claim.sku,
            quantity=claim.quantity,
            estimated_value=f"{claim.estimated_value:.2f}",
            transaction_id=claim.amazon_transaction_id,
            reason=claim.claim_reason,
        )

    def draft_messages(self, claims: list[Claim]) -> list[ClaimMessage]:
        """Draft messages for all claims; a broken template yields none."""
        try:
            return [
                ClaimMessage(sku=c.sku, reason=c.claim_reason, message=self.draft_message(c))
                for c in claims
            ]
        except (KeyError, IndexError, ValueError) as e:
            logger.warning(f"Message drafting skipped, template error: {e}")
            return []


def aggregate_claims(claims: list[Claim], include_messages: bool = True) -> AuditResult:
    """Convenience function to aggregate claims."""
    return AuditAggregator(include_messages=include_messages).aggregate(claims)
