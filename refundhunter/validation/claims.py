"""Claim validation for untrusted candidate payloads.

Every candidate, whether produced by the eligibility rules or returned by the
LLM classifier, passes through here before it becomes a Claim. Validation is
all-or-nothing per candidate: a record either satisfies every field
constraint or is dropped. Nothing in this module raises for bad input.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal, DecimalException
from typing import Any

from ..utils import is_blank, parse_decimal, round_money

logger = logging.getLogger(__name__)

MISSING_TRANSACTION_ID = "N/A"


@dataclass(frozen=True)
class Claim:
    """A validated reimbursement claim."""

    sku: str
    claim_reason: str
    quantity: int
    estimated_value: Decimal
    amazon_transaction_id: str = MISSING_TRANSACTION_ID

    def to_dict(self) -> dict[str, Any]:
        return {
            "sku": self.sku,
            "claimReason": self.claim_reason,
            "quantity": self.quantity,
            "estimatedValue": float(self.estimated_value),
            "amazonTransactionId": self.amazon_transaction_id,
        }


def _text(value: Any) -> str | None:
    """Trimmed text for string or integer identifiers, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


class ClaimValidator:
    """Filters arbitrary candidate sequences into Claims.

    Checks per candidate:
    1. It is a mapping (or an already validated Claim)
    2. ``sku`` is non-empty after trimming
    3. ``claimReason`` (or its alias ``reason``) is non-empty after trimming
    4. ``quantity`` is a finite whole number greater than zero
    5. ``estimatedValue`` is finite and still greater than zero once rounded
       half-up to cents

    Attributes:
        assume_single_unit_on_missing_quantity: Treat an absent or blank
            quantity as one unit instead of dropping the candidate
    """

    def __init__(self, assume_single_unit_on_missing_quantity: bool = False) -> None:
        self.assume_single_unit_on_missing_quantity = assume_single_unit_on_missing_quantity

    def validate(self, candidates: Any) -> list[Claim]:
        """Validate a candidate sequence.

        Args:
            candidates: Anything; only non-string sequences are inspected

        Returns:
            Claims in the order their candidates appeared
        """
        if not isinstance(candidates, Sequence) or isinstance(
            candidates, (str, bytes, bytearray)
        ):
            logger.debug(f"Candidate payload is not a sequence: {type(candidates).__name__}")
            return []

        claims: list[Claim] = []
        for index, candidate in enumerate(candidates):
            claim = self.validate_one(candidate)
            if claim is None:
                logger.debug(f"Dropped candidate {index}")
                continue
            claims.append(claim)

        dropped = len(candidates) - len(claims)
        if dropped:
            logger.info(f"Validated {len(claims)} claims, dropped {dropped} candidates")
        return claims

    def validate_one(self, candidate: Any) -> Claim | None:
        """Validate a single candidate, returning None when it fails."""
        if isinstance(candidate, Claim):
            # Re-check from the exact fields; to_dict() floats the value
            candidate = {
                "sku": candidate.sku,
                "claimReason": candidate.claim_reason,
                "quantity": candidate.quantity,
                "estimatedValue": candidate.estimated_value,
                "amazonTransactionId": candidate.amazon_transaction_id,
            }
        if not isinstance(candidate, Mapping):
            return None

        sku = _text(candidate.get("sku"))
        if sku is None:
            return None

        reason = _text(candidate.get("claimReason")) or _text(candidate.get("reason"))
        if reason is None:
            return None

        quantity = self._quantity(candidate.get("quantity"))
        if quantity is None:
            return None

        estimated_value = self._estimated_value(candidate.get("estimatedValue"))
        if estimated_value is None:
            return None

        transaction_id = (
            _text(candidate.get("amazonTransactionId"))
            or _text(candidate.get("transactionId"))
            or MISSING_TRANSACTION_ID
        )

        return Claim(
            sku=sku,
            claim_reason=reason,
            quantity=quantity,
            estimated_value=estimated_value,
            amazon_transaction_id=transaction_id,
        )

    def _quantity(self, value: Any) -> int | None:
        if is_blank(value):
            return 1 if self.assume_single_unit_on_missing_quantity else None

        quantity = parse_decimal(value)
        if quantity is None or quantity <= 0:
            return None
        if quantity != quantity.to_integral_value():
            return None
        return int(quantity)

    @staticmethod
    def _estimated_value(value: Any) -> Decimal | None:
        amount = parse_decimal(value)
        if amount is None:
            return None
        try:
            amount = round_money(amount)
        except DecimalException:
            return None
        if amount <= 0:
            return None
        return amount


def validate_claims(
    candidates: Any,
    assume_single_unit_on_missing_quantity: bool = False,
) -> list[Claim]:
    """Convenience function to validate a candidate sequence."""
    validator = ClaimValidator(
        assume_single_unit_on_missing_quantity=assume_single_unit_on_missing_quantity
    )
    return validator.validate(candidates)
