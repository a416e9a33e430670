"""Quantity-sign signals."""

from __future__ import annotations

from ..models import EligibilityContext, Signal


def negative_quantity_rule(context: EligibilityContext) -> list[Signal]:
    """Flag rows whose quantity is negative; a negative adjustment is a loss."""
    quantity = context.row.quantity
    if quantity >= 0:
        return []
    return [
        Signal(
            rule_id="NEGATIVE_QUANTITY",
            description=f"Adjustment removed {abs(quantity)} unit(s) of {context.row.sku}",
            flag="negative_quantity",
            metadata={"category": "quantity", "quantity": str(quantity)},
        )
    ]
