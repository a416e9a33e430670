"""Disposition-based refinement labels for negative adjustments."""
from __future__ import annotations

from ..parsers import CanonicalRow

LOST_INVENTORY = "Lost Inventory"
DAMAGED_INVENTORY = "Damaged Inventory"
UNEXPLAINED_ADJUSTMENT_LOSS = "Unexplained Adjustment Loss"


def refine_label(row: CanonicalRow) -> str | None:
    """Classify a negative-quantity row by disposition and event type.

    Checked in priority order: SELLABLE disposition, any other disposition,
    then an Adjustments event without a disposition. Rows that are not
    negative, or carry neither signal, get no label.
    """
    if row.quantity >= 0:
        return None

    disposition = (row.disposition or "").strip().upper()
    if disposition == "SELLABLE":
        return LOST_INVENTORY
    if disposition:
        return DAMAGED_INVENTORY

    if (row.event_type or "").strip().lower() == "adjustments":
        return UNEXPLAINED_ADJUSTMENT_LOSS
    return None
