"""Pre-built alias templates for common inventory report exports.

This module provides alias-table extensions for standard report formats:
- FBA Inventory Adjustments / Inventory Ledger
- FBA Reimbursements
- FBA Removal orders
- FBA Customer returns
"""

from __future__ import annotations

from ..inventory_schema import DEFAULT_ALIAS_TABLE, merge_alias_tables
from .fba_reports import (
    FBA_CUSTOMER_RETURNS_MAPPING,
    FBA_INVENTORY_ADJUSTMENTS_MAPPING,
    FBA_REIMBURSEMENTS_MAPPING,
    FBA_REMOVALS_MAPPING,
)

__all__ = [
    "FBA_INVENTORY_ADJUSTMENTS_MAPPING",
    "FBA_REIMBURSEMENTS_MAPPING",
    "FBA_REMOVALS_MAPPING",
    "FBA_CUSTOMER_RETURNS_MAPPING",
    "TEMPLATE_DESCRIPTIONS",
    "get_template",
    "apply_template",
]

_TEMPLATES: dict[str, dict[str, list[str]]] = {
    "fba_inventory_adjustments": FBA_INVENTORY_ADJUSTMENTS_MAPPING,
    "fba_ledger": FBA_INVENTORY_ADJUSTMENTS_MAPPING,
    "fba_reimbursements": FBA_REIMBURSEMENTS_MAPPING,
    "fba_removals": FBA_REMOVALS_MAPPING,
    "fba_customer_returns": FBA_CUSTOMER_RETURNS_MAPPING,
}

TEMPLATE_DESCRIPTIONS: dict[str, str] = {
    "fba_inventory_adjustments": "FBA Inventory Adjustments and Inventory Ledger exports",
    "fba_reimbursements": "FBA Reimbursements report",
    "fba_removals": "FBA Removal order detail report",
    "fba_customer_returns": "FBA Customer returns report",
}


def get_template(template_name: str) -> dict[str, list[str]]:
    """Get an alias template by name.

    Args:
        template_name: Name of the template (e.g. 'fba_removals')

    Returns:
        Canonical field -> extra aliases

    Raises:
        ValueError: If template name is not recognized
    """
    key = template_name.lower()
    if key not in _TEMPLATES:
        available = ", ".join(_TEMPLATES.keys())
        raise ValueError(f"Unknown template: {template_name}. Available: {available}")
    return _TEMPLATES[key]


def apply_template(
    template_name: str,
    base: dict[str, tuple[str, ...]] | None = None,
) -> dict[str, tuple[str, ...]]:
    """Return the base alias table extended with a named template."""
    return merge_alias_tables(
        base if base is not None else DEFAULT_ALIAS_TABLE,
        get_template(template_name),
    )
