"""Alias extensions for Amazon FBA report exports.

Each mapping adds header spellings used by one report type on top of the
packaged alias table. Aliases are folded the same way as the base table, so
"amount-per-unit" and "amount per unit" are equivalent.
"""

# Inventory Adjustments report (legacy) and Inventory Ledger detail view
FBA_INVENTORY_ADJUSTMENTS_MAPPING: dict[str, list[str]] = {
    "transaction_id": ["transaction-item-id", "reference-id"],
    "sku": ["msku", "fnsku"],
    "disposition": ["detailed-disposition"],
    "event_type": ["event-type"],
    "reason": ["reason-code"],
    "quantity": ["quantity", "adjusted-quantity"],
}

# Reimbursements report, used to cross-check already reimbursed units
FBA_REIMBURSEMENTS_MAPPING: dict[str, list[str]] = {
    "transaction_id": ["reimbursement-id", "amazon-order-id"],
    "disposition": ["condition"],
    "quantity": ["quantity-reimbursed-total", "quantity-reimbursed-cash"],
    "unit_cost": ["amount-per-unit"],
}

# Removal order detail report
FBA_REMOVALS_MAPPING: dict[str, list[str]] = {
    "transaction_id": ["order-id"],
    "disposition": ["disposition"],
    "event_type": ["order-type", "order-status"],
    "quantity": ["cancelled-quantity", "disposed-quantity", "requested-quantity"],
    "unit_cost": ["removal-fee"],
}

# Customer returns report
FBA_CUSTOMER_RETURNS_MAPPING: dict[str, list[str]] = {
    "transaction_id": ["order-id", "license-plate-number"],
    "disposition": ["detailed-disposition"],
    "reason": ["reason", "customer-comments"],
    "event_type": ["status"],
}
