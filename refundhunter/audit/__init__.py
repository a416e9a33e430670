"""Audit totals and reimbursement message drafts."""

from .aggregator import (
    MESSAGE_TEMPLATE,
    AuditAggregator,
    AuditResult,
    ClaimMessage,
    aggregate_claims,
)

__all__ = [
    "MESSAGE_TEMPLATE",
    "AuditAggregator",
    "AuditResult",
    "ClaimMessage",
    "aggregate_claims",
]
