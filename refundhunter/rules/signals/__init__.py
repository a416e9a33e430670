"""Eligibility signal rules.

Each rule takes an EligibilityContext and returns zero or more Signals.
A row is a reimbursement candidate when any rule fires.
"""

from __future__ import annotations

from ..registry import SignalRegistry, SignalRule
from .keyword_signals import reason_keyword_rule, signal_text
from .quantity_signals import negative_quantity_rule

DEFAULT_SIGNAL_RULES: tuple[SignalRule, ...] = (
    negative_quantity_rule,
    reason_keyword_rule,
)

__all__ = [
    "DEFAULT_SIGNAL_RULES",
    "negative_quantity_rule",
    "reason_keyword_rule",
    "register_default_signals",
    "signal_text",
]


def register_default_signals(registry: SignalRegistry) -> None:
    """Register built-in signal rules with a registry."""
    registry.extend(DEFAULT_SIGNAL_RULES)
