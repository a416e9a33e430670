"""Reason/disposition keyword signals."""

from __future__ import annotations

from ..models import EligibilityContext, Signal


def signal_text(context: EligibilityContext) -> str:
    """Lower-cased reason, disposition and event type joined for matching."""
    row = context.row
    parts = [row.reason, row.disposition or "", row.event_type or ""]
    return " ".join(p for p in parts if p).lower()


def reason_keyword_rule(context: EligibilityContext) -> list[Signal]:
    """Flag rows whose reason text mentions a loss, damage or adjustment."""
    text = signal_text(context)
    if not text:
        return []

    matched = [keyword for keyword in context.config.keywords if keyword in text]
    if not matched:
        return []

    return [
        Signal(
            rule_id="REASON_KEYWORD",
            description=f"Reason text mentions {', '.join(matched)}",
            flag="keyword_match",
            metadata={"category": "keyword", "keywords": matched},
        )
    ]
