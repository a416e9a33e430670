"""Eligibility rules for reimbursement candidates."""

from .engine import EligibilityClassifier, classify_rows
from .labels import (
    DAMAGED_INVENTORY,
    LOST_INVENTORY,
    UNEXPLAINED_ADJUSTMENT_LOSS,
    refine_label,
)
from .models import Candidate, EligibilityContext, Signal
from .registry import SignalRegistry

__all__ = [
    "EligibilityClassifier",
    "classify_rows",
    "refine_label",
    "Candidate",
    "EligibilityContext",
    "Signal",
    "SignalRegistry",
    "LOST_INVENTORY",
    "DAMAGED_INVENTORY",
    "UNEXPLAINED_ADJUSTMENT_LOSS",
]
