"""Claim validation for internal and externally classified candidates."""

from .claims import MISSING_TRANSACTION_ID, Claim, ClaimValidator, validate_claims

__all__ = ["MISSING_TRANSACTION_ID", "Claim", "ClaimValidator", "validate_claims"]
