"""Shared Pydantic schemas for the RefundHunter backend.

This module centralizes request/response models used across multiple routers
to prevent drift between duplicate definitions.
"""

from .audit import (
    AuditRequest,
    AuditResponse,
    ClaimMessageModel,
    ClaimModel,
    NormalizeRequest,
    ValidateResponse,
)

__all__ = [
    "AuditRequest",
    "AuditResponse",
    "ClaimMessageModel",
    "ClaimModel",
    "NormalizeRequest",
    "ValidateResponse",
]
