"""Pydantic schemas for audit endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..config import UPLOAD_SIZE_LIMIT_MB

MAX_CSV_CHARS = UPLOAD_SIZE_LIMIT_MB * 1024 * 1024


class NormalizeRequest(BaseModel):
    """Request model for header resolution and row normalization."""

    csv: str
    template: str | None = None

    @field_validator("csv")
    @classmethod
    def validate_csv_length(cls, v: str) -> str:
        """Validate that the pasted text stays under the upload limit."""
        if len(v) > MAX_CSV_CHARS:
            raise ValueError(f"CSV text too large. Maximum {UPLOAD_SIZE_LIMIT_MB}MB.")
        return v


class AuditRequest(NormalizeRequest):
    """Request model for a full audit over pasted CSV text."""

    enrich: bool = False
    include_messages: bool = True


class ClaimModel(BaseModel):
    sku: str
    claimReason: str
    quantity: int
    estimatedValue: float
    amazonTransactionId: str


class ClaimMessageModel(BaseModel):
    sku: str
    reason: str
    message: str


class ValidateResponse(BaseModel):
    """Validated claims and their total."""

    claims: list[ClaimModel]
    totalEstimatedValue: float
    messages: list[ClaimMessageModel] = Field(default_factory=list)
    summary: dict[str, Any] = Field(default_factory=dict)


class AuditResponse(ValidateResponse):
    """Full audit response including ingest diagnostics."""

    ingest: dict[str, Any] = Field(default_factory=dict)
    enriched: bool = False
    stageCounts: dict[str, int] = Field(default_factory=dict)
