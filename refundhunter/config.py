"""Shared configuration for the RefundHunter backend.

This module centralizes environment variable access and default values
to prevent drift between modules. Pipeline policy is carried on an
immutable PipelineConfig that is handed to each component, so pipelines
with different caps can run side by side.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any

# Claude API configuration
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Upload limits
UPLOAD_SIZE_LIMIT_MB = int(os.getenv("UPLOAD_SIZE_LIMIT_MB", "100"))

# Comma-separated list of allowed browser origins
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173",
    ).split(",")
    if origin.strip()
]

DEFAULT_UNIT_VALUE = Decimal("8.50")
DEFAULT_MAX_ROWS = 10000
DEFAULT_CLASSIFIER_MAX_ROWS = 400
DEFAULT_MAX_CLAIMS = 50
DEFAULT_REASON = "Lost inventory"

REIMBURSEMENT_KEYWORDS: tuple[str, ...] = (
    "lost",
    "missing",
    "damaged",
    "warehouse",
    "dispose",
    "scrap",
    "defective",
    "destroy",
    "mismatch",
    "misplaced",
    "not returned",
    "customer_return",
    "adjustment",
    "reimburs",
    "claim",
)

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class PipelineConfig:
    """Policy for a single audit pipeline.

    Attributes:
        unit_value_constant: Per-unit fallback valuation when a row has no cost
        max_rows: Hard cap on data rows normalized per ingest
        classifier_max_rows: Cap on rows handed to the external classifier
        max_claims: Cap on candidates passed to validation, in input order
        assume_single_unit_on_missing_quantity: Treat a missing quantity as 1
            unit instead of 0 (row excluded)
        default_reason: Claim reason when the row carries none
        keywords: Lower-case substrings that mark a row as reimbursable
        alias_table: Canonical field -> header aliases; None uses the
            packaged table
        max_input_bytes: Largest ingest payload accepted
    """

    unit_value_constant: Decimal = DEFAULT_UNIT_VALUE
    max_rows: int = DEFAULT_MAX_ROWS
    classifier_max_rows: int = DEFAULT_CLASSIFIER_MAX_ROWS
    max_claims: int = DEFAULT_MAX_CLAIMS
    assume_single_unit_on_missing_quantity: bool = False
    default_reason: str = DEFAULT_REASON
    keywords: tuple[str, ...] = REIMBURSEMENT_KEYWORDS
    alias_table: dict[str, tuple[str, ...]] | None = field(default=None, compare=False)
    max_input_bytes: int = UPLOAD_SIZE_LIMIT_MB * 1024 * 1024

    def __post_init__(self) -> None:
        if self.max_rows < 0 or self.classifier_max_rows < 0 or self.max_claims < 0:
            raise ValueError("Row and claim caps must be non-negative")
        if Decimal(self.unit_value_constant) < 0:
            raise ValueError("unit_value_constant must be non-negative")
        # Accept floats/strings for convenience, store as Decimal
        object.__setattr__(
            self, "unit_value_constant", Decimal(str(self.unit_value_constant))
        )
        object.__setattr__(
            self, "keywords", tuple(k.lower() for k in self.keywords if k)
        )

    def with_overrides(self, **overrides: Any) -> "PipelineConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Build a config from REFUNDHUNTER_* environment variables."""
        return cls(
            unit_value_constant=Decimal(
                os.getenv("REFUNDHUNTER_UNIT_VALUE", str(DEFAULT_UNIT_VALUE))
            ),
            max_rows=int(os.getenv("REFUNDHUNTER_MAX_ROWS", str(DEFAULT_MAX_ROWS))),
            classifier_max_rows=int(
                os.getenv(
                    "REFUNDHUNTER_CLASSIFIER_MAX_ROWS", str(DEFAULT_CLASSIFIER_MAX_ROWS)
                )
            ),
            max_claims=int(
                os.getenv("REFUNDHUNTER_MAX_CLAIMS", str(DEFAULT_MAX_CLAIMS))
            ),
            assume_single_unit_on_missing_quantity=os.getenv(
                "REFUNDHUNTER_ASSUME_SINGLE_UNIT", "false"
            ).lower()
            in _TRUTHY,
            max_input_bytes=UPLOAD_SIZE_LIMIT_MB * 1024 * 1024,
        )
