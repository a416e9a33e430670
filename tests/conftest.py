"""Pytest configuration and fixtures."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from refundhunter.config import PipelineConfig

# Negative adjustment, zero quantity and a positive receipt
SAMPLE_CSV = "sku,quantity,reason\nA-1,-3,Warehouse damaged\nA-2,0,Lost\nA-3,5,Found"

# Inventory Ledger style export with a BOM, tabs and extra columns
LEDGER_TSV = (
    "\ufeffDate\tFNSKU\tMSKU\tTitle\tEvent Type\tReference ID\tQuantity\t"
    "Fulfillment Center\tDisposition\tReason\n"
    "2024-03-01\tX001\tMUG-RED\tRed mug\tAdjustments\t9981\t-2\tPHX7\tSELLABLE\tM\n"
    "2024-03-02\tX002\tMUG-BLUE\tBlue mug\tAdjustments\t9982\t-1\tPHX7\tDEFECTIVE\tE\n"
    "2024-03-03\tX003\tMUG-GRN\tGreen mug\tAdjustments\t9983\t-4\tPHX7\t\t\n"
    "2024-03-04\tX004\tMUG-YLW\tYellow mug\tReceipts\t9984\t10\tPHX7\tSELLABLE\t\n"
)


@pytest.fixture
def sample_csv() -> str:
    """Three-row CSV with one reimbursable row."""
    return SAMPLE_CSV


@pytest.fixture
def ledger_tsv() -> str:
    """Tab-separated ledger export with three negative adjustments."""
    return LEDGER_TSV


@pytest.fixture
def config() -> PipelineConfig:
    """Default pipeline policy."""
    return PipelineConfig()


@pytest.fixture
def sample_candidates() -> list[dict[str, Any]]:
    """Candidate payloads as an external classifier would return them."""
    return [
        {
            "sku": "B-9",
            "claimReason": "Lost",
            "quantity": "3",
            "estimatedValue": "12.345",
        },
        {
            "sku": "",
            "claimReason": "Lost",
            "quantity": 2,
            "estimatedValue": 10,
        },
        {
            "sku": "C-4",
            "claimReason": "Damaged by carrier",
            "quantity": 1,
            "estimatedValue": 19.99,
            "amazonTransactionId": "TX-42",
        },
    ]


@pytest.fixture
def anthropic_response():
    """Factory for fake Messages API responses carrying one text block."""

    def _make(text: str, input_tokens: int = 120, output_tokens: int = 80) -> MagicMock:
        response = MagicMock()
        response.content = [MagicMock(text=text)]
        response.usage = MagicMock(input_tokens=input_tokens, output_tokens=output_tokens)
        return response

    return _make


@pytest.fixture
def fake_anthropic() -> MagicMock:
    """Anthropic client double; set messages.create.return_value per test."""
    return MagicMock()
