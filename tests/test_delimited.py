"""Tests for delimited text normalization."""

from __future__ import annotations

from decimal import Decimal

import pytest

from refundhunter.mapping import HeaderResolver
from refundhunter.parsers import UNKNOWN_SKU_PREFIX, RowNormalizer, clean_cell, normalize_rows


class TestRowNormalizer:
    """Test row extraction from raw text."""

    def test_extracts_rows_in_order(self, sample_csv: str):
        result = normalize_rows(sample_csv)

        assert [row.sku for row in result.rows] == ["A-1", "A-2", "A-3"]
        assert [row.quantity for row in result.rows] == [Decimal(-3), Decimal(0), Decimal(5)]
        assert result.rows[0].reason == "Warehouse damaged"
        assert result.message == "Extracted 3 rows"
        assert result.truncated is False

    @pytest.mark.parametrize("text", ["", "sku,quantity,reason", "   \n  ", None, 42, b"sku\nA"])
    def test_empty_or_invalid_input_yields_no_rows(self, text):
        result = normalize_rows(text)

        assert result.rows == []

    def test_unrecognized_header(self):
        result = normalize_rows("foo,bar\n1,2")

        assert result.rows == []
        assert result.message == "No recognizable columns found"

    def test_tab_delimited_ledger(self, ledger_tsv: str):
        result = normalize_rows(ledger_tsv)

        assert result.delimiter == "\t"
        assert len(result.rows) == 4
        first = result.rows[0]
        assert first.sku == "X001"
        assert first.quantity == Decimal(-2)
        assert first.transaction_id == "9981"
        assert first.disposition == "SELLABLE"
        assert first.event_type == "Adjustments"
        assert result.rows[2].disposition is None
        assert result.rows[2].reason == ""

    def test_bom_is_stripped(self):
        result = normalize_rows("\ufeffsku,quantity\nA,-1")

        assert result.mapping.sources["sku"] == "sku"
        assert result.rows[0].sku == "A"

    def test_quoted_cells_keep_embedded_delimiters(self):
        text = 'sku,reason,quantity\n"A,1","Lost, ""per"" FC",-2'
        row = normalize_rows(text).rows[0]

        assert row.sku == "A,1"
        assert row.reason == 'Lost, "per" FC'
        assert row.quantity == Decimal(-2)

    def test_missing_sku_column_gets_placeholders(self):
        result = normalize_rows("quantity,reason\n-1,Lost\n-2,Damaged")

        assert [row.sku for row in result.rows] == [
            f"{UNKNOWN_SKU_PREFIX}1",
            f"{UNKNOWN_SKU_PREFIX}2",
        ]
        assert all(row.has_placeholder_sku for row in result.rows)

    def test_blank_sku_cell_gets_placeholder(self):
        result = normalize_rows("sku,quantity\nA,-1\n,-2")

        assert result.rows[1].sku == f"{UNKNOWN_SKU_PREFIX}2"

    def test_blank_rows_are_skipped(self):
        result = normalize_rows("sku,quantity\nA,-1\n\n , \nB,-2\n")

        assert [row.sku for row in result.rows] == ["A", "B"]
        assert result.rows[1].row_index == 2

    def test_short_rows_are_padded(self):
        row = normalize_rows("sku,reason,quantity\nA,Lost").rows[0]

        assert row.quantity == Decimal(0)
        assert row.quantity_missing is True

    def test_numeric_cells_are_coerced(self):
        row = normalize_rows("sku,quantity,unit cost\nA,(3),\"$1,204.50\"").rows[0]

        assert row.quantity == Decimal(-3)
        assert row.unit_cost == Decimal("1204.50")
        assert row.quantity_missing is False

    def test_non_numeric_quantity_becomes_zero(self):
        row = normalize_rows("sku,quantity\nA,lots").rows[0]

        assert row.quantity == Decimal(0)
        assert row.quantity_missing is True

    @pytest.mark.parametrize("cell", ["-1e999999999", "1e5000", "(1e50000000)"])
    def test_out_of_range_quantity_is_unparseable(self, cell):
        row = normalize_rows(f"sku,quantity,reason\nA,{cell},Lost").rows[0]

        assert row.quantity == Decimal(0)
        assert row.quantity_missing is True
        assert normalize_rows(f"sku,quantity\nA,{cell}").to_dict()["rows"][0]["quantity"] == 0

    def test_explicit_zero_is_not_missing(self):
        row = normalize_rows("sku,quantity\nA,0").rows[0]

        assert row.quantity_missing is False

    def test_row_cap(self):
        text = "sku,quantity\n" + "\n".join(f"S{i},-1" for i in range(25))
        result = RowNormalizer(max_rows=10).normalize(text)

        assert len(result.rows) == 10
        assert result.truncated is True
        assert result.message == "Extracted 10 rows (capped at 10)"

    def test_row_cap_not_hit_at_exact_size(self):
        text = "sku,quantity\n" + "\n".join(f"S{i},-1" for i in range(10))
        result = RowNormalizer(max_rows=10).normalize(text)

        assert len(result.rows) == 10
        assert result.truncated is False

    def test_column_reorder_gives_identical_rows(self):
        forward = normalize_rows("sku,quantity,reason\nA-1,-3,Lost\nA-2,4,Found")
        reordered = normalize_rows("reason,sku,quantity\nLost,A-1,-3\nFound,A-2,4")

        assert forward.rows == reordered.rows

    def test_custom_resolver(self):
        resolver = HeaderResolver({"sku": ["article"], "quantity": ["menge"]})
        row = RowNormalizer(resolver=resolver).normalize("Article,Menge\nZ-1,-2").rows[0]

        assert row.sku == "Z-1"
        assert row.quantity == Decimal(-2)

    def test_to_dict(self, sample_csv: str):
        data = normalize_rows(sample_csv).to_dict()

        assert data["rows"][0] == {
            "sku": "A-1",
            "quantity": -3,
            "reason": "Warehouse damaged",
            "amazonTransactionId": None,
        }
        assert data["mapping"]["fields"]["sku"] == "sku"


class TestCleanCell:
    def test_strips_whitespace_and_stray_quotes(self):
        assert clean_cell('  "A-1" ') == "A-1"
        assert clean_cell(None) == ""
        assert clean_cell('"') == '"'
