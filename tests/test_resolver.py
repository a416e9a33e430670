"""Tests for header alias resolution and vendor templates."""

from __future__ import annotations

import pytest

from refundhunter.mapping import (
    ALIAS_TABLE_VERSION,
    DEFAULT_ALIAS_TABLE,
    REQUIRED_FIELDS,
    HeaderResolver,
    detect_delimiter,
    load_schema,
    merge_alias_tables,
    normalize_header_text,
)
from refundhunter.mapping.templates import apply_template, get_template


class TestAliasTable:
    """Test the packaged alias table."""

    def test_version_and_order(self):
        assert ALIAS_TABLE_VERSION == 1
        assert list(DEFAULT_ALIAS_TABLE) == [
            "transaction_id",
            "sku",
            "disposition",
            "event_type",
            "reason",
            "quantity",
            "unit_cost",
        ]

    def test_sku_is_required(self):
        assert REQUIRED_FIELDS == ["sku"]

    def test_canonical_name_is_an_alias(self):
        assert DEFAULT_ALIAS_TABLE["unit_cost"][0] == "unit cost"

    def test_load_schema_rejects_bad_file(self, tmp_path):
        path = tmp_path / "aliases.yaml"
        path.write_text("version: 2\nfields: nope\n")

        with pytest.raises(ValueError):
            load_schema(path)

    def test_load_schema_custom_file(self, tmp_path):
        path = tmp_path / "aliases.yaml"
        path.write_text(
            "version: 3\nfields:\n  - name: sku\n    required: true\n    aliases: [article]\n"
        )

        version, fields = load_schema(path)

        assert version == 3
        assert fields[0].name == "sku"
        assert fields[0].aliases == ("article",)


class TestNormalizeHeaderText:
    @pytest.mark.parametrize(
        "header", ["Seller-SKU", "seller_sku", "  SELLER   SKU ", "\ufeffseller sku"]
    )
    def test_folds_case_and_separators(self, header):
        assert normalize_header_text(header) == "seller sku"


class TestDetectDelimiter:
    def test_tab_wins(self):
        assert detect_delimiter("a,b\tc\n1,2\t3") == "\t"

    def test_defaults_to_comma(self):
        assert detect_delimiter("a;b\n1;2") == ","


class TestHeaderResolver:
    """Test header-to-canonical resolution."""

    def test_resolves_simple_headers(self):
        mapping = HeaderResolver().resolve(["sku", "quantity", "reason"])

        assert mapping.columns == {0: "sku", 1: "quantity", 2: "reason"}
        assert mapping.sources == {"sku": "sku", "quantity": "quantity", "reason": "reason"}

    def test_case_and_separator_insensitive(self):
        mapping = HeaderResolver().resolve(["Seller-SKU", "QTY", "Adjustment Reason"])

        assert mapping.sources == {
            "sku": "Seller-SKU",
            "reason": "Adjustment Reason",
            "quantity": "QTY",
        }

    def test_first_matching_header_wins(self):
        mapping = HeaderResolver().resolve(["Notes", "Reason"])

        assert mapping.sources["reason"] == "Notes"
        assert mapping.unmapped_headers == ["Reason"]

    def test_header_claimed_once(self):
        """A header bound to transaction_id is not reused for another field."""
        resolver = HeaderResolver({"transaction_id": ["id"], "sku": ["id"]})
        mapping = resolver.resolve(["Item ID"])

        assert mapping.columns == {0: "transaction_id"}
        assert mapping.index_of("sku") is None

    def test_unmatched_fields_stay_unbound(self):
        mapping = HeaderResolver().resolve(["sku", "Title"])

        assert mapping.index_of("quantity") is None
        assert mapping.unmapped_headers == ["Title"]

    def test_no_match_is_empty(self):
        mapping = HeaderResolver().resolve(["foo", "bar"])

        assert mapping.is_empty()

    def test_column_order_does_not_change_fields(self):
        resolver = HeaderResolver()
        forward = resolver.resolve(["sku", "quantity", "reason"])
        reordered = resolver.resolve(["reason", "sku", "quantity"])

        assert forward.sources == reordered.sources

    def test_empty_alias_ignored(self):
        mapping = HeaderResolver({"sku": ["", "sku"]}).resolve(["Title", "SKU"])

        assert mapping.columns == {1: "sku"}

    def test_resolve_text(self):
        delimiter, mapping = HeaderResolver().resolve_text("sku\tqty\nA\t1")

        assert delimiter == "\t"
        assert mapping.columns == {0: "sku", 1: "quantity"}

    def test_resolve_text_handles_quoted_headers(self):
        _, mapping = HeaderResolver().resolve_text('"sku, seller",quantity\nA,1')

        assert mapping.sources == {"sku": "sku, seller", "quantity": "quantity"}

    @pytest.mark.parametrize("text", ["", "   ", "\nsku,quantity"])
    def test_resolve_text_fails_soft(self, text):
        _, mapping = HeaderResolver().resolve_text(text)

        assert mapping.is_empty()

    def test_to_dict(self):
        mapping = HeaderResolver().resolve(["sku", "Title"])

        assert mapping.to_dict() == {"fields": {"sku": "sku"}, "unmapped": ["Title"]}


class TestTemplates:
    """Test vendor alias templates."""

    def test_get_template(self):
        template = get_template("fba_removals")

        assert "disposed-quantity" in template["quantity"]

    def test_unknown_template_raises(self):
        with pytest.raises(ValueError, match="Unknown template"):
            get_template("nope")

    def test_template_names_are_case_insensitive(self):
        assert get_template("FBA_REMOVALS") is get_template("fba_removals")

    def test_apply_template_extends_base(self):
        table = apply_template("fba_reimbursements")

        assert table["unit_cost"][: len(DEFAULT_ALIAS_TABLE["unit_cost"])] == (
            DEFAULT_ALIAS_TABLE["unit_cost"]
        )
        assert "amount-per-unit" in table["unit_cost"]

    def test_template_resolves_vendor_headers(self):
        headers = ["reimbursement-id", "sku", "condition", "amount-per-unit", "quantity-reimbursed-total"]
        mapping = HeaderResolver(apply_template("fba_reimbursements")).resolve(headers)

        assert mapping.sources == {
            "transaction_id": "reimbursement-id",
            "sku": "sku",
            "disposition": "condition",
            "quantity": "quantity-reimbursed-total",
            "unit_cost": "amount-per-unit",
        }

    def test_merge_appends_new_fields(self):
        merged = merge_alias_tables({"sku": ("sku",)}, {"sku": "article", "lot": ["lot"]})

        assert merged == {"sku": ("sku", "article"), "lot": ("lot",)}
