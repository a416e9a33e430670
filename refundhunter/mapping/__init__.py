"""Header alias mapping for inventory-adjustment exports.

This module resolves the column headers of vendor spreadsheets (Amazon FBA
reports, 3PL exports, hand-made sheets) onto a small canonical row schema.

Usage:
    from refundhunter.mapping import HeaderResolver

    resolver = HeaderResolver()
    delimiter, mapping = resolver.resolve_text(raw_text)

    # With a vendor template
    from refundhunter.mapping.templates import apply_template
    resolver = HeaderResolver(apply_template("fba_removals"))
"""

from .inventory_schema import (
    ALIAS_TABLE_VERSION,
    CANONICAL_FIELDS,
    DEFAULT_ALIAS_TABLE,
    REQUIRED_FIELDS,
    CanonicalField,
    build_alias_table,
    load_schema,
    merge_alias_tables,
    normalize_header_text,
)
from .resolver import HeaderMapping, HeaderResolver, detect_delimiter

__all__ = [
    # Resolver
    "HeaderResolver",
    "HeaderMapping",
    "detect_delimiter",
    # Schema
    "ALIAS_TABLE_VERSION",
    "CANONICAL_FIELDS",
    "DEFAULT_ALIAS_TABLE",
    "REQUIRED_FIELDS",
    "CanonicalField",
    "build_alias_table",
    "load_schema",
    "merge_alias_tables",
    "normalize_header_text",
]
