"""Canonical schema for inventory-adjustment rows.

This module loads the versioned alias table shipped as ``aliases.yaml`` and
exposes it as ordered CanonicalField definitions. The table is configuration,
not code: vendors that spell columns differently get a new alias (or a
template, see ``mapping.templates``) without touching the resolver.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Mapping

import yaml

logger = logging.getLogger(__name__)

FieldType = Literal["str", "decimal"]

ALIAS_TABLE_PATH = Path(__file__).parent / "aliases.yaml"

_SEPARATORS = re.compile(r"[\s_\-]+")


@dataclass(frozen=True)
class CanonicalField:
    """Definition of a canonical row field with header aliases."""

    name: str
    field_type: FieldType = "str"
    required: bool = False
    aliases: tuple[str, ...] = field(default_factory=tuple)
    description: str = ""


def normalize_header_text(text: str) -> str:
    """Fold a header or alias to the form used for substring matching.

    Lower-cases, drops a UTF-8 BOM, and collapses '-', '_' and whitespace
    runs to a single space.
    """
    cleaned = text.replace("\ufeff", "").strip().lower()
    return _SEPARATORS.sub(" ", cleaned).strip()


def load_schema(path: str | Path = ALIAS_TABLE_PATH) -> tuple[int, list[CanonicalField]]:
    """Load a versioned alias table from YAML.

    Args:
        path: Path to the alias table file

    Returns:
        Tuple of (version, ordered list of CanonicalField)

    Raises:
        ValueError: If the file does not describe a list of fields
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict) or not isinstance(data.get("fields"), list):
        raise ValueError(f"Alias table {path} must define a 'fields' list")

    fields: list[CanonicalField] = []
    for entry in data["fields"]:
        fields.append(
            CanonicalField(
                name=entry["name"],
                field_type=entry.get("type", "str"),
                required=bool(entry.get("required", False)),
                aliases=tuple(str(a) for a in entry.get("aliases", [])),
                description=entry.get("description", ""),
            )
        )

    version = int(data.get("version", 1))
    logger.debug(f"Loaded alias table v{version} with {len(fields)} fields from {path}")
    return version, fields


def build_alias_table(
    fields: list[CanonicalField],
) -> dict[str, tuple[str, ...]]:
    """Build the ordered canonical -> aliases table used by the resolver.

    The canonical name is always accepted as an alias of itself.
    """
    table: dict[str, tuple[str, ...]] = {}
    for canonical in fields:
        aliases = [canonical.name.replace("_", " ")]
        aliases.extend(a for a in canonical.aliases if a not in aliases)
        table[canonical.name] = tuple(aliases)
    return table


def merge_alias_tables(
    base: Mapping[str, tuple[str, ...] | list[str]],
    extra: Mapping[str, Any],
) -> dict[str, tuple[str, ...]]:
    """Merge extra aliases into a base table.

    Extra aliases for an existing field are tried after the base ones; new
    fields are appended at the end of the resolution order.
    """
    merged = {name: tuple(aliases) for name, aliases in base.items()}
    for name, aliases in extra.items():
        if isinstance(aliases, str):
            aliases = [aliases]
        current = list(merged.get(name, ()))
        current.extend(a for a in aliases if a not in current)
        merged[name] = tuple(current)
    return merged


ALIAS_TABLE_VERSION, CANONICAL_FIELDS = load_schema()
DEFAULT_ALIAS_TABLE = build_alias_table(CANONICAL_FIELDS)
REQUIRED_FIELDS = [f.name for f in CANONICAL_FIELDS if f.required]
