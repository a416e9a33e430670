"""Alias table inspection routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ..mapping import ALIAS_TABLE_VERSION, CANONICAL_FIELDS, HeaderResolver
from ..mapping.templates import TEMPLATE_DESCRIPTIONS, apply_template, get_template

router = APIRouter(prefix="/api/mappings", tags=["mappings"])


@router.get("/aliases")
def list_aliases():
    """Return the packaged alias table in resolution order."""
    return {
        "version": ALIAS_TABLE_VERSION,
        "fields": [
            {
                "name": f.name,
                "type": f.field_type,
                "required": f.required,
                "description": f.description,
                "aliases": list(f.aliases),
            }
            for f in CANONICAL_FIELDS
        ],
    }


@router.get("/templates")
def list_alias_templates():
    """List available vendor alias templates."""
    return {
        "templates": [
            {
                "name": name,
                "description": description,
                "fields": sorted(get_template(name).keys()),
            }
            for name, description in TEMPLATE_DESCRIPTIONS.items()
        ]
    }


@router.post("/resolve")
def resolve_headers(headers: list[str], template: str | None = None):
    """Resolve a header row without uploading any data."""
    if len(headers) > 500:
        raise HTTPException(status_code=400, detail="Too many headers. Maximum 500.")
    alias_table = None
    if template:
        try:
            alias_table = apply_template(template)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
    return HeaderResolver(alias_table).resolve(headers).to_dict()
