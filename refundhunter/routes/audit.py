"""Audit routes: normalization, eligibility and claim validation.

Handlers are plain functions and run in FastAPI's thread pool.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException

from ..audit import AuditAggregator
from ..classifier_client import ClassifierClient
from ..config import PipelineConfig
from ..errors import (
    ClassifierNotConfiguredError,
    InputTooLargeError,
    UpstreamClassificationError,
)
from ..mapping.templates import apply_template
from ..pipeline import AuditPipeline
from ..schemas import AuditRequest, AuditResponse, NormalizeRequest, ValidateResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["audit"])


def build_pipeline(template: str | None = None) -> AuditPipeline:
    """Build a pipeline from environment config and an optional alias template.

    Raises:
        HTTPException: 400 if the template name is unknown
    """
    config = PipelineConfig.from_env()
    if template:
        try:
            config = config.with_overrides(alias_table=apply_template(template))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
    return AuditPipeline(config=config, classifier=ClassifierClient())


def run_audit_request(
    pipeline: AuditPipeline,
    text: str,
    enrich: bool,
    include_messages: bool,
) -> dict[str, Any]:
    """Run the pipeline and translate pipeline errors into HTTP errors."""
    try:
        run = pipeline.run(text, enrich=enrich, include_messages=include_messages)
    except InputTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e)) from e
    except ClassifierNotConfiguredError as e:
        raise HTTPException(
            status_code=503,
            detail="Claim classifier unavailable - check ANTHROPIC_API_KEY is set",
        ) from e
    except UpstreamClassificationError as e:
        logger.error(f"Enrichment failed: {e}")
        raise HTTPException(status_code=502, detail=f"Claim classifier failed: {e}") from e
    return run.to_dict()


@router.post("/audit", response_model=AuditResponse)
def audit_csv(request: AuditRequest):
    """Audit pasted CSV text and return validated reimbursement claims."""
    pipeline = build_pipeline(request.template)
    return run_audit_request(
        pipeline,
        request.csv,
        enrich=request.enrich,
        include_messages=request.include_messages,
    )


@router.post("/normalize")
def normalize_csv(request: NormalizeRequest):
    """Resolve headers and return the canonical rows without classifying them."""
    pipeline = build_pipeline(request.template)
    try:
        result = pipeline.ingest(request.csv)
    except InputTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e)) from e
    return result.to_dict()


@router.post("/claims/validate", response_model=ValidateResponse)
def validate_claim_payload(payload: Any = Body(...)):
    """Validate an arbitrary claim payload, e.g. output from another auditor.

    Accepts a bare list or an object with a "claims" list. Invalid items
    are dropped; anything else yields an empty result.
    """
    if isinstance(payload, dict):
        payload = payload.get("claims")

    pipeline = AuditPipeline(config=PipelineConfig.from_env())
    claims = pipeline.validate(payload)

    result = AuditAggregator(include_messages=False).aggregate(claims)
    logger.info(f"Validated {len(claims)} claims from external payload")
    return result.to_dict()
