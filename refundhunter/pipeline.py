"""Audit pipeline orchestrator.

Coordinates the stages of a reimbursement audit:

    raw text -> RowNormalizer -> EligibilityClassifier
             -> (optional ClassifierClient enrichment)
             -> ClaimValidator -> AuditAggregator

Each AuditPipeline owns its policy (PipelineConfig) and holds no per-call
state, so one instance can serve concurrent requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .audit import AuditAggregator, AuditResult
from .classifier_client import ClassifierClient
from .config import PipelineConfig
from .errors import ClassifierNotConfiguredError, InputTooLargeError
from .mapping import HeaderResolver
from .parsers import IngestResult, RowNormalizer
from .rules import Candidate, EligibilityClassifier
from .validation import Claim, ClaimValidator

logger = logging.getLogger(__name__)


@dataclass
class AuditRun:
    """Everything produced by one pipeline run."""

    ingest: IngestResult
    candidates: list[Candidate]
    result: AuditResult
    enriched: bool = False
    stage_counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = self.result.to_dict()
        data["ingest"] = {
            "message": self.ingest.message,
            "truncated": self.ingest.truncated,
            "mapping": self.ingest.mapping.to_dict(),
        }
        data["enriched"] = self.enriched
        data["stageCounts"] = dict(self.stage_counts)
        return data


class AuditPipeline:
    """Runs the normalization, eligibility and validation stages.

    Attributes:
        config: Pipeline policy shared by all stages
        classifier: Optional external classifier used when enrichment is requested
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        classifier: ClassifierClient | None = None,
    ) -> None:
        self.config = config or PipelineConfig()
        self.classifier = classifier

        self.normalizer = RowNormalizer(
            resolver=HeaderResolver(self.config.alias_table),
            max_rows=self.config.max_rows,
        )
        self.eligibility = EligibilityClassifier(config=self.config)
        self.validator = ClaimValidator(
            assume_single_unit_on_missing_quantity=self.config.assume_single_unit_on_missing_quantity
        )

    def check_size(self, text: Any) -> None:
        """Raise InputTooLargeError when the payload exceeds max_input_bytes."""
        if isinstance(text, (str, bytes)):
            size = len(text.encode("utf-8")) if isinstance(text, str) else len(text)
            if size > self.config.max_input_bytes:
                raise InputTooLargeError(size, self.config.max_input_bytes)

    def ingest(self, text: Any) -> IngestResult:
        """Normalize raw delimited text into canonical rows."""
        self.check_size(text)
        return self.normalizer.normalize(text)

    def classify(self, text: Any) -> tuple[IngestResult, list[Candidate]]:
        """Normalize and apply the eligibility rules."""
        ingest = self.ingest(text)
        return ingest, self.eligibility.classify(ingest.rows)

    def validate(self, candidates: Any) -> list[Claim]:
        """Cap and validate an untrusted candidate payload."""
        if isinstance(candidates, (list, tuple)):
            candidates = list(candidates)[: self.config.max_claims]
        return self.validator.validate(candidates)

    def run(
        self,
        text: Any,
        enrich: bool = False,
        include_messages: bool = True,
    ) -> AuditRun:
        """Run a full audit over raw delimited text.

        Args:
            text: Raw file contents, header line first
            enrich: Send candidates through the external classifier
            include_messages: Draft one message per claim

        Returns:
            AuditRun with the validated result and stage counts

        Raises:
            InputTooLargeError: If the input exceeds max_input_bytes
            UpstreamClassificationError: If enrichment was requested and failed
        """
        ingest, candidates = self.classify(text)
        payload: Any = [candidate.to_payload() for candidate in candidates]

        enriched = False
        if enrich:
            payload = self._enrich(payload)
            enriched = True

        claims = self.validate(payload)
        result = AuditAggregator(include_messages=include_messages).aggregate(claims)

        stage_counts = {
            "rows": len(ingest.rows),
            "candidates": len(candidates),
            "claims": len(claims),
        }
        logger.info(
            f"Audit complete: {stage_counts['rows']} rows, "
            f"{stage_counts['candidates']} candidates, {stage_counts['claims']} claims, "
            f"total {result.total_estimated_value}"
        )
        return AuditRun(
            ingest=ingest,
            candidates=candidates,
            result=result,
            enriched=enriched,
            stage_counts=stage_counts,
        )

    def _enrich(self, payload: list[dict[str, Any]]) -> list[Any]:
        if self.classifier is None or not self.classifier.is_configured:
            raise ClassifierNotConfiguredError("Claim classifier is not configured")
        rows = payload[: self.config.classifier_max_rows]
        if len(rows) < len(payload):
            logger.warning(
                f"Sending {len(rows)} of {len(payload)} candidates to the classifier"
            )
        return self.classifier.classify(rows)


def run_audit(
    text: Any,
    config: PipelineConfig | None = None,
    include_messages: bool = True,
) -> AuditResult:
    """Convenience function for a rules-only audit."""
    return AuditPipeline(config=config).run(text, include_messages=include_messages).result
