"""Exceptions raised by the audit pipeline.

Per-row and per-candidate problems never raise; rows and candidates are
dropped locally. Only whole-pipeline faults use these exceptions so callers
can tell "no claims" apart from "the audit did not run".
"""

from __future__ import annotations


class AuditPipelineError(Exception):
    """Base class for pipeline-level failures."""


class InputTooLargeError(AuditPipelineError):
    """Raised when the ingest payload exceeds the configured byte limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"Input of {size} bytes exceeds limit of {limit} bytes")
        self.size = size
        self.limit = limit


class UpstreamClassificationError(AuditPipelineError):
    """Raised when the external claim classifier fails or returns garbage."""

    def __init__(self, message: str, raw_response: str | None = None):
        super().__init__(message)
        self.raw_response = raw_response


class ClassifierNotConfiguredError(UpstreamClassificationError):
    """Raised when enrichment is requested but no API key is configured."""
