"""Error taxonomy for AI content generation.

Only ``ModelUnavailable``, ``GenerationFailed`` (incl. ``QuotaExhausted``) and
``InvalidFormat`` ever leave the orchestrator. ``TransientFailure`` is used
internally to mark a retryable attempt.
"""

from __future__ import annotations

from typing import Optional


RETRY_SUGGESTION = "Try again later or upload a smaller PDF."
FORMAT_SUGGESTION = "Try a smaller PDF or fewer questions."
CONFIG_SUGGESTION = "Check the AI service API keys and service status."


class OrchestratorError(Exception):
    """Base class for every failure surfaced by the generation orchestrator."""

    suggestion: str = RETRY_SUGGESTION

    def __init__(self, message: str, *, suggestion: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if suggestion is not None:
            self.suggestion = suggestion


class ModelUnavailable(OrchestratorError):
    suggestion = CONFIG_SUGGESTION


class GenerationFailed(OrchestratorError):
    """Retry budget exhausted; ``message`` holds the last error, truncated."""

    def __init__(
        self,
        message: str,
        *,
        attempts: int = 0,
        suggestion: Optional[str] = None,
    ) -> None:
        super().__init__(message, suggestion=suggestion)
        self.attempts = attempts


class QuotaExhausted(GenerationFailed):
    """Every credential in the pool reported a quota/rate-limit failure."""


class TransientFailure(OrchestratorError):
    pass


class InvalidFormat(OrchestratorError):
    suggestion = FORMAT_SUGGESTION

    def __init__(
        self,
        message: str,
        *,
        index: Optional[int] = None,
        field: Optional[str] = None,
        raw_excerpt: str = "",
    ) -> None:
        super().__init__(message)
        self.index = index
        self.field = field
        self.raw_excerpt = raw_excerpt


__all__ = [
    "OrchestratorError",
    "ModelUnavailable",
    "GenerationFailed",
    "QuotaExhausted",
    "TransientFailure",
    "InvalidFormat",
]
