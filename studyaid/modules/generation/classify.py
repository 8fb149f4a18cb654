"""Map exceptions from the generation endpoint onto retry categories."""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx

from studyaid.modules.generation.models import AttemptOutcome

QUOTA_STATUS = {429}
TRANSIENT_STATUS = {500, 503}

QUOTA_MARKERS = ("quota", "rate limit", "rate-limit", "resource_exhausted", "resource exhausted")
TRANSIENT_MARKERS = ("timeout", "timed out", "deadline exceeded")


def error_status(exc: BaseException) -> Optional[int]:
    for attr in ("status_code", "code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def is_quota_error(exc: BaseException) -> bool:
    if error_status(exc) in QUOTA_STATUS:
        return True
    message = str(exc).lower()
    return any(m in message for m in QUOTA_MARKERS)


def is_transient_error(exc: BaseException) -> bool:
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError, httpx.TimeoutException)):
        return True
    if error_status(exc) in TRANSIENT_STATUS:
        return True
    message = str(exc).lower()
    return any(m in message for m in TRANSIENT_MARKERS)


def classify(exc: BaseException) -> AttemptOutcome:
    """Quota is checked before transient; everything else is fatal."""
    if is_quota_error(exc):
        return AttemptOutcome.QUOTA
    if is_transient_error(exc):
        return AttemptOutcome.TRANSIENT
    return AttemptOutcome.FATAL
