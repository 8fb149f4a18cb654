"""Mastery bookkeeping for flashcard study sessions."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

KNOWN_THRESHOLD = 80
KNOWN_STEP = 15
UNKNOWN_STEP = -10


def apply_study_result(mastery: int, known: bool) -> int:
    """+15 when the card was known, -10 otherwise, clamped to 0..100."""
    step = KNOWN_STEP if known else UNKNOWN_STEP
    return min(100, max(0, mastery + step))


def set_mastery(card_masteries: Iterable[int]) -> int:
    values = list(card_masteries)
    if not values:
        return 0
    return round(sum(values) / len(values))


def count_known(card_masteries: Iterable[int]) -> int:
    return sum(1 for m in card_masteries if m >= KNOWN_THRESHOLD)


def set_status(known: int, total: int, last_studied: Optional[datetime]) -> str:
    if not last_studied:
        return "not-started"
    return "completed" if known == total else "in-progress"
