"""Flashcards module exports."""

from .progress import (
    KNOWN_THRESHOLD,
    apply_study_result,
    count_known,
    set_mastery,
    set_status,
)
from .generator import generate_flashcards

__all__ = [
    "KNOWN_THRESHOLD",
    "apply_study_result",
    "count_known",
    "set_mastery",
    "set_status",
    "generate_flashcards",
]
