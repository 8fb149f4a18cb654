"""Flashcard generation from extracted PDF text."""

from __future__ import annotations

from studyaid.modules.generation.models import ValidatedFlashcard
from studyaid.modules.generation.orchestrator import GenerationOrchestrator
from studyaid.modules.generation.prompts import (
    DEFAULT_FLASHCARD_COUNT,
    MAX_CONTENT_CHARS,
    build_flashcards_prompt,
)


async def generate_flashcards(
    orchestrator: GenerationOrchestrator,
    content: str,
    subject: str,
    *,
    count: int = DEFAULT_FLASHCARD_COUNT,
    max_chars: int = MAX_CONTENT_CHARS,
) -> list[ValidatedFlashcard]:
    prompt = build_flashcards_prompt(content, subject, count=count, max_chars=max_chars)
    return await orchestrator.generate_flashcards(prompt, expected_count=count)
