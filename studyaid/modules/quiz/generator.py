"""Multiple-choice quiz generation from extracted PDF text."""

from __future__ import annotations

from studyaid.modules.generation.models import ValidatedQuizQuestion
from studyaid.modules.generation.orchestrator import GenerationOrchestrator
from studyaid.modules.generation.prompts import MAX_CONTENT_CHARS, build_quiz_prompt


async def generate_quiz_questions(
    orchestrator: GenerationOrchestrator,
    content: str,
    subject: str,
    *,
    num_questions: int = 10,
    difficulty: str = "medium",
    max_chars: int = MAX_CONTENT_CHARS,
) -> list[ValidatedQuizQuestion]:
    prompt = build_quiz_prompt(
        content,
        subject,
        num_questions=num_questions,
        difficulty=difficulty,
        max_chars=max_chars,
    )
    return await orchestrator.generate_quiz(prompt, expected_count=num_questions)
