"""Prompt builders for flashcard and quiz generation."""

from __future__ import annotations

DEFAULT_FLASHCARD_COUNT = 10
MAX_CONTENT_CHARS = 30000

FLASHCARD_EXAMPLE = '[{"question":"Capital of France?","answer":"Paris"}]'
QUIZ_EXAMPLE = '[{"question":"What is 2+2?","options":["1","2","3","4"],"correctAnswer":3}]'


def build_flashcards_prompt(
    content: str,
    subject: str,
    *,
    count: int = DEFAULT_FLASHCARD_COUNT,
    max_chars: int = MAX_CONTENT_CHARS,
) -> str:
    return (
        f'Generate {int(count)} flashcards from the following content for subject "{subject}".\n\n'
        "Each flashcard must have:\n"
        "- question (string)\n"
        "- answer (string)\n\n"
        f"Return ONLY a valid JSON array. No explanations. Example:\n{FLASHCARD_EXAMPLE}\n\n"
        f"Content:\n{content[:max_chars]}"
    )


def build_quiz_prompt(
    content: str,
    subject: str,
    *,
    num_questions: int,
    difficulty: str,
    max_chars: int = MAX_CONTENT_CHARS,
) -> str:
    return (
        f'Generate {int(num_questions)} multiple-choice questions for a quiz on "{subject}" '
        f"at {difficulty} difficulty level based on the following content:\n\n"
        "Each question must have:\n"
        "- question (string)\n"
        "- options (array of exactly 4 strings)\n"
        "- correctAnswer (index 0-3)\n\n"
        f"Return ONLY a valid JSON array. No explanations. Example:\n{QUIZ_EXAMPLE}\n\n"
        f"Content:\n{content[:max_chars]}"
    )
