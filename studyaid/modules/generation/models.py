"""Pydantic models for generation requests and validated AI output."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictStr, StringConstraints


NonEmptyText = Annotated[StrictStr, StringConstraints(strip_whitespace=True, min_length=1)]


def _whole_number(value: object) -> object:
    """Ints and integral floats (3.0) pass; strings, bools and fractions do not."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("must be an integer")
        return int(value)
    return value


OptionIndex = Annotated[int, BeforeValidator(_whole_number)]


class GenerationKind(str, enum.Enum):
    FLASHCARDS = "flashcards"
    QUIZ = "quiz"


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt: str
    kind: GenerationKind
    expected_count: Optional[int] = None


class AttemptOutcome(str, enum.Enum):
    SUCCESS = "success"
    TRANSIENT = "transient"
    QUOTA = "quota"
    FATAL = "fatal"


@dataclass(frozen=True)
class GenerationAttempt:
    """One external call made while serving a request. Never persisted."""

    attempt_number: int
    credential_index: int
    outcome: AttemptOutcome
    detail: str = ""


class ValidatedFlashcard(BaseModel):
    model_config = ConfigDict(extra="ignore")

    question: NonEmptyText
    answer: NonEmptyText


class ValidatedQuizQuestion(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    question: NonEmptyText
    options: Annotated[list[NonEmptyText], Field(min_length=4, max_length=4)]
    correct_answer: Annotated[OptionIndex, Field(ge=0, le=3, alias="correctAnswer")]


ValidatedContent = list[ValidatedFlashcard] | list[ValidatedQuizQuestion]
