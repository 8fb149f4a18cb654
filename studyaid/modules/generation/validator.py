"""Parse raw model text into validated flashcards or quiz questions."""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from studyaid.core.logging import get_logger
from studyaid.modules.generation.errors import InvalidFormat
from studyaid.modules.generation.models import (
    GenerationKind,
    ValidatedContent,
    ValidatedFlashcard,
    ValidatedQuizQuestion,
)

logger = get_logger(__name__)

OPENING_FENCE = re.compile(r"^```[\w-]*\s*")
CLOSING_FENCE = re.compile(r"\s*```$")

_ADAPTERS: dict[GenerationKind, TypeAdapter] = {
    GenerationKind.FLASHCARDS: TypeAdapter(list[ValidatedFlashcard]),
    GenerationKind.QUIZ: TypeAdapter(list[ValidatedQuizQuestion]),
}


def strip_code_fence(raw: str) -> str:
    """Remove a wrapping ```lang ... ``` fence; unfenced text is returned trimmed."""
    text = raw.strip()
    while True:
        stripped = OPENING_FENCE.sub("", text, count=1)
        stripped = CLOSING_FENCE.sub("", stripped, count=1).strip()
        if stripped == text:
            return text
        text = stripped


class ResponseValidator:
    def __init__(self, *, excerpt_chars: int = 500) -> None:
        self.excerpt_chars = excerpt_chars

    def _fail(self, raw: str, message: str, **kwargs: Any) -> InvalidFormat:
        logger.warning("Invalid AI response: %s", message)
        return InvalidFormat(message, raw_excerpt=raw[: self.excerpt_chars], **kwargs)

    def validate(
        self,
        raw: str,
        kind: GenerationKind,
        expected_count: Optional[int] = None,
    ) -> ValidatedContent:
        cleaned = strip_code_fence(raw or "")
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise self._fail(raw, f"Response is not valid JSON: {e.msg}") from e

        if not isinstance(data, list):
            raise self._fail(raw, "Response is not a JSON array")
        if not data:
            raise self._fail(raw, "Response array is empty")

        try:
            items = _ADAPTERS[kind].validate_python(data)
        except ValidationError as e:
            err = e.errors()[0]
            loc = err.get("loc", ())
            index = loc[0] if loc and isinstance(loc[0], int) else None
            field = str(loc[1]) if len(loc) > 1 else None
            label = "Card" if kind == GenerationKind.FLASHCARDS else "Question"
            where = f"{label} {index}" if index is not None else label
            what = f"'{field}' {err.get('msg', 'invalid')}" if field else err.get("msg", "invalid")
            raise self._fail(raw, f"{where}: {what}", index=index, field=field) from e

        if expected_count is not None and expected_count > 0:
            if len(items) > expected_count:
                logger.info(
                    "Trimming %d items to expected %d",
                    len(items),
                    expected_count,
                    extra={"kind": kind.value},
                )
                items = items[:expected_count]
            elif len(items) < expected_count:
                logger.info(
                    "Model returned %d of %d expected items",
                    len(items),
                    expected_count,
                    extra={"kind": kind.value},
                )
        return items

