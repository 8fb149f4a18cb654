"""Public entry point for AI content generation.

``GenerationOrchestrator.generate`` turns a prompt into validated flashcards or
quiz questions. It never touches persistence; callers save the result.
"""

from __future__ import annotations

from typing import Optional

from studyaid.core.config import GeminiSettings
from studyaid.core.logging import get_logger
from studyaid.modules.generation.errors import ModelUnavailable
from studyaid.modules.generation.handles import ModelFactory, ModelResolver, build_google_model
from studyaid.modules.generation.models import (
    GenerationAttempt,
    GenerationKind,
    GenerationRequest,
    ValidatedContent,
)
from studyaid.modules.generation.retry import RetryController, Sleep
from studyaid.modules.generation.rotation import RotationManager
from studyaid.modules.generation.validator import ResponseValidator

logger = get_logger(__name__)


class GenerationOrchestrator:
    def __init__(
        self,
        rotation: RotationManager,
        retry: RetryController,
        validator: ResponseValidator,
    ) -> None:
        self.rotation = rotation
        self.retry = retry
        self.validator = validator

    @classmethod
    def from_settings(
        cls,
        cfg: GeminiSettings,
        *,
        model_factory: ModelFactory = build_google_model,
        sleep: Optional[Sleep] = None,
    ) -> "GenerationOrchestrator":
        resolver = ModelResolver(
            primary_model=cfg.primary_model,
            fallback_model=cfg.fallback_model,
            model_factory=model_factory,
        )
        rotation = RotationManager(cfg.api_keys, resolver)
        retry_kwargs = {} if sleep is None else {"sleep": sleep}
        retry = RetryController(
            rotation,
            max_attempts=cfg.max_attempts,
            rotation_pause_sec=cfg.rotation_pause_sec,
            call_timeout_sec=cfg.request_timeout_sec,
            error_detail_chars=cfg.error_detail_chars,
            **retry_kwargs,
        )
        validator = ResponseValidator(excerpt_chars=cfg.debug_excerpt_chars)
        logger.info("Generation orchestrator ready with %d key(s)", rotation.pool_size)
        return cls(rotation, retry, validator)

    async def generate(
        self,
        request: GenerationRequest,
        history: Optional[list[GenerationAttempt]] = None,
    ) -> ValidatedContent:
        handle = await self.rotation.current_handle()
        if handle is None:
            raise ModelUnavailable("AI model not initialized.")

        raw = await self.retry.execute(request, handle, history=history)
        items = self.validator.validate(raw, request.kind, request.expected_count)
        logger.info(
            "Generated %d %s item(s)",
            len(items),
            request.kind.value,
            extra={"kind": request.kind.value},
        )
        return items

    async def generate_flashcards(
        self, prompt: str, expected_count: Optional[int] = None
    ) -> ValidatedContent:
        return await self.generate(
            GenerationRequest(
                prompt=prompt,
                kind=GenerationKind.FLASHCARDS,
                expected_count=expected_count,
            )
        )

    async def generate_quiz(
        self, prompt: str, expected_count: Optional[int] = None
    ) -> ValidatedContent:
        return await self.generate(
            GenerationRequest(
                prompt=prompt, kind=GenerationKind.QUIZ, expected_count=expected_count
            )
        )
