"""Bounded retry loop around a single generation call.

Attempts are counted per credential. A quota error hands over to the
``RotationManager`` and, when a new handle comes back, the new key starts from a
clean attempt budget. Transient errors back off exponentially on the same
handle and never rotate.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from pydantic_ai.exceptions import UnexpectedModelBehavior

from studyaid.core.logging import get_logger
from studyaid.modules.generation.classify import classify
from studyaid.modules.generation.errors import (
    GenerationFailed,
    QuotaExhausted,
    TransientFailure,
)
from studyaid.modules.generation.handles import ModelHandle
from studyaid.modules.generation.models import (
    AttemptOutcome,
    GenerationAttempt,
    GenerationRequest,
)
from studyaid.modules.generation.rotation import RotationManager

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]

MAX_ATTEMPTS = 5
ROTATION_PAUSE_SEC = 1.0


class RetryController:
    def __init__(
        self,
        rotation: RotationManager,
        *,
        max_attempts: int = MAX_ATTEMPTS,
        rotation_pause_sec: float = ROTATION_PAUSE_SEC,
        call_timeout_sec: Optional[float] = None,
        error_detail_chars: int = 150,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.rotation = rotation
        self.max_attempts = max(1, int(max_attempts))
        self.rotation_pause_sec = rotation_pause_sec
        self.call_timeout_sec = call_timeout_sec
        self.error_detail_chars = error_detail_chars
        self._sleep = sleep

    @staticmethod
    def backoff_delay(attempts: int) -> float:
        return float(2**attempts)

    async def _call(self, handle: ModelHandle, prompt: str) -> str:
        try:
            if self.call_timeout_sec:
                text = await asyncio.wait_for(
                    handle.generate_content(prompt), timeout=self.call_timeout_sec
                )
            else:
                text = await handle.generate_content(prompt)
        except UnexpectedModelBehavior as e:
            # Empty or unusable reply from the model
            raise TransientFailure(f"Unusable model response: {e.message}") from e
        if not text or not text.strip():
            raise TransientFailure("Empty response from model")
        return text

    def _detail(self, exc: BaseException) -> str:
        return str(exc)[: self.error_detail_chars]

    async def execute(
        self,
        request: GenerationRequest,
        handle: ModelHandle,
        history: Optional[list[GenerationAttempt]] = None,
    ) -> str:
        history = history if history is not None else []
        attempts = 0
        rotations = 0
        total = 0
        last_error: Optional[BaseException] = None
        ctx = {"kind": request.kind.value}

        while attempts < self.max_attempts:
            total += 1
            try:
                text = await self._call(handle, request.prompt)
            except asyncio.CancelledError:
                raise
            except Exception as e:  # noqa: BLE001
                last_error = e
                attempts += 1
                outcome = (
                    AttemptOutcome.TRANSIENT
                    if isinstance(e, TransientFailure)
                    else classify(e)
                )
                history.append(
                    GenerationAttempt(
                        attempt_number=total,
                        credential_index=handle.credential_index,
                        outcome=outcome,
                        detail=self._detail(e),
                    )
                )

                if outcome == AttemptOutcome.QUOTA:
                    # One full loop over the pool at most; rotate() never cycles on its own.
                    if rotations >= self.rotation.pool_size - 1:
                        raise QuotaExhausted(
                            f"Quota exhausted on all keys: {self._detail(e)}",
                            attempts=total,
                        ) from e
                    new_handle = await self.rotation.rotate(e)
                    if new_handle is None:
                        raise QuotaExhausted(
                            f"Quota exhausted and no other key available: {self._detail(e)}",
                            attempts=total,
                        ) from e
                    rotations += 1
                    handle = new_handle
                    attempts = 0
                    await self._sleep(self.rotation_pause_sec)
                    continue

                if outcome == AttemptOutcome.TRANSIENT and attempts < self.max_attempts:
                    delay = self.backoff_delay(attempts)
                    logger.warning(
                        "Transient AI error (%s). Retrying in %.0fs...",
                        self._detail(e),
                        delay,
                        extra={**ctx, "key_index": handle.credential_index},
                    )
                    await self._sleep(delay)
                    continue

                logger.error(
                    "AI generation failed after %d attempts: %s",
                    total,
                    self._detail(e),
                    extra={**ctx, "key_index": handle.credential_index},
                )
                raise GenerationFailed(
                    f"AI generation failed after {total} attempts: {self._detail(e)}",
                    attempts=total,
                ) from e
            else:
                history.append(
                    GenerationAttempt(
                        attempt_number=total,
                        credential_index=handle.credential_index,
                        outcome=AttemptOutcome.SUCCESS,
                    )
                )
                return text

        detail = self._detail(last_error) if last_error else "no response"
        raise GenerationFailed(
            f"AI generation failed after {total} attempts: {detail}", attempts=total
        )
