"""Credential rotation over an ordered key pool.

One ``RotationManager`` is created at startup and shared by every request. The
current index and the handle cache only change under ``_lock`` so a rotation is
never observed half-applied.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from studyaid.core.logging import get_logger
from studyaid.modules.generation.classify import is_quota_error
from studyaid.modules.generation.handles import ModelHandle, ModelResolver

logger = get_logger(__name__)

_FAILED = object()


class RotationManager:
    def __init__(self, credentials: Sequence[str], resolver: ModelResolver) -> None:
        self._credentials: tuple[str, ...] = tuple(credentials)
        self._resolver = resolver
        self._current_index = 0
        self._cache: dict[int, object] = {}
        self._lock = asyncio.Lock()
        self.rotation_count = 0

    @property
    def pool_size(self) -> int:
        return len(self._credentials)

    @property
    def current_index(self) -> int:
        return self._current_index

    def _handle_for(self, index: int) -> Optional[ModelHandle]:
        cached = self._cache.get(index)
        if cached is None:
            handle = self._resolver.resolve(index, self._credentials[index])
            self._cache[index] = handle if handle is not None else _FAILED
            return handle
        if cached is _FAILED:
            return None
        return cached  # type: ignore[return-value]

    async def current_handle(self) -> Optional[ModelHandle]:
        if not self._credentials:
            return None
        async with self._lock:
            return self._handle_for(self._current_index)

    async def rotate(self, error: BaseException) -> Optional[ModelHandle]:
        """Advance to the next credential after a quota error.

        Returns None when nothing changed: a non-quota error, a single-key pool,
        or a next credential that cannot resolve a model. In the last case the
        index stays on the previous key so later requests are not pinned to a
        broken one. The caller treats None as exhaustion.
        """
        if not is_quota_error(error):
            return None
        if self.pool_size <= 1:
            logger.warning("Quota exhausted on the only configured key", extra={"key_index": 0})
            return None

        async with self._lock:
            previous = self._current_index
            candidate = (previous + 1) % self.pool_size
            handle = self._handle_for(candidate)
            if handle is not None:
                self._current_index = candidate
                self.rotation_count += 1

        if handle is None:
            logger.error(
                "Key %d could not resolve a model; staying on key %d",
                candidate,
                previous,
                extra={"key_index": previous},
            )
            return None

        logger.warning(
            "Rotated key %d -> %d after quota error",
            previous,
            candidate,
            extra={"key_index": candidate},
        )
        return handle

    async def reset(self) -> None:
        """Forget cached handles so every key is resolved again on next use."""
        async with self._lock:
            self._cache.clear()
            self._current_index = 0
        logger.info("Key rotation state reset")
