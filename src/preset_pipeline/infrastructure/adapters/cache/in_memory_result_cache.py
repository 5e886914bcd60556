import asyncio
import time
from collections.abc import Callable

from preset_pipeline.core.application.ports import ResultCachePort
from preset_pipeline.core.domain.pipeline import PipelineResult


class InMemoryResultCache(ResultCachePort):
    """Process-local idempotency cache with monotonic-clock expiry."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, tuple[float, PipelineResult]] = {}
        self._lock = asyncio.Lock()
        self._clock = clock

    async def get(self, signature: str) -> PipelineResult | None:
        async with self._lock:
            entry = self._entries.get(signature)
            if entry is None:
                return None
            expires_at, result = entry
            if self._clock() >= expires_at:
                del self._entries[signature]
                return None
            return result

    async def set(self, signature: str, result: PipelineResult, ttl_seconds: int) -> None:
        async with self._lock:
            self._entries[signature] = (self._clock() + ttl_seconds, result)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()
