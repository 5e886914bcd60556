from abc import ABC, abstractmethod

from preset_pipeline.core.domain.pipeline import PipelineResult


class ResultCachePort(ABC):
    """Idempotency cache: request signature -> previously computed result.

    Entries are write-once per signature; concurrent writers may race and the
    last one wins.
    """

    @abstractmethod
    async def get(self, signature: str) -> PipelineResult | None:
        """Return the cached result, or None when absent or expired."""

    @abstractmethod
    async def set(self, signature: str, result: PipelineResult, ttl_seconds: int) -> None:
        """Store *result* under *signature* for *ttl_seconds*."""
