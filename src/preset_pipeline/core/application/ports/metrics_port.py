from abc import ABC, abstractmethod
from enum import StrEnum


class PipelineCounter(StrEnum):
    REQUESTS = "preset_generation_requests_total"
    ATTEMPTS = "preset_generation_attempts_total"
    SUCCESS = "preset_generation_success_total"
    FALLBACK = "preset_generation_fallback_total"
    CACHE_HITS = "preset_cache_hits_total"


class MetricsPort(ABC):
    """Process-wide pipeline counters, injected into the workflow."""

    @abstractmethod
    def increment(self, counter: PipelineCounter, amount: float = 1) -> None: ...

    @abstractmethod
    def observe_generation_time(self, seconds: float) -> None: ...

    @abstractmethod
    def snapshot(self) -> dict[str, float]:
        """Read-only copy of every counter plus generation time sum/count."""

    @abstractmethod
    def reset(self) -> None:
        """Zero every counter. Meant for tests."""
