from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationRequest:
    """One call to the generation backend."""

    pass_name: str
    system_prompt: str
    user_prompt: str
    temperature: float
    timeout_seconds: float


class GenerationPort(ABC):
    """Port for the (untrusted, non-deterministic) text generation backend.

    Implementations MUST raise:
        - ProviderError: on provider-level failures (rate limits, auth, outages).
        - GenerationError: when no text could be obtained at all.

    Timeouts are enforced by the caller as well, so an implementation that
    ignores ``timeout_seconds`` still cannot stall the pipeline.
    """

    @abstractmethod
    async def complete(self, request: GenerationRequest) -> str:
        """Send the prompts and return the raw text answer, expected to be JSON."""
