"""Application-layer exception hierarchy for the preset pipeline.

Skills raise from this tree so the workflow can tell an attempt failure
(consumes one attempt, never reaches the caller) from a programming error.
"""

from dataclasses import dataclass
from typing import Any


class ApplicationError(Exception):
    """Base exception for all application-layer errors."""

    def __init__(self, message: str = "", *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context: dict[str, Any] = context or {}


class PipelineError(ApplicationError):
    """Base for failures raised while producing a preset."""


class GenerationError(PipelineError):
    """The generation backend failed to answer (network, provider, empty body)."""


class GenerationTimeoutError(GenerationError):
    """A generation call exceeded its timeout."""


class ResponseParseError(PipelineError):
    """A backend answer could not be read as the expected JSON structure."""


class SkillExecutionError(PipelineError):
    """Raised when a Skill.execute() call fails for any other reason."""


@dataclass(frozen=False)
class ProviderError(Exception):
    """Provider-level failure reported by a generation adapter."""

    provider: str
    message: str
    retryable: bool = False
    status_code: int | None = None

    def __str__(self) -> str:
        code = f" status={self.status_code}" if self.status_code is not None else ""
        return f"{self.provider}: {self.message}{code}"
