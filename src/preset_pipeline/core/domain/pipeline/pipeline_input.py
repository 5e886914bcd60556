from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from preset_pipeline.core.domain.preset.value_objects.tech_category import TechCategory


class InvalidPipelineInputError(ValueError):
    """Raised for requests that must be rejected before any generation call."""


@dataclass(frozen=True)
class PipelineInput:
    """Immutable preset generation request.

    ``request_id`` identifies one logical user action; resubmitting the same
    request content is served from the idempotency cache.
    """

    user_id: str
    description: str
    answers: dict[str, Any] = field(default_factory=dict)
    category: TechCategory | None = None
    request_id: str = field(default_factory=lambda: str(uuid4()))

    def __post_init__(self) -> None:
        if not self.description or not self.description.strip():
            raise InvalidPipelineInputError("Project description must not be empty")
        if not self.user_id or not self.user_id.strip():
            raise InvalidPipelineInputError("User identifier must not be empty")
