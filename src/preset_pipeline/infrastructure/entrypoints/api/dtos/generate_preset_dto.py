from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from preset_pipeline.core.domain.preset import TechCategory


class GeneratePresetRequestDTO(BaseModel):
    """HTTP body of ``POST /api/v1/presets/generate``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    user_id: str = Field(min_length=1)
    description: str
    answers: dict[str, Any] = Field(default_factory=dict)
    category: TechCategory | None = None
    request_id: str | None = None
