from typing import Annotated

from pydantic import Field

from preset_pipeline.core.domain.preset.entities.camel_model import CamelModel
from preset_pipeline.core.domain.preset.entities.pipeline_activity import (
    Confidence,
    PipelineActivity,
)
from preset_pipeline.core.domain.preset.value_objects.tech_category import TechCategory

MIN_ACTIVITIES = 5
MAX_ACTIVITIES = 20


class Preset(CamelModel):
    """Work-breakdown preset: activities plus default drivers and risks."""

    name: str = Field(min_length=5, max_length=100)
    description: str = Field(min_length=20, max_length=500)
    detailed_description: str = Field(min_length=100, max_length=2000)
    tech_category: TechCategory
    activities: tuple[PipelineActivity, ...] = Field(
        min_length=MIN_ACTIVITIES, max_length=MAX_ACTIVITIES
    )
    driver_values: dict[str, Annotated[float, Field(strict=True)]]
    risk_codes: tuple[str, ...]
    reasoning: str = Field(min_length=50, max_length=2000)
    confidence: Confidence

    def with_activities(self, activities: list[PipelineActivity]) -> "Preset":
        """Return a copy carrying *activities*. Bounds are not re-checked here."""
        return self.model_copy(update={"activities": tuple(activities)})
