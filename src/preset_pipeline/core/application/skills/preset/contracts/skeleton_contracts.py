from pydantic import BaseModel, ConfigDict, Field

from preset_pipeline.core.domain.preset import ActivityGroup, ActivityPriority


class SkeletonActivity(BaseModel):
    """Coarse activity returned by the skeleton pass. No prose."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    title: str = Field(min_length=1)
    group: ActivityGroup
    estimated_hours: float = Field(alias="estimatedHours", gt=0)
    priority: ActivityPriority


class SkeletonResponseSchema(BaseModel):
    """LLM CONTRACT: ``{"success": true, "activities": [...]}``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    success: bool
    activities: tuple[SkeletonActivity, ...] = Field(min_length=1)

    def to_prompt_payload(self) -> list[dict]:
        return [activity.model_dump(mode="json", by_alias=True) for activity in self.activities]
