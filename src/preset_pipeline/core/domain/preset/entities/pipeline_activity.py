from typing import Annotated

from pydantic import Field

from preset_pipeline.core.domain.preset.entities.camel_model import CamelModel
from preset_pipeline.core.domain.preset.value_objects.activity_group import ActivityGroup
from preset_pipeline.core.domain.preset.value_objects.activity_priority import ActivityPriority

MAX_TITLE_LENGTH = 150

Confidence = Annotated[float, Field(ge=0, le=1, strict=True)]


class TechnicalDetails(CamelModel):
    suggested_files: tuple[str, ...] | None = None
    suggested_commands: tuple[str, ...] | None = None
    suggested_tests: tuple[str, ...] | None = None
    dependencies: tuple[str, ...] | None = None

    def populated_fields(self) -> int:
        """Number of detail lists that carry at least one non-blank entry."""
        values = (
            self.suggested_files,
            self.suggested_commands,
            self.suggested_tests,
            self.dependencies,
        )
        return sum(1 for v in values if v and any(item.strip() for item in v))


class PipelineActivity(CamelModel):
    """Single work item of a preset.

    Skeleton activities only carry title, group, hours and priority; the expand
    pass fills in the prose, acceptance criteria and technical details.
    """

    title: str = Field(min_length=10, max_length=MAX_TITLE_LENGTH)
    group: ActivityGroup
    estimated_hours: float = Field(gt=0, le=320, strict=True)
    priority: ActivityPriority
    description: str | None = None
    acceptance_criteria: tuple[str, ...] | None = None
    technical_details: TechnicalDetails | None = None
    estimated_hours_justification: str | None = None
    confidence: Confidence | None = None
