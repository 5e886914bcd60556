from preset_pipeline.core.domain.preset.entities.fallback_preset import FALLBACK_PRESET
from preset_pipeline.core.domain.preset.entities.pipeline_activity import (
    MAX_TITLE_LENGTH,
    PipelineActivity,
    TechnicalDetails,
)
from preset_pipeline.core.domain.preset.entities.preset import (
    MAX_ACTIVITIES,
    MIN_ACTIVITIES,
    Preset,
)
from preset_pipeline.core.domain.preset.entities.scored_activity import (
    ActivityScore,
    ScoredActivity,
    ScoredPreset,
)
from preset_pipeline.core.domain.preset.value_objects.activity_group import ActivityGroup
from preset_pipeline.core.domain.preset.value_objects.activity_priority import ActivityPriority
from preset_pipeline.core.domain.preset.value_objects.tech_category import TechCategory

__all__ = [
    "FALLBACK_PRESET",
    "MAX_ACTIVITIES",
    "MAX_TITLE_LENGTH",
    "MIN_ACTIVITIES",
    "ActivityGroup",
    "ActivityPriority",
    "ActivityScore",
    "PipelineActivity",
    "Preset",
    "ScoredActivity",
    "ScoredPreset",
    "TechCategory",
    "TechnicalDetails",
]
