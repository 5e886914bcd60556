from enum import StrEnum

from preset_pipeline.core.domain.preset.entities.camel_model import CamelModel
from preset_pipeline.core.domain.preset.entities.preset import Preset


class FallbackReason(StrEnum):
    AI_DISABLED = "ai_disabled"
    SKELETON_FAILED = "skeleton_failed"
    QUALITY_BELOW_THRESHOLD = "quality_below_threshold"
    VALIDATION_FAILED = "validation_failed"
    GENERATION_FAILED = "generation_failed"


class PipelineMetadata(CamelModel):
    request_id: str
    user_id: str
    cached: bool = False
    model_passes: tuple[str, ...] = ()
    attempts: int = 0
    generation_time_ms: int = 0
    prompt_hashes: tuple[str, ...] = ()
    average_completeness: float | None = None
    validation_errors: tuple[str, ...] | None = None
    fallback_used: bool = False
    fallback_reason: FallbackReason | None = None


class PipelineResult(CamelModel):
    """Terminal outcome of one pipeline run. Never mutated once returned."""

    success: bool
    preset: Preset
    metadata: PipelineMetadata
