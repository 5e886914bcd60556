from preset_pipeline.core.domain.pipeline.pipeline_input import (
    InvalidPipelineInputError,
    PipelineInput,
)
from preset_pipeline.core.domain.pipeline.pipeline_result import (
    FallbackReason,
    PipelineMetadata,
    PipelineResult,
)
from preset_pipeline.core.domain.pipeline.pipeline_stage import PipelineStage

__all__ = [
    "FallbackReason",
    "InvalidPipelineInputError",
    "PipelineInput",
    "PipelineMetadata",
    "PipelineResult",
    "PipelineStage",
]
