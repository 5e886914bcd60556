from preset_pipeline.core.application.exceptions.pipeline_exceptions import (
    ApplicationError,
    GenerationError,
    GenerationTimeoutError,
    PipelineError,
    ProviderError,
    ResponseParseError,
    SkillExecutionError,
)
from preset_pipeline.core.domain.pipeline import InvalidPipelineInputError

__all__ = [
    "ApplicationError",
    "GenerationError",
    "GenerationTimeoutError",
    "InvalidPipelineInputError",
    "PipelineError",
    "ProviderError",
    "ResponseParseError",
    "SkillExecutionError",
]
