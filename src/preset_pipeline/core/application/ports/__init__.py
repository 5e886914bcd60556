from preset_pipeline.core.application.ports.generation_port import (
    GenerationPort,
    GenerationRequest,
)
from preset_pipeline.core.application.ports.metrics_port import MetricsPort, PipelineCounter
from preset_pipeline.core.application.ports.result_cache_port import ResultCachePort

__all__ = [
    "GenerationPort",
    "GenerationRequest",
    "MetricsPort",
    "PipelineCounter",
    "ResultCachePort",
]
