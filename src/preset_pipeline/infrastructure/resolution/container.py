"""Composition root: wires settings, adapters and the preset generation workflow."""

from dataclasses import dataclass

import structlog

from preset_pipeline.core.application.ports import GenerationPort, ResultCachePort
from preset_pipeline.core.application.quality import (
    CompletenessScorer,
    PresetSchemaValidator,
    TaskSplitter,
)
from preset_pipeline.core.application.skills.preset.expand_preset_skill import ExpandPresetSkill
from preset_pipeline.core.application.skills.preset.generate_skeleton_skill import (
    GenerateSkeletonSkill,
)
from preset_pipeline.core.application.skills.preset.prompt_templates.preset_prompt_builder import (
    PresetPromptBuilder,
)
from preset_pipeline.core.application.workflows.preset.pipeline_policy import PipelinePolicy
from preset_pipeline.core.application.workflows.preset.preset_generation_workflow import (
    PresetGenerationWorkflow,
)
from preset_pipeline.infrastructure.adapters.cache.file_result_cache import FileResultCache
from preset_pipeline.infrastructure.adapters.cache.in_memory_result_cache import (
    InMemoryResultCache,
)
from preset_pipeline.infrastructure.adapters.llm.litellm_generation_adapter import (
    LiteLlmGenerationAdapter,
)
from preset_pipeline.infrastructure.adapters.metrics.prometheus_pipeline_metrics import (
    PrometheusPipelineMetrics,
)
from preset_pipeline.infrastructure.configuration.cache_settings import CacheBackend, CacheSettings
from preset_pipeline.infrastructure.configuration.main_settings import Settings

logger = structlog.get_logger()


@dataclass(frozen=True)
class PipelineContainer:
    """Objects shared by every request of one app instance."""

    workflow: PresetGenerationWorkflow
    metrics: PrometheusPipelineMetrics
    cache: ResultCachePort


def build_cache(settings: CacheSettings) -> ResultCachePort:
    if settings.backend is CacheBackend.FILE:
        return FileResultCache(settings.runtime_data_dir)
    return InMemoryResultCache()


def build_workflow(
    policy: PipelinePolicy,
    generation: GenerationPort,
    cache: ResultCachePort,
    metrics: PrometheusPipelineMetrics,
) -> PresetGenerationWorkflow:
    prompt_builder = PresetPromptBuilder(
        max_hours=policy.max_hours,
        min_activities=policy.min_activities,
        max_activities=policy.max_activities,
    )
    return PresetGenerationWorkflow(
        generate_skeleton=GenerateSkeletonSkill(generation, prompt_builder),
        expand_preset=ExpandPresetSkill(generation, prompt_builder),
        validator=PresetSchemaValidator(),
        splitter=TaskSplitter(confidence_decay=policy.confidence_decay),
        scorer=CompletenessScorer(
            weights=policy.score_weights,
            min_criteria=policy.min_acceptance_criteria,
            coherence_saturation=policy.coherence_saturation,
        ),
        cache=cache,
        metrics=metrics,
        policy=policy,
    )


def build_container(
    settings: Settings, generation: GenerationPort | None = None
) -> PipelineContainer:
    """Build the app-wide container. ``generation`` overrides the litellm adapter."""
    policy = settings.to_policy()
    cache = build_cache(settings.cache)
    metrics = PrometheusPipelineMetrics()
    workflow = build_workflow(
        policy,
        generation or LiteLlmGenerationAdapter(settings.llm),
        cache,
        metrics,
    )
    logger.info(
        "Pipeline container built",
        cache_backend=settings.cache.backend.value,
        ai_enabled=policy.ai_enabled,
        ensemble=policy.ensemble,
        model_priority=settings.llm.preset_llm_model_priority,
    )
    return PipelineContainer(workflow=workflow, metrics=metrics, cache=cache)
