"""Preset generation state machine: cache -> skeleton -> expand (retry) -> fallback."""

import time
from dataclasses import dataclass, field
from typing import Any

import structlog
from structlog.contextvars import bind_contextvars

from preset_pipeline.core.application.exceptions import (
    InvalidPipelineInputError,
    PipelineError,
)
from preset_pipeline.core.application.ports import MetricsPort, PipelineCounter, ResultCachePort
from preset_pipeline.core.application.quality import (
    CompletenessScorer,
    PresetSchemaValidator,
    TaskSplitter,
)
from preset_pipeline.core.application.skills.preset.contracts.preset_pass_input import (
    ExpandPresetInput,
    GenerateSkeletonInput,
    ProjectContext,
)
from preset_pipeline.core.application.skills.preset.contracts.skeleton_contracts import (
    SkeletonResponseSchema,
)
from preset_pipeline.core.application.skills.preset.expand_preset_skill import ExpandPresetSkill
from preset_pipeline.core.application.skills.preset.generate_skeleton_skill import (
    SKELETON_PASS,
    GenerateSkeletonSkill,
)
from preset_pipeline.core.application.workflows.base_workflow import BaseWorkflow
from preset_pipeline.core.application.workflows.preset.pipeline_policy import PipelinePolicy
from preset_pipeline.core.application.workflows.preset.request_signature import (
    RequestSignature,
    RequestSignatureBuilder,
    sanitize_prompt_input,
)
from preset_pipeline.core.domain.pipeline import (
    FallbackReason,
    PipelineInput,
    PipelineMetadata,
    PipelineResult,
    PipelineStage,
)
from preset_pipeline.core.domain.preset import FALLBACK_PRESET, Preset, ScoredPreset
from preset_pipeline.infrastructure.observability.tracing_setup import (
    SpanAttributes,
    trace_operation,
)

logger = structlog.get_logger()


def span_attributes(result: PipelineResult) -> SpanAttributes:
    metadata = result.metadata
    return {
        "pipeline.cached": metadata.cached,
        "pipeline.attempts": metadata.attempts,
        "pipeline.fallback_used": metadata.fallback_used,
        "pipeline.fallback_reason": str(metadata.fallback_reason or ""),
        "pipeline.activity_count": len(result.preset.activities),
    }


@dataclass
class _RunState:
    """Mutable bookkeeping for one invocation; frozen into PipelineMetadata at the end."""

    signature: RequestSignature
    model_passes: list[str] = field(default_factory=list)
    attempts: int = 0
    average_completeness: float | None = None
    validation_errors: tuple[str, ...] | None = None


@dataclass(frozen=True)
class _AttemptOutcome:
    scored: ScoredPreset | None = None
    failure: FallbackReason | None = None
    validation_errors: tuple[str, ...] | None = None


class PresetGenerationWorkflow(BaseWorkflow[PipelineInput, PipelineResult]):
    """Turns a project description into a schema-valid preset, always.

    Generation problems (timeouts, provider errors, unparsable or invalid
    answers, low completeness) consume attempts and end in the fallback
    preset; only ``InvalidPipelineInputError`` reaches the caller. Cache and
    metrics failures are logged and skipped.
    """

    def __init__(
        self,
        generate_skeleton: GenerateSkeletonSkill,
        expand_preset: ExpandPresetSkill,
        validator: PresetSchemaValidator,
        splitter: TaskSplitter,
        scorer: CompletenessScorer,
        cache: ResultCachePort,
        metrics: MetricsPort,
        policy: PipelinePolicy,
        signature_builder: RequestSignatureBuilder | None = None,
    ) -> None:
        self._generate_skeleton = generate_skeleton
        self._expand_preset = expand_preset
        self._validator = validator
        self._splitter = splitter
        self._scorer = scorer
        self._cache = cache
        self._metrics = metrics
        self._policy = policy
        self._signature_builder = signature_builder or RequestSignatureBuilder()

    @trace_operation("workflow.preset_generation", result_attributes=span_attributes)
    async def execute(self, input_data: PipelineInput) -> PipelineResult:
        start = time.perf_counter()
        bind_contextvars(request_id=input_data.request_id, event_type="workflow.preset_generation")
        context = self._build_context(input_data)
        self._increment(PipelineCounter.REQUESTS)

        state = _RunState(signature=self._signature_builder.build(input_data.user_id, context))
        logger.info(
            "Preset pipeline started",
            prompt_hash=state.signature.digest,
            ai_enabled=self._policy.ai_enabled,
            ensemble=self._policy.ensemble,
        )

        cached = await self._step_1_check_cache(state.signature)
        if cached is not None:
            return self._cached_result(input_data, state, cached, start)

        if not self._policy.ai_enabled:
            logger.info(
                "AI generation disabled, using fallback preset", stage=PipelineStage.FALLBACK
            )
            preset, reason = None, FallbackReason.AI_DISABLED
        else:
            preset, reason = await self._generate(context, state)

        result = self._finalize(input_data, state, preset, reason, start)
        await self._step_5_store_result(state.signature, result)
        return result

    # ── Generation (max one skeleton, N expand attempts) ─────────────

    async def _generate(
        self, context: ProjectContext, state: _RunState
    ) -> tuple[Preset | None, FallbackReason | None]:
        skeleton: SkeletonResponseSchema | None = None
        if self._policy.ensemble:
            state.model_passes.append(SKELETON_PASS)
            try:
                skeleton = await self._step_2_generate_skeleton(context)
            except PipelineError as exc:
                self._log_attempt_failure("Skeleton pass failed", exc, PipelineStage.SKELETON, 0)
                return None, FallbackReason.SKELETON_FAILED

        failure = FallbackReason.GENERATION_FAILED
        for attempt in range(1, self._policy.max_expand_attempts + 1):
            temperature = self._policy.expand_temperature(attempt)
            pass_name = f"{'expand' if skeleton is not None else 'direct'}_temp{temperature:g}"
            state.attempts = attempt
            state.model_passes.append(pass_name)
            self._increment(PipelineCounter.ATTEMPTS)

            outcome = await self._step_3_expand_attempt(
                context, skeleton, pass_name, temperature, attempt
            )
            if outcome.scored is not None:
                state.average_completeness = outcome.scored.average_completeness
                if self._step_4_accept(outcome.scored, attempt):
                    state.validation_errors = None
                    return outcome.scored.preset, None
                failure = FallbackReason.QUALITY_BELOW_THRESHOLD
            else:
                failure = outcome.failure
                if outcome.validation_errors is not None:
                    state.validation_errors = outcome.validation_errors

        if failure is not FallbackReason.VALIDATION_FAILED:
            state.validation_errors = None
        logger.warning(
            "Expand attempts exhausted, using fallback preset",
            stage=PipelineStage.FALLBACK,
            attempt=state.attempts,
            fallback_reason=failure.value,
        )
        return None, failure

    # ── Step Methods ─────────────────────────────────────────────────

    async def _step_1_check_cache(self, signature: RequestSignature) -> PipelineResult | None:
        try:
            cached = await self._cache.get(signature.cache_key)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Cache check failed, continuing without cache",
                stage=PipelineStage.CACHE_CHECK,
                error_type=type(exc).__name__,
                error_details=str(exc),
            )
            return None
        if cached is not None:
            logger.info("Cache hit", stage=PipelineStage.CACHE_CHECK, prompt_hash=signature.digest)
        return cached

    async def _step_2_generate_skeleton(self, context: ProjectContext) -> SkeletonResponseSchema:
        logger.info("Generating skeleton", stage=PipelineStage.SKELETON)
        return await self._generate_skeleton.execute(
            GenerateSkeletonInput(
                context=context,
                temperature=self._policy.skeleton_temperature,
                timeout_seconds=self._policy.generation_timeout_seconds,
            )
        )

    async def _step_3_expand_attempt(
        self,
        context: ProjectContext,
        skeleton: SkeletonResponseSchema | None,
        pass_name: str,
        temperature: float,
        attempt: int,
    ) -> _AttemptOutcome:
        """Expand, validate, split, re-validate and score one candidate."""
        logger.info(
            "Expanding preset", stage=PipelineStage.EXPAND, attempt=attempt, pass_name=pass_name
        )
        try:
            candidate = await self._expand_preset.execute(
                ExpandPresetInput(
                    context=context,
                    skeleton=skeleton,
                    pass_name=pass_name,
                    temperature=temperature,
                    timeout_seconds=self._policy.generation_timeout_seconds,
                )
            )
        except PipelineError as exc:
            self._log_attempt_failure("Expand attempt failed", exc, PipelineStage.EXPAND, attempt)
            return _AttemptOutcome(failure=FallbackReason.GENERATION_FAILED)

        report = self._validator.check(candidate)
        if not report.valid:
            return self._invalid_outcome(report.errors, attempt, "candidate")

        preset = Preset.model_validate(candidate, by_alias=True, by_name=False)
        split_preset = preset.with_activities(
            self._splitter.split_all(list(preset.activities), self._policy.max_hours)
        )
        report = self._validator.check(split_preset)
        if not report.valid:
            return self._invalid_outcome(report.errors, attempt, "split")

        scored = self._scorer.post_process_and_score(split_preset, context.description)
        return _AttemptOutcome(scored=scored)

    def _step_4_accept(self, scored: ScoredPreset, attempt: int) -> bool:
        accepted = scored.average_completeness >= self._policy.completeness_threshold
        logger.info(
            "Expand attempt scored",
            stage=PipelineStage.EXPAND,
            attempt=attempt,
            average_completeness=round(scored.average_completeness, 4),
            threshold=self._policy.completeness_threshold,
            accepted=accepted,
        )
        return accepted

    async def _step_5_store_result(
        self, signature: RequestSignature, result: PipelineResult
    ) -> None:
        try:
            await self._cache.set(signature.cache_key, result, self._policy.cache_ttl_seconds)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Cache write failed",
                stage=PipelineStage.DONE,
                error_type=type(exc).__name__,
                error_details=str(exc),
            )

    # ── Result assembly ──────────────────────────────────────────────

    def _finalize(
        self,
        input_data: PipelineInput,
        state: _RunState,
        preset: Preset | None,
        reason: FallbackReason | None,
        start: float,
    ) -> PipelineResult:
        fallback_used = preset is None
        if fallback_used:
            preset = FALLBACK_PRESET
            self._increment(PipelineCounter.FALLBACK)
        else:
            self._increment(PipelineCounter.SUCCESS)
            self._warn_on_bounds(preset)

        elapsed = time.perf_counter() - start
        self._observe(elapsed)
        metadata = PipelineMetadata(
            request_id=input_data.request_id,
            user_id=input_data.user_id,
            cached=False,
            model_passes=tuple(state.model_passes),
            attempts=state.attempts,
            generation_time_ms=int(elapsed * 1000),
            prompt_hashes=(state.signature.digest,),
            average_completeness=state.average_completeness,
            validation_errors=state.validation_errors,
            fallback_used=fallback_used,
            fallback_reason=reason,
        )
        logger.info(
            "Preset pipeline completed",
            stage=PipelineStage.DONE,
            processing_status="FALLBACK" if fallback_used else "SUCCESS",
            processing_duration_ms=metadata.generation_time_ms,
            processing_retries=max(state.attempts - 1, 0),
            activity_count=len(preset.activities),
        )
        return PipelineResult(success=True, preset=preset, metadata=metadata)

    def _cached_result(
        self, input_data: PipelineInput, state: _RunState, cached: PipelineResult, start: float
    ) -> PipelineResult:
        self._increment(PipelineCounter.CACHE_HITS)
        elapsed = time.perf_counter() - start
        self._observe(elapsed)
        metadata = PipelineMetadata(
            request_id=input_data.request_id,
            user_id=input_data.user_id,
            cached=True,
            generation_time_ms=int(elapsed * 1000),
            prompt_hashes=(state.signature.digest,),
            average_completeness=cached.metadata.average_completeness,
            fallback_used=cached.metadata.fallback_used,
            fallback_reason=cached.metadata.fallback_reason,
        )
        return PipelineResult(success=True, preset=cached.preset, metadata=metadata)

    # ── Helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _build_context(input_data: PipelineInput) -> ProjectContext:
        description = sanitize_prompt_input(input_data.description)
        if not description:
            raise InvalidPipelineInputError("Project description is empty after sanitising")
        return ProjectContext(
            description=description,
            answers=dict(input_data.answers),
            category=input_data.category,
        )

    def _invalid_outcome(
        self, errors: tuple[str, ...], attempt: int, phase: str
    ) -> _AttemptOutcome:
        logger.warning(
            "Expand candidate failed validation",
            stage=PipelineStage.EXPAND,
            attempt=attempt,
            phase=phase,
            error_type="ValidationError",
            error_details=list(errors[:10]),
            error_count=len(errors),
        )
        return _AttemptOutcome(failure=FallbackReason.VALIDATION_FAILED, validation_errors=errors)

    def _warn_on_bounds(self, preset: Preset) -> None:
        count = len(preset.activities)
        if not self._policy.min_activities <= count <= self._policy.max_activities:
            logger.warning(
                "Activity count out of range",
                activity_count=count,
                min_activities=self._policy.min_activities,
                max_activities=self._policy.max_activities,
            )
        max_hours = self._policy.max_hours
        oversized = [a.title for a in preset.activities if a.estimated_hours > max_hours]
        if oversized:
            logger.warning("Oversized activities detected", oversized=oversized)

    @staticmethod
    def _log_attempt_failure(
        message: str, exc: PipelineError, stage: PipelineStage, attempt: int
    ) -> None:
        extra: dict[str, Any] = exc.context
        logger.warning(
            message,
            stage=stage,
            attempt=attempt,
            error_type=type(exc).__name__,
            error_details=str(exc),
            **{k: v for k, v in extra.items() if k not in ("stage", "attempt")},
        )

    def _increment(self, counter: PipelineCounter) -> None:
        try:
            self._metrics.increment(counter)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Metrics increment failed",
                counter=counter.value,
                error_type=type(exc).__name__,
                error_details=str(exc),
            )

    def _observe(self, seconds: float) -> None:
        try:
            self._metrics.observe_generation_time(seconds)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Metrics observation failed",
                error_type=type(exc).__name__,
                error_details=str(exc),
            )
