"""Unit tests — ExpandPresetSkill (scripted generation backend, zero network)."""

import asyncio
import json

import pytest

from preset_pipeline.core.application.exceptions import (
    GenerationError,
    GenerationTimeoutError,
    ProviderError,
    ResponseParseError,
    SkillExecutionError,
)
from preset_pipeline.core.application.skills.preset.contracts.preset_pass_input import (
    ExpandPresetInput,
    ProjectContext,
)
from preset_pipeline.core.application.skills.preset.contracts.skeleton_contracts import (
    SkeletonResponseSchema,
)
from preset_pipeline.core.application.skills.preset.expand_preset_skill import ExpandPresetSkill
from preset_pipeline.core.application.skills.preset.prompt_templates.preset_prompt_builder import (
    PresetPromptBuilder,
)
from preset_pipeline.core.domain.preset import TechCategory

# ── Fixtures ──


@pytest.fixture()
def prompt_builder() -> PresetPromptBuilder:
    return PresetPromptBuilder(max_hours=8.0, min_activities=5, max_activities=20)


def _input(
    skeleton: SkeletonResponseSchema | None = None,
    category: TechCategory | None = None,
    timeout_seconds: float = 5.0,
) -> ExpandPresetInput:
    return ExpandPresetInput(
        context=ProjectContext(
            description="HR Dashboard with real-time employee metrics",
            answers={"team_size": 4},
            category=category,
        ),
        skeleton=skeleton,
        pass_name="expand_temp0.6",
        temperature=0.6,
        timeout_seconds=timeout_seconds,
    )


class TestExpandPresetSkill:
    @pytest.mark.asyncio
    async def test_returns_candidate_without_envelope(
        self, scripted_generation, prompt_builder, payloads
    ) -> None:
        generation = scripted_generation(payloads.expand_answer())
        skill = ExpandPresetSkill(generation, prompt_builder)

        candidate = await skill.execute(_input())

        assert "success" not in candidate
        assert candidate["name"] == "HR Dashboard Preset"
        assert len(candidate["activities"]) == 5

    @pytest.mark.asyncio
    async def test_sends_pass_name_temperature_and_timeout(
        self, scripted_generation, prompt_builder, payloads
    ) -> None:
        generation = scripted_generation(payloads.expand_answer())
        skill = ExpandPresetSkill(generation, prompt_builder)

        await skill.execute(_input(timeout_seconds=12.0))

        request = generation.requests[0]
        assert request.pass_name == "expand_temp0.6"
        assert request.temperature == 0.6
        assert request.timeout_seconds == 12.0
        assert "<project_description>HR Dashboard" in request.user_prompt

    @pytest.mark.asyncio
    async def test_embeds_skeleton_in_user_prompt(
        self, scripted_generation, prompt_builder, payloads
    ) -> None:
        skeleton = SkeletonResponseSchema.model_validate(json.loads(payloads.skeleton_answer()))
        generation = scripted_generation(payloads.expand_answer())
        skill = ExpandPresetSkill(generation, prompt_builder)

        await skill.execute(_input(skeleton=skeleton))

        user_prompt = generation.requests[0].user_prompt
        assert "<skeleton_activities>" in user_prompt
        assert "Build real-time employee metrics ingestion service" in user_prompt

    @pytest.mark.asyncio
    async def test_fills_missing_prose_defaults(
        self, scripted_generation, prompt_builder, payloads
    ) -> None:
        answer = json.dumps({"success": True, "activities": payloads.hr_activities()})
        skill = ExpandPresetSkill(scripted_generation(answer), prompt_builder)

        candidate = await skill.execute(_input(category=TechCategory.FRONTEND))

        assert candidate["techCategory"] == "FRONTEND"
        assert candidate["name"] == "Generated Preset"
        assert len(candidate["detailedDescription"]) >= 100
        assert len(candidate["reasoning"]) >= 50
        assert candidate["riskCodes"] == []
        assert candidate["confidence"] == 0.75

    @pytest.mark.asyncio
    async def test_replaces_blank_prose_fields_with_defaults(
        self, scripted_generation, prompt_builder, payloads
    ) -> None:
        answer = payloads.expand_answer(name="", description="", reasoning="", techCategory="")
        skill = ExpandPresetSkill(scripted_generation(answer), prompt_builder)

        candidate = await skill.execute(_input(category=TechCategory.BACKEND))

        assert candidate["name"] == "Generated Preset"
        assert candidate["description"] == "AI-generated technology preset"
        assert candidate["reasoning"].startswith("AI-generated preset")
        assert candidate["techCategory"] == "BACKEND"

    @pytest.mark.asyncio
    async def test_defaults_category_to_multi(
        self, scripted_generation, prompt_builder, payloads
    ) -> None:
        answer = payloads.expand_answer(techCategory=None)
        skill = ExpandPresetSkill(scripted_generation(answer), prompt_builder)

        candidate = await skill.execute(_input())

        assert candidate["techCategory"] == "MULTI"

    @pytest.mark.asyncio
    async def test_keeps_hallucinated_keys_for_the_validator(
        self, scripted_generation, prompt_builder, payloads
    ) -> None:
        answer = payloads.expand_answer(storyPoints=13)
        skill = ExpandPresetSkill(scripted_generation(answer), prompt_builder)

        candidate = await skill.execute(_input())

        assert candidate["storyPoints"] == 13

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "answer",
        [
            '{"success": false, "activities": []}',
            '{"activities": []}',
            '{"success": true, "activities": "none"}',
            "not json at all",
        ],
    )
    async def test_rejects_unusable_answers(
        self, scripted_generation, prompt_builder, answer
    ) -> None:
        skill = ExpandPresetSkill(scripted_generation(answer), prompt_builder)
        with pytest.raises(ResponseParseError):
            await skill.execute(_input())

    @pytest.mark.asyncio
    async def test_provider_error_becomes_generation_error(
        self, scripted_generation, prompt_builder
    ) -> None:
        failure = ProviderError(provider="litellm", message="rate limited", retryable=True)
        skill = ExpandPresetSkill(scripted_generation(failure), prompt_builder)

        with pytest.raises(GenerationError, match="rate limited") as exc_info:
            await skill.execute(_input())
        assert exc_info.value.context["retryable"] is True

    @pytest.mark.asyncio
    async def test_slow_backend_raises_timeout(self, scripted_generation, prompt_builder) -> None:
        async def _slow() -> str:
            await asyncio.sleep(5)
            return "{}"

        skill = ExpandPresetSkill(scripted_generation(_slow), prompt_builder)

        with pytest.raises(GenerationTimeoutError, match="timed out"):
            await skill.execute(_input(timeout_seconds=0.05))

    @pytest.mark.asyncio
    async def test_unexpected_error_is_wrapped(self, scripted_generation, prompt_builder) -> None:
        skill = ExpandPresetSkill(scripted_generation(RuntimeError("boom")), prompt_builder)

        with pytest.raises(SkillExecutionError, match="boom") as exc_info:
            await skill.execute(_input())
        assert exc_info.value.context["pass_name"] == "expand_temp0.6"
