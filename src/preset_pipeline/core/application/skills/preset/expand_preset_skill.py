"""Skill that turns the skeleton plus project context into a full candidate preset."""

from typing import Any

import structlog

from preset_pipeline.core.application.exceptions import (
    PipelineError,
    ResponseParseError,
    SkillExecutionError,
)
from preset_pipeline.core.application.ports import GenerationPort, GenerationRequest
from preset_pipeline.core.application.skills.preset.contracts.preset_pass_input import (
    ExpandPresetInput,
)
from preset_pipeline.core.application.skills.preset.prompt_templates.preset_prompt_builder import (
    PresetPromptBuilder,
)
from preset_pipeline.core.application.skills.preset.tools.generation_call import call_generation
from preset_pipeline.core.application.skills.preset.tools.response_parser import (
    parse_json_object,
)
from preset_pipeline.core.application.skills.skill import BaseSkill
from preset_pipeline.core.domain.preset import TechCategory

logger = structlog.get_logger()

_PROSE_DEFAULTS: dict[str, Any] = {
    "name": "Generated Preset",
    "description": "AI-generated technology preset",
    "detailedDescription": (
        "AI-generated technology preset built from the submitted project description and "
        "answers. Review the activities and adjust them to the team's context."
    ),
    "driverValues": {"complexity": 5, "quality": 6, "team": 5},
    "riskCodes": [],
    "reasoning": "AI-generated preset based on the submitted project description.",
    "confidence": 0.75,
}


class ExpandPresetSkill(BaseSkill[ExpandPresetInput, dict[str, Any]]):
    """Runs one expand attempt and returns the candidate in wire (camelCase) form.

    The candidate is NOT validated here; hallucinated extra keys are kept so
    the schema validator can reject them.
    """

    def __init__(self, generation: GenerationPort, prompt_builder: PresetPromptBuilder) -> None:
        self._generation = generation
        self._prompt_builder = prompt_builder

    async def execute(self, input_data: ExpandPresetInput) -> dict[str, Any]:
        try:
            return await self._expand(input_data)
        except PipelineError:
            raise
        except Exception as exc:
            raise SkillExecutionError(
                f"Preset expansion failed: {exc}",
                context={"skill": "expand_preset", "pass_name": input_data.pass_name},
            ) from exc

    async def _expand(self, input_data: ExpandPresetInput) -> dict[str, Any]:
        skeleton_payload = (
            input_data.skeleton.to_prompt_payload() if input_data.skeleton is not None else None
        )
        system_prompt, user_prompt = self._prompt_builder.build_expand_prompt(
            input_data.context, skeleton_payload
        )
        raw = await call_generation(
            self._generation,
            GenerationRequest(
                pass_name=input_data.pass_name,
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                temperature=input_data.temperature,
                timeout_seconds=input_data.timeout_seconds,
            ),
        )
        data = parse_json_object(raw, input_data.pass_name)
        candidate = self._unwrap_envelope(data, input_data)
        logger.info(
            "Expand candidate received",
            pass_name=input_data.pass_name,
            activity_count=len(candidate["activities"]),
        )
        return candidate

    @staticmethod
    def _unwrap_envelope(data: dict[str, Any], input_data: ExpandPresetInput) -> dict[str, Any]:
        ctx = {"pass_name": input_data.pass_name}
        candidate = dict(data)
        if not candidate.pop("success", False):
            raise ResponseParseError("Expand response missing success=true", context=ctx)
        if not isinstance(candidate.get("activities"), list):
            raise ResponseParseError("Expand response has no activity list", context=ctx)

        category = input_data.context.category or TechCategory.MULTI
        if not candidate.get("techCategory"):
            candidate["techCategory"] = category.value
        for key, default in _PROSE_DEFAULTS.items():
            if not candidate.get(key):
                candidate[key] = default
        return candidate
