"""Skill that asks the backend for the coarse activity list anchoring the expand pass."""

import structlog
from pydantic import ValidationError

from preset_pipeline.core.application.exceptions import (
    PipelineError,
    ResponseParseError,
    SkillExecutionError,
)
from preset_pipeline.core.application.ports import GenerationPort, GenerationRequest
from preset_pipeline.core.application.skills.preset.contracts.preset_pass_input import (
    GenerateSkeletonInput,
)
from preset_pipeline.core.application.skills.preset.contracts.skeleton_contracts import (
    SkeletonResponseSchema,
)
from preset_pipeline.core.application.skills.preset.prompt_templates.preset_prompt_builder import (
    PresetPromptBuilder,
)
from preset_pipeline.core.application.skills.preset.tools.generation_call import call_generation
from preset_pipeline.core.application.skills.preset.tools.response_parser import (
    parse_json_object,
)
from preset_pipeline.core.application.skills.skill import BaseSkill

logger = structlog.get_logger()

SKELETON_PASS = "skeleton"


class GenerateSkeletonSkill(BaseSkill[GenerateSkeletonInput, SkeletonResponseSchema]):
    """Runs the skeleton pass: title/group/hours/priority per activity, nothing else.

    Raises ``GenerationError`` on backend failure or timeout and
    ``ResponseParseError`` when the answer is not a usable skeleton.
    """

    def __init__(self, generation: GenerationPort, prompt_builder: PresetPromptBuilder) -> None:
        self._generation = generation
        self._prompt_builder = prompt_builder

    async def execute(self, input_data: GenerateSkeletonInput) -> SkeletonResponseSchema:
        try:
            return await self._generate(input_data)
        except PipelineError:
            raise
        except Exception as exc:
            raise SkillExecutionError(
                f"Skeleton generation failed: {exc}", context={"skill": "generate_skeleton"}
            ) from exc

    async def _generate(self, input_data: GenerateSkeletonInput) -> SkeletonResponseSchema:
        system_prompt, user_prompt = self._prompt_builder.build_skeleton_prompt(
            input_data.context
        )
        raw = await call_generation(
            self._generation,
            GenerationRequest(
                pass_name=SKELETON_PASS,
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                temperature=input_data.temperature,
                timeout_seconds=input_data.timeout_seconds,
            ),
        )
        skeleton = self._parse(raw)
        logger.info("Skeleton generated", activity_count=len(skeleton.activities))
        return skeleton

    @staticmethod
    def _parse(raw: str) -> SkeletonResponseSchema:
        data = parse_json_object(raw, SKELETON_PASS)
        try:
            skeleton = SkeletonResponseSchema.model_validate(data)
        except ValidationError as exc:
            raise ResponseParseError(
                f"Invalid skeleton response structure: {exc.error_count()} error(s)",
                context={"pass_name": SKELETON_PASS},
            ) from exc
        if not skeleton.success:
            raise ResponseParseError(
                "Skeleton response reported success=false", context={"pass_name": SKELETON_PASS}
            )
        return skeleton
