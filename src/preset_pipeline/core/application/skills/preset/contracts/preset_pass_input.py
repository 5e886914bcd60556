"""Input contracts for the skeleton and expand passes."""

from dataclasses import dataclass

from preset_pipeline.core.application.skills.preset.contracts.skeleton_contracts import (
    SkeletonResponseSchema,
)
from preset_pipeline.core.domain.preset import TechCategory


@dataclass(frozen=True)
class ProjectContext:
    """Sanitised request content shared by every pass of one run."""

    description: str
    answers: dict
    category: TechCategory | None


@dataclass(frozen=True)
class GenerateSkeletonInput:
    context: ProjectContext
    temperature: float
    timeout_seconds: float


@dataclass(frozen=True)
class ExpandPresetInput:
    """``skeleton`` is None for single-pass (non-ensemble) runs."""

    context: ProjectContext
    skeleton: SkeletonResponseSchema | None
    pass_name: str
    temperature: float
    timeout_seconds: float
