from dataclasses import dataclass

from preset_pipeline.core.domain.preset.entities.pipeline_activity import PipelineActivity
from preset_pipeline.core.domain.preset.entities.preset import Preset


@dataclass(frozen=True)
class ActivityScore:
    coherence: float
    depth: float
    actionable: float
    completeness: float


@dataclass(frozen=True)
class ScoredActivity:
    activity: PipelineActivity
    score: ActivityScore


@dataclass(frozen=True)
class ScoredPreset:
    """A preset together with the per-activity scores computed for it."""

    preset: Preset
    activities: tuple[ScoredActivity, ...]
    average_completeness: float
