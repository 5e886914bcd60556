import structlog

from preset_pipeline.core.application.quality.text_signals import (
    bullet_lines,
    content_terms,
    non_empty_lines,
    word_count,
)
from preset_pipeline.core.domain.preset import (
    ActivityScore,
    PipelineActivity,
    Preset,
    ScoredActivity,
    ScoredPreset,
)

logger = structlog.get_logger()

DEFAULT_WEIGHTS = (1.0, 1.0, 1.0)
DEFAULT_MIN_CRITERIA = 3
DEFAULT_COHERENCE_SATURATION = 4

_MIN_CRITERION_WORDS = 3
_DEPTH_DETAIL_FIELDS = 3
_DEPTH_FULL_WORDS = 120


class CompletenessScorer:
    """Heuristic 0-1 quality score for generated activities.

    Three sub-scores per activity:

    - coherence: share of the project's topical vocabulary reused by the
      activity title and description, saturating after a few shared terms.
    - depth: populated technical-detail lists, multi-line or bulleted
      description, description length.
    - actionable: concrete acceptance criteria against a minimum count.

    The weighted mean of the three is the activity completeness; the preset
    score is the plain mean over activities.
    """

    def __init__(
        self,
        weights: tuple[float, float, float] = DEFAULT_WEIGHTS,
        min_criteria: int = DEFAULT_MIN_CRITERIA,
        coherence_saturation: int = DEFAULT_COHERENCE_SATURATION,
    ) -> None:
        if len(weights) != 3 or any(w < 0 for w in weights) or sum(weights) <= 0:
            raise ValueError("weights must be three non-negative numbers with a positive sum")
        if min_criteria < 1:
            raise ValueError("min_criteria must be >= 1")
        if coherence_saturation < 1:
            raise ValueError("coherence_saturation must be >= 1")
        total = float(sum(weights))
        self._weights = tuple(w / total for w in weights)
        self._min_criteria = min_criteria
        self._saturation = coherence_saturation

    def post_process_and_score(self, preset: Preset, project_description: str) -> ScoredPreset:
        project_terms = content_terms(project_description)
        scored = tuple(
            ScoredActivity(activity=activity, score=self.score_activity(activity, project_terms))
            for activity in preset.activities
        )
        average = (
            sum(item.score.completeness for item in scored) / len(scored) if scored else 0.0
        )
        logger.debug(
            "Preset scored",
            activity_count=len(scored),
            average_completeness=round(average, 4),
        )
        return ScoredPreset(preset=preset, activities=scored, average_completeness=average)

    def score_activity(self, activity: PipelineActivity, project_terms: set[str]) -> ActivityScore:
        coherence = self._coherence(activity, project_terms)
        depth = self._depth(activity)
        actionable = self._actionable(activity)
        w_coherence, w_depth, w_actionable = self._weights
        completeness = w_coherence * coherence + w_depth * depth + w_actionable * actionable
        return ActivityScore(
            coherence=coherence,
            depth=depth,
            actionable=actionable,
            completeness=min(1.0, completeness),
        )

    def _coherence(self, activity: PipelineActivity, project_terms: set[str]) -> float:
        if not project_terms:
            return 0.0
        activity_terms = content_terms(f"{activity.title}\n{activity.description or ''}")
        shared = len(activity_terms & project_terms)
        return min(1.0, shared / min(len(project_terms), self._saturation))

    @staticmethod
    def _depth(activity: PipelineActivity) -> float:
        details = activity.technical_details
        populated = details.populated_fields() if details is not None else 0
        detail_score = min(1.0, populated / _DEPTH_DETAIL_FIELDS)

        description = activity.description
        lines = len(non_empty_lines(description))
        if lines >= 3 or bullet_lines(description) >= 2:
            structure_score = 1.0
        elif lines == 2:
            structure_score = 0.5
        else:
            structure_score = 0.0

        length_score = min(1.0, word_count(description) / _DEPTH_FULL_WORDS)
        return 0.4 * detail_score + 0.3 * structure_score + 0.3 * length_score

    def _actionable(self, activity: PipelineActivity) -> float:
        concrete = sum(
            1
            for criterion in activity.acceptance_criteria or ()
            if word_count(criterion) >= _MIN_CRITERION_WORDS
        )
        return min(1.0, concrete / self._min_criteria)
