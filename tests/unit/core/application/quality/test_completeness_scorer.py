"""Unit tests — CompletenessScorer (coherence, depth, actionable sub-scores)."""

import pytest

from preset_pipeline.core.application.quality import CompletenessScorer
from preset_pipeline.core.application.quality.text_signals import content_terms
from preset_pipeline.core.domain.preset import PipelineActivity, Preset

HR_PROJECT = "HR Dashboard with real-time employee metrics"
FRONTEND_PROJECT = (
    "React single-page frontend written in TypeScript with Redux state management "
    "and Tailwind styling"
)


def _activity(**overrides) -> PipelineActivity:
    data = {
        "title": "Build HR dashboard charts",
        "group": "DEV",
        "estimatedHours": 6.0,
        "priority": "core",
    }
    data.update(overrides)
    return PipelineActivity.model_validate(data)


@pytest.fixture()
def scorer() -> CompletenessScorer:
    return CompletenessScorer()


class TestPresetScore:
    def test_rich_aligned_preset_clears_threshold(self, scorer, payloads) -> None:
        preset = Preset.model_validate(payloads.preset())

        scored = scorer.post_process_and_score(preset, HR_PROJECT)

        assert scored.average_completeness >= 0.65
        assert len(scored.activities) == len(preset.activities)
        assert all(item.score.actionable == 1.0 for item in scored.activities)
        assert all(item.score.coherence > 0.5 for item in scored.activities)
        assert scored.preset is preset

    def test_poor_preset_stays_below_threshold(self, scorer, payloads) -> None:
        activities = [payloads.poor_activity(f"Generic work item {i}") for i in range(5)]
        preset = Preset.model_validate(payloads.preset(activities))

        scored = scorer.post_process_and_score(preset, HR_PROJECT)

        assert scored.average_completeness < 0.1

    def test_average_is_mean_of_activity_scores(self, scorer, payloads) -> None:
        activities = payloads.hr_activities()[:3] + [
            payloads.poor_activity("Generic work item A"),
            payloads.poor_activity("Generic work item B"),
        ]
        preset = Preset.model_validate(payloads.preset(activities))

        scored = scorer.post_process_and_score(preset, HR_PROJECT)

        expected = sum(item.score.completeness for item in scored.activities) / 5
        assert scored.average_completeness == pytest.approx(expected)


class TestActivityScore:
    def test_single_sentence_without_criteria_scores_low(self, scorer) -> None:
        activity = _activity(description="Build charts for the HR dashboard.")

        score = scorer.score_activity(activity, content_terms(HR_PROJECT))

        assert score.actionable == 0.0
        assert score.completeness < 0.4

    def test_unrelated_stack_has_no_coherence(self, scorer) -> None:
        activity = _activity(
            title="Provision Kubernetes cluster for Java Spring Boot microservices",
            description="Deploy Helm charts, tune Maven builds and JVM settings for Spring.",
        )

        score = scorer.score_activity(activity, content_terms(FRONTEND_PROJECT))

        assert score.coherence < 0.3

    def test_coherence_saturates_after_shared_terms(self, scorer) -> None:
        activity = _activity(
            title="Real-time employee metrics panel",
            description="HR dashboard panel for employee metrics.",
        )
        score = scorer.score_activity(activity, content_terms(HR_PROJECT))
        assert score.coherence == 1.0

    def test_coherence_is_zero_without_project_terms(self, scorer) -> None:
        score = scorer.score_activity(_activity(), content_terms("the and of it"))
        assert score.coherence == 0.0

    def test_counts_only_concrete_criteria(self, scorer) -> None:
        activity = _activity(
            acceptanceCriteria=[
                "Charts render employee headcount",
                "Filters persist across page reloads",
                "OK",
            ]
        )
        score = scorer.score_activity(activity, set())
        assert score.actionable == pytest.approx(2 / 3)

    def test_two_line_description_gets_partial_structure(self, scorer) -> None:
        activity = _activity(description="Line one here.\nLine two here.")
        score = scorer.score_activity(activity, set())
        assert score.depth == pytest.approx(0.3 * 0.5 + 0.3 * (6 / 120))

    def test_bullets_and_details_raise_depth(self, scorer) -> None:
        bare = scorer.score_activity(_activity(description="Charts."), set())
        detailed = scorer.score_activity(
            _activity(
                description="Charts:\n- headcount by team\n- attrition trend",
                technicalDetails={
                    "suggestedFiles": ["src/charts.ts"],
                    "suggestedCommands": ["npm test"],
                    "suggestedTests": ["charts.spec.ts"],
                },
            ),
            set(),
        )
        assert detailed.depth > bare.depth
        assert detailed.depth >= 0.7

    def test_custom_weights_change_the_blend(self) -> None:
        coherence_only = CompletenessScorer(weights=(1.0, 0.0, 0.0))
        activity = _activity(description="HR dashboard for real-time employee metrics.")

        score = coherence_only.score_activity(activity, content_terms(HR_PROJECT))

        assert score.completeness == pytest.approx(score.coherence)


class TestConstruction:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"weights": (1.0, 1.0)},
            {"weights": (1.0, -1.0, 1.0)},
            {"weights": (0.0, 0.0, 0.0)},
            {"min_criteria": 0},
            {"coherence_saturation": 0},
        ],
    )
    def test_rejects_invalid_arguments(self, kwargs) -> None:
        with pytest.raises(ValueError):
            CompletenessScorer(**kwargs)
