"""Unit tests — PipelinePolicy defaults, validation and temperature schedule."""

import pytest

from preset_pipeline.core.application.workflows.preset.pipeline_policy import PipelinePolicy


class TestPipelinePolicy:
    def test_defaults(self) -> None:
        policy = PipelinePolicy()

        assert policy.ai_enabled is True
        assert policy.ensemble is True
        assert policy.max_hours == 8.0
        assert policy.completeness_threshold == 0.65
        assert policy.max_expand_attempts == 2
        assert policy.cache_ttl_seconds == 604800

    def test_temperature_schedule_repeats_last_entry(self) -> None:
        policy = PipelinePolicy(expand_temperatures=(0.6, 0.8))

        assert [policy.expand_temperature(n) for n in (1, 2, 3, 4)] == [0.6, 0.8, 0.8, 0.8]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_expand_attempts": 0},
            {"expand_temperatures": ()},
            {"completeness_threshold": 1.2},
            {"max_hours": 0},
            {"generation_timeout_seconds": 0},
            {"min_activities": 10, "max_activities": 5},
        ],
    )
    def test_rejects_inconsistent_values(self, kwargs) -> None:
        with pytest.raises(ValueError):
            PipelinePolicy(**kwargs)

    def test_is_frozen(self) -> None:
        policy = PipelinePolicy()
        with pytest.raises(AttributeError):
            policy.max_hours = 4.0
