"""Shared fixtures: a scripted generation backend and preset payload builders."""

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import pytest

from preset_pipeline.core.application.ports import (
    GenerationPort,
    GenerationRequest,
    MetricsPort,
    ResultCachePort,
)
from preset_pipeline.core.application.workflows.preset.pipeline_policy import PipelinePolicy
from preset_pipeline.core.application.workflows.preset.preset_generation_workflow import (
    PresetGenerationWorkflow,
)
from preset_pipeline.infrastructure.adapters.cache.in_memory_result_cache import (
    InMemoryResultCache,
)
from preset_pipeline.infrastructure.adapters.metrics.prometheus_pipeline_metrics import (
    PrometheusPipelineMetrics,
)
from preset_pipeline.infrastructure.resolution.container import build_workflow

HR_DESCRIPTION = "HR Dashboard with real-time employee metrics"

HR_ACTIVITIES: tuple[tuple[str, str, float], ...] = (
    ("Design HR dashboard data model for employee metrics", "ANALYSIS", 6.0),
    ("Build real-time employee metrics ingestion service", "DEV", 8.0),
    ("Implement HR dashboard charts for employee metrics", "DEV", 7.0),
    ("Write end-to-end tests for the HR dashboard", "TEST", 5.0),
    ("Deploy real-time HR dashboard to staging", "OPS", 4.0),
)

Answer = str | BaseException | Callable[[], Awaitable[str]]


# ── Generation backend ──


class ScriptedGeneration(GenerationPort):
    """Replays queued answers in call order and records every request.

    An exception entry is raised instead of returned; a coroutine function is
    awaited (useful to simulate a slow backend).
    """

    def __init__(self, *answers: Answer) -> None:
        self._answers: list[Answer] = list(answers)
        self.requests: list[GenerationRequest] = []

    async def complete(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        if not self._answers:
            raise AssertionError(f"Unexpected generation call for pass {request.pass_name}")
        answer = self._answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        if callable(answer):
            return await answer()
        return answer

    @property
    def pass_names(self) -> list[str]:
        return [r.pass_name for r in self.requests]

    @property
    def temperatures(self) -> list[float]:
        return [r.temperature for r in self.requests]


# ── Payload builders ──


class PresetPayloads:
    """Builds wire-format (camelCase) preset fragments and backend answers."""

    def rich_activity(
        self, title: str, group: str = "DEV", hours: float = 6.0, **overrides: Any
    ) -> dict[str, Any]:
        activity = {
            "title": title,
            "group": group,
            "estimatedHours": hours,
            "priority": "core",
            "description": (
                f"{title} for the HR Dashboard.\n"
                "- Stream real-time employee metrics from the HR database.\n"
                "- Render dashboard widgets with React and Chart.js.\n"
                "- Handle errors and empty employee metrics gracefully."
            ),
            "acceptanceCriteria": [
                "Employee metrics refresh within five seconds",
                "Dashboard renders without console errors",
                "Unit test coverage stays above eighty percent",
            ],
            "technicalDetails": {
                "suggestedFiles": ["src/dashboard/metrics.ts", "src/api/employees.py"],
                "suggestedCommands": ["npm run build", "pytest -q"],
                "suggestedTests": ["test_metrics_refresh", "test_dashboard_render"],
                "dependencies": ["react", "chart.js"],
            },
            "estimatedHoursJustification": "Comparable dashboard work took a full day.",
            "confidence": 0.8,
        }
        activity.update(overrides)
        return activity

    def poor_activity(
        self, title: str = "Generic work item", group: str = "DEV", hours: float = 4.0
    ) -> dict[str, Any]:
        return {
            "title": title,
            "group": group,
            "estimatedHours": hours,
            "priority": "core",
            "description": "Do the work.",
        }

    def hr_activities(self) -> list[dict[str, Any]]:
        return [self.rich_activity(title, group, hours) for title, group, hours in HR_ACTIVITIES]

    def preset(self, activities: list[dict[str, Any]] | None = None, **overrides: Any) -> dict:
        preset = {
            "name": "HR Dashboard Preset",
            "description": "Preset for an HR dashboard with real-time employee metrics",
            "detailedDescription": (
                "Work breakdown for an internal HR dashboard that streams real-time employee "
                "metrics, renders charts and ships to a staging environment."
            ),
            "techCategory": "MULTI",
            "activities": activities if activities is not None else self.hr_activities(),
            "driverValues": {"complexity": 5.0, "quality": 6.0, "team": 5.0},
            "riskCodes": ["TECH_NEW"],
            "reasoning": "Activities follow the dashboard lifecycle from data model to rollout.",
            "confidence": 0.8,
        }
        preset.update(overrides)
        return preset

    def expand_answer(
        self, activities: list[dict[str, Any]] | None = None, **overrides: Any
    ) -> str:
        return json.dumps({"success": True, **self.preset(activities, **overrides)})

    def poor_expand_answer(self, count: int = 5) -> str:
        activities = [self.poor_activity(f"Generic work item {i}") for i in range(1, count + 1)]
        return self.expand_answer(activities)

    def skeleton_answer(self) -> str:
        return json.dumps(
            {
                "success": True,
                "activities": [
                    {"title": t, "group": g, "estimatedHours": h, "priority": "core"}
                    for t, g, h in HR_ACTIVITIES
                ],
            }
        )


# ── Workflow harness ──


@dataclass
class WorkflowHarness:
    workflow: PresetGenerationWorkflow
    generation: ScriptedGeneration
    cache: ResultCachePort
    metrics: MetricsPort


@pytest.fixture()
def payloads() -> PresetPayloads:
    return PresetPayloads()


@pytest.fixture()
def scripted_generation() -> type[ScriptedGeneration]:
    return ScriptedGeneration


@pytest.fixture()
def make_harness() -> Callable[..., WorkflowHarness]:
    """Factory: ``make_harness(*answers, cache=None, metrics=None, **policy_overrides)``."""

    def _make(
        *answers: Answer,
        cache: ResultCachePort | None = None,
        metrics: MetricsPort | None = None,
        **policy_overrides: Any,
    ) -> WorkflowHarness:
        generation = ScriptedGeneration(*answers)
        cache = cache or InMemoryResultCache()
        metrics = metrics or PrometheusPipelineMetrics()
        workflow = build_workflow(PipelinePolicy(**policy_overrides), generation, cache, metrics)
        return WorkflowHarness(
            workflow=workflow, generation=generation, cache=cache, metrics=metrics
        )

    return _make
