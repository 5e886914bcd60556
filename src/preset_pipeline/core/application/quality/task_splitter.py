import math

import structlog

from preset_pipeline.core.domain.preset import MAX_TITLE_LENGTH, ActivityGroup, PipelineActivity

logger = structlog.get_logger()

# Canonical sub-task labels per group, in execution order.
_SPLIT_TEMPLATES: dict[ActivityGroup, tuple[str, ...]] = {
    ActivityGroup.ANALYSIS: (
        "Requirements gathering",
        "Analysis and modelling",
        "Review and sign-off",
    ),
    ActivityGroup.DEV: (
        "Design and scaffolding",
        "Core implementation",
        "Integration and hardening",
    ),
    ActivityGroup.TEST: (
        "Test planning",
        "Test writing",
        "Test execution",
    ),
    ActivityGroup.OPS: (
        "Environment preparation",
        "Configuration and automation",
        "Rollout and verification",
    ),
    ActivityGroup.GOVERNANCE: (
        "Planning",
        "Documentation",
        "Review and approval",
    ),
}

DEFAULT_CONFIDENCE_DECAY = 0.85


class TaskSplitter:
    """Breaks activities above the per-activity hour ceiling into legible parts.

    Hours are redistributed in half-hour units (even shares when the ceiling is
    finer than that) so every part is positive and within the ceiling while the
    parts add up to the original estimate (+-0.25h). Children always carry a
    strictly lower confidence than a positive parent.
    """

    def __init__(self, confidence_decay: float = DEFAULT_CONFIDENCE_DECAY) -> None:
        if not 0 < confidence_decay < 1:
            raise ValueError("confidence_decay must be in (0, 1)")
        self._confidence_decay = confidence_decay

    def split_all(
        self, activities: list[PipelineActivity], max_hours: float
    ) -> list[PipelineActivity]:
        result: list[PipelineActivity] = []
        for activity in activities:
            result.extend(self.split_task(activity, max_hours))
        return result

    def split_task(self, activity: PipelineActivity, max_hours: float) -> list[PipelineActivity]:
        if max_hours <= 0:
            raise ValueError("max_hours must be positive")
        if activity.estimated_hours <= max_hours:
            return [activity]

        hours = self._distribute_hours(activity.estimated_hours, max_hours)
        parts = len(hours)
        titles = self._sub_titles(activity, parts)
        confidence = self._decayed_confidence(activity.confidence)

        logger.info(
            "Splitting oversized activity",
            activity_title=activity.title,
            estimated_hours=activity.estimated_hours,
            max_hours=max_hours,
            parts=parts,
        )
        return [
            activity.model_copy(
                update={"title": title, "estimated_hours": part_hours, "confidence": confidence}
            )
            for title, part_hours in zip(titles, hours, strict=True)
        ]

    @staticmethod
    def _distribute_hours(total_hours: float, max_hours: float) -> list[float]:
        parts = math.ceil(total_hours / max_hours)
        max_units = math.floor(max_hours * 2)
        units = round(total_hours * 2)
        if max_units < 1 or units < parts:
            # Too few half-hour units for every part: even, unrounded shares.
            return [total_hours / parts] * parts

        parts = max(parts, math.ceil(units / max_units))
        base, remainder = divmod(units, parts)
        return [(base + (1 if i < remainder else 0)) / 2 for i in range(parts)]

    @staticmethod
    def _sub_titles(activity: PipelineActivity, parts: int) -> list[str]:
        template = _SPLIT_TEMPLATES[activity.group]
        titles = []
        for i in range(parts):
            if parts <= len(template):
                label = template[i]
            else:
                label = f"{template[i % len(template)]} (part {i + 1} of {parts})"
            titles.append(f"{label}: {activity.title}"[:MAX_TITLE_LENGTH])
        return titles

    def _decayed_confidence(self, confidence: float | None) -> float | None:
        if confidence is None:
            return None
        decayed = confidence * self._confidence_decay
        if confidence > 0 and decayed >= confidence:
            decayed = math.nextafter(confidence, 0)
        return decayed
