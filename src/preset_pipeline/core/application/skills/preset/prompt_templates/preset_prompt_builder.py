import json
from typing import Any

import structlog

from preset_pipeline.core.application.skills.preset.contracts.preset_pass_input import (
    ProjectContext,
)
from preset_pipeline.core.domain.preset import ActivityGroup, ActivityPriority, TechCategory

logger = structlog.get_logger()

_GROUPS = ", ".join(g.value for g in ActivityGroup)
_PRIORITIES = ", ".join(p.value for p in ActivityPriority)


class PresetPromptBuilder:
    """Builds the (system_prompt, user_prompt) pairs for the skeleton and expand passes.

    Project content is placed inside XML-delimited sections so the model can
    tell instructions from user text.
    """

    def __init__(self, max_hours: float, min_activities: int, max_activities: int) -> None:
        self._max_hours = max_hours
        self._min_activities = min_activities
        self._max_activities = max_activities

    def build_skeleton_prompt(self, context: ProjectContext) -> tuple[str, str]:
        sections = [
            self._skeleton_role_section(),
            self._skeleton_rules_section(),
            self._skeleton_example_section(),
        ]
        return "\n\n".join(sections), self._project_context_section(context)

    def build_expand_prompt(
        self, context: ProjectContext, skeleton_activities: list[dict[str, Any]] | None
    ) -> tuple[str, str]:
        system_prompt = "\n\n".join(
            [
                self._expand_role_section(),
                self._expand_rules_section(),
                self._expand_schema_section(),
            ]
        )
        user_sections = [self._project_context_section(context)]
        if skeleton_activities:
            user_sections.append(self._skeleton_section(skeleton_activities))
            user_sections.append(
                "Expand each skeleton activity with detailed descriptions, acceptance "
                "criteria, and technical details."
            )
        else:
            user_sections.append(
                f"Produce between {self._min_activities} and {self._max_activities} fully "
                "detailed activities for this project."
            )
        logger.debug("Expand prompt built", has_skeleton=bool(skeleton_activities))
        return system_prompt, "\n\n".join(user_sections)

    # ── Skeleton pass ─────────────────────────────────────────────

    @staticmethod
    def _skeleton_role_section() -> str:
        return (
            "<system_role>\n"
            "You are a Technical Estimator generating a skeleton structure for a software "
            "project estimation preset. Generate ONLY the minimal activity structure, "
            "without detailed descriptions.\n"
            "</system_role>"
        )

    def _skeleton_rules_section(self) -> str:
        hours = f"{self._max_hours:g}"
        return (
            "<strict_rules>\n"
            "1. OUTPUT FORMAT: Respond with a valid JSON object only.\n"
            f"2. Generate between {self._min_activities} and {self._max_activities} activities.\n"
            "3. Each activity has ONLY: title (short descriptive name), "
            f"group (one of [{_GROUPS}]), estimatedHours (number), "
            f"priority (one of [{_PRIORITIES}]).\n"
            "4. Each activity must be atomic and completable in one work session.\n"
            f"5. NEVER exceed {hours} hours per activity.\n"
            "6. Do NOT include descriptions, acceptance criteria or technical details.\n"
            "</strict_rules>"
        )

    @staticmethod
    def _skeleton_example_section() -> str:
        return (
            "## EXAMPLE OUTPUT\n"
            "{\n"
            '  "success": true,\n'
            '  "activities": [\n'
            '    {"title": "Set up PostgreSQL database schema", "group": "DEV",'
            ' "estimatedHours": 4, "priority": "core"},\n'
            '    {"title": "Create REST API endpoints for CRUD operations", "group": "DEV",'
            ' "estimatedHours": 6, "priority": "core"}\n'
            "  ]\n"
            "}"
        )

    # ── Expand pass ───────────────────────────────────────────────

    @staticmethod
    def _expand_role_section() -> str:
        return (
            "<system_role>\n"
            "You are a Technical Architect expanding activities into detailed, actionable "
            "implementation tasks for a software estimation preset.\n"
            "</system_role>"
        )

    def _expand_rules_section(self) -> str:
        return (
            "<strict_rules>\n"
            "1. OUTPUT FORMAT: Respond with a valid JSON object only. No extra fields.\n"
            "2. description: detailed technical implementation in several lines or bullet "
            "points, naming the specific libraries, patterns and integration points.\n"
            "3. acceptanceCriteria: 3-5 measurable, verifiable statements.\n"
            "4. technicalDetails: suggestedFiles, suggestedCommands, suggestedTests and "
            "dependencies, each with at least 2 project-specific entries.\n"
            "5. estimatedHoursJustification: brief explanation of the time estimate.\n"
            f"6. estimatedHours must not exceed {self._max_hours:g} per activity.\n"
            "</strict_rules>"
        )

    @staticmethod
    def _expand_schema_section() -> str:
        return (
            "## OUTPUT SCHEMA\n"
            "{\n"
            '  "success": true,\n'
            '  "name": "5-100 chars",\n'
            '  "description": "20-500 chars",\n'
            '  "detailedDescription": "100-2000 chars",\n'
            f'  "techCategory": "one of {[c.value for c in TechCategory]}",\n'
            '  "activities": [{"title", "group", "estimatedHours", "priority", '
            '"description", "acceptanceCriteria", "technicalDetails", '
            '"estimatedHoursJustification", "confidence"}],\n'
            '  "driverValues": {"complexity": 5, "quality": 6, "team": 5},\n'
            '  "riskCodes": ["TECH_NEW"],\n'
            '  "reasoning": "50-2000 chars",\n'
            '  "confidence": 0.8\n'
            "}"
        )

    @staticmethod
    def _skeleton_section(skeleton_activities: list[dict[str, Any]]) -> str:
        return (
            "<skeleton_activities>\n"
            f"{json.dumps(skeleton_activities, indent=2)}\n"
            "</skeleton_activities>"
        )

    # ── Shared ────────────────────────────────────────────────────

    @staticmethod
    def _project_context_section(context: ProjectContext) -> str:
        category = context.category.value if context.category else TechCategory.MULTI.value
        return (
            "<project_context>\n"
            f"<project_description>{context.description}</project_description>\n"
            f"<user_answers>{json.dumps(context.answers, indent=2, sort_keys=True, default=str)}"
            "</user_answers>\n"
            f"<technology_category>{category}</technology_category>\n"
            "</project_context>"
        )
