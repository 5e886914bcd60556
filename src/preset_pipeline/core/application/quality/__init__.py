from preset_pipeline.core.application.quality.completeness_scorer import CompletenessScorer
from preset_pipeline.core.application.quality.schema_validator import (
    PresetSchemaValidator,
    ValidationReport,
)
from preset_pipeline.core.application.quality.task_splitter import TaskSplitter

__all__ = [
    "CompletenessScorer",
    "PresetSchemaValidator",
    "TaskSplitter",
    "ValidationReport",
]
