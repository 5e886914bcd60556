from enum import StrEnum


class PipelineStage(StrEnum):
    """States of the generation state machine, as reported in logs."""

    CACHE_CHECK = "cache_check"
    SKELETON = "skeleton"
    EXPAND = "expand"
    FALLBACK = "fallback"
    DONE = "done"
