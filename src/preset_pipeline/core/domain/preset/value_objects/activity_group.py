from enum import StrEnum


class ActivityGroup(StrEnum):
    """Phase an activity belongs to inside a work breakdown."""

    ANALYSIS = "ANALYSIS"
    DEV = "DEV"
    TEST = "TEST"
    OPS = "OPS"
    GOVERNANCE = "GOVERNANCE"
