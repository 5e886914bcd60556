from enum import StrEnum


class TechCategory(StrEnum):
    """Technology family a preset targets. MULTI covers cross-stack projects."""

    FRONTEND = "FRONTEND"
    BACKEND = "BACKEND"
    MULTI = "MULTI"
