from enum import StrEnum


class ActivityPriority(StrEnum):
    CORE = "core"
    RECOMMENDED = "recommended"
    OPTIONAL = "optional"
