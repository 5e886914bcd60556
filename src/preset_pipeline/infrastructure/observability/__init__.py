from .logger_factory_service import configure_logging
from .redaction_service import redact_dict, redact_text

__all__ = [
    "configure_logging",
    "redact_dict",
    "redact_text",
]
