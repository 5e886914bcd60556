"""structlog setup shared by the app and the stdlib loggers it hosts.

uvicorn, fastapi and litellm log through ``logging``. Their records go through the
same pre-chain as structlog events, so every line follows the pipeline log schema.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from preset_pipeline.infrastructure.observability.logging.log_schema_processor import (
    log_schema_processor,
)

_JSON_ENVIRONMENTS = frozenset({"qa", "staging", "prod", "production"})

_configured = False


def configure_logging(
    level: str = "INFO", log_format: str | None = None, env: str = "local"
) -> None:
    """Configure structlog and the root logger once per process."""
    global _configured  # noqa: PLW0603
    if _configured:
        return
    _configured = True

    numeric_level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
    renderer = build_renderer(log_format, env)
    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        log_schema_processor,
    ]

    structlog.configure(
        processors=[*pre_chain, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)


def build_renderer(log_format: str | None, env: str) -> Any:
    """JSON when asked for, or in shared environments; console otherwise."""
    requested = (log_format or "").lower()
    if requested == "json":
        return structlog.processors.JSONRenderer()
    if not requested and env.lower() in _JSON_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)
