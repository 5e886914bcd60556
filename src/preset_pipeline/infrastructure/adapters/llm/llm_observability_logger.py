"""Pure functions that log LLM request/response payloads with redaction and metrics."""

import json
from typing import Any

import structlog

from preset_pipeline.infrastructure.observability.metrics_service import (
    LLM_CALLS_TOTAL,
    LLM_LATENCY_SECONDS,
    LLM_TOKENS_TOTAL,
)
from preset_pipeline.infrastructure.observability.redaction_service import redact_text, truncate

logger = structlog.get_logger()

_MAX_LOG_PROMPT_LENGTH = 10_000


def log_llm_request(messages: list[dict[str, Any]], model_id: str, pass_name: str) -> None:
    """Log the redacted prompt payload before sending to LLM."""
    raw_prompt = json.dumps(messages, ensure_ascii=False, default=str)
    logger.info(
        "Sending payload to LLM",
        prompt_text=truncate(redact_text(raw_prompt), _MAX_LOG_PROMPT_LENGTH),
        llm_model=model_id,
        pass_name=pass_name,
        tags=["llm-prompt"],
    )


def log_llm_response(response: Any, model_id: str, duration_ms: float, pass_name: str) -> None:
    """Log successful inference with token usage and duration, and record Prometheus metrics."""
    usage = getattr(response, "usage", None)
    tokens_in = getattr(usage, "prompt_tokens", 0) if usage else 0
    tokens_out = getattr(usage, "completion_tokens", 0) if usage else 0

    LLM_TOKENS_TOTAL.labels(model=model_id, type="prompt").inc(tokens_in or 0)
    LLM_TOKENS_TOTAL.labels(model=model_id, type="completion").inc(tokens_out or 0)
    LLM_LATENCY_SECONDS.labels(model=model_id).observe(duration_ms / 1000)
    LLM_CALLS_TOTAL.labels(pass_name=pass_name, outcome="success").inc()

    logger.info(
        "LLM inference completed",
        llm_model=model_id,
        pass_name=pass_name,
        tokens_in=tokens_in,
        tokens_out=tokens_out,
        processing_status="SUCCESS",
        processing_duration_ms=duration_ms,
        tags=["llm-response"],
    )


def log_llm_failure(exc: Exception, model_id: str, pass_name: str) -> None:
    LLM_CALLS_TOTAL.labels(pass_name=pass_name, outcome="error").inc()
    logger.warning(
        "Model failed",
        llm_model=model_id,
        pass_name=pass_name,
        error_type=type(exc).__name__,
        error_details=str(exc),
    )
