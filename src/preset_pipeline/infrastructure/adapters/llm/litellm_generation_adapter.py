"""Implements GenerationPort via ``litellm.acompletion`` with priority-based model fallback."""

import os
import time
from typing import Any, NoReturn

import litellm
import structlog

from preset_pipeline.core.application.exceptions import ProviderError
from preset_pipeline.core.application.ports import GenerationPort, GenerationRequest
from preset_pipeline.infrastructure.adapters.llm.config.llm_settings import LlmSettings
from preset_pipeline.infrastructure.adapters.llm.llm_observability_logger import (
    log_llm_failure,
    log_llm_request,
    log_llm_response,
)
from preset_pipeline.infrastructure.common.retry.retry_policy import RetryPolicy
from preset_pipeline.infrastructure.observability.tracing_setup import get_tracer

logger = structlog.get_logger()


class LiteLlmGenerationAdapter(GenerationPort):
    """Implements GenerationPort via ``litellm.acompletion`` with priority-based model fallback.

    API keys are extracted from the injected ``LlmSettings`` and pushed into
    ``os.environ`` so that litellm's internal provider auto-detection picks
    them up transparently. The whole model chain is retried by ``RetryPolicy``
    when it fails with a retryable ``ProviderError``.
    """

    def __init__(self, settings: LlmSettings, retry_policy: RetryPolicy | None = None) -> None:
        self._inject_api_keys(settings)
        self._priority_models = list(settings.preset_llm_model_priority)
        self._retry_policy = retry_policy or RetryPolicy(max_attempts=settings.retry_max_attempts)

    async def complete(self, request: GenerationRequest) -> str:
        return await self._retry_policy.run(lambda: self._complete_with_fallback(request))

    async def _complete_with_fallback(self, request: GenerationRequest) -> str:
        last_error: Exception | None = None
        tracer = get_tracer()

        for model_id in self._priority_models:
            try:
                messages = self._build_messages(request)
                log_llm_request(messages, model_id, request.pass_name)

                with tracer.start_as_current_span("llm.completion") as span:
                    span.set_attribute("llm.model", model_id)
                    span.set_attribute("llm.pass", request.pass_name)
                    span.set_attribute("llm.temperature", request.temperature)

                    start = time.perf_counter()
                    response = await litellm.acompletion(
                        model=self._normalize_model_id(model_id),
                        messages=messages,
                        temperature=request.temperature,
                        timeout=request.timeout_seconds,
                        response_format={"type": "json_object"},
                    )
                    duration_ms = round((time.perf_counter() - start) * 1000, 2)
                    log_llm_response(response, model_id, duration_ms, request.pass_name)

                return self._extract_content(response, model_id)

            except ProviderError:
                raise
            except Exception as exc:
                last_error = exc
                log_llm_failure(exc, model_id, request.pass_name)

        self._raise_all_failed(request.pass_name, last_error)

    # ── Private helpers ──────────────────────────────────────────

    @staticmethod
    def _build_messages(request: GenerationRequest) -> list[dict[str, str]]:
        messages: list[dict[str, str]] = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        messages.append({"role": "user", "content": request.user_prompt})
        return messages

    @staticmethod
    def _extract_content(response: Any, model_id: str) -> str:
        content: str | None = response.choices[0].message.content
        if not content:
            raise ProviderError(provider=model_id, message="LLM returned empty content")
        return content

    @staticmethod
    def _normalize_model_id(model_id: str) -> str:
        """Convert ``provider:model`` to ``provider/model`` for litellm routing."""
        return model_id.replace(":", "/", 1)

    @staticmethod
    def _inject_api_keys(settings: LlmSettings) -> None:
        """Push non-null SecretStr keys into ``os.environ`` for litellm auto-detection."""
        mapping = {
            "OPENAI_API_KEY": settings.openai_api_key,
            "GEMINI_API_KEY": settings.gemini_api_key,
            "DEEPSEEK_API_KEY": settings.deepseek_api_key,
            "ANTHROPIC_API_KEY": settings.anthropic_api_key,
        }
        for env_var, secret in mapping.items():
            if secret is not None:
                os.environ[env_var] = secret.get_secret_value()

    def _raise_all_failed(self, pass_name: str, last_error: Exception | None) -> NoReturn:
        raise ProviderError(
            provider="litellm",
            message=f"All {len(self._priority_models)} model(s) failed for pass {pass_name}",
            retryable=True,
        ) from last_error
