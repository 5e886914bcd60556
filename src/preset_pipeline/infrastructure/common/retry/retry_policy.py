from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from preset_pipeline.core.application.exceptions import ProviderError

logger = structlog.get_logger()

_T = TypeVar("_T")


def _is_retryable_provider_error(exc: BaseException) -> bool:
    return isinstance(exc, ProviderError) and exc.retryable


def _log_backoff(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying generation backend call",
        attempt=retry_state.attempt_number,
        error_type=type(error).__name__,
        error_details=str(error),
        wait_seconds=round(retry_state.next_action.sleep, 3) if retry_state.next_action else 0.0,
    )


@dataclass(frozen=True)
class RetryPolicy:
    """Jittered exponential backoff around a generation backend call.

    Only ``ProviderError``s flagged retryable are retried. ``max_attempts=1`` is a
    single call. Once attempts run out the last provider error is re-raised as is.
    """

    max_attempts: int = 1
    initial_wait: float = 0.25
    max_wait: float = 5.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    async def run(self, fn: Callable[[], Awaitable[_T]]) -> _T:
        retrying = AsyncRetrying(
            retry=retry_if_exception(_is_retryable_provider_error),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter(initial=self.initial_wait, max=self.max_wait),
            before_sleep=_log_backoff,
            reraise=True,
        )
        return await retrying(fn)
