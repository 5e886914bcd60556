import asyncio

import structlog

from preset_pipeline.core.application.exceptions import (
    GenerationError,
    GenerationTimeoutError,
    ProviderError,
)
from preset_pipeline.core.application.ports import GenerationPort, GenerationRequest

logger = structlog.get_logger()


async def call_generation(generation: GenerationPort, request: GenerationRequest) -> str:
    """Run one backend call bounded by ``request.timeout_seconds``.

    Provider failures and timeouts are normalised to ``GenerationError`` so
    the workflow can count them as one failed attempt.
    """
    ctx = {"pass_name": request.pass_name, "temperature": request.temperature}
    try:
        return await asyncio.wait_for(generation.complete(request), request.timeout_seconds)
    except TimeoutError as exc:
        raise GenerationTimeoutError(
            f"Generation pass '{request.pass_name}' timed out after "
            f"{request.timeout_seconds:g}s",
            context=ctx,
        ) from exc
    except ProviderError as exc:
        raise GenerationError(
            f"Generation provider failed: {exc}",
            context={**ctx, "provider": exc.provider, "retryable": exc.retryable},
        ) from exc
