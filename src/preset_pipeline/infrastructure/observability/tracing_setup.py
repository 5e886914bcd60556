"""OpenTelemetry tracing for the preset pipeline.

``configure_tracing`` installs a console-exporting TracerProvider once per process.
``trace_operation`` wraps an async entry point in a span and can tag that span
with attributes derived from the awaited result.
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

TRACER_NAME = "preset-pipeline"

SpanAttributes = dict[str, str | bool | int | float]

P = ParamSpec("P")
R = TypeVar("R")

_provider_installed = False


def configure_tracing(service_name: str = TRACER_NAME, environment: str = "local") -> None:
    """Install the process TracerProvider. Later calls are no-ops."""
    global _provider_installed  # noqa: PLW0603
    if _provider_installed:
        return
    _provider_installed = True

    resource = Resource.create(
        {"service.name": service_name, "deployment.environment": environment}
    )
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)


def get_tracer() -> trace.Tracer:
    return trace.get_tracer(TRACER_NAME)


def trace_operation(
    span_name: str,
    result_attributes: Callable[[Any], SpanAttributes] | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Run an async callable inside a span named ``span_name``.

    Usage:
        @trace_operation("workflow.preset_generation", result_attributes=span_attributes)
        async def execute(self, input_data): ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with get_tracer().start_as_current_span(span_name) as span:
                result = await func(*args, **kwargs)
                if result_attributes is not None:
                    span.set_attributes(result_attributes(result))
                return result

        return wrapper

    return decorator
