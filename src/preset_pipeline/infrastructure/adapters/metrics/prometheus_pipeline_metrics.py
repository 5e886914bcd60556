"""Pipeline counters backed by prometheus_client.

Each instance owns its CollectorRegistry so tests and app instances never
share counter state through the process-wide default registry.
"""

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from preset_pipeline.core.application.ports import MetricsPort, PipelineCounter

GENERATION_DURATION_METRIC = "preset_generation_duration_seconds"

_DESCRIPTIONS: dict[PipelineCounter, str] = {
    PipelineCounter.REQUESTS: "Preset generation requests received",
    PipelineCounter.ATTEMPTS: "Expand attempts sent to the generation backend",
    PipelineCounter.SUCCESS: "Preset generations accepted without fallback",
    PipelineCounter.FALLBACK: "Preset generations resolved with the fallback preset",
    PipelineCounter.CACHE_HITS: "Preset requests served from the idempotency cache",
}


class PrometheusPipelineMetrics(MetricsPort):
    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or CollectorRegistry()
        self._counters: dict[PipelineCounter, Counter] = {}
        self._duration: Histogram | None = None
        self._register()

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def increment(self, counter: PipelineCounter, amount: float = 1) -> None:
        self._counters[counter].inc(amount)

    def observe_generation_time(self, seconds: float) -> None:
        self._duration.observe(seconds)

    def snapshot(self) -> dict[str, float]:
        values = {
            counter.value: self._registry.get_sample_value(counter.value) or 0.0
            for counter in PipelineCounter
        }
        for suffix in ("sum", "count"):
            name = f"{GENERATION_DURATION_METRIC}_{suffix}"
            values[name] = self._registry.get_sample_value(name) or 0.0
        return values

    def reset(self) -> None:
        for collector in [*self._counters.values(), self._duration]:
            self._registry.unregister(collector)
        self._register()

    def render(self) -> bytes:
        """Prometheus text exposition format for this registry."""
        return generate_latest(self._registry)

    def _register(self) -> None:
        # prometheus_client appends _total to counter samples; declare the base name
        self._counters = {
            counter: Counter(
                counter.value.removesuffix("_total"),
                _DESCRIPTIONS[counter],
                registry=self._registry,
            )
            for counter in PipelineCounter
        }
        self._duration = Histogram(
            GENERATION_DURATION_METRIC,
            "End-to-end preset generation time in seconds",
            registry=self._registry,
        )
