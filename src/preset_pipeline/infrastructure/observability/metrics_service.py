"""Prometheus metrics for generation backend calls.

Declared at module level on the default registry. Labels use ONLY static
values (model ids, pass names), never request ids or hashes.
"""

from prometheus_client import Counter, Histogram

LLM_TOKENS_TOTAL = Counter(
    "preset_llm_tokens_total",
    "Total LLM tokens consumed",
    ["model", "type"],
)

LLM_LATENCY_SECONDS = Histogram(
    "preset_llm_latency_seconds",
    "LLM inference latency in seconds",
    ["model"],
)

LLM_CALLS_TOTAL = Counter(
    "preset_llm_calls_total",
    "Total LLM calls by pass and outcome",
    ["pass_name", "outcome"],
)
