from dataclasses import dataclass


@dataclass(frozen=True)
class PipelinePolicy:
    """Tunable constants of the preset pipeline.

    Built from configuration at startup; the core never reads settings directly.
    """

    ai_enabled: bool = True
    ensemble: bool = True
    max_hours: float = 8.0
    completeness_threshold: float = 0.65
    min_activities: int = 5
    max_activities: int = 20
    max_expand_attempts: int = 2
    skeleton_temperature: float = 0.0
    expand_temperatures: tuple[float, ...] = (0.6, 0.8)
    generation_timeout_seconds: float = 50.0
    cache_ttl_seconds: int = 7 * 24 * 60 * 60
    score_weights: tuple[float, float, float] = (1.0, 1.0, 1.0)
    confidence_decay: float = 0.85
    min_acceptance_criteria: int = 3
    coherence_saturation: int = 4

    def __post_init__(self) -> None:
        if self.max_expand_attempts < 1:
            raise ValueError("max_expand_attempts must be >= 1")
        if not self.expand_temperatures:
            raise ValueError("expand_temperatures must not be empty")
        if not 0 <= self.completeness_threshold <= 1:
            raise ValueError("completeness_threshold must be within [0, 1]")
        if self.max_hours <= 0:
            raise ValueError("max_hours must be positive")
        if self.generation_timeout_seconds <= 0:
            raise ValueError("generation_timeout_seconds must be positive")
        if self.min_activities > self.max_activities:
            raise ValueError("min_activities must not exceed max_activities")

    def expand_temperature(self, attempt: int) -> float:
        """Temperature for the 1-based expand *attempt*; the last entry repeats."""
        index = min(attempt - 1, len(self.expand_temperatures) - 1)
        return self.expand_temperatures[index]
