import json

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from preset_pipeline.core.application.workflows.preset.pipeline_policy import PipelinePolicy

DEFAULT_CACHE_TTL_SECONDS = 7 * 24 * 60 * 60


class PipelineSettings(BaseSettings):
    """Feature flags and policy constants of the preset generation pipeline."""

    ai_enabled: bool = Field(default=True, alias="AI_ENABLED")
    ensemble: bool = Field(default=True, alias="AI_ENSEMBLE")
    max_hours: float = Field(default=8.0, gt=0, alias="AI_MAX_HOURS")
    completeness_threshold: float = Field(
        default=0.65, ge=0, le=1, alias="AI_COMPLETENESS_THRESHOLD"
    )
    min_activities: int = Field(default=5, ge=1, alias="AI_MIN_ACTIVITIES")
    max_activities: int = Field(default=20, ge=1, alias="AI_MAX_ACTIVITIES")
    max_expand_attempts: int = Field(default=2, ge=1, alias="AI_MAX_EXPAND_ATTEMPTS")
    skeleton_temperature: float = Field(default=0.0, ge=0, le=2, alias="AI_SKELETON_TEMPERATURE")
    expand_temperatures: list[float] = Field(
        default_factory=lambda: [0.6, 0.8], alias="AI_EXPAND_TEMPERATURES"
    )
    generation_timeout_seconds: float = Field(
        default=50.0, gt=0, alias="AI_GENERATION_TIMEOUT_SECONDS"
    )
    score_weights: list[float] = Field(
        default_factory=lambda: [1.0, 1.0, 1.0], alias="AI_SCORE_WEIGHTS"
    )
    confidence_decay: float = Field(default=0.85, gt=0, lt=1, alias="AI_CONFIDENCE_DECAY")
    min_acceptance_criteria: int = Field(default=3, ge=1, alias="AI_MIN_ACCEPTANCE_CRITERIA")
    coherence_saturation: int = Field(default=4, ge=1, alias="AI_COHERENCE_SATURATION")

    @field_validator("expand_temperatures", "score_weights", mode="before")
    @classmethod
    def parse_json_list(cls, value: object) -> list[float]:
        """Accept both raw JSON strings and native lists from .env or direct injection."""
        if isinstance(value, str):
            parsed = json.loads(value)
            if not isinstance(parsed, list):
                raise ValueError(f"Expected a JSON list, got {type(parsed).__name__}")
            return parsed
        if isinstance(value, (list, tuple)):
            return list(value)
        raise ValueError(f"Expected str or list, got {type(value).__name__}")

    @field_validator("expand_temperatures")
    @classmethod
    def require_temperatures(cls, value: list[float]) -> list[float]:
        if not value:
            raise ValueError("AI_EXPAND_TEMPERATURES must contain at least one value")
        return value

    @field_validator("score_weights")
    @classmethod
    def require_three_weights(cls, value: list[float]) -> list[float]:
        if len(value) != 3 or any(w < 0 for w in value) or sum(value) <= 0:
            raise ValueError("AI_SCORE_WEIGHTS must be three non-negative numbers, sum > 0")
        return value

    def to_policy(self, cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS) -> PipelinePolicy:
        weights = self.score_weights
        return PipelinePolicy(
            ai_enabled=self.ai_enabled,
            ensemble=self.ensemble,
            max_hours=self.max_hours,
            completeness_threshold=self.completeness_threshold,
            min_activities=self.min_activities,
            max_activities=self.max_activities,
            max_expand_attempts=self.max_expand_attempts,
            skeleton_temperature=self.skeleton_temperature,
            expand_temperatures=tuple(self.expand_temperatures),
            generation_timeout_seconds=self.generation_timeout_seconds,
            cache_ttl_seconds=cache_ttl_seconds,
            score_weights=(weights[0], weights[1], weights[2]),
            confidence_decay=self.confidence_decay,
            min_acceptance_criteria=self.min_acceptance_criteria,
            coherence_saturation=self.coherence_saturation,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )
