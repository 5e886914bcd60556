import json

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LlmSettings(BaseSettings):
    """Settings for LLM providers and model priority configuration."""

    openai_api_key: SecretStr | None = Field(default=None, alias="OPENAI_API_KEY")
    deepseek_api_key: SecretStr | None = Field(default=None, alias="DEEPSEEK_API_KEY")
    gemini_api_key: SecretStr | None = Field(default=None, alias="GEMINI_API_KEY")
    anthropic_api_key: SecretStr | None = Field(default=None, alias="ANTHROPIC_API_KEY")

    preset_llm_model_priority: list[str] = Field(
        default_factory=lambda: ["openai:gpt-4o-mini"], alias="PRESET_LLM_MODEL_PRIORITY"
    )
    retry_max_attempts: int = Field(default=1, ge=1, alias="LLM_RETRY_MAX_ATTEMPTS")

    @field_validator("preset_llm_model_priority", mode="before")
    @classmethod
    def parse_json_list(cls, value: object) -> list[str]:
        """Accept both raw JSON strings and native lists from .env or direct injection."""
        if isinstance(value, str):
            parsed = json.loads(value)
            if not isinstance(parsed, list):
                raise ValueError(f"Expected a JSON list, got {type(parsed).__name__}")
            return parsed
        if isinstance(value, list):
            return value
        raise ValueError(f"Expected str or list, got {type(value).__name__}")

    @field_validator("preset_llm_model_priority")
    @classmethod
    def require_one_model(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("PRESET_LLM_MODEL_PRIORITY must name at least one model")
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )
