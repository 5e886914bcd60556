from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from preset_pipeline.core.application.workflows.preset.pipeline_policy import PipelinePolicy
from preset_pipeline.infrastructure.adapters.llm.config.llm_settings import LlmSettings
from preset_pipeline.infrastructure.configuration.cache_settings import CacheSettings
from preset_pipeline.infrastructure.configuration.pipeline_settings import PipelineSettings


class Settings(BaseSettings):
    """Master configuration combining all sub-settings."""

    app_name: str = Field(default="Preset Pipeline", alias="APP_NAME")
    env: str = Field(default="local", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str | None = Field(default=None, alias="LOG_FORMAT")

    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    llm: LlmSettings = Field(default_factory=LlmSettings)

    def to_policy(self) -> PipelinePolicy:
        return self.pipeline.to_policy(cache_ttl_seconds=self.cache.ttl_seconds)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )
