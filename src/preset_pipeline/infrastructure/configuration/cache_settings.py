from enum import StrEnum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from preset_pipeline.infrastructure.configuration.pipeline_settings import (
    DEFAULT_CACHE_TTL_SECONDS,
)


class CacheBackend(StrEnum):
    MEMORY = "memory"
    FILE = "file"


class CacheSettings(BaseSettings):
    backend: CacheBackend = Field(default=CacheBackend.MEMORY, alias="CACHE_BACKEND")
    ttl_seconds: int = Field(default=DEFAULT_CACHE_TTL_SECONDS, gt=0, alias="CACHE_TTL_SECONDS")
    runtime_data_dir: Path = Field(default=Path("./runtime_data"), alias="RUNTIME_DATA_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )
