from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    project_name: str = "Travel Planner API"
    api_v1_prefix: str = "/api/v1"

    storage_key: str = "travelplanner_trips"
    storage_path: str = Field(default=".travelplanner/storage.json", description="Empty keeps trips in memory")
    use_file_storage: bool = True

    history_page_size: int = Field(default=10, ge=1)

    log_level: str = "INFO"

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]


settings = get_settings()
