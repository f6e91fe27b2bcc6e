"""Application configuration using Pydantic settings."""
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.config import MAX_GRID_RESOLUTION


class Settings(BaseSettings):
    """Central configuration for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    scoring_mode: str = Field(default="three_factor", alias="SCORING_MODE")
    random_seed: Optional[int] = Field(default=None, alias="RANDOM_SEED")
    fallback_demand_distance_km: float = Field(default=100.0, alias="FALLBACK_DEMAND_DISTANCE_KM")
    max_grid_resolution: int = Field(default=MAX_GRID_RESOLUTION, alias="MAX_GRID_RESOLUTION")
    default_grid_resolution: int = Field(default=8, alias="DEFAULT_GRID_RESOLUTION")
    ranked_sites_limit: int = Field(default=10, alias="RANKED_SITES_LIMIT")
    demand_search_radius_km: float = Field(default=100.0, alias="DEMAND_SEARCH_RADIUS_KM")
    demand_search_limit: int = Field(default=20, alias="DEMAND_SEARCH_LIMIT")
    area_workers: int = Field(default=1, alias="AREA_WORKERS")
    data_file: Optional[str] = Field(default=None, alias="SITING_DATA_FILE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("scoring_mode")
    @classmethod
    def _normalize_mode(cls, value: str) -> str:
        normalized = value.strip().lower().replace("-", "_")
        if normalized not in {"three_factor", "four_factor"}:
            raise ValueError(f"Unknown scoring mode: {value!r}")
        return normalized

    @field_validator("max_grid_resolution")
    @classmethod
    def _cap_resolution(cls, value: int) -> int:
        if value < 1:
            raise ValueError("max_grid_resolution must be at least 1")
        return min(value, MAX_GRID_RESOLUTION)

    @field_validator("area_workers", "ranked_sites_limit", "demand_search_limit")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("value must be at least 1")
        return value


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
