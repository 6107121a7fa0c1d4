"""Process-level settings read from the environment and ``.env``."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from ``HEXMAP_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HEXMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(
        default="console", description="Logging format (json or console)"
    )

    # Map Generation Configuration
    default_map_width: int = Field(default=64, gt=0, description="Default map width in tiles")
    default_map_height: int = Field(default=64, gt=0, description="Default map height in tiles")
    max_map_width: int = Field(default=2048, gt=0, description="Max allowed map width")
    max_map_height: int = Field(default=2048, gt=0, description="Max allowed map height")
    cell_size: float = Field(default=1.0, gt=0, description="Hex flat-to-flat width")
    chunk_size: int = Field(default=16, gt=0, description="Tiles per chunk side")
    water_level: float = Field(default=0.45, description="Water plane height, in shaped-height units")
    water_buffer: float = Field(default=10.0, ge=0, description="Water margin beyond the map edge")
    default_preset: str = Field(default="default", description="Terrain preset name")


def get_settings(**overrides) -> Settings:
    """Load settings; keyword overrides win over the environment."""
    return Settings(**overrides)
