"""
Configuration management using Pydantic Settings.

Environment variables (prefix ENTROPY_):
- ENTROPY_BLOCK_SIZE: Grid block edge in pixels
- ENTROPY_HIGH_ENTROPY_THRESHOLD: Fraction of blocks used for the centroid
- ENTROPY_DEBUG: Invoke the debug hook after each analysis
- ENTROPY_MIN_PERCENTAGE: Default minimum visible percentage
- ENTROPY_RASTER_BACKEND: auto, pillow or opencv
- ENTROPY_OUTPUT_QUALITY: JPEG quality for materialized crops
- ENTROPY_HTTP_TIMEOUT: Timeout in seconds when fetching image URLs
- ENTROPY_LOG_LEVEL: Log level for the CLI
"""
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import (
    DEFAULT_BLOCK_SIZE,
    DEFAULT_HIGH_ENTROPY_THRESHOLD,
    DEFAULT_MIN_PERCENTAGE,
    DEFAULT_OUTPUT_PARAMS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ENTROPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Analysis
    block_size: int = Field(default=DEFAULT_BLOCK_SIZE, gt=0)
    high_entropy_threshold: float = Field(default=DEFAULT_HIGH_ENTROPY_THRESHOLD, gt=0, le=1)
    debug: bool = False
    min_percentage: float = Field(default=DEFAULT_MIN_PERCENTAGE, gt=0, le=100)

    # Backends
    raster_backend: Literal["auto", "pillow", "opencv"] = "auto"
    output_quality: int = Field(default=DEFAULT_OUTPUT_PARAMS['quality'], ge=1, le=100)
    http_timeout: float = Field(default=30.0, gt=0)

    # Logging
    log_level: str = "INFO"

    def get_analyzer_config(self) -> dict:
        """Get analyzer constructor options as dictionary."""
        return {
            'block_size': self.block_size,
            'high_entropy_threshold': self.high_entropy_threshold,
            'debug': self.debug,
        }


# Global settings instance
settings = Settings()
