"""
Application settings for Excel Diff.
All settings are loaded from environment variables (prefix EXCELDIFF_)
or a .env file in the working directory.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EXCELDIFF_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Console logging level")
    LOG_DIR: Optional[Path] = Field(
        default=None,
        description="Directory for DEBUG log files (unset = console only)"
    )

    # Output
    DEFAULT_OUTPUT: Path = Field(
        default=Path("diff_output.xlsx"),
        description="Output path used when --output is not given"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is a standard logging level."""
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()
