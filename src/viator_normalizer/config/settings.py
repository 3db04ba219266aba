"""Runtime configuration for the normaliser.

Relies on pydantic-settings so that environment variables (prefixed with
``VIATOR_NORMALIZER_``) can override defaults.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Captures runtime configuration for normalisation runs."""

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("data/logs"), description="Directory for normalizer.log")
    output_dir: Path = Field(
        default=Path("data/normalized"), description="Root directory for normalised JSON output"
    )
    max_season_days: Optional[int] = Field(
        default=3660,
        description="Upper bound on days expanded per availability season; unset for no bound",
    )

    model_config = SettingsConfigDict(
        env_prefix="VIATOR_NORMALIZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_dir", "output_dir", mode="before")
    @classmethod
    def _expand_path(cls, value: str | Path) -> Path:
        if isinstance(value, Path):
            return value.expanduser()
        return Path(value).expanduser()

    @field_validator("max_season_days", mode="before")
    @classmethod
    def _blank_season_cap(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("max_season_days")
    @classmethod
    def _validate_season_cap(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise ValueError("max_season_days must be positive")
        return value

    def ensure_directories(self) -> None:
        """Create directories that must exist at runtime."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.log_dir.mkdir(parents=True, exist_ok=True)
