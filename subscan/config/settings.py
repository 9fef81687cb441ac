"""
Configuration Management for SubScan

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see where state is stored and how failures
are handled, and ensures configuration is validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Durable local storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SUBSCAN_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["file", "memory"] = Field(
        default="file",
        description="Storage backend (memory loses state on exit)"
    )
    data_dir: Path = Field(
        default=Path("~/.subscan"),
        validate_default=True,
        description="Directory holding the state files"
    )
    state_key: str = Field(
        default="subscriptions",
        pattern=r"^[A-Za-z0-9_-][A-Za-z0-9_.-]*$",
        description="Namespaced key the subscription collection is stored under"
    )
    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per storage read/write before giving up"
    )
    retry_wait_seconds: float = Field(
        default=0.1,
        ge=0.0,
        le=10.0,
        description="Base wait between storage retries (exponential)"
    )

    @field_validator("data_dir")
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        return v.expanduser()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SUBSCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Standard library log level name"
    )

    # What to do when the stored collection cannot be parsed
    on_corrupt_state: Literal["reset", "abort"] = Field(
        default="reset",
        description=(
            "reset: back up the unreadable payload and start empty; "
            "abort: surface CorruptStateError to the caller"
        )
    )

    # Display
    currency_symbol: str = Field(
        default="$",
        max_length=5,
        description="Symbol shown before amounts (no conversion is done)"
    )
    counter_duration_ms: int = Field(
        default=1000,
        ge=0,
        le=10000,
        description="Duration of the animated monthly total"
    )
    counter_steps: int = Field(
        default=60,
        ge=1,
        le=600,
        description="Frames in the animated monthly total"
    )
    budget_ceiling: float = Field(
        default=500.0,
        gt=0,
        description="Monthly amount that fills the burn bar"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, object]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid} plus {name}_error
    entries for the failures. Useful for startup checks.
    """
    results: dict[str, object] = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
