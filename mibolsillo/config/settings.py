"""
Configuration Management for MiBolsillo

Uses pydantic-settings for type-safe configuration from environment variables.

All configuration is centralized here, so every tunable of the app
(storage location, trend window, filter ranges) is visible in one place
and validated at startup.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_STORAGE_KEY = "mibolsillo-movimientos"


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MIBOLSILLO_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    path: Path = Field(
        default=Path.home() / ".mibolsillo" / "storage.json",
        description="JSON file holding the key-value records"
    )
    key: str = Field(
        default=DEFAULT_STORAGE_KEY,
        min_length=1,
        description="Key under which the movement state is persisted"
    )

    @field_validator('path')
    @classmethod
    def expand_path(cls, v: Path) -> Path:
        """Allow ~ in the configured path."""
        return v.expanduser()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MIBOLSILLO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Shown in the sidebar outside production"
    )
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for structured logs"
    )

    # Presentation
    currency_symbol: str = Field(
        default="$",
        max_length=5,
        description="Symbol shown before amounts"
    )
    trend_days: int = Field(
        default=7,
        ge=1,
        le=31,
        description="Number of days in the dashboard trend chart"
    )
    filter_ranges: str = Field(
        default="7,30",
        description="Comma-separated day ranges offered by the movement filter"
    )

    # Categories
    strict_categories: bool = Field(
        default=False,
        description="Reject categories outside the suggested list"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @field_validator('filter_ranges')
    @classmethod
    def validate_filter_ranges(cls, v: str) -> str:
        """Every range must be a positive integer."""
        for part in v.split(","):
            part = part.strip()
            if not part.isdigit() or int(part) <= 0:
                raise ValueError(f"Invalid filter range: {part!r}")
        return v

    @property
    def filter_ranges_list(self) -> list[int]:
        """Get filter ranges as a sorted list of days."""
        return sorted({int(part.strip()) for part in self.filter_ranges.split(",")})

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level


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

    # Sub-settings are loaded lazily to allow partial configuration

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


def validate_all_settings() -> dict[str, bool]:
    """
    Check that every settings group loads from the environment.

    Returns a dict of {group: is_valid}, plus "<group>_error" with the
    message of each group that failed. Used by the app at startup.
    """
    settings = get_settings()
    results = {}

    for group in ("storage", "app"):
        try:
            getattr(settings, group)
        except ValidationError as e:
            results[group] = False
            results[f"{group}_error"] = str(e)
        else:
            results[group] = True

    return results
