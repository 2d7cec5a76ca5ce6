"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from mibolsillo.config import (
    DEFAULT_STORAGE_KEY,
    AppSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestStorageSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("MIBOLSILLO_STORAGE_KEY", raising=False)
        monkeypatch.delenv("MIBOLSILLO_STORAGE_PATH", raising=False)

        settings = StorageSettings()

        assert settings.key == DEFAULT_STORAGE_KEY
        assert settings.path.name == "storage.json"

    def test_path_expands_home(self, monkeypatch):
        monkeypatch.setenv("MIBOLSILLO_STORAGE_PATH", "~/datos/bolsillo.json")

        settings = StorageSettings()

        assert settings.path == Path.home() / "datos" / "bolsillo.json"


class TestAppSettings:
    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MIBOLSILLO_TREND_DAYS", "14")
        monkeypatch.setenv("MIBOLSILLO_LOG_LEVEL", "debug")

        settings = get_settings().app

        assert settings.trend_days == 14
        assert settings.log_level == "DEBUG"

    def test_debug_mode_forces_debug_logging(self, monkeypatch):
        monkeypatch.setenv("MIBOLSILLO_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("MIBOLSILLO_DEBUG_MODE", "true")
        assert AppSettings().effective_log_level == "DEBUG"

    def test_filter_ranges_list(self, monkeypatch):
        monkeypatch.setenv("MIBOLSILLO_FILTER_RANGES", "30, 7,90,7")
        assert AppSettings().filter_ranges_list == [7, 30, 90]

    @pytest.mark.parametrize("ranges", ["7,abc", "0", "7,,30"])
    def test_invalid_filter_ranges(self, monkeypatch, ranges):
        monkeypatch.setenv("MIBOLSILLO_FILTER_RANGES", ranges)
        with pytest.raises(ValidationError):
            AppSettings()

    def test_trend_days_bounds(self, monkeypatch):
        monkeypatch.setenv("MIBOLSILLO_TREND_DAYS", "0")
        with pytest.raises(ValidationError):
            AppSettings()

    def test_validate_all_settings(self, monkeypatch):
        monkeypatch.setenv("MIBOLSILLO_LOG_LEVEL", "LOUD")

        results = validate_all_settings()

        assert results["storage"] is True
        assert results["app"] is False
        assert "app_error" in results
