"""Tests for Settings configuration class."""

from pathlib import Path

import pytest


class TestSettingsDefaults:
    """Test that Settings loads sensible defaults."""

    def test_settings_loads_with_defaults(self, monkeypatch):
        """Settings should load with default values when no env vars are set."""
        for var in ("CATALOG_PATH", "PROGRESS_STORE_PATH", "LOG_LEVEL", "LOG_FILE"):
            monkeypatch.delenv(var, raising=False)

        from career_compass.config.settings import Settings

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.catalog_path == Path("data/careers.yaml")
        assert settings.progress_store_path == Path("./data/progress.json")
        assert settings.log_level == "INFO"
        assert settings.log_file is None


class TestSettingsFromEnvironment:
    """Test that Settings reads from environment variables."""

    def test_settings_reads_paths_from_env(self, monkeypatch):
        """Settings should read path overrides from environment."""
        monkeypatch.setenv("CATALOG_PATH", "/tmp/catalog.json")
        monkeypatch.setenv("PROGRESS_STORE_PATH", "/tmp/progress.json")

        from career_compass.config.settings import Settings

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.catalog_path == Path("/tmp/catalog.json")
        assert settings.progress_store_path == Path("/tmp/progress.json")

    def test_settings_normalizes_log_level(self, monkeypatch):
        """Lowercase log levels should be accepted and uppercased."""
        monkeypatch.setenv("LOG_LEVEL", "debug")

        from career_compass.config.settings import Settings

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.log_level == "DEBUG"

    def test_settings_rejects_unknown_log_level(self, monkeypatch):
        """Unknown log levels should fail validation."""
        from pydantic import ValidationError

        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        from career_compass.config.settings import Settings

        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]


class TestSettingsSingleton:
    """Test the get_settings/reset_settings helpers."""

    def test_get_settings_returns_same_instance(self):
        """get_settings should cache the instance."""
        from career_compass.config.settings import get_settings

        assert get_settings() is get_settings()

    def test_reset_settings_creates_new_instance(self):
        """reset_settings should drop the cached instance."""
        from career_compass.config.settings import get_settings, reset_settings

        first = get_settings()
        reset_settings()

        assert get_settings() is not first
