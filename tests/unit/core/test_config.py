"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest

from statforge.core.config import (
    EngineSettings,
    IngestionSettings,
    LeaderboardSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from statforge.core.exceptions import ConfigurationError


class TestEngineSettings:
    """Tests for EngineSettings configuration."""

    def test_default_values(self) -> None:
        """Test default engine settings."""
        settings = EngineSettings()

        assert settings.base_percentage_at_level_zero is False
        assert settings.band_table_path is None

    def test_existing_band_table_path(self, tmp_path: Path) -> None:
        """Test that an existing band table file is accepted."""
        table_file = tmp_path / "bands.json"
        table_file.write_text("[]", encoding="utf-8")

        settings = EngineSettings(band_table_path=table_file)

        assert settings.band_table_path == table_file

    def test_missing_band_table_path(self, tmp_path: Path) -> None:
        """Test that a missing band table file is rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            EngineSettings(band_table_path=tmp_path / "missing.json")

        assert exc_info.value.details["config_key"] == "band_table_path"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test reading the level-zero flag from the environment."""
        monkeypatch.setenv("STATFORGE_ENGINE_BASE_PERCENTAGE_AT_LEVEL_ZERO", "true")

        assert EngineSettings().base_percentage_at_level_zero is True


class TestIngestionSettings:
    """Tests for IngestionSettings configuration."""

    def test_strict_by_default(self) -> None:
        """Test that ingestion is strict by default."""
        assert IngestionSettings().strict is True


class TestLeaderboardSettings:
    """Tests for LeaderboardSettings configuration."""

    def test_default_values(self) -> None:
        """Test default leaderboard sizes."""
        settings = LeaderboardSettings()

        assert settings.default_top_n == 10
        assert settings.max_top_n == 100

    def test_default_must_not_exceed_max(self) -> None:
        """Test that default_top_n must not exceed max_top_n."""
        with pytest.raises(ConfigurationError) as exc_info:
            LeaderboardSettings(default_top_n=50, max_top_n=20)

        assert "default_top_n" in str(exc_info.value)


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default settings initialization."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.app_name == "statforge"
        assert settings.log_level == "INFO"
        assert settings.json_logs is False
        assert settings.ingestion.strict is True

    def test_env_vars(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        mock_env_vars: dict[str, str],
    ) -> None:
        """Test settings populated from environment variables."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.log_level == "DEBUG"
        assert settings.ingestion.strict is False
        assert settings.leaderboard.default_top_n == 3

    def test_app_name_from_env(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test overriding the application name stamped on logs."""
        monkeypatch.setenv("STATFORGE_APP_NAME", "sheet-service")
        monkeypatch.chdir(tmp_path)

        assert Settings().app_name == "sheet-service"


class TestGetSettings:
    """Tests for get_settings singleton function."""

    def test_returns_settings_instance(self) -> None:
        """Test that get_settings returns a Settings instance."""
        assert isinstance(get_settings(), Settings)

    def test_caching(self) -> None:
        """Test that settings are cached."""
        assert get_settings() is get_settings()

    def test_cache_clear(self) -> None:
        """Test that cache can be cleared."""
        settings1 = get_settings()
        clear_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2

    def test_invalid_env_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that invalid environment values raise ConfigurationError."""
        monkeypatch.setenv("STATFORGE_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            get_settings()

    def test_nested_error_not_rewrapped(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that configuration errors from nested settings pass through."""
        monkeypatch.setenv("STATFORGE_ENGINE_BAND_TABLE_PATH", str(tmp_path / "nope.json"))

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert exc_info.value.details.get("config_key") == "band_table_path"
