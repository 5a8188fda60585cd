"""Tests for AppSettings and ConfigManager."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from emuconsole.constants.enums import ViewName
from emuconsole.models.state import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigManager,
)
from emuconsole.models.state.config_manager import BASE_URL_ENV, CONFIG_PATH_ENV


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(BASE_URL_ENV, raising=False)
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)


class TestAppSettings:
    """Tests for AppSettings validation."""

    def test_defaults(self) -> None:
        settings = AppSettings()
        assert settings.base_url == "http://localhost:9340"
        assert settings.view is ViewName.DASHBOARD
        assert settings.peek_limit == 10

    def test_trailing_slash_stripped(self) -> None:
        assert AppSettings(base_url="http://emu:9000/").base_url == "http://emu:9000"

    @pytest.mark.parametrize(
        "overrides",
        [{"base_url": "  "}, {"initial_view": "storage"}, {"peek_limit": 0}, {"banner_hide_seconds": 0}],
    )
    def test_invalid_values(self, overrides: dict) -> None:
        with pytest.raises(ValidationError):
            AppSettings(**overrides)


class TestConfigManager:
    """Tests for ConfigManager load/save."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert ConfigManager.load(tmp_path / "absent.yaml") == AppSettings()

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert ConfigManager.load(path) == AppSettings()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("base_url: [unclosed\n")
        with pytest.raises(ConfigLoadError):
            ConfigManager.load(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigLoadError, match="must contain a mapping"):
            ConfigManager.load(path)

    def test_invalid_values_are_config_errors(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("peek_limit: 1000\n")
        with pytest.raises(ConfigError, match="Invalid settings"):
            ConfigManager.load(path)

    def test_env_base_url_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("base_url: http://file:1\nstream_retry_seconds: 2.5\n")
        monkeypatch.setenv(BASE_URL_ENV, "http://env:2/")

        settings = ConfigManager.load(path)

        assert settings.base_url == "http://env:2"
        assert settings.stream_retry_seconds == 2.5

    def test_env_config_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_PATH_ENV, str(tmp_path / "custom.yaml"))
        assert ConfigManager.config_path() == tmp_path / "custom.yaml"

    def test_save_round_trip(self, tmp_path: Path) -> None:
        settings = AppSettings(base_url="http://emu:9000", initial_view="ess-enn-ess", peek_limit=25)
        path = ConfigManager.save(settings, tmp_path / "nested" / "settings.yaml")

        assert path.exists()
        assert ConfigManager.load(path) == settings
