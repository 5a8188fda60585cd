"""YAML-backed settings persistence."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from emuconsole.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "EMUCONSOLE_CONFIG"
BASE_URL_ENV = "EMUCONSOLE_BASE_URL"


class ConfigManager:
    """Load and save ``AppSettings`` as a YAML document."""

    DEFAULT_PATH = Path("~/.config/emuconsole/settings.yaml")

    @classmethod
    def config_path(cls) -> Path:
        """Return the settings file path, honoring ``$EMUCONSOLE_CONFIG``."""
        override = os.environ.get(CONFIG_PATH_ENV, "").strip()
        if override:
            return Path(override).expanduser()
        return cls.DEFAULT_PATH.expanduser()

    @classmethod
    def load(cls, path: Path | None = None) -> AppSettings:
        """Load settings from disk, applying environment overrides.

        A missing file yields defaults. A file that cannot be read, parsed or
        validated raises ``ConfigLoadError``.
        """
        target = path or cls.config_path()
        data: dict[str, Any] = {}
        if target.exists():
            try:
                raw = yaml.safe_load(target.read_text(encoding="utf-8"))
            except (OSError, yaml.YAMLError) as exc:
                raise ConfigLoadError(f"Cannot read {target}: {exc}") from exc
            if raw is None:
                raw = {}
            if not isinstance(raw, dict):
                raise ConfigLoadError(f"{target} must contain a mapping")
            data.update(raw)

        env_base_url = os.environ.get(BASE_URL_ENV, "").strip()
        if env_base_url:
            data["base_url"] = env_base_url

        try:
            settings = AppSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings in {target}: {exc}") from exc
        logger.debug("Loaded settings from %s", target)
        return settings

    @classmethod
    def save(cls, settings: AppSettings, path: Path | None = None) -> Path:
        """Write settings to disk and return the path written."""
        target = path or cls.config_path()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(
                yaml.safe_dump(settings.model_dump(), sort_keys=True),
                encoding="utf-8",
            )
        except OSError as exc:
            raise ConfigSaveError(f"Cannot write {target}: {exc}") from exc
        return target


__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
]
