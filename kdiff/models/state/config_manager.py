"""Settings loading from config file, environment and command line."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from kdiff.constants.defaults import CONFIG_FILE_DEFAULT
from kdiff.constants.values import ENV_PREFIX
from kdiff.models.state.app_settings import AppSettings, ConfigError, ConfigLoadError

logger = logging.getLogger(__name__)

_PATH_FIELDS = ("kubeconfig", "log_file")


class ConfigManager:
    """Builds AppSettings with precedence: config file < environment < overrides."""

    @staticmethod
    def read_file(path: str | Path) -> dict[str, Any]:
        """Read a YAML settings file; a missing file yields no settings."""
        config_path = Path(path).expanduser()
        if not config_path.is_file():
            return {}
        try:
            with config_path.open(encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Unable to read config file {config_path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigLoadError(f"Config file {config_path} must contain a mapping")
        logger.info("Using config file: %s", config_path)
        return data

    @staticmethod
    def read_environment(environ: Mapping[str, str] | None = None) -> dict[str, str]:
        """Collect ``KDIFF_<FIELD>`` variables for every settings field."""
        source = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for field_name in AppSettings.model_fields:
            env_name = f"{ENV_PREFIX}{field_name.upper()}"
            if env_name in source:
                values[field_name] = source[env_name]
        return values

    @classmethod
    def load(
        cls,
        path: str | Path | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> AppSettings:
        """Load settings, applying environment variables and explicit overrides.

        Args:
            path: YAML settings file; defaults to ~/.config/kdiff/config.yaml
            environ: Environment mapping (defaults to ``os.environ``)
            overrides: Values from the command line; ``None`` values are ignored

        Returns:
            Validated AppSettings.

        Raises:
            ConfigLoadError: When the file or the merged values are invalid.
        """
        merged: dict[str, Any] = {}
        for key, value in cls.read_file(path or CONFIG_FILE_DEFAULT).items():
            merged[cls._field_name(key)] = value
        merged.update(cls.read_environment(environ))
        for key, value in (overrides or {}).items():
            if value is not None:
                merged[cls._field_name(key)] = value

        for field_name in _PATH_FIELDS:
            if isinstance(merged.get(field_name), str):
                merged[field_name] = os.path.expanduser(merged[field_name])

        try:
            return AppSettings.model_validate(merged)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings: {exc}") from exc

    @staticmethod
    def _field_name(key: str) -> str:
        """Map a field alias such as ``logFile`` to its field name."""
        for field_name, field_info in AppSettings.model_fields.items():
            if key in (field_name, field_info.alias):
                return field_name
        return key


__all__ = ["ConfigError", "ConfigLoadError", "ConfigManager"]
