"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from kdiff.constants.defaults import LOG_LEVEL_DEFAULT, REFRESH_INTERVAL_DEFAULT
from kdiff.models.core.image_ref import ImageProjection
from kdiff.models.state.app_settings import AppSettings, ConfigError, ConfigLoadError
from kdiff.models.state.config_manager import ConfigManager


class TestAppSettings:
    """Tests for AppSettings model."""

    def test_defaults(self) -> None:
        settings = AppSettings()
        assert settings.log_level == LOG_LEVEL_DEFAULT
        assert settings.refresh_interval == REFRESH_INTERVAL_DEFAULT
        assert settings.max_concurrency is None
        assert settings.show_differences_only is False

    def test_aliases(self) -> None:
        settings = AppSettings.model_validate(
            {"logFile": "/tmp/x.log", "logLevel": "DEBUG", "refreshRate": 5}
        )
        assert settings.log_file == "/tmp/x.log"
        assert settings.log_level == "debug"
        assert settings.refresh_interval == 5

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValueError):
            AppSettings(log_level="verbose")

    def test_refresh_interval_minimum(self) -> None:
        with pytest.raises(ValueError):
            AppSettings(refresh_interval=0)

    def test_image_projection(self) -> None:
        settings = AppSettings(show_image_registry=False, show_image_hash=True)
        assert settings.image_projection() == ImageProjection(
            registry=False, name=True, tag=True, digest=True
        )

    def test_error_hierarchy(self) -> None:
        assert issubclass(ConfigLoadError, ConfigError)


class TestConfigManager:
    """Tests for ConfigManager class."""

    @pytest.fixture
    def config_file(self, tmp_path: Path) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(
            "kubeconfig: ~/clusters/config\n"
            "logLevel: warn\n"
            "refreshRate: 10\n"
            "probe_timeout: 3.5\n",
            encoding="utf-8",
        )
        return path

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        settings = ConfigManager.load(tmp_path / "absent.yaml", environ={})
        assert settings == AppSettings()

    def test_file_values(self, config_file: Path) -> None:
        settings = ConfigManager.load(config_file, environ={})

        assert settings.log_level == "warn"
        assert settings.refresh_interval == 10
        assert settings.probe_timeout == 3.5
        assert settings.kubeconfig == str(Path.home() / "clusters" / "config")

    def test_environment_overrides_file(self, config_file: Path) -> None:
        settings = ConfigManager.load(
            config_file,
            environ={"KDIFF_LOG_LEVEL": "error", "KDIFF_MAX_CONCURRENCY": "4"},
        )

        assert settings.log_level == "error"
        assert settings.max_concurrency == 4
        assert settings.refresh_interval == 10

    def test_overrides_win(self, config_file: Path) -> None:
        settings = ConfigManager.load(
            config_file,
            environ={"KDIFF_REFRESH_INTERVAL": "20"},
            overrides={"refresh_interval": 30, "log_level": None},
        )

        assert settings.refresh_interval == 30
        assert settings.log_level == "warn"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("logLevel: [oops", encoding="utf-8")
        with pytest.raises(ConfigLoadError):
            ConfigManager.load(path, environ={})

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="mapping"):
            ConfigManager.load(path, environ={})

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("refreshRate: 0\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="Invalid settings"):
            ConfigManager.load(path, environ={})

    def test_read_environment_ignores_unrelated(self) -> None:
        values = ConfigManager.read_environment({"KDIFF_KUBECONFIG": "/k", "HOME": "/root"})
        assert values == {"kubeconfig": "/k"}
