"""Application state and settings models."""

from kdiff.models.state.app_settings import AppSettings, ConfigError, ConfigLoadError
from kdiff.models.state.config_manager import ConfigManager

__all__ = ["AppSettings", "ConfigError", "ConfigLoadError", "ConfigManager"]
