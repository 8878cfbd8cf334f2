"""Utility helpers."""

from kdiff.utils.logging_setup import configure_logging, resolve_log_level

__all__ = ["configure_logging", "resolve_log_level"]
