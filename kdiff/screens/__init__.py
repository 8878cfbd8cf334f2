"""Screens for the kdiff TUI."""

from kdiff.screens.diff import DiffScreen

__all__ = ["DiffScreen"]
