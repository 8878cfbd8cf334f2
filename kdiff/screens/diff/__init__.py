"""Diff screen."""

from kdiff.screens.diff.diff_screen import DiffScreen
from kdiff.screens.diff.presenter import DiffCell, DiffPresenter, DiffRow

__all__ = ["DiffCell", "DiffPresenter", "DiffRow", "DiffScreen"]
