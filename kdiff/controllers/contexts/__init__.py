"""Contexts domain controller."""

from kdiff.controllers.contexts.controller import ContextsController
from kdiff.controllers.contexts.fetchers import VersionFetcher

__all__ = ["ContextsController", "VersionFetcher"]
