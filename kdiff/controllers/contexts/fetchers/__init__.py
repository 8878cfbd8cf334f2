"""Contexts fetchers."""

from kdiff.controllers.contexts.fetchers.version_fetcher import VersionFetcher

__all__ = ["VersionFetcher"]
