"""Workloads fetchers."""

from kdiff.controllers.workloads.fetchers.workload_fetcher import (
    FetchError,
    ImageParseFetchError,
    WorkloadFetcher,
)

__all__ = ["FetchError", "ImageParseFetchError", "WorkloadFetcher"]
