"""Workloads domain controller."""

from kdiff.controllers.workloads.controller import FetchRequest, WorkloadsController

__all__ = ["FetchRequest", "WorkloadsController"]
