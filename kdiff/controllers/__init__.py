"""Controllers module for kdiff.

This module provides the controllers that probe kubeconfig contexts and
aggregate workload images across them.
"""

from __future__ import annotations

# Base classes
from kdiff.controllers.base import BaseController, WorkerResult

# Contexts domain
from kdiff.controllers.contexts.controller import ContextsController

# Workloads domain
from kdiff.controllers.workloads.controller import FetchRequest, WorkloadsController

__all__ = [
    "BaseController",
    "ContextsController",
    "FetchRequest",
    "WorkerResult",
    "WorkloadsController",
]
