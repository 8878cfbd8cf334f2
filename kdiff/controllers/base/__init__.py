"""Base controller classes."""

from kdiff.controllers.base.base_controller import BaseController, WorkerResult

__all__ = ["BaseController", "WorkerResult"]
