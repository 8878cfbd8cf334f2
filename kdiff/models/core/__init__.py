"""Core domain models."""

from kdiff.models.core.context_info import ContextProbe, ErrorInfo
from kdiff.models.core.image_ref import ImageProjection, ImageRef
from kdiff.models.core.workload_info import (
    Container,
    RawContainer,
    RawWorkload,
    WorkloadResource,
)

__all__ = [
    "Container",
    "ContextProbe",
    "ErrorInfo",
    "ImageProjection",
    "ImageRef",
    "RawContainer",
    "RawWorkload",
    "WorkloadResource",
]
