"""Workloads parsers."""

from kdiff.controllers.workloads.parsers.image_parser import (
    ImageParseError,
    MalformedImageError,
    parse_image,
    render_image,
)

__all__ = ["ImageParseError", "MalformedImageError", "parse_image", "render_image"]
