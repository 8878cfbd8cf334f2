"""Image reference parser - splits container image strings into components.

Disambiguation rules, applied in order:

1. A trailing ``@sha256:<word characters>`` is the digest. Any other ``@``
   stays part of the name.
2. Everything before the last ``/`` is the registry, so
   ``docker.io/library/nginx`` has registry ``docker.io/library``.
3. In the final path segment, the text after the last ``:`` is the tag when
   it only contains ``[A-Za-z0-9_.-]``. A registry port is never read as a tag
   because tags are only searched after the last ``/``.
4. Whatever remains is the name and must not be empty.

Empty digests and tags (``nginx:`` or ``nginx@sha256:``) are treated as absent.
"""

from __future__ import annotations

import re

from kdiff.models.core.image_ref import ImageProjection, ImageRef

DIGEST_SEPARATOR = "@sha256:"
REGISTRY_SEPARATOR = "/"
TAG_SEPARATOR = ":"

_DIGEST_CHARS = re.compile(r"\w*")
_TAG_CHARS = re.compile(r"[\w.-]*")


class ImageParseError(ValueError):
    """Base exception for image references that cannot be parsed."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw


class MalformedImageError(ImageParseError):
    """No name component can be isolated from the image reference."""


def _split_digest(raw: str) -> tuple[str, str | None]:
    index = raw.rfind(DIGEST_SEPARATOR)
    if index < 0:
        return raw, None
    digest = raw[index + len(DIGEST_SEPARATOR):]
    if not _DIGEST_CHARS.fullmatch(digest):
        return raw, None
    return raw[:index], digest or None


def _split_registry(reference: str) -> tuple[str | None, str]:
    registry, separator, path = reference.rpartition(REGISTRY_SEPARATOR)
    if not separator:
        return None, reference
    return registry or None, path


def _split_tag(path: str) -> tuple[str, str | None]:
    name, separator, tag = path.rpartition(TAG_SEPARATOR)
    if not separator or not name or not _TAG_CHARS.fullmatch(tag):
        return path, None
    return name, tag or None


def parse_image(raw: str) -> ImageRef:
    """Parse a container image string.

    Args:
        raw: Image string from a pod template, e.g. ``nginx:1.21``

    Returns:
        ImageRef with the recognised components.

    Raises:
        MalformedImageError: When no name component can be isolated.
    """
    if not raw or raw.isspace():
        raise MalformedImageError("empty image reference", raw)

    reference, digest = _split_digest(raw)
    registry, path = _split_registry(reference)
    name, tag = _split_tag(path)

    if not name or name.startswith(TAG_SEPARATOR):
        raise MalformedImageError(f"no image name in {raw!r}", raw)

    return ImageRef(registry=registry, name=name, tag=tag, digest=digest)


def render_image(ref: ImageRef, projection: ImageProjection) -> str:
    """Render the components selected by ``projection``.

    Separators are only emitted between components, never before the first
    one. Rendering with every component selected reproduces a string that
    parses back to ``ref``.
    """
    rendered = ""
    if projection.registry and ref.registry:
        rendered = ref.registry
    if projection.name:
        if rendered:
            rendered += REGISTRY_SEPARATOR
        rendered += ref.name
    if projection.tag and ref.tag:
        if rendered:
            rendered += TAG_SEPARATOR
        rendered += ref.tag
    if projection.digest and ref.digest:
        if rendered:
            rendered += DIGEST_SEPARATOR
        rendered += ref.digest
    return rendered


__all__ = [
    "ImageParseError",
    "MalformedImageError",
    "parse_image",
    "render_image",
]
