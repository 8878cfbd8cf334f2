"""Container image reference models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from kdiff.constants.defaults import (
    SHOW_IMAGE_HASH_DEFAULT,
    SHOW_IMAGE_NAME_DEFAULT,
    SHOW_IMAGE_REGISTRY_DEFAULT,
    SHOW_IMAGE_TAG_DEFAULT,
)
from kdiff.constants.enums import ImageComponent


class ImageRef(BaseModel):
    """A container image reference split into its components."""

    model_config = ConfigDict(frozen=True)

    registry: str | None = None
    name: str = Field(min_length=1)
    tag: str | None = None
    digest: str | None = None


class ImageProjection(BaseModel):
    """Subset of image components used for comparison and display."""

    model_config = ConfigDict(frozen=True)

    registry: bool = SHOW_IMAGE_REGISTRY_DEFAULT
    name: bool = SHOW_IMAGE_NAME_DEFAULT
    tag: bool = SHOW_IMAGE_TAG_DEFAULT
    digest: bool = SHOW_IMAGE_HASH_DEFAULT

    @classmethod
    def all(cls) -> ImageProjection:
        """Projection selecting every component."""
        return cls(registry=True, name=True, tag=True, digest=True)

    @classmethod
    def only(cls, *components: ImageComponent) -> ImageProjection:
        """Projection selecting exactly the given components."""
        selected = {component.value for component in components}
        return cls(**{component.value: component.value in selected for component in ImageComponent})

    def includes(self, component: ImageComponent) -> bool:
        return bool(getattr(self, component.value))

    def toggled(self, component: ImageComponent) -> ImageProjection:
        """Return a copy with one component flipped."""
        return self.model_copy(update={component.value: not self.includes(component)})
