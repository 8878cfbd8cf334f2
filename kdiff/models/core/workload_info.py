"""Workload models: raw cluster objects and their parsed form."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from kdiff.models.core.image_ref import ImageRef


class RawContainer(BaseModel):
    """Container template entry as returned by the cluster."""

    model_config = ConfigDict(frozen=True)

    name: str
    image: str


class RawWorkload(BaseModel):
    """Deployment, StatefulSet or DaemonSet as returned by the cluster."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str = ""
    containers: tuple[RawContainer, ...] = ()


class Container(BaseModel):
    """Container of a workload with its parsed image."""

    model_config = ConfigDict(frozen=True)

    name: str
    image: ImageRef


class WorkloadResource(BaseModel):
    """Workload fetched from one (context, namespace) with parsed images."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str = ""
    containers: tuple[Container, ...] = ()

    @property
    def container_names(self) -> list[str]:
        return [container.name for container in self.containers]

    def get_container(self, name: str) -> Container | None:
        """Return the container with the given name, if present."""
        for container in self.containers:
            if container.name == name:
                return container
        return None
