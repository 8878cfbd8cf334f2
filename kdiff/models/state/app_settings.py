"""Application settings models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kdiff.constants.defaults import (
    KUBECONFIG_DEFAULT,
    LOG_FILE_DEFAULT,
    LOG_LEVEL_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
    SHOW_DIFFERENCES_ONLY_DEFAULT,
    SHOW_IMAGE_HASH_DEFAULT,
    SHOW_IMAGE_NAME_DEFAULT,
    SHOW_IMAGE_REGISTRY_DEFAULT,
    SHOW_IMAGE_TAG_DEFAULT,
)
from kdiff.constants.limits import (
    MAX_CONCURRENCY_MIN,
    PROBE_TIMEOUT_MIN,
    REFRESH_INTERVAL_MIN,
)
from kdiff.constants.timeouts import CONTEXT_PROBE_TIMEOUT
from kdiff.models.core.image_ref import ImageProjection

LOG_LEVELS = ("trace", "debug", "info", "warn", "warning", "error")


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True)

    # Paths
    kubeconfig: str = KUBECONFIG_DEFAULT
    log_file: str = Field(default=LOG_FILE_DEFAULT, alias="logFile")

    # Runtime
    log_level: str = Field(default=LOG_LEVEL_DEFAULT, alias="logLevel")
    refresh_interval: int = Field(
        default=REFRESH_INTERVAL_DEFAULT, ge=REFRESH_INTERVAL_MIN, alias="refreshRate"
    )  # seconds
    probe_timeout: float = Field(default=CONTEXT_PROBE_TIMEOUT, ge=PROBE_TIMEOUT_MIN)
    max_concurrency: int | None = Field(default=None, ge=MAX_CONCURRENCY_MIN)

    # Display toggles
    show_image_registry: bool = SHOW_IMAGE_REGISTRY_DEFAULT
    show_image_name: bool = SHOW_IMAGE_NAME_DEFAULT
    show_image_tag: bool = SHOW_IMAGE_TAG_DEFAULT
    show_image_hash: bool = SHOW_IMAGE_HASH_DEFAULT
    show_differences_only: bool = SHOW_DIFFERENCES_ONLY_DEFAULT

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return normalized

    def image_projection(self) -> ImageProjection:
        """Initial image projection derived from the display toggles."""
        return ImageProjection(
            registry=self.show_image_registry,
            name=self.show_image_name,
            tag=self.show_image_tag,
            digest=self.show_image_hash,
        )


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""
