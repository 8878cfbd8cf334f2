"""Constants module for kdiff.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (strings with Final)
- timeouts.py: Timeout values (seconds)
- limits.py: Limit values (max/min)
- defaults.py: Default values for settings
"""

from kdiff.constants.defaults import (
    CONFIG_FILE_DEFAULT,
    KUBECONFIG_DEFAULT,
    LOG_FILE_DEFAULT,
    LOG_LEVEL_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
)
from kdiff.constants.enums import (
    FetchState,
    ImageComponent,
    ResourceKind,
)
from kdiff.constants.limits import (
    ERROR_MESSAGE_MAX_LENGTH,
    REFRESH_INTERVAL_MIN,
)
from kdiff.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    CONTEXT_PROBE_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
)
from kdiff.constants.values import (
    APP_NAME,
    APP_TITLE,
    COLOR_HEADER,
)

__all__ = [
    # Application
    "APP_NAME",
    "APP_TITLE",
    # Timeouts
    "CLUSTER_REQUEST_TIMEOUT",
    "COLOR_HEADER",
    # Defaults
    "CONFIG_FILE_DEFAULT",
    "CONTEXT_PROBE_TIMEOUT",
    "ERROR_MESSAGE_MAX_LENGTH",
    "KUBECONFIG_DEFAULT",
    "KUBECTL_COMMAND_TIMEOUT",
    "LOG_FILE_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "REFRESH_INTERVAL_DEFAULT",
    "REFRESH_INTERVAL_MIN",
    # Enums
    "FetchState",
    "ImageComponent",
    "ResourceKind",
]
