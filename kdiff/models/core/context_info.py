"""Context probe models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from kdiff.constants.limits import ERROR_MESSAGE_MAX_LENGTH

_FALLBACK_MESSAGE = "Cluster connection check failed"

_PREFERRED_TOKENS = (
    "unable to connect to the server",
    "you must be logged in",
    "context deadline exceeded",
    "timed out",
    "certificate",
    "no such host",
    "forbidden",
    "unauthorized",
)


def summarize_error_message(error: BaseException | str) -> str:
    """Extract a concise, user-facing message from a possibly multi-line error."""
    raw_message = str(error).strip()
    lines = [line.strip() for line in raw_message.splitlines() if line.strip()]
    if not lines:
        return _FALLBACK_MESSAGE

    selected_line = lines[-1]
    for line in reversed(lines):
        lower_line = line.lower()
        if line.startswith("error:") or any(token in lower_line for token in _PREFERRED_TOKENS):
            selected_line = line
            break

    cleaned = selected_line.removeprefix("error:").strip()
    if len(cleaned) > ERROR_MESSAGE_MAX_LENGTH:
        return f"{cleaned[:ERROR_MESSAGE_MAX_LENGTH - 3].rstrip()}..."
    return cleaned or _FALLBACK_MESSAGE


class ErrorInfo(BaseModel):
    """Error captured as data for a single probe or fetch."""

    model_config = ConfigDict(frozen=True)

    type: str
    message: str

    @classmethod
    def from_exception(cls, error: BaseException) -> ErrorInfo:
        return cls(type=type(error).__name__, message=summarize_error_message(error))

    def __str__(self) -> str:
        return self.message


class ContextProbe(BaseModel):
    """Reachability and server version of one kubeconfig context."""

    model_config = ConfigDict(frozen=True)

    name: str
    reachable: bool
    server_version: str | None = None
    error: ErrorInfo | None = None
