"""Error taxonomy shared by startup, backends and the interactive loop."""

from __future__ import annotations

from enum import Enum


class ConfigError(Exception):
    """Invalid or missing configuration. Fatal before the UI starts."""


class BackendInitError(Exception):
    """A backend could not be created or warmed up. Fatal before the UI starts."""


class GenerationErrorKind(str, Enum):
    """Why a single generation attempt failed."""

    BACKEND_REJECTED = "backend_rejected"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"
    TIMEOUT = "timeout"
    TRANSPORT_ERROR = "transport_error"


class GenerationError(Exception):
    """Recoverable failure of one generation attempt."""

    def __init__(self, kind: GenerationErrorKind, message: str = "") -> None:
        self.kind = kind
        self.message = message or kind.value.replace("_", " ")
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class ClipboardError(Exception):
    """Clipboard write failed. Shown inline; never fatal."""
