"""
Backend Descriptors and Resolution
==================================

A backend is described by a BackendDescriptor whose optional capabilities
(model identifier, warmup) are explicit fields filled at construction.
Backend types map to factories through a plain dict built at startup and
handed to BackendResolver, which creates each configured backend once.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional

from config import AppConfig, BackendSettings
from errors import BackendInitError
from naming import NameRequest

GenerateNames = Callable[[NameRequest, float], list[str]]
Warmup = Callable[[float], None]


@dataclass(frozen=True)
class BackendDescriptor:
    """A ready-to-use backend instance."""

    name: str
    type: str
    display_name: str
    generate_names: GenerateNames
    model_identifier: Optional[str] = None
    warmup: Optional[Warmup] = None


BackendFactory = Callable[[str, BackendSettings, AppConfig], BackendDescriptor]


@dataclass(frozen=True)
class BackendType:
    """Factory plus the friendly name shown in listings."""

    factory: BackendFactory
    display_name: str


def default_backend_types() -> dict[str, BackendType]:
    """Return the backend types shipped with the tool."""
    from gemini_backend import create_gemini_backend
    from mock_backend import create_mock_backend

    return {
        "gemini": BackendType(create_gemini_backend, "Google Gemini"),
        "mock": BackendType(create_mock_backend, "Offline mock"),
    }


class BackendResolver:
    """Creates configured backends lazily and memoizes them by name."""

    def __init__(self, cfg: AppConfig, backend_types: dict[str, BackendType]) -> None:
        self.cfg = cfg
        self.backend_types = backend_types
        self._instances: dict[str, BackendDescriptor] = {}
        self._lock = threading.Lock()

    def backend_names(self) -> list[str]:
        return sorted(self.cfg.backends)

    def default_backend_name(self) -> str:
        return self.cfg.app.default_backend

    def display_name(self, backend_type: str) -> str:
        entry = self.backend_types.get(backend_type)
        return entry.display_name if entry else backend_type

    def resolve(self, name: str) -> BackendDescriptor:
        """
        Return the backend configured under `name`, creating it on first use.

        Raises:
            BackendInitError: unknown name, unregistered type, or factory failure.
        """
        with self._lock:
            existing = self._instances.get(name)
            if existing is not None:
                return existing

            settings = self.cfg.backend(name)
            if settings is None:
                raise BackendInitError(f"Unknown backend: {name}")

            entry = self.backend_types.get(settings.type)
            if entry is None:
                known = ", ".join(sorted(self.backend_types)) or "none"
                raise BackendInitError(
                    f"Backend {name!r} uses unregistered type {settings.type!r} (known: {known})"
                )

            try:
                instance = entry.factory(name, settings, self.cfg)
            except BackendInitError:
                raise
            except Exception as exc:
                raise BackendInitError(f"Failed to create backend {name!r}: {exc}") from exc

            self._instances[name] = instance
            return instance
