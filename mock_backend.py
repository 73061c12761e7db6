"""
Mock backend for trying the TUI without API keys.

Options (all strings, from the backend's `options:` mapping):
  names  comma-separated names to return
  delay  seconds to sleep before answering
  fail   a GenerationErrorKind value to raise instead of answering
"""

from __future__ import annotations

import re
import time

from backends import BackendDescriptor
from config import AppConfig, BackendSettings
from errors import BackendInitError, GenerationError, GenerationErrorKind
from naming import NameKind, NameRequest, NamingStyle

VERBS = ("get", "load", "fetch", "build", "resolve", "compute", "find", "make")
NOUNS = ("core", "kit", "hub", "forge", "works", "lab", "flow", "base")


def split_words(text: str) -> list[str]:
    return [word.lower() for word in re.findall(r"[A-Za-z0-9]+", text)]


def format_words(words: list[str], style: NamingStyle) -> str:
    if not words:
        return ""
    if style is NamingStyle.SNAKE_CASE:
        return "_".join(words)
    if style is NamingStyle.KEBAB_CASE:
        return "-".join(words)
    if style is NamingStyle.PASCAL_CASE:
        return "".join(word.capitalize() for word in words)
    return words[0] + "".join(word.capitalize() for word in words[1:])


def derive_names(req: NameRequest) -> list[str]:
    """Build deterministic names from the description's first words."""
    subject = split_words(req.description)[:2] or ["name"]
    prefixes = VERBS if req.kind is NameKind.FUNCTION else NOUNS
    names: list[str] = []
    for prefix in prefixes:
        if req.kind is NameKind.FUNCTION:
            words = [prefix, *subject]
        else:
            words = [*subject, prefix]
        name = format_words(words, req.naming_style)
        if name not in names:
            names.append(name)
        if len(names) >= max(req.count, 1):
            break
    return names


class MockBackend:
    """Answers from configured names or names derived from the request."""

    def __init__(
        self,
        name: str,
        names: list[str] | None = None,
        delay: float = 0.0,
        fail: GenerationErrorKind | None = None,
    ) -> None:
        self.name = name
        self.names = names
        self.delay = delay
        self.fail = fail
        self.calls = 0

    def generate_names(self, req: NameRequest, deadline: float) -> list[str]:
        self.calls += 1
        if self.delay > 0:
            time.sleep(self.delay)
        if self.fail is not None:
            raise GenerationError(self.fail, f"mock backend configured to fail ({self.fail.value})")
        if self.names is not None:
            return list(self.names)
        return derive_names(req)

    def describe(self) -> BackendDescriptor:
        return BackendDescriptor(
            name=self.name,
            type="mock",
            display_name="Offline mock",
            generate_names=self.generate_names,
            model_identifier="mock",
        )


def create_mock_backend(name: str, settings: BackendSettings, cfg: AppConfig) -> BackendDescriptor:
    options = settings.options
    names = None
    if "names" in options:
        names = [item.strip() for item in options["names"].split(",") if item.strip()]

    try:
        delay = float(options.get("delay", "0") or 0)
    except ValueError:
        raise BackendInitError(f"Backend {name!r}: delay must be a number") from None

    fail = None
    raw_fail = options.get("fail", "").strip()
    if raw_fail:
        try:
            fail = GenerationErrorKind(raw_fail)
        except ValueError:
            raise BackendInitError(f"Backend {name!r}: unknown fail kind {raw_fail!r}") from None

    return MockBackend(name, names=names, delay=delay, fail=fail).describe()
