"""
Naming Prompt Definitions
=========================

Loads per-style and per-kind prompt blocks from a YAML file and resolves
command-line style aliases.

File layout:
    styles:
      lower_camel:
        label: lowerCamelCase
        prompt: |
          ...
        aliases: [camel, lcc]
    kinds:
      function:
        label: Function
        prompt: |
          ...
        default_style: lower_camel
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from errors import ConfigError
from naming import NameKind, NamingStyle, parse_name_kind, parse_naming_style


@dataclass(frozen=True)
class StyleDefinition:
    """Prompt block for a single naming style."""

    label: str
    prompt: str
    aliases: tuple[str, ...] = ()


@dataclass(frozen=True)
class KindDefinition:
    """Prompt block for a name kind, with an optional preferred style."""

    label: str
    prompt: str
    default_style: NamingStyle | None = None


def normalize_alias(raw: str) -> str:
    """Lower-case and keep letters/digits only, so `Snake-Case` matches `snakecase`."""
    return "".join(ch for ch in raw.strip().lower() if ch.isalnum())


@dataclass
class NamingPrompts:
    """Style and kind definitions plus the alias lookup table."""

    styles: dict[NamingStyle, StyleDefinition] = field(default_factory=dict)
    kinds: dict[NameKind, KindDefinition] = field(default_factory=dict)
    aliases: dict[str, NamingStyle] = field(default_factory=dict)

    def definition(self, style: NamingStyle) -> StyleDefinition | None:
        return self.styles.get(style)

    def kind_definition(self, kind: NameKind) -> KindDefinition | None:
        return self.kinds.get(kind)

    def lookup(self, raw: str) -> tuple[NamingStyle, StyleDefinition] | None:
        """Resolve a user-typed style by id, label or alias."""
        style = self.aliases.get(normalize_alias(raw))
        if style is None:
            return None
        definition = self.styles.get(style)
        if definition is None:
            return None
        return style, definition

    def add_alias(self, style: NamingStyle, alias: str) -> None:
        normalized = normalize_alias(alias)
        if normalized:
            self.aliases[normalized] = style


def _as_mapping(raw: Any, what: str) -> dict:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Naming prompt {what} must be a mapping")
    return raw


def parse_naming_prompts(data: Any) -> NamingPrompts:
    """Build NamingPrompts from already-parsed YAML data, validating every entry."""
    data = _as_mapping(data, "file")
    raw_styles = _as_mapping(data.get("styles"), "styles")
    raw_kinds = _as_mapping(data.get("kinds"), "kinds")
    if not raw_styles:
        raise ConfigError("Naming prompt file defines no styles")

    lib = NamingPrompts()
    for key, raw in raw_styles.items():
        try:
            style = parse_naming_style(str(key))
        except ValueError as exc:
            raise ConfigError(f"Unsupported naming style {key!r}: {exc}") from exc
        raw = _as_mapping(raw, f"style {key!r}")
        prompt = str(raw.get("prompt") or "")
        if not prompt.strip():
            raise ConfigError(f"Naming style {key!r} has an empty prompt")
        aliases = tuple(str(alias) for alias in (raw.get("aliases") or []))
        definition = StyleDefinition(
            label=str(raw.get("label") or ""),
            prompt=prompt,
            aliases=aliases,
        )
        lib.styles[style] = definition

        lib.add_alias(style, style.value)
        if definition.label:
            lib.add_alias(style, definition.label)
        for alias in aliases:
            lib.add_alias(style, alias)

    for key, raw in raw_kinds.items():
        try:
            kind = parse_name_kind(str(key))
        except ValueError as exc:
            raise ConfigError(f"Unsupported name kind {key!r}: {exc}") from exc
        raw = _as_mapping(raw, f"kind {key!r}")
        prompt = str(raw.get("prompt") or "")
        if not prompt.strip():
            raise ConfigError(f"Name kind {key!r} has an empty prompt")
        default_style = None
        raw_default = str(raw.get("default_style") or "").strip()
        if raw_default:
            try:
                default_style = parse_naming_style(raw_default)
            except ValueError as exc:
                raise ConfigError(f"Name kind {key!r} has an invalid default_style: {exc}") from exc
        lib.kinds[kind] = KindDefinition(
            label=str(raw.get("label") or ""),
            prompt=prompt,
            default_style=default_style,
        )

    return lib


def load_naming_prompts(path: Path | str) -> NamingPrompts:
    """Read and validate the naming prompt YAML file at `path`."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read naming prompt file {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse naming prompt file {path}: {exc}") from exc
    return parse_naming_prompts(data)
