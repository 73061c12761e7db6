"""Name kinds, naming styles and the immutable generation request."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NameKind(str, Enum):
    """Semantic category of the name being generated."""

    FUNCTION = "function"
    VARIABLE = "variable"
    PROJECT = "project"


class NamingStyle(str, Enum):
    """Formatting convention requested for generated names."""

    LOWER_CAMEL = "lower_camel"
    PASCAL_CASE = "pascal_case"
    SNAKE_CASE = "snake_case"
    KEBAB_CASE = "kebab_case"


def parse_name_kind(raw: str) -> NameKind:
    """Convert a literal kind id into NameKind, raising ValueError when unknown."""
    try:
        return NameKind(raw.strip())
    except ValueError:
        raise ValueError(f"Unsupported name kind: {raw}") from None


def parse_naming_style(raw: str) -> NamingStyle:
    """Convert a literal style id into NamingStyle, raising ValueError when unknown."""
    try:
        return NamingStyle(raw.strip())
    except ValueError:
        raise ValueError(f"Unsupported naming style: {raw}") from None


@dataclass(frozen=True)
class NameRequest:
    """Everything a backend needs to produce candidate names. Built once per run."""

    description: str
    kind: NameKind
    count: int
    naming_style: NamingStyle
    kind_label: str = ""
    kind_prompt: str = ""
    naming_style_label: str = ""
    naming_style_prompt: str = ""
