"""Service-layer helpers for the Name Sprout TUI."""

from __future__ import annotations

from pathlib import Path

from backends import BackendDescriptor
from config import AppConfig, get_settings
from errors import ConfigError
from naming import NameKind, NameRequest, NamingStyle, parse_naming_style
from naming_prompts import NamingPrompts, StyleDefinition
from run_logging import RunLogger
from tui_models import SessionDetails


def resolve_style(
    kind: NameKind,
    style_flag: str | None,
    cfg: AppConfig,
    prompts: NamingPrompts,
) -> tuple[NamingStyle, StyleDefinition]:
    """Pick the style: explicit flag, then the kind's default, then the config default."""
    raw_flag = (style_flag or "").strip()
    if raw_flag:
        found = prompts.lookup(raw_flag)
        if found is None:
            raise ConfigError(f"Unsupported naming style: {raw_flag}")
        return found

    kind_def = prompts.kind_definition(kind)
    if kind_def is not None and kind_def.default_style is not None:
        style = kind_def.default_style
    else:
        try:
            style = parse_naming_style(cfg.app.default_naming_style)
        except ValueError as exc:
            raise ConfigError(f"Invalid app.default_naming_style: {exc}") from exc

    definition = prompts.definition(style)
    if definition is None:
        raise ConfigError(f"Naming prompt file has no definition for default style {style.value}")
    return style, definition


def build_name_request(
    description: str,
    kind: NameKind,
    style_flag: str | None,
    cfg: AppConfig,
    prompts: NamingPrompts,
) -> NameRequest:
    """Assemble the immutable request for this run."""
    style, definition = resolve_style(kind, style_flag, cfg, prompts)
    kind_def = prompts.kind_definition(kind)
    kind_label = kind_def.label.strip() if kind_def is not None else ""
    return NameRequest(
        description=description,
        kind=kind,
        count=cfg.app.max_suggestions,
        naming_style=style,
        kind_label=kind_label or kind.value,
        kind_prompt=kind_def.prompt if kind_def is not None else "",
        naming_style_label=definition.label or style.value,
        naming_style_prompt=definition.prompt,
    )


def session_details(backend: BackendDescriptor, request: NameRequest) -> SessionDetails:
    return SessionDetails(
        backend_name=backend.name,
        model_identifier=backend.model_identifier,
        kind=request.kind.value,
        style=request.naming_style.value,
        style_label=request.naming_style_label,
        description=request.description,
    )


def create_session_logger(backend: BackendDescriptor, request: NameRequest) -> RunLogger:
    """Return a session logger honoring NAMESPROUT_RUN_LOG_* settings."""
    settings = get_settings()
    return RunLogger.create(
        enabled=settings.run_log_enabled,
        base_dir=Path(settings.run_log_dir),
        backend=backend.name,
        model=backend.model_identifier or "",
        kind=request.kind.value,
    )


__all__ = [
    "resolve_style",
    "build_name_request",
    "session_details",
    "create_session_logger",
]
