"""
Central Configuration Module
==============================

Loads the YAML application config (default backend, per-backend settings,
naming defaults) and runtime settings from .env via python-dotenv.

Usage:
    from config import get_settings, load_config
    cfg = load_config(resolve_config_path(get_settings().config_path))
    print(cfg.app.default_backend)
"""

import os
import sys
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from errors import ConfigError

# Load .env file if it exists
load_dotenv(dotenv_path=Path.cwd() / ".env")


DEFAULT_CONFIG_PATH = "config.yaml"
DEFAULT_MAX_SUGGESTIONS = 5
DEFAULT_NAMING_STYLE = "lower_camel"
DEFAULT_NAMING_PROMPT_FILE = "prompts/naming.yaml"
DEFAULT_RUN_LOG_DIR = "logs"

# Checked in order when a backend entry leaves api_key empty
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


def _parse_bool_env(value: str | None, default: bool) -> bool:
    """Parse boolean-like env values with sensible defaults."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _optional_float(raw: Any, key: str, backend: str) -> float | None:
    if raw is None:
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"Backend {backend!r}: {key} must be a number, got {raw!r}") from None


@dataclass
class BackendSettings:
    """Settings shared by every backend type. `options` carries type-specific extras."""

    type: str = ""
    api_key: str = ""
    model: str = ""
    endpoint: str = ""
    temperature: float | None = None
    top_k: float | None = None
    options: dict[str, str] = field(default_factory=dict)

    def resolved_api_key(self) -> str:
        """Return the configured key, falling back to well-known env vars."""
        if self.api_key.strip():
            return self.api_key.strip()
        for var in API_KEY_ENV_VARS:
            value = os.environ.get(var, "").strip()
            if value:
                return value
        return ""


@dataclass
class AppSettings:
    """The `app:` section of the config file."""

    default_backend: str = ""
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS
    default_naming_style: str = DEFAULT_NAMING_STYLE
    naming_prompt_file: str = DEFAULT_NAMING_PROMPT_FILE
    fallback_line_split: bool = True


@dataclass
class AppConfig:
    """Whole application configuration as loaded from one YAML file."""

    app: AppSettings
    backends: dict[str, BackendSettings]
    source: Path | None = None

    def backend(self, name: str) -> BackendSettings | None:
        return self.backends.get(name)

    def default_backend(self) -> tuple[str, BackendSettings]:
        name = self.app.default_backend
        return name, self.backends[name]

    @property
    def naming_prompt_path(self) -> Path:
        """Prompt file path; relative paths are anchored at the config file's directory."""
        path = Path(self.app.naming_prompt_file)
        if path.is_absolute() or self.source is None:
            return path
        return self.source.parent / path

    def validate(self) -> None:
        if not self.app.default_backend:
            raise ConfigError("Config is missing app.default_backend")
        settings = self.backends.get(self.app.default_backend)
        if settings is None:
            raise ConfigError(
                f"Default backend {self.app.default_backend!r} has no entry under backends"
            )
        if not settings.type:
            raise ConfigError(f"Backend {self.app.default_backend!r} is missing a type")


def _parse_backend(name: str, raw: Any) -> BackendSettings:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Backend {name!r} must be a mapping")
    options = raw.get("options") or {}
    if not isinstance(options, dict):
        raise ConfigError(f"Backend {name!r}: options must be a mapping")
    return BackendSettings(
        # type defaults to the entry name so `gemini: {...}` needs no type line
        type=str(raw.get("type") or name).strip(),
        api_key=str(raw.get("api_key") or ""),
        model=str(raw.get("model") or ""),
        endpoint=str(raw.get("endpoint") or ""),
        temperature=_optional_float(raw.get("temperature"), "temperature", name),
        top_k=_optional_float(raw.get("top_k"), "top_k", name),
        options={str(k): str(v) for k, v in options.items()},
    )


def _parse_app(raw: Any) -> AppSettings:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("The app section must be a mapping")
    try:
        max_suggestions = int(raw.get("max_suggestions") or 0)
    except (TypeError, ValueError):
        raise ConfigError(
            f"app.max_suggestions must be an integer, got {raw.get('max_suggestions')!r}"
        ) from None
    if max_suggestions <= 0:
        max_suggestions = DEFAULT_MAX_SUGGESTIONS
    fallback = raw.get("fallback_line_split", True)
    if isinstance(fallback, str):
        fallback = _parse_bool_env(fallback, True)
    return AppSettings(
        default_backend=str(raw.get("default_backend") or "").strip(),
        max_suggestions=max_suggestions,
        default_naming_style=str(raw.get("default_naming_style") or DEFAULT_NAMING_STYLE).strip(),
        naming_prompt_file=str(raw.get("naming_prompt_file") or DEFAULT_NAMING_PROMPT_FILE),
        fallback_line_split=bool(fallback),
    )


def load_config(path: Path | str) -> AppConfig:
    """
    Read, default and validate the YAML config at `path`.

    Raises:
        ConfigError: file missing or unreadable, invalid YAML, or failed validation.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    raw_backends = data.get("backends") or {}
    if not isinstance(raw_backends, dict):
        raise ConfigError("The backends section must be a mapping")

    cfg = AppConfig(
        app=_parse_app(data.get("app")),
        backends={str(name): _parse_backend(str(name), raw) for name, raw in raw_backends.items()},
        source=path,
    )
    cfg.validate()
    return cfg


def resolve_config_path(raw: str | Path | None) -> Path:
    """
    Locate the config file.

    Absolute paths and existing relative paths are returned unchanged; otherwise
    the same relative path next to the launched script is tried.
    """
    path = Path(raw) if raw else Path(DEFAULT_CONFIG_PATH)
    if path.is_absolute() or path.exists():
        return path
    script_dir = Path(sys.argv[0]).resolve().parent if sys.argv and sys.argv[0] else None
    if script_dir is not None:
        candidate = script_dir / path
        if candidate.exists():
            return candidate
    return path


@dataclass
class RuntimeSettings:
    """Process-level settings loaded from environment variables."""

    config_path: str = DEFAULT_CONFIG_PATH
    run_log_enabled: bool = False
    run_log_dir: str = DEFAULT_RUN_LOG_DIR


@lru_cache(maxsize=1)
def get_settings() -> RuntimeSettings:
    """
    Return the singleton RuntimeSettings loaded from environment variables.

    Call reload_settings() to re-read after writing a new .env.
    """
    return RuntimeSettings(
        config_path=os.environ.get("NAMESPROUT_CONFIG", DEFAULT_CONFIG_PATH),
        run_log_enabled=_parse_bool_env(os.environ.get("NAMESPROUT_RUN_LOG_ENABLED"), False),
        run_log_dir=os.environ.get("NAMESPROUT_RUN_LOG_DIR", DEFAULT_RUN_LOG_DIR),
    )


def reload_settings() -> RuntimeSettings:
    """Reload runtime settings (re-reads .env, clears cache)."""
    get_settings.cache_clear()
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=True)
    return get_settings()
