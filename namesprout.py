#!/usr/bin/env python3
"""
Name Sprout
===========

Ask a generative backend for candidate names and pick one in the terminal.

Example Usage:
    # Function names in the kind's default style:
    python namesprout.py -f "load a user profile from the cache"

    # Project names in snake_case with a specific config file:
    python namesprout.py -p --style snake "static site generator for notebooks" --config ./config.yaml

    # Try it offline with a mock backend entry from config.yaml:
    python namesprout.py -v --backend offline "retry counter"
"""

from __future__ import annotations

import argparse
import sys

from backends import BackendResolver, default_backend_types
from config import get_settings, load_config, resolve_config_path
from errors import BackendInitError, ConfigError
from generation import warmup_backend
from naming import NameKind
from naming_prompts import load_naming_prompts
from tui_app import NameSproutApp
from tui_services import build_name_request, create_session_logger

VERSION = "0.1.0"


def create_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="namesprout",
        description="Generate candidate names with a language model and copy your favorite.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Keys:
  Up/Down  choose      Enter/C  copy      R  regenerate
  I        details     Q/Esc    quit

Authentication:
  Put api_key in config.yaml or set GEMINI_API_KEY (a .env file works too).
        """,
    )
    kind = parser.add_mutually_exclusive_group()
    kind.add_argument("-f", dest="kind", action="store_const", const=NameKind.FUNCTION, help="Generate function names")
    kind.add_argument("-v", dest="kind", action="store_const", const=NameKind.VARIABLE, help="Generate variable names")
    kind.add_argument("-p", dest="kind", action="store_const", const=NameKind.PROJECT, help="Generate project names")
    parser.add_argument(
        "--style",
        type=str,
        default=None,
        help="Naming style or alias (lowerCamelCase, PascalCase, snake_case, kebab-case, ...)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=settings.config_path,
        help=f"Config file path (default: {settings.config_path} or NAMESPROUT_CONFIG)",
    )
    parser.add_argument(
        "--backend",
        type=str,
        default=None,
        help="Backend entry to use instead of app.default_backend",
    )
    parser.add_argument(
        "--no-alt-screen",
        action="store_true",
        help="Render inline instead of switching to the alternate screen",
    )
    parser.add_argument(
        "--list-backends",
        action="store_true",
        help="List configured backends and exit",
    )
    parser.add_argument("--version", action="store_true", help="Print version information and exit")
    parser.add_argument("description", nargs="*", help="What the name is for")
    return parser


def fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"Name Sprout TUI {VERSION}")
        return 0

    try:
        cfg = load_config(resolve_config_path(args.config))
    except ConfigError as exc:
        return fail(f"Failed to load config: {exc}")

    resolver = BackendResolver(cfg, default_backend_types())

    if args.list_backends:
        for name in resolver.backend_names():
            settings = cfg.backends[name]
            marker = "*" if name == resolver.default_backend_name() else " "
            print(f"{marker} {name:<16} {resolver.display_name(settings.type)}")
        return 0

    if args.kind is None:
        return fail("Specify exactly one of -f, -v or -p to choose the name kind.")

    description = " ".join(args.description).strip()
    if not description:
        return fail('Describe what needs a name, e.g.: namesprout -f "parse a config file"')

    try:
        prompts = load_naming_prompts(cfg.naming_prompt_path)
        request = build_name_request(description, args.kind, args.style, cfg, prompts)
    except ConfigError as exc:
        return fail(f"Failed to load naming prompts: {exc}")

    backend_name = args.backend or resolver.default_backend_name()
    try:
        backend = resolver.resolve(backend_name)
        warmup_backend(backend)
    except BackendInitError as exc:
        return fail(f"Failed to initialize backend: {exc}")

    app = NameSproutApp(backend, request, run_logger=create_session_logger(backend, request))
    app.run(inline=args.no_alt_screen)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
