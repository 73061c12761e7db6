#!/usr/bin/env python3
"""Tests for TUI service helpers."""

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from backends import BackendDescriptor
from config import AppConfig, AppSettings, BackendSettings, RuntimeSettings
from errors import ConfigError
from naming import NameKind, NamingStyle
from naming_prompts import parse_naming_prompts
from tui_services import build_name_request, create_session_logger, resolve_style, session_details


def make_prompts():
    return parse_naming_prompts(
        {
            "styles": {
                "lower_camel": {"label": "lowerCamelCase", "prompt": "camel rules", "aliases": ["camel"]},
                "snake_case": {"label": "snake_case", "prompt": "snake rules", "aliases": ["snake"]},
                "kebab_case": {"prompt": "kebab rules"},
            },
            "kinds": {
                "function": {"label": "Function", "prompt": "verbs", "default_style": "lower_camel"},
                "variable": {"prompt": "nouns"},
                "project": {"label": "Project", "prompt": "brandable", "default_style": "kebab_case"},
            },
        }
    )


def make_config(default_style="snake_case", max_suggestions=6):
    return AppConfig(
        app=AppSettings(
            default_backend="offline",
            max_suggestions=max_suggestions,
            default_naming_style=default_style,
        ),
        backends={"offline": BackendSettings(type="mock")},
    )


class TestResolveStyle(unittest.TestCase):
    def test_explicit_flag_wins(self):
        style, definition = resolve_style(NameKind.FUNCTION, "snake", make_config(), make_prompts())
        self.assertIs(style, NamingStyle.SNAKE_CASE)
        self.assertEqual(definition.prompt, "snake rules")

    def test_kind_default_beats_config_default(self):
        style, _ = resolve_style(NameKind.PROJECT, None, make_config(), make_prompts())
        self.assertIs(style, NamingStyle.KEBAB_CASE)

    def test_config_default_used_when_kind_has_none(self):
        style, _ = resolve_style(NameKind.VARIABLE, "  ", make_config(), make_prompts())
        self.assertIs(style, NamingStyle.SNAKE_CASE)

    def test_unknown_flag_is_rejected(self):
        with self.assertRaises(ConfigError) as ctx:
            resolve_style(NameKind.FUNCTION, "hungarian", make_config(), make_prompts())
        self.assertIn("hungarian", str(ctx.exception))

    def test_invalid_config_default_is_rejected(self):
        with self.assertRaises(ConfigError):
            resolve_style(NameKind.VARIABLE, None, make_config(default_style="camel"), make_prompts())

    def test_default_style_without_definition_is_rejected(self):
        with self.assertRaises(ConfigError):
            resolve_style(NameKind.VARIABLE, None, make_config(default_style="pascal_case"), make_prompts())


class TestBuildNameRequest(unittest.TestCase):
    def test_request_carries_labels_and_prompts(self):
        req = build_name_request("load a user", NameKind.FUNCTION, None, make_config(), make_prompts())
        self.assertEqual(req.description, "load a user")
        self.assertEqual(req.count, 6)
        self.assertIs(req.naming_style, NamingStyle.LOWER_CAMEL)
        self.assertEqual(req.kind_label, "Function")
        self.assertEqual(req.kind_prompt, "verbs")
        self.assertEqual(req.naming_style_label, "lowerCamelCase")
        self.assertEqual(req.naming_style_prompt, "camel rules")

    def test_missing_labels_fall_back_to_ids(self):
        req = build_name_request("retry count", NameKind.VARIABLE, "kebab_case", make_config(), make_prompts())
        self.assertEqual(req.kind_label, "variable")
        self.assertEqual(req.naming_style_label, "kebab_case")


class TestSessionHelpers(unittest.TestCase):
    def setUp(self):
        self.backend = BackendDescriptor(
            name="offline",
            type="mock",
            display_name="Offline mock",
            generate_names=lambda req, deadline: [],
            model_identifier="mock",
        )
        self.request = build_name_request("cache", NameKind.VARIABLE, None, make_config(), make_prompts())

    def test_session_details(self):
        details = session_details(self.backend, self.request)
        self.assertEqual(details.backend_name, "offline")
        self.assertEqual(details.model_identifier, "mock")
        self.assertEqual(details.kind, "variable")
        self.assertEqual(details.style, "snake_case")
        self.assertEqual(details.description, "cache")

    def test_create_session_logger_honors_settings(self):
        with tempfile.TemporaryDirectory() as tmp:
            settings = RuntimeSettings(run_log_enabled=True, run_log_dir=tmp)
            with mock.patch("tui_services.get_settings", return_value=settings):
                logger = create_session_logger(self.backend, self.request)
            self.assertTrue(logger.enabled)
            assert logger.log_file is not None
            self.assertEqual(logger.log_file.parent, Path(tmp))
            self.assertIn("offline", logger.log_file.name)

    def test_create_session_logger_disabled_by_default(self):
        with mock.patch("tui_services.get_settings", return_value=RuntimeSettings()):
            logger = create_session_logger(self.backend, self.request)
        self.assertFalse(logger.enabled)
        self.assertIsNone(logger.log_file)


if __name__ == "__main__":
    unittest.main()
