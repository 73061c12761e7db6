#!/usr/bin/env python3
"""Pilot tests for the Textual app wired to an offline backend."""

import unittest

from errors import GenerationErrorKind
from mock_backend import MockBackend
from naming import NameKind, NameRequest, NamingStyle
from tui_app import NameSproutApp
from tui_models import Phase

REQUEST = NameRequest(
    description="load a user",
    kind=NameKind.FUNCTION,
    count=3,
    naming_style=NamingStyle.LOWER_CAMEL,
)


class FakeClipboard:
    def __init__(self):
        self.copied = []

    def __call__(self, text):
        self.copied.append(text)


class TestNameSproutApp(unittest.IsolatedAsyncioTestCase):
    async def test_pick_and_copy_third_candidate(self):
        clipboard = FakeClipboard()
        backend = MockBackend("offline", names=["fetchUser", "getUser", "loadUser"]).describe()
        app = NameSproutApp(backend, REQUEST, clipboard=clipboard, timeout=5.0)

        async with app.run_test() as pilot:
            await app.workers.wait_for_complete()
            await pilot.pause()
            self.assertIs(app.controller.state.phase, Phase.READY)
            self.assertEqual(app.controller.state.suggestions, ["fetchUser", "getUser", "loadUser"])

            await pilot.press("down", "down", "enter")
            await pilot.pause()
            self.assertEqual(clipboard.copied, ["loadUser"])
            self.assertEqual(app.controller.state.status_message, "Copied: loadUser")

            await pilot.press("q")
            self.assertTrue(app.controller.finished)

    async def test_failure_then_retry(self):
        mock = MockBackend("offline", fail=GenerationErrorKind.TRANSPORT_ERROR)
        app = NameSproutApp(mock.describe(), REQUEST, clipboard=FakeClipboard(), timeout=5.0)

        async with app.run_test() as pilot:
            await app.workers.wait_for_complete()
            await pilot.pause()
            self.assertIs(app.controller.state.phase, Phase.FAILED)
            self.assertIn("transport_error", app.controller.state.last_error)

            mock.fail = None
            mock.names = ["retried"]
            await pilot.press("r")
            await app.workers.wait_for_complete()
            await pilot.pause()
            self.assertIs(app.controller.state.phase, Phase.READY)
            self.assertEqual(app.controller.state.suggestions, ["retried"])
            self.assertEqual(app.controller.generation, 2)
            self.assertEqual(mock.calls, 2)


if __name__ == "__main__":
    unittest.main()
