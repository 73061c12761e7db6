#!/usr/bin/env python3
"""Tests for clipboard command selection and fallbacks."""

import subprocess
import unittest
from unittest import mock

from clipboard import copy_to_clipboard, iter_clipboard_commands
from errors import ClipboardError


def which_only(*available):
    return lambda name: f"/usr/bin/{name}" if name in available else None


class TestIterClipboardCommands(unittest.TestCase):
    def test_linux_prefers_wayland_then_x11(self):
        with mock.patch("clipboard.shutil.which", side_effect=which_only("wl-copy", "xsel")):
            commands = list(iter_clipboard_commands("Linux"))
        self.assertEqual(commands, [("wl-copy",), ("xsel", "--clipboard", "--input")])

    def test_macos_uses_pbcopy(self):
        with mock.patch("clipboard.shutil.which", side_effect=which_only("pbcopy")):
            self.assertEqual(list(iter_clipboard_commands("Darwin")), [("pbcopy",)])

    def test_windows_uses_powershell(self):
        commands = list(iter_clipboard_commands("Windows"))
        self.assertEqual(commands[0][0], "powershell")


class TestCopyToClipboard(unittest.TestCase):
    def setUp(self):
        patcher = mock.patch("clipboard.platform.system", return_value="Linux")
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_first_working_command_is_used(self):
        with mock.patch("clipboard.shutil.which", side_effect=which_only("xclip")), mock.patch(
            "clipboard.subprocess.run"
        ) as run:
            method = copy_to_clipboard("loadUser")
        self.assertEqual(method, "xclip -selection clipboard")
        run.assert_called_once()
        self.assertEqual(run.call_args.kwargs["input"], b"loadUser")

    def test_failed_command_falls_through_to_terminal_writer(self):
        written = []
        failure = subprocess.CalledProcessError(1, ["wl-copy"])
        with mock.patch("clipboard.shutil.which", side_effect=which_only("wl-copy")), mock.patch(
            "clipboard.subprocess.run", side_effect=failure
        ):
            method = copy_to_clipboard("loadUser", terminal_writer=written.append)
        self.assertEqual(method, "osc52")
        self.assertEqual(written, ["loadUser"])

    def test_nothing_available_raises(self):
        with mock.patch("clipboard.shutil.which", return_value=None):
            with self.assertRaises(ClipboardError):
                copy_to_clipboard("loadUser")

    def test_terminal_writer_error_is_reported(self):
        def broken(text):
            raise RuntimeError("no tty")

        with mock.patch("clipboard.shutil.which", return_value=None):
            with self.assertRaises(ClipboardError) as ctx:
                copy_to_clipboard("loadUser", terminal_writer=broken)
        self.assertIn("no tty", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
