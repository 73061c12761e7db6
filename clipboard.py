"""Copy text to the system clipboard from the TUI."""

from __future__ import annotations

import platform
import shutil
import subprocess
from typing import Callable, Iterable, Optional

from errors import ClipboardError

TerminalWriter = Callable[[str], None]


def iter_clipboard_commands(system: str | None = None) -> Iterable[tuple[str, ...]]:
    system = (system or platform.system()).lower()
    if system == "darwin":
        if shutil.which("pbcopy"):
            yield ("pbcopy",)
        return
    if system == "windows":
        yield ("powershell", "-NoProfile", "-Command", "Set-Clipboard")
        return
    # Linux / BSD
    if shutil.which("wl-copy"):
        yield ("wl-copy",)
    if shutil.which("xclip"):
        yield ("xclip", "-selection", "clipboard")
    if shutil.which("xsel"):
        yield ("xsel", "--clipboard", "--input")


def copy_to_clipboard(text: str, terminal_writer: Optional[TerminalWriter] = None) -> str:
    """
    Copy `text` using the first platform command that works, then the
    terminal writer (OSC-52) if one is given. Returns the method used.

    Raises:
        ClipboardError: no method succeeded.
    """
    last_error = "no clipboard command found"
    for command in iter_clipboard_commands():
        try:
            subprocess.run(
                command,
                check=True,
                input=text.encode("utf-8"),
                capture_output=True,
                timeout=5,
            )
            return " ".join(command)
        except (OSError, subprocess.SubprocessError) as exc:
            last_error = f"{' '.join(command)}: {exc}"

    if terminal_writer is not None:
        try:
            terminal_writer(text)
            return "osc52"
        except Exception as exc:
            last_error = f"osc52: {exc}"

    raise ClipboardError(last_error)
