#!/usr/bin/env python3
"""Textual TUI that requests candidate names and lets the user copy one."""

from __future__ import annotations

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer
from textual.worker import get_current_worker

from backends import BackendDescriptor
from clipboard import copy_to_clipboard
from generation import GENERATION_TIMEOUT, GenerationTask
from naming import NameRequest
from run_logging import RunLogger
from tui_controller import ClipboardWriter, Command, InteractionController, Quit, StartGeneration
from tui_models import Outcome
from tui_services import session_details
from tui_widgets import SproutFrame

SPINNER_INTERVAL = 0.1


class NameSproutApp(App[None]):
    """Keyboard-only browser for generated names."""

    TITLE = "Name Sprout"

    CSS = """
    Screen {
      layout: vertical;
    }
    #frame {
      height: 1fr;
      padding: 1 2;
    }
    """

    BINDINGS = [
        Binding("up", "dispatch_key('up')", "Up", show=False, priority=True),
        Binding("down", "dispatch_key('down')", "Down", show=False, priority=True),
        Binding("enter", "dispatch_key('enter')", "Copy", priority=True),
        Binding("c,C", "dispatch_key('c')", "Copy", show=False, priority=True),
        Binding("r,R", "dispatch_key('r')", "Regenerate", priority=True),
        Binding("i,I", "dispatch_key('i')", "Details", priority=True),
        Binding("q,Q", "dispatch_key('q')", "Quit", priority=True),
        Binding("escape", "dispatch_key('escape')", "Quit", show=False, priority=True),
        Binding("ctrl+c", "dispatch_key('ctrl+c')", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        backend: BackendDescriptor,
        request: NameRequest,
        run_logger: RunLogger | None = None,
        clipboard: ClipboardWriter | None = None,
        timeout: float = GENERATION_TIMEOUT,
    ) -> None:
        super().__init__()
        self.backend = backend
        self.request = request
        self.timeout = timeout
        self.details = session_details(backend, request)
        self.controller = InteractionController(
            clipboard=clipboard or self._write_clipboard,
            run_logger=run_logger,
        )

    def compose(self) -> ComposeResult:
        yield SproutFrame(self.details, id="frame")
        yield Footer()

    def on_mount(self) -> None:
        self._run_commands(self.controller.start())
        self.set_interval(SPINNER_INTERVAL, self._tick)

    def _write_clipboard(self, text: str) -> None:
        copy_to_clipboard(text, terminal_writer=self.copy_to_clipboard)

    def _refresh_frame(self) -> None:
        self.query_one("#frame", SproutFrame).show(self.controller.state)

    def _tick(self) -> None:
        if self.controller.tick():
            self._refresh_frame()

    def _run_commands(self, commands: list[Command]) -> None:
        for command in commands:
            if isinstance(command, StartGeneration):
                self.run_generation_worker(command.generation)
            elif isinstance(command, Quit):
                self.exit(None)
                return
        self._refresh_frame()

    def action_dispatch_key(self, key: str) -> None:
        self._run_commands(self.controller.handle_key(key))

    def _deliver_outcome(self, generation: int, outcome: Outcome) -> None:
        if self.controller.handle_outcome(generation, outcome):
            self._refresh_frame()

    @work(thread=True, group="generation")
    def run_generation_worker(self, generation: int) -> None:
        worker = get_current_worker()
        task = GenerationTask(self.backend, self.request, timeout=self.timeout)
        outcome = task.run(should_abort=lambda: worker.is_cancelled)
        if worker.is_cancelled or self.controller.finished:
            return
        self.call_from_thread(self._deliver_outcome, generation, outcome)
