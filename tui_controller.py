"""
Interaction Controller
======================

State machine behind the TUI. It consumes key presses and generation
outcomes, mutates SelectionState, and returns commands for the app to run
(start a generation worker, quit). It never touches Textual directly, so it
is driven the same way from the app and from tests.

Each issued generation gets a number; an outcome is applied only when it
carries the number of the most recently issued generation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

from errors import ClipboardError
from name_parsing import sanitize_names
from run_logging import RunLogger
from tui_models import Outcome, Phase, SelectionState, Success

WAITING_STATUS = "Waiting for the model to respond..."
FAILED_STATUS = "Generation failed. Check the configuration or press R to retry."
NO_CANDIDATES_STATUS = "No candidates returned. Press R to retry."

QUIT_KEYS = frozenset({"q", "Q", "escape", "ctrl+c"})
RETRY_KEYS = frozenset({"r", "R"})
COPY_KEYS = frozenset({"enter", "c", "C"})
DETAIL_KEYS = frozenset({"i", "I"})
UP_KEYS = frozenset({"up"})
DOWN_KEYS = frozenset({"down"})


@dataclass(frozen=True)
class StartGeneration:
    """Run a generation task tagged with `generation`."""

    generation: int


@dataclass(frozen=True)
class Quit:
    """Leave the run loop."""


Command = Union[StartGeneration, Quit]
ClipboardWriter = Callable[[str], object]


def ready_status(count: int) -> str:
    noun = "candidate" if count == 1 else "candidates"
    return f"Generated {count} {noun}. Use ↑↓ to choose, Enter/C to copy."


def copied_status(name: str) -> str:
    return f"Copied: {name}"


class InteractionController:
    """Owns SelectionState; see module docstring for the transition rules."""

    def __init__(self, clipboard: ClipboardWriter, run_logger: RunLogger | None = None) -> None:
        self.state = SelectionState(phase=Phase.LOADING, status_message=WAITING_STATUS)
        self.clipboard = clipboard
        self.run_logger = run_logger or RunLogger.disabled()
        self.generation = 0
        self.finished = False

    def start(self) -> list[Command]:
        """Issue the initial generation."""
        self.run_logger.log_event(event_type="lifecycle", message="session_started")
        return [self._issue_generation()]

    def _issue_generation(self) -> StartGeneration:
        self.generation += 1
        self.run_logger.log_event(
            event_type="generation",
            message="generation_started",
            generation=self.generation,
        )
        return StartGeneration(self.generation)

    def handle_key(self, key: str) -> list[Command]:
        if self.finished:
            return []

        if key in QUIT_KEYS:
            self.finished = True
            self.run_logger.log_event(event_type="lifecycle", message="session_finished")
            return [Quit()]

        if key in DETAIL_KEYS:
            self.state.details_visible = not self.state.details_visible
            return []

        if self.state.phase is Phase.LOADING:
            return []

        if key in RETRY_KEYS:
            return [self._retry()]
        if key in UP_KEYS:
            self._move_cursor(-1)
        elif key in DOWN_KEYS:
            self._move_cursor(1)
        elif key in COPY_KEYS:
            self._copy_selected()
        return []

    def handle_outcome(self, generation: int, outcome: Outcome) -> bool:
        """Apply `outcome` if it belongs to the latest generation. Returns whether it was applied."""
        if self.finished:
            return False
        if generation != self.generation or self.state.phase is not Phase.LOADING:
            self.run_logger.log_event(
                event_type="generation",
                message="generation_discarded",
                generation=generation,
                meta={"current": self.generation},
            )
            return False

        state = self.state
        if isinstance(outcome, Success):
            names = sanitize_names(outcome.names)
            state.suggestions = names
            state.cursor = 0
            state.last_error = None
            state.phase = Phase.READY
            state.status_message = ready_status(len(names)) if names else NO_CANDIDATES_STATUS
            self.run_logger.log_event(
                event_type="generation",
                message="generation_finished",
                generation=generation,
                meta={"outcome": "success", "count": len(names)},
            )
            return True

        state.phase = Phase.FAILED
        state.last_error = outcome.message or outcome.kind.value
        state.status_message = FAILED_STATUS
        self.run_logger.log_event(
            event_type="generation",
            message="generation_finished",
            generation=generation,
            meta={"outcome": "failure", "kind": outcome.kind.value, "error": outcome.message},
        )
        return True

    def tick(self) -> bool:
        """Advance the spinner. Returns True when a redraw is needed."""
        if self.finished or self.state.phase is not Phase.LOADING:
            return False
        self.state.spinner_tick += 1
        return True

    def _retry(self) -> StartGeneration:
        state = self.state
        state.phase = Phase.LOADING
        state.last_error = None
        state.suggestions = []
        state.cursor = 0
        state.spinner_tick = 0
        state.status_message = WAITING_STATUS
        return self._issue_generation()

    def _move_cursor(self, delta: int) -> None:
        count = len(self.state.suggestions)
        if count == 0:
            return
        self.state.cursor = (self.state.cursor + delta) % count

    def _copy_selected(self) -> None:
        name = self.state.selected
        if name is None:
            return
        try:
            self.clipboard(name)
        except ClipboardError as exc:
            self.state.last_error = f"Copy failed: {exc}"
            self.run_logger.log_event(event_type="clipboard", message="copy_failed", meta={"error": str(exc)})
            return
        self.state.last_error = None
        self.state.status_message = copied_status(name)
        self.run_logger.log_event(event_type="clipboard", message="copied", meta={"name": name})
