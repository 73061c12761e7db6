"""Reusable Textual widgets for the Name Sprout TUI."""

from textual.widgets import Static

from tui_models import SelectionState, SessionDetails
from tui_render import render_frame


class SproutFrame(Static):
    """Displays the rendered frame; redraws only when the text changes."""

    def __init__(self, details: SessionDetails, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.details = details
        self._last_frame: str | None = None

    def show(self, state: SelectionState) -> None:
        frame = render_frame(state, self.details)
        if frame == self._last_frame:
            return
        self._last_frame = frame
        self.update(frame)
