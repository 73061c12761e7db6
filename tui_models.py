"""Shared models for the Name Sprout Textual TUI."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from errors import GenerationErrorKind


class Phase(str, Enum):
    """Lifecycle of the current generation attempt."""

    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class Success:
    """A generation finished with a (possibly empty) list of names."""

    names: tuple[str, ...]


@dataclass(frozen=True)
class Failure:
    """A generation failed; `message` is shown to the user."""

    kind: GenerationErrorKind
    message: str


Outcome = Union[Success, Failure]


@dataclass
class SelectionState:
    """Everything the renderer needs to draw a frame."""

    suggestions: list[str] = field(default_factory=list)
    cursor: int = 0
    phase: Phase = Phase.LOADING
    status_message: str = ""
    last_error: str | None = None
    details_visible: bool = False
    spinner_tick: int = 0

    @property
    def selected(self) -> str | None:
        if not self.suggestions:
            return None
        return self.suggestions[self.cursor]


@dataclass(frozen=True)
class SessionDetails:
    """Static facts shown in the detail panel."""

    backend_name: str
    model_identifier: str | None
    kind: str
    style: str
    style_label: str
    description: str
