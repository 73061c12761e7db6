"""Pure rendering of SelectionState into a Rich-markup frame."""

from __future__ import annotations

from rich.markup import escape

from tui_models import Phase, SelectionState, SessionDetails

TITLE = "[b #ff5faf]🌱 Name Sprout[/]"
HELP_LINE = "Keys: ↑↓ choose  Enter/C copy  R regenerate  I details  Q quit"
NO_RESULTS = "No candidates were returned."
SPINNER_FRAMES = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")


def _faint(text: str) -> str:
    return f"[#808080]{escape(text)}[/]"


def _info(text: str) -> str:
    return f"[b #87afff]{escape(text)}[/]"


def _error(text: str) -> str:
    return f"[b #ff5f5f]{escape(text)}[/]"


def render_details(details: SessionDetails) -> str:
    model = details.model_identifier.strip() if details.model_identifier else ""
    lines = [
        f"Backend: {_info(details.backend_name)}  Model: {_info(model or 'not configured')}",
        f"Kind: {_info(details.kind)}",
    ]
    if details.style_label and details.style_label != details.style:
        lines.append(f"Style: {_info(details.style_label)} ({_faint(details.style)})")
    elif details.style:
        lines.append(f"Style: {_info(details.style)}")
    lines.append(f"Description: {_info(details.description)}")
    return "\n".join(lines)


def render_status(state: SelectionState) -> str:
    if state.phase is Phase.LOADING:
        frame = SPINNER_FRAMES[state.spinner_tick % len(SPINNER_FRAMES)]
        return f"[#ff5faf]{frame}[/] {escape(state.status_message)}"
    lines = []
    if state.last_error:
        lines.append(_error(state.last_error))
    if state.status_message:
        lines.append(_faint(state.status_message))
    return "\n".join(lines)


def render_suggestions(state: SelectionState) -> str:
    if state.phase is Phase.LOADING:
        return ""
    if not state.suggestions:
        return _error(NO_RESULTS)
    rows = []
    for idx, name in enumerate(state.suggestions):
        if idx == state.cursor:
            rows.append(f"▶ [b #ffffaf on #5f5fff]{escape(name)}[/]")
        else:
            rows.append(f"  [#9e9e9e]{escape(name)}[/]")
    return "\n".join(rows)


def render_frame(state: SelectionState, details: SessionDetails) -> str:
    """Build the full frame. Reads `state` only; equal inputs give equal output."""
    sections = [TITLE]
    toggle = "▼ Details (I)" if state.details_visible else "▶ Details (I)"
    sections.append(_faint(toggle))
    if state.details_visible:
        sections.append(render_details(details))

    status = render_status(state)
    if status:
        sections.append(status)

    suggestions = render_suggestions(state)
    if suggestions:
        sections.append(suggestions)

    sections.append(_faint(HELP_LINE))
    return "\n\n".join(sections)
