"""Pure rendering of the selection state."""

from __future__ import annotations

from rich.text import Text

from uzzy.tmux.naming import project_name
from uzzy.ui import styles
from uzzy.ui.state import PickerState, SelectionState, Step

_HELP_LINE = "↑/↓ move • type to filter • enter select • esc quit"


def _truncate(label: str, width: int) -> str:
    if width <= 1 or len(label) <= width:
        return label
    return label[: width - 1] + "…"


def _loading(state: SelectionState) -> Text:
    frame = styles.SPINNER_FRAMES[state.frame % len(styles.SPINNER_FRAMES)]
    what = "projects" if state.step is Step.LOADING_PROJECTS else "layouts"
    text = Text()
    text.append(styles.APP_TITLE, style=styles.TITLE)
    text.append("\n\n")
    text.append(frame, style=styles.SPINNER)
    text.append(f" Loading {what}...")
    return text


def _picker(
    state: SelectionState,
    picker: PickerState,
    *,
    headings: list[str],
    noun: str,
    empty_hint: str,
) -> Text:
    text = Text()
    text.append(styles.APP_TITLE, style=styles.TITLE)
    text.append("\n\n")
    for heading in headings:
        text.append(heading, style=styles.SUBTITLE)
        text.append("\n")
    text.append("\n")
    text.append("> ", style=styles.FILTER)
    text.append(picker.query)
    text.append("\n\n")

    visible = picker.visible
    if not picker.items:
        text.append(empty_hint, style=styles.DIM)
        text.append("\n")
    elif not visible:
        text.append("No matches", style=styles.DIM)
        text.append("\n")
    else:
        rows = state.page_size
        cursor = min(picker.cursor, len(visible) - 1)
        start = (cursor // rows) * rows
        label_width = max(1, state.width - len(styles.CURSOR_MARKER))
        for index, item in enumerate(visible[start : start + rows], start=start):
            label = _truncate(item.label, label_width)
            if index == cursor:
                text.append(styles.CURSOR_MARKER + label, style=styles.SELECTED)
            else:
                text.append("  " + label, style=styles.NORMAL)
            text.append("\n")

    text.append("\n")
    counter = f"{len(visible)}/{len(picker.items)} {noun}"
    if visible and len(visible) > state.page_size:
        pages = (len(visible) + state.page_size - 1) // state.page_size
        page = min(picker.cursor, len(visible) - 1) // state.page_size + 1
        counter += f" • page {page}/{pages}"
    text.append(counter, style=styles.DIM)
    text.append("\n")
    text.append(_HELP_LINE, style=styles.HELP)
    return text


def render(state: SelectionState) -> Text:
    if state.quitting:
        return Text("")
    if state.error is not None:
        return Text(f"Error: {state.error}", style=styles.ERROR)

    if state.step in (Step.LOADING_PROJECTS, Step.LOADING_LAYOUTS):
        return _loading(state)
    if state.step is Step.SELECT_PROJECT:
        return _picker(
            state,
            state.projects,
            headings=["Select a project"],
            noun="projects",
            empty_hint="No projects found. Check scan_paths in the config file.",
        )
    if state.step is Step.SELECT_LAYOUT:
        return _picker(
            state,
            state.layouts,
            headings=[f"Project: {project_name(state.selected_path)}", "Select a layout"],
            noun="layouts",
            empty_hint="No layouts found. Run 'uzzy --init' to create default layouts.",
        )
    return Text("")
