"""Selection state machine driving the picker.

The machine is a pure function ``update(state, event) -> (state, effect)``.
The host feeds it key, resize, tick and discovery events one at a time and
carries out the returned effect (start a discovery, or exit the loop).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from functools import cached_property
from typing import Union

from uzzy.errors import UzzyError
from uzzy.tmux.layouts import Layout
from uzzy.ui.filtering import PickerItem, filter_items


class Step(Enum):
    LOADING_PROJECTS = "loading_projects"
    SELECT_PROJECT = "select_project"
    LOADING_LAYOUTS = "loading_layouts"
    SELECT_LAYOUT = "select_layout"
    DONE = "done"


LOADING_STEPS = frozenset({Step.LOADING_PROJECTS, Step.LOADING_LAYOUTS})

CANCEL_KEYS = frozenset({"ctrl+c", "escape"})
CONFIRM_KEYS = frozenset({"enter"})
UP_KEYS = frozenset({"up", "ctrl+p", "ctrl+k"})
DOWN_KEYS = frozenset({"down", "ctrl+n", "ctrl+j"})
PAGE_UP_KEYS = frozenset({"pageup"})
PAGE_DOWN_KEYS = frozenset({"pagedown"})
FIRST_KEYS = frozenset({"home"})
LAST_KEYS = frozenset({"end"})
DELETE_KEYS = frozenset({"backspace", "ctrl+h"})
CLEAR_KEYS = frozenset({"ctrl+u"})

# Lines taken by title, subtitles, filter prompt, counters and help.
LIST_CHROME_LINES = 10


# Events


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class KeyPressed:
    key: str
    character: str | None = None


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class ProjectsLoaded:
    projects: tuple[str, ...]


@dataclass(frozen=True)
class LayoutsLoaded:
    layouts: tuple[Layout, ...]


@dataclass(frozen=True)
class LoadFailed:
    error: UzzyError


Event = Union[Resized, KeyPressed, Tick, ProjectsLoaded, LayoutsLoaded, LoadFailed]


# Effects


@dataclass(frozen=True)
class LoadProjects:
    pass


@dataclass(frozen=True)
class LoadLayouts:
    pass


@dataclass(frozen=True)
class Exit:
    pass


Effect = Union[LoadProjects, LoadLayouts, Exit]


@dataclass(frozen=True)
class PickerState:
    items: tuple[PickerItem, ...] = ()
    query: str = ""
    cursor: int = 0

    # Computed once per instance; every edit produces a new PickerState.
    @cached_property
    def visible(self) -> tuple[PickerItem, ...]:
        return filter_items(self.items, self.query)

    def highlighted(self) -> PickerItem | None:
        visible = self.visible
        if not visible:
            return None
        return visible[min(self.cursor, len(visible) - 1)]

    def move_to(self, index: int) -> PickerState:
        count = len(self.visible)
        if count == 0:
            return replace(self, cursor=0)
        return replace(self, cursor=max(0, min(index, count - 1)))

    def move(self, delta: int) -> PickerState:
        return self.move_to(self.cursor + delta)

    def with_query(self, query: str) -> PickerState:
        return replace(self, query=query, cursor=0)


@dataclass(frozen=True)
class SelectionState:
    step: Step = Step.LOADING_PROJECTS
    selected_path: str = ""
    selected_layout: str = ""
    error: UzzyError | None = None
    quitting: bool = False
    projects: PickerState = field(default_factory=PickerState)
    layouts: PickerState = field(default_factory=PickerState)
    preferred_layout: str = ""
    home: str = ""
    width: int = 80
    height: int = 24
    frame: int = 0

    @property
    def loading(self) -> bool:
        return self.step in LOADING_STEPS

    @property
    def finished(self) -> bool:
        return self.quitting or self.error is not None or self.step is Step.DONE

    @property
    def should_attach(self) -> bool:
        return (
            self.step is Step.DONE
            and not self.quitting
            and self.error is None
            and bool(self.selected_path)
            and bool(self.selected_layout)
        )

    @property
    def page_size(self) -> int:
        return max(1, self.height - LIST_CHROME_LINES)


def display_path(path: str, home: str) -> str:
    """Shorten ``path`` by replacing the home directory prefix with ``~``."""
    home = home.rstrip("/")
    if not home:
        return path
    if path == home:
        return "~"
    if path.startswith(home + "/"):
        return "~" + path[len(home):]
    return path


def initial_state(
    *,
    project_path: str = "",
    layout_name: str = "",
    preferred_layout: str = "",
    home: str = "",
) -> tuple[SelectionState, Effect | None]:
    state = SelectionState(
        selected_path=project_path,
        selected_layout=layout_name,
        preferred_layout=preferred_layout,
        home=home,
    )
    if project_path and layout_name:
        return replace(state, step=Step.DONE), None
    if project_path:
        return replace(state, step=Step.LOADING_LAYOUTS), LoadLayouts()
    return state, LoadProjects()


def _edit_picker(picker: PickerState, event: KeyPressed, page_size: int) -> PickerState:
    key = event.key
    if key in UP_KEYS:
        return picker.move(-1)
    if key in DOWN_KEYS:
        return picker.move(1)
    if key in PAGE_UP_KEYS:
        return picker.move(-page_size)
    if key in PAGE_DOWN_KEYS:
        return picker.move(page_size)
    if key in FIRST_KEYS:
        return picker.move_to(0)
    if key in LAST_KEYS:
        return picker.move_to(len(picker.visible) - 1)
    if key in DELETE_KEYS:
        return picker.with_query(picker.query[:-1]) if picker.query else picker
    if key in CLEAR_KEYS:
        return picker.with_query("")
    character = event.character
    if character and len(character) == 1 and character.isprintable():
        return picker.with_query(picker.query + character)
    return picker


def _layout_cursor(layouts: tuple[Layout, ...], *names: str) -> int:
    for name in names:
        if not name:
            continue
        for index, layout in enumerate(layouts):
            if layout.name == name:
                return index
    return 0


def _on_key(state: SelectionState, event: KeyPressed) -> tuple[SelectionState, Effect | None]:
    if state.step is Step.SELECT_PROJECT:
        if event.key in CONFIRM_KEYS:
            item = state.projects.highlighted()
            if item is None:
                return state, None
            return replace(state, selected_path=item.value, step=Step.LOADING_LAYOUTS, frame=0), LoadLayouts()
        projects = _edit_picker(state.projects, event, state.page_size)
        if projects is state.projects:
            return state, None
        return replace(state, projects=projects), None

    if state.step is Step.SELECT_LAYOUT:
        if event.key in CONFIRM_KEYS:
            item = state.layouts.highlighted()
            if item is None:
                return state, None
            return replace(state, selected_layout=item.value, step=Step.DONE), Exit()
        layouts = _edit_picker(state.layouts, event, state.page_size)
        if layouts is state.layouts:
            return state, None
        return replace(state, layouts=layouts), None

    # Only cancel is accepted while a discovery is outstanding.
    return state, None


def update(state: SelectionState, event: Event) -> tuple[SelectionState, Effect | None]:
    if state.finished:
        return state, None

    if isinstance(event, Resized):
        return replace(state, width=max(1, event.width), height=max(1, event.height)), None

    if isinstance(event, KeyPressed):
        if event.key in CANCEL_KEYS:
            return replace(state, quitting=True), Exit()
        return _on_key(state, event)

    if isinstance(event, Tick):
        if state.loading:
            return replace(state, frame=state.frame + 1), None
        return state, None

    if isinstance(event, LoadFailed):
        if not state.loading:
            return state, None
        return replace(state, error=event.error), Exit()

    if isinstance(event, ProjectsLoaded):
        if state.step is not Step.LOADING_PROJECTS:
            return state, None
        items = tuple(
            PickerItem(label=display_path(path, state.home), value=path)
            for path in event.projects
        )
        return replace(state, projects=PickerState(items=items), step=Step.SELECT_PROJECT), None

    if isinstance(event, LayoutsLoaded):
        if state.step is not Step.LOADING_LAYOUTS:
            return state, None
        items = tuple(PickerItem(label=layout.name, value=layout.name) for layout in event.layouts)
        cursor = _layout_cursor(event.layouts, state.selected_layout, state.preferred_layout)
        return (
            replace(state, layouts=PickerState(items=items, cursor=cursor), step=Step.SELECT_LAYOUT),
            None,
        )

    return state, None
