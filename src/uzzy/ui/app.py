"""Textual host running the selection state machine."""

from __future__ import annotations

import logging as py_logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import replace
from functools import partial
from pathlib import Path

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Static

from uzzy.config import AppConfig
from uzzy.errors import DiscoveryFailed, UzzyError
from uzzy.git.repo_discovery import discover_projects
from uzzy.tmux.layouts import Layout, list_layouts
from uzzy.ui.render import render
from uzzy.ui.state import (
    Effect,
    Event,
    Exit,
    KeyPressed,
    LayoutsLoaded,
    LoadFailed,
    LoadLayouts,
    LoadProjects,
    ProjectsLoaded,
    Resized,
    SelectionState,
    Step,
    Tick,
    initial_state,
    update,
)

logger = py_logging.getLogger(__name__)

TICK_SECONDS = 0.1

ProjectLoader = Callable[[], Sequence[str]]
LayoutLoader = Callable[[], Sequence[Layout]]


class DiscoveryFinished(Message):
    """Posted from a discovery thread once its result is known."""

    def __init__(self, event: Event) -> None:
        self.event = event
        super().__init__()


class PickerApp(App[SelectionState]):
    CSS = """
    #view {
        padding: 1 2;
    }
    """
    ENABLE_COMMAND_PALETTE = False
    BINDINGS = [
        Binding("ctrl+c", "cancel", "Quit", show=False, priority=True),
        Binding("escape", "cancel", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        state: SelectionState,
        effect: Effect | None,
        *,
        project_loader: ProjectLoader,
        layout_loader: LayoutLoader,
    ) -> None:
        super().__init__()
        self.picker_state = state
        self._picker_effect = effect
        self._picker_project_loader = project_loader
        self._picker_layout_loader = layout_loader
        self.discoveries_started = 0
        self._picker_view: Static | None = None
        self._picker_mounted = False

    def compose(self) -> ComposeResult:
        self._picker_view = Static(render(self.picker_state), id="view")
        yield self._picker_view

    def on_mount(self) -> None:
        self._picker_mounted = True
        self._refresh_picker_view()
        self.set_interval(TICK_SECONDS, self._picker_tick)
        self._apply_effect(self._picker_effect)

    def on_resize(self, event: events.Resize) -> None:
        self.feed(Resized(width=event.size.width, height=event.size.height))

    def on_key(self, event: events.Key) -> None:
        self.feed(KeyPressed(key=event.key, character=event.character))

    def on_discovery_finished(self, message: DiscoveryFinished) -> None:
        self.feed(message.event)

    def action_cancel(self) -> None:
        self.feed(KeyPressed(key="ctrl+c"))

    def _picker_tick(self) -> None:
        self.feed(Tick())

    def feed(self, event: Event) -> None:
        state, effect = update(self.picker_state, event)
        # update returns the same object for ignored events.
        if state is not self.picker_state:
            self.picker_state = state
            self._refresh_picker_view()
        self._apply_effect(effect)

    def _refresh_picker_view(self) -> None:
        if self._picker_mounted and self._picker_view is not None:
            self._picker_view.update(render(self.picker_state))

    def _apply_effect(self, effect: Effect | None) -> None:
        if isinstance(effect, LoadProjects):
            self._start_picker_discovery("projects", self._picker_project_loader, ProjectsLoaded)
        elif isinstance(effect, LoadLayouts):
            self._start_picker_discovery("layouts", self._picker_layout_loader, LayoutsLoaded)
        elif isinstance(effect, Exit):
            self.exit(self.picker_state)

    def _start_picker_discovery(
        self,
        what: str,
        loader: Callable[[], Sequence[object]],
        loaded: Callable[[tuple], Event],
    ) -> None:
        self.discoveries_started += 1

        def _worker() -> None:
            try:
                event = loaded(tuple(loader()))
            except UzzyError as exc:
                event = LoadFailed(exc)
            except OSError as exc:
                event = LoadFailed(DiscoveryFailed(f"Failed to discover {what}: {exc}"))
            except Exception as exc:
                logger.exception("Unexpected failure while discovering %s", what)
                event = LoadFailed(UzzyError(f"Failed to discover {what}: {exc}"))
            # post_message is thread-safe and ignores messages once the app is closed.
            try:
                self.post_message(DiscoveryFinished(event))
            except RuntimeError:
                logger.debug("Dropped %s discovery result after exit", what)

        logger.debug("Starting %s discovery", what)
        threading.Thread(target=_worker, name=f"uzzy-discover-{what}", daemon=True).start()


def _home_directory() -> str:
    try:
        return str(Path.home())
    except RuntimeError:
        return ""


def run_picker(
    config: AppConfig,
    *,
    project_path: str = "",
    layout_name: str = "",
    project_loader: ProjectLoader | None = None,
    layout_loader: LayoutLoader | None = None,
    app_factory: Callable[..., PickerApp] = PickerApp,
) -> SelectionState:
    """Run the interactive picker and return its final state."""
    state, effect = initial_state(
        project_path=project_path,
        layout_name=layout_name,
        preferred_layout=config.default_layout,
        home=_home_directory(),
    )
    if state.step is Step.DONE:
        logger.debug("Project and layout supplied up front; skipping picker")
        return state

    app = app_factory(
        state,
        effect,
        project_loader=project_loader
        or partial(discover_projects, config.scan_paths, config.exclude_patterns),
        layout_loader=layout_loader or partial(list_layouts, config.layouts_dir),
    )
    result = app.run()
    if result is None:
        # Closed without an Exit effect, e.g. through a built-in quit binding.
        final = app.picker_state
        return final if final.finished else replace(final, quitting=True)
    return result
