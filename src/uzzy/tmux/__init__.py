"""tmux session naming, layouts and handoff."""

from .layouts import Layout, get_layout, initialize_defaults, list_layouts
from .naming import project_name, slugify
from .session import TmuxSessions

__all__ = [
    "get_layout",
    "initialize_defaults",
    "Layout",
    "list_layouts",
    "project_name",
    "slugify",
    "TmuxSessions",
]
