"""Colors and text styles for the picker."""

from __future__ import annotations

from rich.style import Style

PRIMARY_COLOR = "#7C3AED"
SECONDARY_COLOR = "#10B981"
MUTED_COLOR = "#6B7280"
ERROR_COLOR = "#EF4444"

TITLE = Style(color=PRIMARY_COLOR, bold=True)
SUBTITLE = Style(color=MUTED_COLOR)
SELECTED = Style(color=SECONDARY_COLOR, bold=True)
NORMAL = Style()
DIM = Style(color=MUTED_COLOR)
ERROR = Style(color=ERROR_COLOR, bold=True)
HELP = Style(color=MUTED_COLOR)
SPINNER = Style(color=PRIMARY_COLOR)
FILTER = Style(color=PRIMARY_COLOR)

SPINNER_FRAMES = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")
CURSOR_MARKER = "▸ "
APP_TITLE = "uzzy"
