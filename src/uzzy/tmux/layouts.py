"""Layout script discovery and validation."""

from __future__ import annotations

import logging as py_logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from uzzy.errors import DiscoveryFailed, LayoutNotExecutable, LayoutNotFound
from uzzy.tmux.templates import DEFAULT_LAYOUT_SCRIPTS

logger = py_logging.getLogger(__name__)

_EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


@dataclass(frozen=True)
class Layout:
    name: str
    path: str


def is_executable_mode(mode: int) -> bool:
    return bool(mode & _EXECUTABLE_BITS)


def list_layouts(layouts_dir: str | Path) -> list[Layout]:
    directory = Path(layouts_dir).expanduser()
    logger.debug("Listing layouts in %s", directory)
    try:
        with os.scandir(directory) as iterator:
            entries = list(iterator)
    except FileNotFoundError:
        logger.debug("Layouts directory does not exist: %s", directory)
        return []
    except OSError as exc:
        logger.error("Failed to list layouts directory %s: %s", directory, exc)
        raise DiscoveryFailed(
            f"Cannot read layouts directory: {directory}",
            hint=exc.strerror or "Check the directory permissions.",
        ) from exc

    layouts: list[Layout] = []
    for entry in entries:
        try:
            if entry.is_dir():
                continue
            mode = entry.stat().st_mode
        except OSError:
            logger.debug("Skipping unreadable layout entry: %s", entry.path)
            continue
        if not is_executable_mode(mode):
            continue
        layouts.append(Layout(name=entry.name, path=str(directory.absolute() / entry.name)))

    layouts.sort(key=lambda item: item.name)
    logger.debug("Discovered %s layouts", len(layouts))
    return layouts


def get_layout(layouts_dir: str | Path, name: str) -> Layout:
    directory = Path(layouts_dir).expanduser()
    if not name or name in {".", ".."} or "/" in name or os.sep in name:
        raise LayoutNotFound(
            f"Layout '{name}' not found",
            hint=f"Use a script name from {directory}.",
        )

    path = directory.absolute() / name
    try:
        mode = path.stat().st_mode
    except OSError as exc:
        raise LayoutNotFound(
            f"Layout '{name}' not found",
            hint="Run 'uzzy --list-layouts' to see available layouts.",
        ) from exc

    if stat.S_ISDIR(mode):
        raise LayoutNotFound(
            f"'{name}' is a directory, not a layout script",
            hint="Run 'uzzy --list-layouts' to see available layouts.",
        )
    if not is_executable_mode(mode):
        raise LayoutNotExecutable(
            f"Layout '{name}' is not executable",
            hint=f"Run: chmod +x {path}",
        )
    return Layout(name=name, path=str(path))


def initialize_defaults(layouts_dir: str | Path) -> list[Path]:
    """Write the built-in layout scripts, keeping any existing file."""
    directory = Path(layouts_dir).expanduser()
    directory.mkdir(parents=True, exist_ok=True)

    created: list[Path] = []
    for name, content in sorted(DEFAULT_LAYOUT_SCRIPTS.items()):
        path = directory / name
        if path.exists():
            logger.debug("Keeping existing layout script %s", path)
            continue
        path.write_text(content, encoding="utf-8")
        path.chmod(0o755)
        created.append(path)
        logger.info("Created layout script %s", path)
    return created
