"""Logging setup for the ``uzzy`` logger tree.

Console records go to stderr at the requested level. When a log file is
given, it receives every record down to DEBUG so a failed launch can be
inspected after tmux has taken over the terminal.
"""

from __future__ import annotations

import logging as py_logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

ROOT_LOGGER = "uzzy"
LOG_FILE_NAME = "uzzy.log"
LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}

_RECORD_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def resolve_level(level: str) -> int:
    """Map a level name (case-insensitive) to its number; unknown names mean INFO."""
    return LOG_LEVELS.get(level.strip().upper(), py_logging.INFO)


def default_log_path() -> Path:
    try:
        base = Path.home() / ".config" / ROOT_LOGGER
    except RuntimeError:
        # No resolvable home directory, e.g. a stripped container environment.
        base = Path.cwd() / f".{ROOT_LOGGER}"
    return (base / "logs" / LOG_FILE_NAME).absolute()


def _open_file_handler(log_file: str | Path) -> py_logging.Handler | None:
    path = Path(log_file)
    try:
        path = path.expanduser()
    except RuntimeError:
        pass
    path = path.absolute()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return py_logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None


def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    console_level = resolve_level(level)
    formatter = py_logging.Formatter(_RECORD_FORMAT)

    logger = py_logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    console = py_logging.StreamHandler(stream or sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    file_handler = _open_file_handler(log_file) if log_file else None
    if file_handler is None:
        logger.setLevel(console_level)
        return logger

    file_handler.setLevel(py_logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    logger.setLevel(py_logging.DEBUG)
    return logger


@contextmanager
def console_suspended(logger: py_logging.Logger) -> Iterator[None]:
    """Detach console handlers while a full-screen UI owns the terminal.

    File handlers stay attached so records emitted meanwhile are still kept.
    """
    detached = [
        handler
        for handler in logger.handlers
        if type(handler) is py_logging.StreamHandler
    ]
    for handler in detached:
        logger.removeHandler(handler)
    try:
        yield
    finally:
        for handler in detached:
            logger.addHandler(handler)
