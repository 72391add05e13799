from __future__ import annotations

import io
import logging as py_logging
from pathlib import Path

import uzzy.logging as uzzy_logging


def test_default_log_path_is_expanded() -> None:
    path = uzzy_logging.default_log_path()

    assert path.is_absolute()
    assert path.name == "uzzy.log"


def test_warning_alias_maps_to_warning_level() -> None:
    logger = uzzy_logging.configure_logging("warning")

    assert logger.level == uzzy_logging.LOG_LEVELS["WARN"]


def test_unknown_log_level_falls_back_to_info() -> None:
    logger = uzzy_logging.configure_logging("not-a-level")

    assert logger.level == py_logging.INFO


def test_configure_logging_resets_existing_handlers() -> None:
    logger = uzzy_logging.configure_logging("INFO")
    assert len(logger.handlers) == 1

    logger = uzzy_logging.configure_logging("INFO")

    assert len(logger.handlers) == 1


def test_file_handler_keeps_debug_records_while_console_stays_quiet(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "uzzy.log"
    stream = io.StringIO()

    logger = uzzy_logging.configure_logging("ERROR", stream, log_file=log_file)
    py_logging.getLogger("uzzy.tests").debug("debug detail")
    for handler in logger.handlers:
        handler.flush()

    file_handlers = [handler for handler in logger.handlers if isinstance(handler, py_logging.FileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].level == py_logging.DEBUG
    assert "debug detail" in log_file.read_text(encoding="utf-8")
    assert stream.getvalue() == ""


def test_configure_logging_ignores_file_handler_oserror(monkeypatch, tmp_path: Path) -> None:
    def raise_os_error(*args: object, **kwargs: object) -> py_logging.Handler:
        raise OSError("disk full")

    monkeypatch.setattr(uzzy_logging.py_logging, "FileHandler", raise_os_error)

    logger = uzzy_logging.configure_logging("INFO", log_file=tmp_path / "nope" / "uzzy.log")

    assert len(logger.handlers) == 1


def test_console_suspended_detaches_only_stream_handlers(tmp_path: Path) -> None:
    stream = io.StringIO()
    logger = uzzy_logging.configure_logging("INFO", stream, log_file=tmp_path / "uzzy.log")

    with uzzy_logging.console_suspended(logger):
        assert all(isinstance(handler, py_logging.FileHandler) for handler in logger.handlers)
        py_logging.getLogger("uzzy.tests").warning("hidden while suspended")

    py_logging.getLogger("uzzy.tests").warning("visible again")

    assert len(logger.handlers) == 2
    assert "hidden while suspended" not in stream.getvalue()
    assert "visible again" in stream.getvalue()


def test_resolve_level_is_case_and_space_insensitive() -> None:
    assert uzzy_logging.resolve_level(" debug ") == py_logging.DEBUG
    assert uzzy_logging.resolve_level("Warn") == py_logging.WARNING
    assert uzzy_logging.resolve_level("verbose") == py_logging.INFO


def test_default_log_path_without_home_uses_working_directory(monkeypatch, tmp_path: Path) -> None:
    def no_home() -> Path:
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(uzzy_logging.Path, "home", staticmethod(no_home))
    monkeypatch.chdir(tmp_path)

    assert uzzy_logging.default_log_path() == tmp_path / ".uzzy" / "logs" / "uzzy.log"


def test_console_level_without_log_file_sets_logger_level() -> None:
    logger = uzzy_logging.configure_logging("ERROR", io.StringIO())

    assert logger.level == py_logging.ERROR
    assert logger.propagate is False
