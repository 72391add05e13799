"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import logging as py_logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import AppConfig, get_config_path, load_config, save_config
from .errors import ExitCode, UzzyError, user_facing_error
from .logging import configure_logging, console_suspended, default_log_path
from .orchestrator import LaunchRequest, launch
from .tmux.bootstrap import ensure_tmux
from .tmux.layouts import initialize_defaults, list_layouts
from .ui.state import SelectionState

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

Picker = Callable[..., SelectionState]
Launcher = Callable[[LaunchRequest], object]


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uzzy",
        description="Pick a git project and a layout, then open it in tmux.",
    )
    parser.add_argument("--path", type=Path, default=None, help="Project directory; skips project selection")
    parser.add_argument("--layout", default="", help="Layout name; highlighted or used directly with --path")
    parser.add_argument("--init", action="store_true", help="Write the config file and default layouts")
    parser.add_argument("--list-layouts", action="store_true", help="Print available layouts and exit")
    parser.add_argument("--config", type=Path, default=None, help="Config file path")
    parser.add_argument("--log-level", type=_log_level_type, default="WARN")
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def launch_picker(config: AppConfig, *, project_path: str = "", layout_name: str = "") -> SelectionState:
    from uzzy.ui.app import run_picker

    return run_picker(config, project_path=project_path, layout_name=layout_name)


def resolve_project_path(value: Path | None) -> str:
    if value is None:
        return ""
    resolved = value.expanduser()
    if not resolved.is_absolute():
        resolved = resolved.resolve()
    if not resolved.is_dir():
        raise UzzyError(
            f"Project path is not a directory: {resolved}",
            code=ExitCode.VALIDATION_ERROR,
            hint="Pass an existing project directory to --path.",
        )
    return str(resolved)


def run_init(config: AppConfig, config_path: Path) -> int:
    if config_path.exists():
        print(f"Config already exists: {config_path}")
    else:
        try:
            save_config(config, config_path)
        except OSError as exc:
            raise UzzyError(
                f"Failed to write config file {config_path}: {exc.strerror or exc}",
                code=ExitCode.CONFIG_ERROR,
            ) from exc
        print(f"Created config: {config_path}")

    try:
        created = initialize_defaults(config.layouts_dir)
    except OSError as exc:
        raise UzzyError(
            f"Failed to write default layouts to {config.layouts_dir}: {exc.strerror or exc}",
            code=ExitCode.CONFIG_ERROR,
        ) from exc
    for path in created:
        print(f"Created layout: {path}")
    if not created:
        print(f"Default layouts already present in {config.layouts_dir}")
    return int(ExitCode.SUCCESS)


def run_list_layouts(config: AppConfig) -> int:
    layouts = list_layouts(config.layouts_dir)
    if not layouts:
        print(f"No layouts found in {config.layouts_dir}. Run 'uzzy --init' to create default layouts.")
        return int(ExitCode.SUCCESS)
    for layout in layouts:
        marker = "*" if layout.name == config.default_layout else " "
        print(f"{marker} {layout.name}")
    return int(ExitCode.SUCCESS)


def run_launch_flow(
    namespace: argparse.Namespace,
    config: AppConfig,
    logger: py_logging.Logger,
    *,
    picker: Picker,
    launcher: Launcher,
) -> int:
    project_path = resolve_project_path(namespace.path)
    layout_name = namespace.layout.strip()
    ensure_tmux()

    with console_suspended(logger):
        state = picker(config, project_path=project_path, layout_name=layout_name)

    if state.error is not None:
        raise state.error
    if not state.should_attach:
        logger.debug("Selection cancelled")
        return int(ExitCode.SUCCESS)

    request = LaunchRequest(
        project_path=state.selected_path,
        layout_name=state.selected_layout,
        layouts_dir=config.layouts_dir,
        attach_command=config.attach_command,
    )
    result = launcher(request)
    if isinstance(result, int):
        return result
    return int(ExitCode.SUCCESS)


def main(
    argv: Sequence[str] | None = None,
    *,
    picker: Picker | None = None,
    launcher: Launcher | None = None,
) -> int:
    log_path = default_log_path()
    logger = configure_logging(level="WARN", log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()
    logger = configure_logging(level=namespace.log_level, log_file=log_path)

    try:
        config_path = get_config_path(namespace.config)
        config = load_config(config_path)
        logger.debug("Loaded config from %s", config_path)

        if namespace.init:
            return run_init(config, config_path)
        if namespace.list_layouts:
            return run_list_layouts(config)

        return run_launch_flow(
            namespace,
            config,
            logger,
            picker=picker or launch_picker,
            launcher=launcher or launch,
        )
    except UzzyError as exc:
        logger.error(
            "Handled UzzyError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=namespace.log_level == "DEBUG",
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        hint = f"Inspect logs: {log_path}"
        print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
