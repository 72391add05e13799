"""tmux session queries, creation and terminal handoff."""

from __future__ import annotations

import logging as py_logging
import os
import shlex
import shutil
import subprocess
import sys
from collections.abc import Callable, Mapping
from typing import NoReturn, Protocol

from uzzy.config import DEFAULT_ATTACH_COMMAND
from uzzy.errors import AttachFailed, SessionCreateFailed

logger = py_logging.getLogger(__name__)

TMUX_ENV_MARKER = "TMUX"


class ProcessReplacer(Protocol):
    """Replace the current process image; returns only by raising ``OSError``."""

    def __call__(self, path: str, argv: list[str], env: Mapping[str, str]) -> NoReturn: ...


class TmuxSessions:
    def __init__(
        self,
        attach_command: str = DEFAULT_ATTACH_COMMAND,
        *,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        which: Callable[[str], str | None] = shutil.which,
        replace_process: ProcessReplacer = os.execve,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.attach_command = attach_command
        self.runner = runner
        self.which = which
        self.replace_process = replace_process
        self.environ = os.environ if environ is None else environ

    def session_exists(self, session_name: str) -> bool:
        # "=" forces an exact match; tmux otherwise accepts name prefixes.
        command = ["tmux", "has-session", "-t", f"={session_name}"]
        try:
            result = self.runner(command, capture_output=True, text=True, check=False)
        except OSError as exc:
            logger.debug("tmux has-session could not run: %s", exc)
            return False
        exists = result.returncode == 0
        logger.debug("tmux session=%s exists=%s", session_name, exists)
        return exists

    def create_session(
        self,
        layout_path: str,
        project_path: str,
        session_name: str,
        project_name: str,
    ) -> None:
        command = [layout_path, project_path, session_name, project_name]
        logger.info("Creating tmux session=%s with layout script %s", session_name, layout_path)
        try:
            # stdout/stderr are inherited so script diagnostics reach the user.
            result = self.runner(command, cwd=project_path, check=False)
        except OSError as exc:
            logger.error("Layout script could not be started: %s", exc)
            raise SessionCreateFailed(
                f"Failed to create session '{session_name}': {exc.strerror or exc}",
                hint=f"Check that {layout_path} is a runnable script.",
            ) from exc

        if result.returncode != 0:
            logger.error(
                "Layout script failed session=%s returncode=%s script=%s",
                session_name,
                result.returncode,
                layout_path,
            )
            raise SessionCreateFailed(
                f"Failed to create session '{session_name}': layout script exited with {result.returncode}",
                hint=f"Inspect the script output above; any partial session is left as-is (tmux kill-session -t {session_name}).",
            )
        logger.debug("Layout script finished session=%s", session_name)

    def inside_tmux(self) -> bool:
        return bool(self.environ.get(TMUX_ENV_MARKER, ""))

    def attach_command_for(self, session_name: str) -> list[str]:
        if self.inside_tmux():
            return ["tmux", "switch-client", "-t", session_name]
        return [*shlex.split(self.attach_command), session_name]

    def attach(self, session_name: str) -> NoReturn:
        argv = self.attach_command_for(session_name)
        binary = self.which(argv[0])
        if binary is None:
            logger.error("Attach binary not found: %s", argv[0])
            raise AttachFailed(
                f"Cannot attach to session '{session_name}': {argv[0]} not found",
                hint="Install tmux or fix tmux.attach_command in the config file.",
            )

        logger.info("Handing terminal over to: %s", shlex.join(argv))
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            self.replace_process(binary, argv, dict(self.environ))
        except OSError as exc:
            logger.error("Process replacement failed for %s: %s", binary, exc)
            raise AttachFailed(
                f"Cannot attach to session '{session_name}': {exc.strerror or exc}",
                hint=f"Attach manually with: {shlex.join(argv)}",
            ) from exc
        raise AttachFailed(  # pragma: no cover - exec only returns by raising
            f"Cannot attach to session '{session_name}'",
            hint=f"Attach manually with: {shlex.join(argv)}",
        )

