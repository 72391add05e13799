"""Session launch from final picker selections."""

from __future__ import annotations

import logging as py_logging
from typing import NoReturn

from pydantic import BaseModel, ConfigDict, field_validator

from uzzy.config import DEFAULT_ATTACH_COMMAND
from uzzy.tmux import TmuxSessions, get_layout, project_name, slugify

logger = py_logging.getLogger(__name__)


class LaunchRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    project_path: str
    layout_name: str
    layouts_dir: str
    attach_command: str = DEFAULT_ATTACH_COMMAND

    @field_validator("project_path", "layout_name", "layouts_dir")
    @classmethod
    def _require_value(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


def launch(request: LaunchRequest, *, sessions: TmuxSessions | None = None) -> NoReturn:
    """Create the session when missing, then hand the terminal to tmux.

    Never returns normally: either the process is replaced by tmux or a
    ``UzzyError`` subclass is raised.
    """
    gateway = sessions or TmuxSessions(request.attach_command)
    layout = get_layout(request.layouts_dir, request.layout_name)
    session_name = slugify(request.project_path)
    display_name = project_name(request.project_path)
    logger.debug(
        "Launching project=%s layout=%s session=%s",
        request.project_path,
        layout.name,
        session_name,
    )

    if gateway.session_exists(session_name):
        logger.info("Attaching to existing session=%s", session_name)
    else:
        gateway.create_session(layout.path, request.project_path, session_name, display_name)

    gateway.attach(session_name)
