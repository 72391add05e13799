"""Session naming derived from project paths."""

from __future__ import annotations

import re
from pathlib import PurePath

FALLBACK_SESSION_NAME = "session"

_INVALID_CHARS = re.compile(r"[^a-z0-9-]")
_DASH_RUNS = re.compile(r"-{2,}")


def project_name(project_path: str) -> str:
    """Return the final path segment, ignoring trailing separators."""
    return PurePath(project_path).name


def slugify(project_path: str) -> str:
    """Convert a project path into a valid tmux session name.

    The name is built from the directory's own name only, so
    ``/home/user/My Project (v2)`` becomes ``my-project-v2``. Two projects
    with the same directory name map to the same session.
    """
    slug = project_name(project_path).lower()
    slug = slug.replace(".", "-")
    slug = _INVALID_CHARS.sub("-", slug)
    slug = _DASH_RUNS.sub("-", slug)
    slug = slug.strip("-")
    return slug or FALLBACK_SESSION_NAME
