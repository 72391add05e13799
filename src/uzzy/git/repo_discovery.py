"""Git project discovery through fd/find."""

from __future__ import annotations

import logging as py_logging
import os
import shutil
import subprocess
from collections.abc import Callable, Sequence

from uzzy.errors import DiscoveryFailed

logger = py_logging.getLogger(__name__)

METADATA_DIR = ".git"
FD_MAX_DEPTH = 6
# find counts the root itself as depth 0.
FIND_MAX_DEPTH = FD_MAX_DEPTH + 1
DEFAULT_TIMEOUT_SECONDS = 60.0
SEARCH_TOOLS = ("fd", "fdfind", "find")

SubprocessRunner = Callable[..., subprocess.CompletedProcess]


def is_excluded(path: str, exclude_patterns: Sequence[str]) -> bool:
    return any(pattern and pattern in path for pattern in exclude_patterns)


_GLOB_CHARS = frozenset("*?[]{}\\")


def _prunable_patterns(exclude_patterns: Sequence[str]) -> list[str]:
    """Patterns safe to hand to fd/find as literal path fragments.

    Patterns with glob syntax would match more than the literal substring,
    and a pattern matching the metadata directory itself would hide every
    project. Both are left to the substring filter applied after the search.
    """
    return [
        pattern
        for pattern in exclude_patterns
        if pattern and pattern not in METADATA_DIR and _GLOB_CHARS.isdisjoint(pattern)
    ]


def select_search_tool(which: Callable[[str], str | None] = shutil.which) -> str | None:
    for tool in SEARCH_TOOLS:
        if which(tool) is not None:
            return tool
    return None


def build_fd_command(tool: str, root: str, exclude_patterns: Sequence[str]) -> list[str]:
    command = [
        tool,
        "--type",
        "d",
        "--hidden",
        "--no-ignore",
        "--absolute-path",
        "--max-depth",
        str(FD_MAX_DEPTH),
    ]
    for pattern in _prunable_patterns(exclude_patterns):
        command.extend(["--exclude", pattern])
    command.extend([f"^{METADATA_DIR.replace('.', '[.]')}$", root])
    return command


def build_find_command(root: str, exclude_patterns: Sequence[str]) -> list[str]:
    command = [
        "find",
        root,
        "-maxdepth",
        str(FIND_MAX_DEPTH),
        "-type",
        "d",
        "-name",
        METADATA_DIR,
    ]
    for pattern in _prunable_patterns(exclude_patterns):
        command.extend(["-not", "-path", f"*{pattern}*"])
    return command


def build_search_command(tool: str, root: str, exclude_patterns: Sequence[str]) -> list[str]:
    if tool == "find":
        return build_find_command(root, exclude_patterns)
    return build_fd_command(tool, root, exclude_patterns)


def parse_search_output(stdout: str) -> list[str]:
    """Map metadata directory paths to their project directories."""
    projects: list[str] = []
    for line in stdout.splitlines():
        # fd appends a separator to directory matches.
        metadata_path = line.strip().rstrip("/")
        if not metadata_path:
            continue
        projects.append(os.path.dirname(metadata_path))
    return projects


def search_root(
    tool: str,
    root: str,
    exclude_patterns: Sequence[str],
    *,
    runner: SubprocessRunner = subprocess.run,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> list[str]:
    if not os.path.isdir(root):
        raise DiscoveryFailed(f"Scan path is not a directory: {root}")

    command = build_search_command(tool, root, exclude_patterns)
    logger.debug("Searching for projects: %s", command)
    try:
        result = runner(
            command,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout_seconds,
        )
    except subprocess.TimeoutExpired as exc:
        raise DiscoveryFailed(
            f"{tool} timed out after {timeout_seconds:g}s in {root}",
            hint="Narrow scan_paths or add exclude_patterns.",
        ) from exc
    except OSError as exc:
        raise DiscoveryFailed(f"{tool} could not be started: {exc.strerror or exc}") from exc

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise DiscoveryFailed(
            f"{tool} exited with {result.returncode} in {root}",
            hint=stderr[:200],
        )
    return parse_search_output(result.stdout or "")


def discover_projects(
    scan_paths: Sequence[str],
    exclude_patterns: Sequence[str] = (),
    *,
    runner: SubprocessRunner = subprocess.run,
    which: Callable[[str], str | None] = shutil.which,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> list[str]:
    tool = select_search_tool(which)
    if tool is None:
        logger.warning("No search tool available (tried %s)", ", ".join(SEARCH_TOOLS))
        return []
    logger.debug("Discovering projects with %s in %s roots", tool, len(scan_paths))

    seen: set[str] = set()
    projects: list[str] = []
    for root in scan_paths:
        try:
            found = search_root(
                tool,
                root,
                exclude_patterns,
                runner=runner,
                timeout_seconds=timeout_seconds,
            )
        except DiscoveryFailed as exc:
            logger.warning("Project discovery skipped root=%s: %s", root, exc)
            continue
        for project in found:
            if project in seen or is_excluded(project, exclude_patterns):
                continue
            seen.add(project)
            projects.append(project)

    projects.sort(key=str.lower)
    logger.debug("Discovered %s projects", len(projects))
    return projects
