"""tmux availability check with platform install guidance."""

from __future__ import annotations

import logging as py_logging
import shutil
import sys
from collections.abc import Callable
from pathlib import Path

from uzzy.errors import ExitCode, UzzyError

logger = py_logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")


def _read_os_release(path: Path = OS_RELEASE_PATH) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


def install_command_for(platform: str, os_release: str = "") -> str:
    """Return the install command for tmux, or an empty string when unknown."""
    if platform == "darwin":
        return "brew install tmux"

    lowered = os_release.lower()
    compact = lowered.replace(" ", "")

    _debian_ids = ("debian", "ubuntu", "pengwin", "kali", "mint", "pop", "elementary", "zorin")
    if any(name in lowered for name in _debian_ids) or "id_like=debian" in compact:
        return "sudo apt-get install -y tmux"

    _rhel_ids = ("fedora", "rhel", "centos", "rocky", "almalinux", "oracle", "amazon")
    if any(name in lowered for name in _rhel_ids):
        return "sudo dnf install -y tmux"

    _arch_ids = ("arch", "manjaro", "endeavouros", "garuda")
    if any(name in lowered for name in _arch_ids) or "id_like=arch" in compact:
        return "sudo pacman -S --noconfirm tmux"

    if "opensuse" in lowered or "suse" in lowered:
        return "sudo zypper install -y tmux"
    if "alpine" in lowered:
        return "sudo apk add tmux"
    if "void" in lowered:
        return "sudo xbps-install -Sy tmux"
    if "gentoo" in lowered:
        return "sudo emerge app-misc/tmux"
    if "nixos" in lowered:
        return "nix profile install nixpkgs#tmux"
    return ""


def ensure_tmux(
    *,
    which: Callable[[str], str | None] = shutil.which,
    platform: str | None = None,
    os_release_reader: Callable[[], str] = _read_os_release,
) -> str:
    """Return the tmux binary path or raise with install guidance."""
    binary = which("tmux")
    if binary is not None:
        logger.debug("tmux found at %s", binary)
        return binary

    resolved_platform = platform or sys.platform
    os_release = "" if resolved_platform == "darwin" else os_release_reader()
    command = install_command_for(resolved_platform, os_release)
    logger.error("tmux is not installed platform=%s", resolved_platform)
    raise UzzyError(
        "tmux is not installed",
        code=ExitCode.TMUX_ERROR,
        hint=f"Install it with: {command}" if command else "Install tmux and retry.",
    )
