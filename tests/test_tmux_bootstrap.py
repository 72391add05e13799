from __future__ import annotations

import pytest

from uzzy.errors import ExitCode, UzzyError
from uzzy.tmux.bootstrap import ensure_tmux, install_command_for


def test_tmux_present_returns_binary() -> None:
    def os_release() -> str:
        raise AssertionError("os-release must not be read when tmux exists")

    assert ensure_tmux(which=lambda name: "/usr/bin/tmux", os_release_reader=os_release) == "/usr/bin/tmux"


def test_tmux_missing_on_macos_suggests_homebrew() -> None:
    with pytest.raises(UzzyError) as exc:
        ensure_tmux(which=lambda name: None, platform="darwin")

    assert exc.value.code == ExitCode.TMUX_ERROR
    assert exc.value.hint == "Install it with: brew install tmux"


def test_tmux_missing_on_linux_reads_os_release() -> None:
    with pytest.raises(UzzyError) as exc:
        ensure_tmux(
            which=lambda name: None,
            platform="linux",
            os_release_reader=lambda: 'ID=fedora\nNAME="Fedora Linux"\n',
        )

    assert exc.value.hint == "Install it with: sudo dnf install -y tmux"


def test_unknown_distribution_gets_generic_hint() -> None:
    with pytest.raises(UzzyError) as exc:
        ensure_tmux(which=lambda name: None, platform="linux", os_release_reader=lambda: "ID=plan9\n")

    assert exc.value.hint == "Install tmux and retry."


@pytest.mark.parametrize(
    ("os_release", "expected"),
    [
        ("ID=ubuntu\nID_LIKE=debian\n", "sudo apt-get install -y tmux"),
        ("ID=linuxmint\nID_LIKE=ubuntu\n", "sudo apt-get install -y tmux"),
        ("ID=rocky\n", "sudo dnf install -y tmux"),
        ("ID=manjaro\nID_LIKE=arch\n", "sudo pacman -S --noconfirm tmux"),
        ('ID="opensuse-tumbleweed"\n', "sudo zypper install -y tmux"),
        ("ID=alpine\n", "sudo apk add tmux"),
        ("ID=void\n", "sudo xbps-install -Sy tmux"),
        ("ID=gentoo\n", "sudo emerge app-misc/tmux"),
        ("ID=nixos\n", "nix profile install nixpkgs#tmux"),
        ("", ""),
    ],
)
def test_install_command_matrix(os_release: str, expected: str) -> None:
    assert install_command_for("linux", os_release) == expected
