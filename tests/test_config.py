from __future__ import annotations

import stat
from pathlib import Path

import pytest
from pydantic import ValidationError

from uzzy.config import (
    DEFAULT_ATTACH_COMMAND,
    DEFAULT_EXCLUDE_PATTERNS,
    AppConfig,
    TmuxSettings,
    get_config_path,
    load_config,
    save_config,
)


def test_load_defaults_when_config_missing(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "config.toml")

    assert cfg.scan_paths == [str(Path.home())]
    assert cfg.exclude_patterns == list(DEFAULT_EXCLUDE_PATTERNS)
    assert cfg.default_layout == "nvim-claude"
    assert cfg.layouts_dir == str(Path("~/.config/uzzy/layouts").expanduser())
    assert cfg.attach_command == DEFAULT_ATTACH_COMMAND


def test_default_exclusions_do_not_hide_git_metadata() -> None:
    assert ".git" not in AppConfig().exclude_patterns


def test_config_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    original = AppConfig(
        scan_paths=["/srv/code", "/home/dev/work"],
        exclude_patterns=["node_modules", 'we"ird'],
        default_layout="split-dev",
        layouts_dir="/opt/layouts",
        tmux=TmuxSettings(attach_command="tmux -L work attach -t"),
    )

    save_config(original, path)
    loaded = load_config(path)

    assert loaded == original


def test_saved_config_is_private(tmp_path: Path) -> None:
    path = save_config(AppConfig(), tmp_path / "nested" / "config.toml")

    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_malformed_toml_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("scan_paths = [\n", encoding="utf-8")

    assert load_config(path) == AppConfig()


def test_wrong_types_are_ignored_per_key(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "\n".join(
            [
                'scan_paths = "/not/a/list"',
                "exclude_patterns = [1, \"dist\", true]",
                "default_layout = 42",
                'layouts_dir = "/custom/layouts"',
                "",
                "[tmux]",
                "attach_command = 7",
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg.scan_paths == [str(Path.home())]
    assert cfg.exclude_patterns == ["dist"]
    assert cfg.default_layout == "nvim-claude"
    assert cfg.layouts_dir == "/custom/layouts"
    assert cfg.attach_command == DEFAULT_ATTACH_COMMAND


def test_home_is_expanded_in_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    path = tmp_path / "config.toml"
    path.write_text('scan_paths = ["~/code"]\nlayouts_dir = "~/layouts"\n', encoding="utf-8")

    cfg = load_config(path)

    assert cfg.scan_paths == [str(tmp_path / "code")]
    assert cfg.layouts_dir == str(tmp_path / "layouts")


def test_empty_attach_command_is_rejected() -> None:
    with pytest.raises(ValidationError):
        AppConfig(tmux=TmuxSettings(attach_command="  "))


def test_config_is_immutable() -> None:
    cfg = AppConfig()

    with pytest.raises(ValidationError):
        cfg.default_layout = "terminal"


def test_get_config_path_expands_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    assert get_config_path("~/custom.toml") == tmp_path / "custom.toml"
    assert get_config_path() == tmp_path / ".config" / "uzzy" / "config.toml"
