"""XDG config loading/saving."""

from __future__ import annotations

import sys
from contextlib import suppress
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import TypedDict

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

CONFIG_DIR = Path("~/.config/uzzy")
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_LAYOUTS_DIR = CONFIG_DIR / "layouts"
DEFAULT_LAYOUT = "nvim-claude"
DEFAULT_ATTACH_COMMAND = "tmux attach -t"
DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "Library",
    "Applications",
    ".Trash",
    ".cache",
    ".npm",
    ".yarn",
    "node_modules",
    ".svn",
    "dist",
    "build",
    "target",
    "vendor",
    ".venv",
    "__pycache__",
)


class TmuxSettings(TypedDict):
    attach_command: str


def _expand(path: str | Path) -> str:
    try:
        return str(Path(path).expanduser())
    except RuntimeError:
        return str(path)


def _default_scan_paths() -> list[str]:
    return [_expand("~")]


def _default_layouts_dir() -> str:
    return _expand(DEFAULT_LAYOUTS_DIR)


def _default_tmux_settings() -> TmuxSettings:
    return TmuxSettings(attach_command=DEFAULT_ATTACH_COMMAND)


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    scan_paths: list[str] = Field(default_factory=_default_scan_paths)
    exclude_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    default_layout: str = DEFAULT_LAYOUT
    layouts_dir: str = Field(default_factory=_default_layouts_dir)
    tmux: TmuxSettings = Field(default_factory=_default_tmux_settings)

    @field_validator("scan_paths")
    @classmethod
    def _expand_scan_paths(cls, value: list[str]) -> list[str]:
        return [_expand(item) for item in value if item.strip()]

    @field_validator("exclude_patterns")
    @classmethod
    def _drop_blank_patterns(cls, value: list[str]) -> list[str]:
        return [item for item in value if item]

    @field_validator("layouts_dir")
    @classmethod
    def _expand_layouts_dir(cls, value: str) -> str:
        return _expand(value)

    @field_validator("tmux")
    @classmethod
    def _validate_tmux(cls, value: TmuxSettings) -> TmuxSettings:
        if not value["attach_command"].strip():
            raise ValueError("tmux.attach_command must not be empty")
        return value

    @property
    def attach_command(self) -> str:
        return self.tmux["attach_command"]


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH.expanduser()
    return Path(path).expanduser()


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _toml_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return f'"{_escape(value)}"'
    if isinstance(value, list):
        return "[" + ", ".join(_toml_scalar(item) for item in value) + "]"
    raise TypeError(f"Unsupported TOML scalar type: {type(value)!r}")


def _string_list(value: object) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]


def _sanitize(raw: dict[str, object]) -> AppConfig:
    values: dict[str, object] = {}

    scan_paths = _string_list(raw.get("scan_paths"))
    if scan_paths:
        values["scan_paths"] = scan_paths

    exclude_patterns = _string_list(raw.get("exclude_patterns"))
    if exclude_patterns is not None:
        values["exclude_patterns"] = exclude_patterns

    default_layout = raw.get("default_layout")
    if isinstance(default_layout, str) and default_layout.strip():
        values["default_layout"] = default_layout.strip()

    layouts_dir = raw.get("layouts_dir")
    if isinstance(layouts_dir, str) and layouts_dir.strip():
        values["layouts_dir"] = layouts_dir.strip()

    tmux_table = raw.get("tmux")
    if isinstance(tmux_table, dict):
        attach_command = tmux_table.get("attach_command")
        if isinstance(attach_command, str) and attach_command.strip():
            values["tmux"] = TmuxSettings(attach_command=attach_command.strip())

    return AppConfig(**values)


def load_config(path: str | Path | None = None) -> AppConfig:
    resolved = get_config_path(path)
    if not resolved.exists():
        return AppConfig()
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()
    return _sanitize(raw)


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    resolved = get_config_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)

    lines = [
        f"scan_paths = {_toml_scalar(list(config.scan_paths))}",
        f"exclude_patterns = {_toml_scalar(list(config.exclude_patterns))}",
        f"default_layout = {_toml_scalar(config.default_layout)}",
        f"layouts_dir = {_toml_scalar(config.layouts_dir)}",
        "",
        "[tmux]",
        f"attach_command = {_toml_scalar(config.attach_command)}",
    ]

    resolved.write_text("\n".join(lines) + "\n", encoding="utf-8")
    with suppress(OSError):
        resolved.chmod(0o600)
    return resolved
