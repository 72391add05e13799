from __future__ import annotations

from uzzy.errors import (
    AttachFailed,
    DiscoveryFailed,
    ExitCode,
    LayoutNotExecutable,
    LayoutNotFound,
    SessionCreateFailed,
    UzzyError,
    user_facing_error,
)


def test_exit_codes_are_stable() -> None:
    assert ExitCode.SUCCESS == 0
    assert ExitCode.INVALID_ARGS == 2
    assert ExitCode.CONFIG_ERROR == 3
    assert ExitCode.RUNTIME_ERROR == 4
    assert ExitCode.DISCOVERY_ERROR == 5
    assert ExitCode.TMUX_ERROR == 6
    assert ExitCode.VALIDATION_ERROR == 7
    assert ExitCode.LAYOUT_ERROR == 8


def test_error_subclasses_carry_their_exit_code() -> None:
    assert DiscoveryFailed("x").code == ExitCode.DISCOVERY_ERROR
    assert LayoutNotFound("x").code == ExitCode.LAYOUT_ERROR
    assert LayoutNotExecutable("x").code == ExitCode.LAYOUT_ERROR
    assert SessionCreateFailed("x").code == ExitCode.TMUX_ERROR
    assert AttachFailed("x").code == ExitCode.TMUX_ERROR
    assert UzzyError("x").code == ExitCode.RUNTIME_ERROR


def test_subclasses_are_uzzy_errors() -> None:
    for error_type in (DiscoveryFailed, LayoutNotFound, LayoutNotExecutable, SessionCreateFailed, AttachFailed):
        assert issubclass(error_type, UzzyError)


def test_str_appends_hint() -> None:
    assert str(UzzyError("Broken", hint="Fix it.")) == "Broken Hint: Fix it."
    assert str(UzzyError("Broken")) == "Broken"


def test_user_facing_error_formats_hint() -> None:
    assert user_facing_error("Layout missing.", hint="Run uzzy --init.") == (
        "Error: Layout missing. Next step: Run uzzy --init."
    )
    assert user_facing_error("Layout missing") == "Error: Layout missing."
