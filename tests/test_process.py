"""Tests for the blocking launch primitive."""

from __future__ import annotations

import os
import signal
import sys
from pathlib import Path

import pytest

from retry_command import process
from retry_command.constants import LaunchFailure
from retry_command.process import CommandSpec, launch, outcome_from_returncode
from retry_command.status import Exited, LaunchFailed, Signaled


def test_command_spec_from_argv_and_str() -> None:
    """Verify argv round-trips and str() renders a shell-quoted command."""
    spec = CommandSpec.from_argv(["echo", "hello world"])

    assert spec.program == "echo"
    assert spec.args == ("hello world",)
    assert spec.argv == ["echo", "hello world"]
    assert str(spec) == "echo 'hello world'"


def test_command_spec_rejects_empty_argv() -> None:
    """Verify an empty argument vector is refused."""
    with pytest.raises(ValueError):
        CommandSpec.from_argv([])


def test_outcome_from_returncode_maps_negative_values_to_signals() -> None:
    """Verify subprocess' negative return codes become signal outcomes."""
    assert outcome_from_returncode(3) == Exited(3)
    assert outcome_from_returncode(-9) == Signaled(9)


def test_launch_returns_exit_code() -> None:
    """Verify a real child's exit code is reported."""
    outcome = launch(CommandSpec.from_argv([sys.executable, "-c", "raise SystemExit(3)"]))

    assert outcome == Exited(3)


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals only")
def test_launch_reports_signal_death() -> None:
    """Verify a child killing itself with SIGKILL is reported as a signal."""
    script = "import os, signal; os.kill(os.getpid(), signal.SIGKILL)"

    outcome = launch(CommandSpec.from_argv([sys.executable, "-c", script]))

    assert outcome == Signaled(signal.SIGKILL)


def test_launch_classifies_missing_executable(tmp_path: Path) -> None:
    """Verify a missing program becomes a NOT_FOUND launch failure."""
    outcome = launch(CommandSpec(str(tmp_path / "does-not-exist")))

    assert isinstance(outcome, LaunchFailed)
    assert outcome.kind is LaunchFailure.NOT_FOUND
    assert "does-not-exist" in outcome.message


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions only")
def test_launch_classifies_non_executable_file(tmp_path: Path) -> None:
    """Verify a file without execute bits becomes PERMISSION_DENIED."""
    script = tmp_path / "script.sh"
    script.write_text("#!/bin/sh\nexit 0\n")
    os.chmod(script, 0o644)

    outcome = launch(CommandSpec(str(script)))

    assert isinstance(outcome, LaunchFailed)
    assert outcome.kind is LaunchFailure.PERMISSION_DENIED


def test_launch_classifies_other_os_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify unexpected OS errors are reported as OTHER."""

    def fake_call(argv: list[str]) -> int:
        raise OSError(8, "Exec format error")

    monkeypatch.setattr(process.subprocess, "call", fake_call)

    outcome = launch(CommandSpec("broken"))

    assert isinstance(outcome, LaunchFailed)
    assert outcome.kind is LaunchFailure.OTHER
    assert "Exec format error" in outcome.message
