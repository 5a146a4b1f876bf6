"""Tests for shell-style exit code resolution."""

from __future__ import annotations

import pytest

from retry_command.constants import LaunchFailure
from retry_command.errors import UnresolvedStatusError
from retry_command.status import Exited, LaunchFailed, ResolvedStatus, Signaled, resolve_status


@pytest.mark.parametrize("code", [0, 1, 42, 255, 300])
def test_exit_code_is_kept_unchanged(code: int) -> None:
    """Verify normal exits keep their code and carry no diagnostic."""
    assert resolve_status(Exited(code)) == ResolvedStatus(code, None)


def test_signal_death_adds_shell_offset() -> None:
    """Verify a SIGKILLed child resolves to 137."""
    assert resolve_status(Signaled(9)) == ResolvedStatus(137)


def test_not_found_resolves_to_127_with_message() -> None:
    """Verify a missing executable maps to 127 and keeps the OS message."""
    status = resolve_status(LaunchFailed(LaunchFailure.NOT_FOUND, "No such file or directory"))

    assert status.code == 127
    assert status.diagnostic == "No such file or directory"


def test_permission_denied_resolves_to_126_with_message() -> None:
    """Verify a non-executable file maps to 126."""
    status = resolve_status(LaunchFailed(LaunchFailure.PERMISSION_DENIED, "Permission denied"))

    assert status == ResolvedStatus(126, "Permission denied")


def test_other_launch_failure_is_unresolved() -> None:
    """Verify unclassified launch errors raise instead of guessing a code."""
    outcome = LaunchFailed(LaunchFailure.OTHER, "Exec format error")

    with pytest.raises(UnresolvedStatusError, match="Exec format error") as excinfo:
        resolve_status(outcome)

    assert excinfo.value.outcome is outcome


def test_unknown_outcome_is_unresolved() -> None:
    """Verify outcomes that are neither exit nor signal have no code."""
    with pytest.raises(UnresolvedStatusError, match="Unknown exit code"):
        resolve_status(object())  # type: ignore[arg-type]


def test_resolution_is_stateless() -> None:
    """Verify resolving the same outcome twice yields equal results."""
    outcome = LaunchFailed(LaunchFailure.NOT_FOUND, "missing")

    assert resolve_status(outcome) == resolve_status(outcome)
    assert resolve_status(Signaled(15)) == resolve_status(Signaled(15))
