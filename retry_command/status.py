"""Resolve raw process outcomes into shell-style exit codes.

The mapping follows the usual shell conventions (see
http://tldp.org/LDP/abs/html/exitcodes.html): a normal exit keeps its code,
death by signal ``N`` becomes ``128 + N``, a missing executable becomes 127
and a non-executable one 126.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from retry_command.constants import (
    COMMAND_NOT_EXECUTABLE,
    COMMAND_NOT_FOUND,
    SIGNAL_EXIT_OFFSET,
    LaunchFailure,
)
from retry_command.errors import UnresolvedStatusError


@dataclass(frozen=True, slots=True)
class Exited:
    """The child ran and exited normally with ``code``."""

    code: int


@dataclass(frozen=True, slots=True)
class Signaled:
    """The child was terminated by ``signal``."""

    signal: int


@dataclass(frozen=True, slots=True)
class LaunchFailed:
    """The child could not be started at all."""

    kind: LaunchFailure
    message: str


ProcessOutcome = Union[Exited, Signaled, LaunchFailed]


@dataclass(frozen=True, slots=True)
class ResolvedStatus:
    """Normalized exit code of one attempt plus an optional diagnostic."""

    code: int
    diagnostic: str | None = None


_LAUNCH_FAILURE_CODES = {
    LaunchFailure.NOT_FOUND: COMMAND_NOT_FOUND,
    LaunchFailure.PERMISSION_DENIED: COMMAND_NOT_EXECUTABLE,
}


def resolve_status(outcome: ProcessOutcome) -> ResolvedStatus:
    """
    Convert one launch outcome into a shell-style exit code.

    Parameters:
        outcome (ProcessOutcome): Result of a single launch attempt.

    Returns:
        ResolvedStatus: The exit code and, for launch failures, the reason.

    Raises:
        UnresolvedStatusError: If the outcome has no representable exit code,
            e.g. a launch failure other than not-found or permission-denied.
    """
    if isinstance(outcome, Exited):
        return ResolvedStatus(outcome.code)

    if isinstance(outcome, Signaled):
        return ResolvedStatus(outcome.signal + SIGNAL_EXIT_OFFSET)

    if isinstance(outcome, LaunchFailed):
        code = _LAUNCH_FAILURE_CODES.get(outcome.kind)
        if code is None:
            raise UnresolvedStatusError(outcome.message, outcome)
        return ResolvedStatus(code, outcome.message)

    raise UnresolvedStatusError(f"Unknown exit code for outcome {outcome!r}", outcome)
