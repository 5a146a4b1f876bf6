"""Child process specification and the blocking launch primitive."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Sequence

from retry_command.constants import LaunchFailure
from retry_command.status import Exited, LaunchFailed, ProcessOutcome, Signaled

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Executable plus argument vector of the command to retry."""

    program: str
    args: tuple[str, ...] = ()

    @classmethod
    def from_argv(cls, argv: Sequence[str]) -> CommandSpec:
        """Build a spec from a full argument vector, program first."""
        if not argv:
            raise ValueError("A command needs at least a program name")
        return cls(str(argv[0]), tuple(str(arg) for arg in argv[1:]))

    @property
    def argv(self) -> list[str]:
        """Return the full argument vector passed to the OS."""
        return [self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)


def outcome_from_returncode(returncode: int) -> ProcessOutcome:
    """Map a ``subprocess`` return code; negative values mean death by signal."""
    if returncode < 0:
        return Signaled(-returncode)
    return Exited(returncode)


def launch(command: CommandSpec) -> ProcessOutcome:
    """
    Run ``command`` to completion and classify how it ended.

    The child inherits the standard streams of the current process. Only
    ``OSError`` raised while starting the child is classified; anything else
    propagates.

    Parameters:
        command (CommandSpec): The command to run.

    Returns:
        ProcessOutcome: Exit, signal death or launch failure.
    """
    log.debug("Launching %s", command)
    try:
        returncode = subprocess.call(command.argv)
    except FileNotFoundError as exc:
        return LaunchFailed(LaunchFailure.NOT_FOUND, str(exc))
    except PermissionError as exc:
        return LaunchFailed(LaunchFailure.PERMISSION_DENIED, str(exc))
    except OSError as exc:
        return LaunchFailed(LaunchFailure.OTHER, str(exc))
    return outcome_from_returncode(returncode)
