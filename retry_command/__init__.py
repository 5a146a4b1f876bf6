"""Retry an external command until its exit status satisfies a policy."""

from retry_command.engine import RetryCommand, stream_sink
from retry_command.errors import RetryCommandError, UnresolvedStatusError
from retry_command.policy import RetryPolicy
from retry_command.process import CommandSpec, launch
from retry_command.status import Exited, LaunchFailed, ResolvedStatus, Signaled, resolve_status

__all__ = [
    "CommandSpec",
    "Exited",
    "LaunchFailed",
    "ResolvedStatus",
    "RetryCommand",
    "RetryCommandError",
    "RetryPolicy",
    "Signaled",
    "UnresolvedStatusError",
    "launch",
    "resolve_status",
    "stream_sink",
]
