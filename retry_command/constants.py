"""Shell exit-code conventions shared by the resolver and the CLI."""

from enum import Enum

# Failures of retry itself, as opposed to failures of the wrapped command.
INTERNAL_FAILURE = 125
COMMAND_NOT_EXECUTABLE = 126
COMMAND_NOT_FOUND = 127
SIGNAL_EXIT_OFFSET = 128

# Exit codes and policy sets are 32-bit signed integers.
EXIT_CODE_MIN = -(2**31)
EXIT_CODE_MAX = 2**31 - 1


class LaunchFailure(Enum):
    """Represents why a child process could not be started."""
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    OTHER = "other"
