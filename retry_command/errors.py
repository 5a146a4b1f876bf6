"""Domain-specific exceptions raised by retry_command runtime components."""

from __future__ import annotations

from typing import Any


class RetryCommandError(Exception):
    """Base exception for retry_command-specific runtime failures."""


class UnresolvedStatusError(RetryCommandError):
    """Raised when a process outcome cannot be mapped to a shell exit code."""

    def __init__(self, message: str, outcome: Any = None) -> None:
        """Store the offending outcome alongside the message."""
        super().__init__(message)
        self.outcome = outcome
