"""Immutable retry policy: when to stop and how to rewrite the final code."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """
    Stop/retry configuration for one run of a command.

    ``retry_on`` of ``None`` means every code is worth retrying. Durations are
    in seconds.
    """

    retry_timeout: float = 0.0
    retry_delay: float = 0.0
    retry_until: frozenset[int] = frozenset({0})
    retry_on: frozenset[int] | None = None
    rewrite: tuple[tuple[int, int], ...] = field(default=())

    def __post_init__(self) -> None:
        """Reject negative and non-finite durations."""
        for name in ("retry_timeout", "retry_delay"):
            seconds = getattr(self, name)
            if not math.isfinite(seconds) or seconds < 0:
                raise ValueError(f"{name} must be a finite, non-negative number: {seconds}")

    @classmethod
    def build(
        cls,
        *,
        retry_timeout: float = 0.0,
        retry_delay: float = 0.0,
        retry_until: Iterable[int] | None = None,
        retry_on: Iterable[int] | None = None,
        rewrite: Iterable[tuple[int, int]] = (),
    ) -> RetryPolicy:
        """Build a policy from plain iterables; ``retry_until=None`` keeps ``{0}``."""
        return cls(
            retry_timeout=retry_timeout,
            retry_delay=retry_delay,
            retry_until=frozenset({0} if retry_until is None else retry_until),
            retry_on=None if retry_on is None else frozenset(retry_on),
            rewrite=tuple((int(source), int(target)) for source, target in rewrite),
        )

    def should_stop(self, code: int, elapsed: float) -> bool:
        """
        Decide whether the loop ends after an attempt that resolved to ``code``.

        Acceptance wins over the retry-on filter, which wins over the timeout.

        Parameters:
            code (int): Resolved exit code of the attempt.
            elapsed (float): Seconds since the first attempt started.

        Returns:
            bool: True to stop, False to sleep and retry.
        """
        if code in self.retry_until:
            return True
        if self.retry_on is not None and code not in self.retry_on:
            return True
        return elapsed >= self.retry_timeout

    def apply_rewrite(self, code: int) -> int:
        """Return the rewritten final code; the last matching pair wins."""
        for source, target in reversed(self.rewrite):
            if source == code:
                return target
        return code
