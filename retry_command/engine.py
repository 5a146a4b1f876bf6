"""Retry loop that reruns a command until its policy says stop."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Callable, Iterable, Sequence, TextIO

from retry_command.policy import RetryPolicy
from retry_command.process import CommandSpec, launch
from retry_command.status import ProcessOutcome, resolve_status

log = logging.getLogger(__name__)

DiagnosticSink = Callable[[str], None]
Launcher = Callable[[CommandSpec], ProcessOutcome]


def _discard(line: str) -> None:
    return None


def stream_sink(stream: TextIO) -> DiagnosticSink:
    """Adapt a writable text stream into a line-oriented diagnostic sink."""

    def _write(line: str) -> None:
        stream.write(f"{line}\n")
        stream.flush()

    return _write


class RetryCommand:
    """
    Run a command repeatedly until its exit code satisfies a ``RetryPolicy``.

    By default the command runs exactly once, see ``retry_timeout``. The
    configuration methods return the engine so calls can be chained::

        code = (
            RetryCommand(["curl", "-f", url])
            .retry_timeout(30)
            .retry_delay(2)
            .rewrite([(22, 1)])
            .exit_code()
        )
    """

    def __init__(
        self,
        command: CommandSpec | Sequence[str],
        policy: RetryPolicy | None = None,
        *,
        sink: DiagnosticSink | None = None,
        launcher: Launcher = launch,
        clock: Callable[[], float] = time.monotonic,
        sleeper: Callable[[float], None] = time.sleep,
    ) -> None:
        """Store the command, its policy and the injectable runtime hooks."""
        if not isinstance(command, CommandSpec):
            command = CommandSpec.from_argv(command)
        self.command = command
        self.policy = policy or RetryPolicy()
        self._sink = sink or _discard
        self._launcher = launcher
        self._clock = clock
        self._sleeper = sleeper

    def retry_timeout(self, seconds: float) -> RetryCommand:
        """Keep retrying non-accepted, retryable codes until ``seconds`` elapse."""
        self.policy = replace(self.policy, retry_timeout=seconds)
        return self

    def retry_delay(self, seconds: float) -> RetryCommand:
        """Sleep ``seconds`` before each retry."""
        self.policy = replace(self.policy, retry_delay=seconds)
        return self

    def retry_until(self, codes: Iterable[int]) -> RetryCommand:
        """Exit codes that represent the desired outcome. Defaults to ``{0}``."""
        self.policy = replace(self.policy, retry_until=frozenset(codes))
        return self

    def retry_on(self, codes: Iterable[int] | None) -> RetryCommand:
        """Exit codes worth retrying; ``None`` retries any code."""
        self.policy = replace(
            self.policy, retry_on=None if codes is None else frozenset(codes)
        )
        return self

    def rewrite(self, pairs: Iterable[tuple[int, int]]) -> RetryCommand:
        """Rewrite the final exit code using ``(from, to)`` pairs."""
        self.policy = replace(
            self.policy, rewrite=tuple((int(a), int(b)) for a, b in pairs)
        )
        return self

    def diagnostic_sink(self, sink: DiagnosticSink | None) -> RetryCommand:
        """Send launch diagnostics to ``sink``; ``None`` discards them."""
        self._sink = sink or _discard
        return self

    def run(self) -> tuple[ProcessOutcome, int]:
        """
        Run the command with retries.

        Returns:
            tuple[ProcessOutcome, int]: The last attempt's raw outcome and the
            final, rewritten shell-style exit code.

        Raises:
            UnresolvedStatusError: If an attempt ends in a way that cannot be
                mapped to an exit code. No retry or rewrite happens then.
        """
        policy = self.policy
        start = self._clock()
        attempt = 0

        while True:
            attempt += 1
            outcome = self._launcher(self.command)
            status = resolve_status(outcome)
            log.debug("Attempt %d of %s exited with %d", attempt, self.command, status.code)

            if status.diagnostic is not None:
                self._log(status.diagnostic)

            if policy.should_stop(status.code, self._clock() - start):
                code = policy.apply_rewrite(status.code)
                if code != status.code:
                    log.debug("Rewrote exit code %d to %d", status.code, code)
                return outcome, code

            log.info(
                "%s exited with %d, retrying in %s seconds",
                self.command,
                status.code,
                policy.retry_delay,
            )
            self._sleeper(policy.retry_delay)

    def exit_code(self) -> int:
        """Run with retries and return only the final exit code."""
        _, code = self.run()
        return code

    def status(self) -> ProcessOutcome:
        """Run with retries and return only the last raw outcome."""
        outcome, _ = self.run()
        return outcome

    def _log(self, message: str) -> None:
        try:
            self._sink(f"{self.command} {message}")
        except OSError:
            log.debug("Could not write diagnostic for %s", self.command, exc_info=True)
