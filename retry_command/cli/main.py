import logging
import sys
from functools import partial
from typing import Optional, FrozenSet, Tuple

import click

from retry_command import __version__ as about
from retry_command.cli.config import setup_logging
from retry_command.cli.validators import (
    EXIT_CODE,
    validate_duration,
    validate_exit_codes,
    validate_rewrite,
)
from retry_command.constants import INTERNAL_FAILURE
from retry_command.engine import RetryCommand
from retry_command.errors import UnresolvedStatusError
from retry_command.policy import RetryPolicy

# Get a logger for this module.
log = logging.getLogger(__name__)

# Define an epilog message with examples.
EPILOG = f"""
Examples:

{click.style('• retry a flaky download for up to a minute, waiting 5 seconds between attempts', fg="green")}

    $ retry --retry-timeout 60 --retry-delay 5 -- curl -fsS https://example.com

{click.style('• only retry on exit code 75, report any other failure right away', fg="green")}

    $ retry --retry-timeout 30 --retry-on 75 -- ./sync.sh

{click.style('• wait until a service is down (exit 1) and report that as success', fg="green")}

    $ retry --retry-timeout 120 --retry-until 1 --rewrite 1=0 -- pg_isready
"""


class RetryCLI(click.Command):
    """Click command that exits with the wrapped command's code.

    Argument and parse errors exit with ``INTERNAL_FAILURE`` instead of
    click's default of 2, so they can be told apart from the command's own
    failures.
    """

    def main(self, args=None, prog_name=None, complete_var=None, standalone_mode=True, **extra):
        try:
            code = super().main(
                args, prog_name, complete_var, standalone_mode=False, **extra
            )
        except click.ClickException as exc:
            exc.show()
            code = INTERNAL_FAILURE
        except click.Abort:
            click.echo("Aborted!", err=True)
            code = INTERNAL_FAILURE
        if standalone_mode:
            sys.exit(code)
        return code


@click.command(
    cls=RetryCLI,
    help=about.__description__,
    epilog=EPILOG,
    context_settings={
        "help_option_names": ["-h", "--help"],
        # Everything after the command name belongs to the command.
        "allow_interspersed_args": False,
    },
)
@click.version_option(
    about.__version__,
    "-V", "--version",
    prog_name=about.__title__,
    message="%(prog)s %(version)s",
)
@click.option(
    "--retry-timeout",
    type=click.FloatRange(min=0),
    callback=validate_duration,
    metavar="TIMEOUT",
    default=0,
    show_default=True,
    help="Retry for up to TIMEOUT seconds",
    envvar="RETRY_TIMEOUT",
)
@click.option(
    "--retry-delay",
    type=click.FloatRange(min=0),
    callback=validate_duration,
    metavar="DELAY",
    default=0,
    show_default=True,
    help="Wait DELAY seconds between each retry",
    envvar="RETRY_DELAY",
)
@click.option(
    "--retry-until",
    type=EXIT_CODE,
    metavar="EXITCODE",
    multiple=True,
    callback=validate_exit_codes,
    help="Retry until the exit code is one of the listed values (default 0)",
)
@click.option(
    "--retry-on",
    type=EXIT_CODE,
    metavar="EXITCODE",
    multiple=True,
    callback=validate_exit_codes,
    help="Retry only if the exit code is one of the listed values",
)
@click.option(
    "--rewrite",
    metavar="<A>=<B>",
    multiple=True,
    callback=validate_rewrite,
    help="If the final exit code is A, change it to B; applied after retries",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Log every attempt",
    envvar="RETRY_VERBOSE",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Do not print launch errors of the command",
)
@click.argument("command", nargs=-1, type=click.UNPROCESSED, metavar="COMMAND [ARGS]...")
@click.pass_context
def main(
        ctx: click.Context,
        retry_timeout: float,
        retry_delay: float,
        retry_until: Optional[FrozenSet[int]],
        retry_on: Optional[FrozenSet[int]],
        rewrite: Tuple[Tuple[int, int], ...],
        verbose: bool,
        quiet: bool,
        command: Tuple[str, ...],
):
    """
    Main entry point for the retry CLI.

    Builds the retry policy from the options, runs the command through the
    retry engine and exits with the final, rewritten exit code.

    Parameters:
        ctx (click.Context): Click context.
        retry_timeout (float): Seconds to keep retrying.
        retry_delay (float): Seconds to sleep between attempts.
        retry_until (Optional[FrozenSet[int]]): Accepted exit codes, None for the default.
        retry_on (Optional[FrozenSet[int]]): Retryable exit codes, None for any.
        rewrite (Tuple[Tuple[int, int], ...]): Final exit code rewrites in order.
        verbose (bool): Flag enabling per-attempt logging.
        quiet (bool): Flag suppressing launch diagnostics.
        command (Tuple[str, ...]): The command and its arguments.
    """
    setup_logging(level=logging.DEBUG if verbose else logging.WARNING)

    if not command:
        raise click.UsageError("missing an argument", ctx=ctx)

    policy = RetryPolicy.build(
        retry_timeout=retry_timeout,
        retry_delay=retry_delay,
        retry_until=retry_until,
        retry_on=retry_on,
        rewrite=rewrite,
    )
    log.debug("Running %s with %s", command, policy)

    sink = None if quiet else partial(click.echo, err=True)
    engine = RetryCommand(command, policy, sink=sink)
    try:
        _, code = engine.run()
    except UnresolvedStatusError as exc:
        log.debug("Unresolved exit status", exc_info=True)
        click.echo(f"{engine.command} {exc}", err=True)
        ctx.exit(INTERNAL_FAILURE)

    ctx.exit(code)


if __name__ == "__main__":
    main(prog_name=about.__title__)
