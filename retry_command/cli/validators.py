import math
import re

import click

from retry_command.constants import EXIT_CODE_MAX, EXIT_CODE_MIN

_REWRITE_PATTERN = re.compile(r"^\s*(-?\d+)\s*=\s*(-?\d+)\s*$")

# Click type for options taking an exit code.
EXIT_CODE = click.IntRange(EXIT_CODE_MIN, EXIT_CODE_MAX)


def validate_duration(ctx: click.Context, param, value):
    """
    Reject durations that are not finite numbers.

    ``click.FloatRange`` lets ``nan`` and ``inf`` through, and neither can be
    used as a timeout or a sleep.

    Parameters:
        ctx (click.Context): The Click context.
        param: The parameter definition.
        value: The number of seconds provided.

    Returns:
        float: The original value if valid; otherwise, raises a click.BadParameter exception.
    """
    if value is not None and not math.isfinite(value):
        raise click.BadParameter(f"{value} is not a finite number of seconds")
    return value


def validate_rewrite(ctx: click.Context, param, value):
    """
    Validate ``--rewrite`` values and convert them to integer pairs.

    Each value is expected to look like ``<A>=<B>`` where both sides are
    32-bit signed integers, for example ``1=0``. Order is preserved because
    the last pair for a given ``A`` wins.

    Parameters:
        ctx (click.Context): The Click context.
        param: The parameter definition.
        value: The tuple of raw strings provided.

    Returns:
        tuple[tuple[int, int], ...]: The parsed pairs in command-line order.
    """
    pairs = []
    for raw in value or ():
        match = _REWRITE_PATTERN.match(raw)
        if not match:
            raise click.BadParameter(f"Invalid rewrite: {raw!r}, expected <A>=<B>")
        pair = (int(match.group(1)), int(match.group(2)))
        if not all(EXIT_CODE_MIN <= code <= EXIT_CODE_MAX for code in pair):
            raise click.BadParameter(f"Invalid rewrite: {raw!r}, exit code out of range")
        pairs.append(pair)
    return tuple(pairs)


def validate_exit_codes(ctx: click.Context, param, value):
    """
    Collapse repeated exit-code options into a frozenset.

    Returns None when the option was not given at all, so callers can tell
    "not configured" apart from an explicit list.

    Parameters:
        ctx (click.Context): The Click context.
        param: The parameter definition.
        value: The tuple of integers provided.

    Returns:
        frozenset[int] | None: The codes, or None if the option was absent.
    """
    if not value:
        return None
    return frozenset(value)
