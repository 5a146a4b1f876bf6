import logging
import sys
from typing import TextIO


def setup_logging(*, level: int = logging.WARNING, stream: TextIO | None = None) -> None:
    """
    Configure logging for the application.

    Configures the root logger to write to stderr with a custom format, so log
    records never interleave with the wrapped command's stdout.

    Parameters:
        level (int): Root logging level. Defaults to WARNING.
        stream (TextIO, optional): Destination stream. Defaults to stderr.
    """
    stream_handler = logging.StreamHandler(stream or sys.stderr)
    logging.basicConfig(
        handlers=[stream_handler],
        format=(
            "{asctime:^} | {levelname: ^8} | {filename: ^10} {lineno: <4} | {message}"
        ),
        style="{",
        datefmt="%d.%m.%Y %H:%M:%S",
        level=level,
        force=True,
    )
