"""Logging setup for the command line"""

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: Union[str, int] = "WARNING") -> None:
    """Send aliasgui log records to stderr through rich"""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root = logging.getLogger("aliasgui")
    root.handlers = [handler]
    root.setLevel(level)
