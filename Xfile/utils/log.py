"""
Logging setup for the xfile command line.

Library modules only create ``logging.getLogger(__name__)`` loggers and never
attach handlers; applications decide where records go. The CLI calls
setup_logging() to route them to stderr through Rich.
"""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "Xfile"


def setup_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        verbose: DEBUG level when True, WARNING otherwise
        console: Rich console to log to (defaults to stderr)

    Returns:
        The configured "Xfile" logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Avoid adding duplicate handlers
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=verbose,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger


__all__ = ["LOGGER_NAME", "setup_logging"]
