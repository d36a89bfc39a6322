"""Logging configuration for the CLI, using the stdlib with a Rich handler.

Library code only ever does ``logger = logging.getLogger(__name__)``; the
CLI calls ``setup_logging`` once per invocation.
"""

from __future__ import annotations

import logging

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def resolve_level(
    default: str = "WARNING",
    *,
    quiet: bool = False,
    verbose: bool = False,
    debug: bool = False,
) -> int:
    """Map CLI flags to a logging level.

    Precedence: debug > verbose > quiet > *default*.  Unknown default names
    fall back to WARNING.
    """
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    return _LEVELS.get(default.upper(), logging.WARNING)


def setup_logging(level: int = logging.WARNING) -> None:
    """Attach a RichHandler to the root logger, or just update its level."""
    from rich.logging import RichHandler

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(
                rich_tracebacks=True,
                show_path=False,
                show_time=False,
            )],
        )
    else:
        root.setLevel(level)
        for handler in root.handlers:
            handler.setLevel(level)
