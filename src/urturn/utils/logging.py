"""Logging helpers shared by the urturn package."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the ``urturn`` namespace."""
    return logging.getLogger(name)


def configure_logging(level: str = "WARNING", stream: Optional[object] = None) -> None:
    """
    Configure root logging for command-line use.

    Library code never calls this; only the CLI does.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        stream: Optional stream for the handler. Defaults to stderr.
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")
    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        stream=stream or sys.stderr,
        force=True,
    )
