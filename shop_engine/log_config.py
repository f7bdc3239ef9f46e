"""Logging setup shared by the CLI and GUI entry points.

Engine modules only call ``logging.getLogger(__name__)``; handlers and levels
are configured here, once, by whichever entry point starts the process.
"""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "TOYSHOP_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_log_level(level: str | None = None) -> int:
    """
    Resolve a level name to a logging level.

    Parameters
    ----------
    level:
        Explicit level name. Falls back to $TOYSHOP_LOG_LEVEL, then WARNING.

    Returns
    -------
    int
        A ``logging`` level constant.

    Raises
    ------
    ValueError
        If the name is not a known logging level.
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
    value = getattr(logging, name, None)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return value


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for an entry point."""
    logging.basicConfig(level=resolve_log_level(level), format=LOG_FORMAT)
