"""
Logging configuration for ProjectDash.

The store logs every mutation under ``projectdash.store``: creates and
updates at DEBUG, cascading deletes at INFO. The level follows
``DashboardConfig.verbosity``, so ``-v``, ``-q`` or ``verbosity = "verbose"``
in projectdash.toml all end up here.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import DashboardConfig

_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

# One line per mutation, e.g.
# 2025-10-20 09:14:02 INFO    store: Deleted project p-001: removed 2 task(s), ...
_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(component)s: %(message)s"


class _ComponentFilter(logging.Filter):
    """Adds ``component``: the logger name relative to the package."""

    def filter(self, record: logging.LogRecord) -> bool:
        parts = record.name.split(".")
        if parts[0] == "projectdash" and len(parts) > 1:
            record.component = parts[1]
        else:
            record.component = record.name
        return True


def setup_logging(config: DashboardConfig, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route ``projectdash`` log records to stderr through rich.

    Args:
        config: Resolved configuration; ``verbosity`` picks the level
        log_file: Optional file that also receives every record, one line each

    Returns:
        The ``projectdash`` package logger
    """
    level = _LEVELS[config.verbosity]
    verbose = config.verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.addFilter(_ComponentFilter())
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)

    logger = logging.getLogger("projectdash")
    logger.setLevel(level)
    return logger
