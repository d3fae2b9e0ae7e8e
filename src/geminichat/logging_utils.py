"""Logging configuration for command-line use.

Library modules only create ``logging.getLogger(__name__)`` loggers; this
module decides where their records go when running from the terminal.
The TUI routes the same loggers into its log panel instead.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_OPTIONS = ("DEBUG", "INFO", "WARNING", "ERROR")
DEFAULT_LOG_LEVEL = "WARNING"
PACKAGE_LOGGER = "geminichat"


def normalize_level(level: str | None) -> str:
    """Upper-case a level name, falling back to the default for unknown names."""
    value = (level or "").strip().upper()
    return value if value in LOG_LEVEL_OPTIONS else DEFAULT_LOG_LEVEL


def configure_logging(level: str | None = None, console: Console | None = None) -> logging.Logger:
    """Attach a single RichHandler to the package logger.

    Safe to call repeatedly; earlier handlers installed here are replaced.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(normalize_level(level))
    package_logger.propagate = False
    return package_logger
