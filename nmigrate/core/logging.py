"""Logging setup for the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler


LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARN", "ERROR")


def _to_level(name: str) -> int:
    match name.upper():
        case "TRACE":
            return logging.DEBUG - 5
        case "WARN":
            return logging.WARNING
        case other:
            return logging.getLevelName(other)


def setup_logging(level: str = "INFO", console: Console | None = None) -> None:
    """Route the ``nmigrate`` loggers to stderr through rich."""

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("nmigrate")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(_to_level(level))
    logger.propagate = False
