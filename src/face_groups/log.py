"""Logging setup for the command-line and UI entry points."""

import logging

from rich.logging import RichHandler

from face_groups.config import LOG_LEVEL


def configure_logging(level: str | int | None = None) -> None:
    """Route all ``face_groups`` loggers through a rich console handler."""
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
