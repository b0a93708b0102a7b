"""Root logger setup for the CLI and server."""

import logging

from rich.logging import RichHandler

DEFAULT_LOG_FORMAT = "%(name)s | %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Route all loggers through a single rich handler on the root logger."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.INFO

    root = logging.getLogger()
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)
