from __future__ import annotations

import logging
import sys
from typing import Final

LOGGER_NAME: Final[str] = "ziptool"
LOG_FORMAT: Final[str] = "%(levelname)s %(name)s - %(message)s"


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a stderr handler to the ``ziptool`` logger and set its level.

    Calling this repeatedly never adds a second handler; the existing one is
    pointed at the current ``sys.stderr`` and the level is updated.
    """

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(LOGGER_NAME)
    handler = next(
        (h for h in logger.handlers if getattr(h, "_ziptool_handler", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        setattr(handler, "_ziptool_handler", True)
        logger.addHandler(handler)
    elif isinstance(handler, logging.StreamHandler):
        handler.stream = sys.stderr
    logger.setLevel(level)
    return logger


__all__ = ["LOGGER_NAME", "LOG_FORMAT", "configure_logging"]
