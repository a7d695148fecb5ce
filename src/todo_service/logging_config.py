"""Console logging setup for the todo_service loggers."""

from __future__ import annotations

import logging

LOGGER_NAME = "todo_service"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a stream handler to the package logger and set its level.

    Calling this more than once only updates the level; the handler is
    installed a single time.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not any(getattr(h, "_todo_service", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._todo_service = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
