from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Attach a stdout handler to the package logger.

    Calling it again only updates the level, so the CLI and the app factory can
    both call it without duplicating output.
    """
    logger = logging.getLogger("cityweather")
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
