from __future__ import annotations

import logging

# Business rules
BORROW_LIMIT = 3
FIRST_ITEM_ID = 1
FIRST_MEMBER_ID = 1001

JOIN_DATE_FORMAT = "%Y-%m-%d"

# Logging configuration
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOGGER_NAME = "library"


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """
    Attaches a single stream handler to the root "library" logger.

    Calling it again only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
