"""Logging setup for the ticket service."""

import logging

APP_LOGGER = "app"

# Pillow logs every PNG chunk it decodes at DEBUG
QUIET_LOGGERS = ("PIL",)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stream handler to the service logger and set its level.

    Safe to call more than once: later calls only change the level.
    """
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(level.upper())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
