"""Logging setup for the ironforge package."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a single stream handler to the "ironforge" logger.
    Safe to call more than once; later calls only change the level.
    """
    global _configured
    logger = logging.getLogger("ironforge")
    logger.setLevel(level.upper())
    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        _configured = True
    return logger
