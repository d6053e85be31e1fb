"""Logging helpers for rowbind.

Every module logs through ``logging.getLogger(__name__)``, so all records
live under the ``rowbind`` logger hierarchy.
"""

import logging

LOGGER_NAME = "rowbind"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(pathname)s:%(lineno)d] %(message)s"


class PackageHandler(logging.StreamHandler):
    """Stream handler installed by configure_logging."""

    def __init__(self, stream=None):
        super().__init__(stream)
        self.setFormatter(logging.Formatter(LOG_FORMAT))


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a stream handler to the package logger and set its level.

    Calling this more than once only updates the level.

    Args:
        level: Level name (e.g., 'DEBUG') or number

    Returns:
        The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    if not any(isinstance(h, PackageHandler) for h in logger.handlers):
        logger.addHandler(PackageHandler())
    return logger
