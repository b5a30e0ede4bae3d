"""One-time, process-wide logging initialisation."""

import logging
import sys

from .config import get_settings

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_configured = False


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a stream handler to the ``gpxprocessor`` logger once.

    Repeated calls only adjust the level.
    """
    global _configured
    logger = logging.getLogger("gpxprocessor")
    logger.setLevel((level or get_settings().log_level).upper())
    if not _configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)
        _configured = True
    return logger
