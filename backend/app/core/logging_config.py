"""Logging setup for the ApplyDesk backend.

Modules log through ``logging.getLogger(__name__)``; this installs one stream
handler on the ``backend`` logger so application records share a format
without touching the root logger used by uvicorn.
"""

import logging
import sys

from backend.app.core.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(level: str | None = None) -> logging.Logger:
    global _configured
    logger = logging.getLogger("backend")
    effective_level = (level or get_settings().log_level).upper()
    logger.setLevel(getattr(logging, effective_level, logging.INFO))

    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    return logger
