"""
Logging configuration for the starrocks_driver package.

All driver modules log through the single ``starrocks_driver`` logger set up
here. Its level starts from ``SR_LOG_LEVEL`` (``INFO`` when unset) and is
changed afterwards whenever ``DriverSettings.loglevel`` is assigned. Unlike a
standalone application, the driver leaves ``sys.excepthook`` to the host.
"""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "[%(asctime)s][%(levelname)s]: %(message)s"

logger = logging.getLogger(__name__.split(".")[0])


def _handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


logger.setLevel(os.getenv("SR_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper())
logger.handlers = [_handler()]
