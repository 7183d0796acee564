"""Logging setup shared by the entry points."""

from __future__ import annotations

import logging
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
PACKAGE_LOGGER = "elasticdemo"
_HANDLER_NAME = "elasticdemo-console"


def configure_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Attach one console handler to the package logger.

    `stream` defaults to stderr, which the MCP stdio transport needs since it
    owns stdout. The demo CLI reports on stdout.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    # The client logs every request at INFO
    logging.getLogger("elastic_transport").setLevel(logging.WARNING)
