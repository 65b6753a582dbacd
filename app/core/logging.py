"""Logging setup shared by the API and the maintenance script."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
# Transport libraries log every hosted-service request line at INFO/DEBUG.
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None) -> None:
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    if root.handlers:
        # Already configured by the server; only align our own loggers.
        logging.getLogger("app").setLevel(level_name)
    else:
        logging.basicConfig(level=level_name, format=LOG_FORMAT)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
