"""Logging setup: readable console lines in dev, JSON lines otherwise."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal

from snowball.config import Settings

ROOT_LOGGER_NAME = "snowball"

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


def _json_default(value):
    # Money and calendar fields render the way the API returns them.
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return repr(value)


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with ``extra=`` fields nested under ``context``."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        context = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=_json_default)


def setup_logging(settings: Settings) -> logging.Logger:
    """Attach a single console handler to the ``snowball`` logger.

    Safe to call more than once; existing handlers are replaced.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(settings.LOG_LEVEL)
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    if settings.LOG_JSON:
        handler.setFormatter(JSONFormatter())
    elif settings.DEV_MODE:
        handler.setFormatter(
            logging.Formatter(
                fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    root_logger.addHandler(handler)

    root_logger.debug(
        "Logging initialized",
        extra={"dev_mode": settings.DEV_MODE, "json": settings.LOG_JSON},
    )
    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
