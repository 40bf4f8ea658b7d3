"""Timestamped console logging for the package."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TextIO

LOGGER_NAME = "histocluster"

_LEVEL_NAMES = {"WARNING": "WARN", "CRITICAL": "ERROR"}


class TimestampFormatter(logging.Formatter):
    """Formats records as 'YYYY-MM-DD HH:MM:SS.mmm - LEVEL: message' in local time."""

    def format(self, record: logging.LogRecord) -> str:
        moment = datetime.fromtimestamp(record.created)
        timestamp = f"{moment:%Y-%m-%d %H:%M:%S}.{int(record.msecs):03d}"
        level = _LEVEL_NAMES.get(record.levelname, record.levelname)
        line = f"{timestamp} - {level}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def init_logger(stream: TextIO | None = None) -> logging.Logger:
    """Send the package's INFO-and-above records to *stream* (stdout by default).

    Raises RuntimeError if the logger has already been initialised.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if any(isinstance(h.formatter, TimestampFormatter) for h in logger.handlers):
        raise RuntimeError("logger is already initialised")
    handler = logging.StreamHandler(sys.stdout if stream is None else stream)
    handler.setFormatter(TimestampFormatter())
    handler.setLevel(logging.INFO)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return logger