"""Logging setup for the link shortener.

Modules log through ``logging.getLogger(__name__)``, so everything lands
under the ``links_app`` logger configured here. Request lines go to the
``links_app.access`` child used by ``LoggingMiddleware``.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional


LOGGER_NAME = "links_app"
ACCESS_LOGGER_NAME = f"{LOGGER_NAME}.access"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per line; messages and tracebacks are escaped."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    access_log: bool = True,
) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Also write to this file
        json_format: Emit JSON lines instead of text
        access_log: When False, per-request lines are dropped and only
            warnings from the access logger get through

    Returns:
        The configured ``links_app`` logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.propagate = False
    # Calling setup twice (tests, reloads) must not duplicate output
    logger.handlers.clear()

    if json_format:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    access_logger = logging.getLogger(ACCESS_LOGGER_NAME)
    access_logger.setLevel(logging.NOTSET if access_log else logging.WARNING)

    return logger
