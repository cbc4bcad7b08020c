from __future__ import annotations

import logging
import logging.config
import sys

from pythonjsonlogger.json import JsonFormatter


def setup_logging(*, level: str = "INFO", fmt: str = "text") -> None:
    """Configure root logging once for the app (console only).

    ``fmt="json"`` emits one JSON object per line for log shippers.
    """

    level = (level or "INFO").upper()
    formatter = "json" if (fmt or "").lower() == "json" else "standard"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                    "format": "%(asctime)s %(name)s %(levelname)s %(message)s %(funcName)s %(lineno)d",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": formatter,
                    "stream": sys.stdout,
                },
            },
            "root": {"level": level, "handlers": ["console"]},
            "loggers": {
                # Request lines from the dev server are noisy at DEBUG.
                "werkzeug": {"level": "INFO" if level == "DEBUG" else level},
                "mysql.connector": {"level": "WARNING"},
            },
        }
    )
