"""Logging configuration."""

from __future__ import annotations

import logging
import logging.config
import sys
from pathlib import Path


def setup_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    format: str | None = None,
) -> None:
    """Configure console (and optionally rotating file) logging.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: file to log to as well, None for console only
        format: custom record format
    """
    if format is None:
        format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s [%(filename)s:%(lineno)d]"

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": format,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "standard",
                "stream": sys.stderr,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    }

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "standard",
            "filename": str(log_path),
            "maxBytes": 1_048_576,
            "backupCount": 3,
            "encoding": "utf-8",
        }
        config["root"]["handlers"].append("file")

    logging.config.dictConfig(config)
    logging.getLogger(__name__).debug(f"Logging configured (level: {level})")
