"""Logging configuration for the chart builder.

Human-readable console logging by default; JSON lines (python-json-logger)
when the output is collected by a CI job or log shipper.
"""

import copy
import logging
import logging.config
from typing import Any

LOGGER_NAMES = ("build_charts", "lang_stats", "donut", "bar_chart", "svg_document")

LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        },
        "console": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        name: {"level": "INFO", "handlers": ["console"], "propagate": False}
        for name in LOGGER_NAMES
    },
    "root": {
        "level": "WARNING",
        "handlers": ["console"],
    },
}


def setup_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """Configure logging for a build run.

    Args:
        json_output: If True, emit JSON lines instead of plain console lines
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    config = copy.deepcopy(LOGGING_CONFIG)

    if json_output:
        config["handlers"]["console"]["formatter"] = "json"

    if log_level:
        level = log_level.upper()
        config["handlers"]["console"]["level"] = level
        for logger_cfg in config["loggers"].values():
            logger_cfg["level"] = level

    logging.config.dictConfig(config)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module (typically ``__name__``)."""
    return logging.getLogger(name)
