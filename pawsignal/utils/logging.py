"""
Logging module: one dictConfig-based setup shared by the whole package.

Contains:
- logging_config: logging configuration dictionary
- logger: the configured "pawsignal" logger
- set_log_level: runtime level switch used by create_interpreter
"""

import logging
import logging.config
import sys
from pathlib import Path

from pawsignal.config import LOGS_DIR

LOGGER_NAME = "pawsignal"
MAX_LOG_BYTES = 5 * 1024 * 1024

logging_config = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "console": {"format": "[%(levelname)s] %(message)s"},
        "file": {
            "format": "%(asctime)s %(levelname)-8s %(name)s %(module)s.%(funcName)s:%(lineno)d | %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "stream": sys.stderr,
            "formatter": "console",
            "level": logging.WARNING,
        },
        "engine_file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": Path(LOGS_DIR, "pawsignal.log"),
            "maxBytes": MAX_LOG_BYTES,
            "backupCount": 5,
            "encoding": "utf-8",
            "formatter": "file",
            "level": logging.DEBUG,
        },
        "error_file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": Path(LOGS_DIR, "pawsignal_error.log"),
            "maxBytes": MAX_LOG_BYTES,
            "backupCount": 5,
            "encoding": "utf-8",
            "formatter": "file",
            "level": logging.ERROR,
        },
    },
    "loggers": {
        LOGGER_NAME: {
            "handlers": ["console", "engine_file", "error_file"],
            "level": logging.INFO,
            "propagate": False,
        },
    },
}

logging.config.dictConfig(logging_config)
logger = logging.getLogger(LOGGER_NAME)


def set_log_level(level) -> None:
    """
    Change the engine logger level at runtime.

    Args:
        level: level name ("DEBUG", "INFO", ...) or numeric level
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)
