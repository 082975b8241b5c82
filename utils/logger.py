# -*- coding: utf-8 -*-
"""
Logging configuration.

Every module logs through a child of the ``educenter`` logger. The console
shows ``LOG_LEVEL`` and above; the rotating file keeps everything.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

ROOT_LOGGER_NAME = "educenter"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"

# HTTP libraries log every connection at DEBUG
NOISY_LOGGERS = ("urllib3", "requests")

_root: Optional[logging.Logger] = None


def _file_handler(config) -> logging.Handler:
    config.LOGS_DIR.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        config.LOG_PATH,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8"
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logger() -> logging.Logger:
    """
    (Re)configure the application logger from Config.

    Safe to call more than once; handlers are replaced, not stacked.
    """
    global _root

    from app.config import Config

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(getattr(logging, Config.LOG_LEVEL, logging.INFO))
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if Config.LOG_TO_FILE:
        logger.addHandler(_file_handler(Config))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _root = logger
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger for a module, configuring the root on first use."""
    if _root is None:
        setup_logger()
    return _root.getChild(name)
