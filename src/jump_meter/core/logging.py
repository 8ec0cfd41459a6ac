"""Logging configuration for the jump_meter logger tree.

Library modules only ever call get_logger(); handlers are installed once by
the application (or a script) through setup_logging().
"""

import logging
import sys
from pathlib import Path

from jump_meter.core.config import LoggingSettings

ROOT_LOGGER = "jump_meter"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _handlers(log_file: str | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path))
    return handlers


def setup_logging(level: str | None = None, log_file: str | None = None) -> logging.Logger:
    """Install console (and optional file) handlers on the jump_meter logger.

    Arguments left as None fall back to LoggingSettings (LOG_LEVEL, LOG_FILE).
    Calling it again replaces the previous handlers.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file

    Returns:
        The configured jump_meter logger
    """
    settings = LoggingSettings()
    level_name = (level or settings.level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    for handler in _handlers(log_file if log_file is not None else settings.file):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, always inside the jump_meter namespace."""
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
