"""
Logging for hdkeys

Every module logs through a child of the "hdkeys" logger, which carries the only handler. The level starts from the
HDKEYS_LOG_LEVEL environment variable (WARNING when unset) and can be changed at runtime with set_log_level().
Key material is never passed to a logger.
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional

__all__ = ["get_logger", "set_log_level", "LOG_LEVEL_ENV", "ROOT_LOGGER_NAME"]

LOG_LEVEL_ENV = "HDKEYS_LOG_LEVEL"
ROOT_LOGGER_NAME = "hdkeys"
DEFAULT_FORMAT = '%(asctime)s [%(name)s] [%(levelname)s]: %(message)s'


def _level_from_env() -> str:
    return os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()


def _root_logger(log_file: Optional[Path] = None, format_string: Optional[str] = None) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)

    # Handlers are only attached once
    if not root.handlers:
        root.setLevel(getattr(logging, _level_from_env(), logging.WARNING))
        formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

        console_handler = logging.StreamHandler(stream=sys.stdout)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    return root


def get_logger(name: str, log_level: Optional[str] = None, log_file: Optional[Path] = None,
               format_string: Optional[str] = None) -> logging.Logger:
    """
    Get a logger below the "hdkeys" namespace.

    Args:
        name: Logger name (typically __name__ from calling module)
        log_level: Optional level for this logger only (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file, used when the shared handlers are first created
        format_string: Optional custom format string, used when the shared handlers are first created

    Returns:
        Logger that propagates to the shared "hdkeys" handlers
    """
    _root_logger(log_file, format_string)

    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)

    if log_level is not None:
        logger.setLevel(log_level.upper())
    return logger


def set_log_level(log_level: str) -> None:
    """Change the level of every hdkeys logger that has not been given its own level"""
    _root_logger().setLevel(log_level.upper())
