"""
Logging setup shared by the session-setup server and the voice-chat CLI.

Both front ends log through the ``voice_chat`` logger: one console handler on
the stream they choose, plus a size-rotated file under ``logs/``.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from voicechat.config.constants import LOGGER_NAME

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DIR = Path("logs")
LOG_FILE = LOG_DIR / "voice_chat.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5


def resolve_level(level=None) -> int:
    """Turn a level name (or LOG_LEVEL) into a logging level, INFO if unknown."""
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def _file_handler(formatter: logging.Formatter) -> RotatingFileHandler:
    LOG_DIR.mkdir(exist_ok=True)
    handler = RotatingFileHandler(LOG_FILE, maxBytes=MAX_LOG_SIZE, backupCount=BACKUP_COUNT)
    handler.setFormatter(formatter)
    return handler


def configure_logging(level=None, stream=sys.stdout):
    """
    Configure the application logger with console and file handlers.

    Calling it again replaces the handlers instead of stacking them.

    Args:
        level: Level name overriding the LOG_LEVEL environment variable
        stream: Stream for the console handler; the CLI passes stderr so the
            transcript on stdout stays readable

    Returns:
        logging.Logger: The configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    logger.propagate = False

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(stream)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    try:
        logger.addHandler(_file_handler(formatter))
    except OSError as e:
        logger.warning(f"Could not set up file logging: {e}")

    logger.info("Logging configured")
    return logger
