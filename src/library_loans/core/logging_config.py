"""
Logging configuration for the loans service.

Console output always; a rotating log file when LOG_FILE is set.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import get_settings

SERVICE_LOGGER = "library_loans"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5


def setup_logging(level: str | None = None, log_file: str | None = None) -> logging.Logger:
    """
    Configure the service logger. Safe to call more than once.
    """
    settings = get_settings()
    level_name = (level or settings["log_level"]).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    log_file = log_file or settings["log_file"]

    logger = logging.getLogger(SERVICE_LOGGER)
    logger.setLevel(numeric_level)
    # Avoid duplicate handlers if setup_logging is called multiple times
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Keep SQLAlchemy quiet unless explicitly debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{SERVICE_LOGGER}.{name}")
