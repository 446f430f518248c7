"""
Logging setup for air monitoring sample checks.

Console output for the technician and a detailed file log for support.
Rule components log through child loggers of the application logger.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from datetime import datetime

CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str = "air_monitoring",
    log_file: Optional[str] = None,
    log_level: Optional[str] = None
) -> logging.Logger:
    """
    Set up the application logger.

    Args:
        name: Logger name
        log_file: Path to log file. If None, uses LOG_FILE env var or logs/air_monitoring.log
        log_level: Console level (DEBUG, INFO, WARNING, ERROR). If None, uses LOG_LEVEL env var or INFO

    Returns:
        Configured logger instance
    """
    log_file = log_file or os.getenv("LOG_FILE", "logs/air_monitoring.log")
    log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    console_level = getattr(logging, log_level, logging.INFO)

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    # The file log always keeps debug detail
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)

    logger.propagate = False

    return logger


class LoggerContext:
    """
    Time an operation and log its outcome.

    Set ``summary`` inside the block to have it included in the completion
    message (e.g. counts of loaded items).
    """

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.summary: Optional[str] = None
        self.start_time: Optional[datetime] = None

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.info(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = (datetime.now() - self.start_time).total_seconds()

        if exc_type is not None:
            self.logger.error(
                f"Failed {self.operation} after {duration:.2f}s: {exc_val}",
                exc_info=True
            )
            return False

        message = f"Completed {self.operation} in {duration:.2f}s"
        if self.summary:
            message += f" ({self.summary})"
        self.logger.info(message)
        return False
