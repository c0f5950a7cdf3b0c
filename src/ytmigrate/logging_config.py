"""Logging configuration for the ytmigrate package."""

import logging
import logging.handlers
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "ytmigrate.log"


def configure_logging(debug: bool = False, log_dir: Optional[str] = None) -> None:
    """Configure logging for the package.

    Logs go to stdout and, when log_dir is given, to a log file that
    rolls over at midnight.

    Args:
        debug: Whether to enable debug output
        log_dir: Directory for the daily log file
    """
    level = logging.DEBUG if debug else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            logging.handlers.TimedRotatingFileHandler(
                os.path.join(log_dir, LOG_FILE_NAME),
                when="midnight",
                backupCount=30,
                encoding="utf-8",
            )
        )

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,  # Force reconfiguration to avoid duplicates
    )

    # The discovery client is chatty at DEBUG
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name for the logger, typically __name__

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
