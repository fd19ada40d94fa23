"""
Logging utilities for graphExplorer
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} - {name} - {level} - {file}:{line} - {message}"


def setup_logger(name: str, level: str = "INFO", log_dir: Optional[str] = "logs"):
    """
    Setup loguru with a console sink and, optionally, a daily file sink

    Args:
        name: Prefix of the log file name
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory to save log files, None for console only

    Returns:
        Configured logger instance
    """
    # Clear existing sinks
    logger.remove()

    # Console sink
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=level.upper())

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)

        # File sink, always detailed
        timestamp = datetime.now().strftime("%Y%m%d")
        log_file = os.path.join(log_dir, f"{name}_{timestamp}.log")
        logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")

    return logger
