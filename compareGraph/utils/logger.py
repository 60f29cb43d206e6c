"""
Logging utilities for compareGraph
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger


CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} - {name} - {level} - {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} - {name} - {level} - {file}:{line} - {message}"


def setup_logger(name: str = "compareGraph", level: str = "INFO", log_dir: Optional[str] = "logs"):
    """
    Setup loguru with both file and console sinks

    Args:
        name: Prefix of the log file name
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory to save log files, None disables the file sink

    Returns:
        The configured loguru logger
    """
    # Clear existing sinks
    logger.remove()

    logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d")
        log_file = Path(log_dir) / f"{name}_{timestamp}.log"
        # Always save detailed logs to file
        logger.add(str(log_file), level="DEBUG", format=FILE_FORMAT, encoding="utf-8")

    return logger
