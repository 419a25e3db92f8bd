"""
log_setup.py - Logging Configuration

The level comes from --verbose or the FILE_RENAMER_LOG_LEVEL environment
variable (default WARNING, so CLI output stays readable).
"""

from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional
import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV = "FILE_RENAMER_LOG_LEVEL"


def get_log_level(verbose: bool = False) -> int:
    """Resolve the log level from the flag and the environment"""
    if verbose:
        return logging.DEBUG

    name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Configure the root logger

    Args:
        verbose: Log everything (DEBUG)
        log_file: Also write DEBUG logs to this rotating file
    """
    level = get_log_level(verbose)
    logging.basicConfig(level=logging.DEBUG if log_file else level, format=LOG_FORMAT, force=True)

    if log_file:
        root = logging.getLogger()
        for handler in root.handlers:
            handler.setLevel(level)

        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=1024 * 1024,  # 1 MB
            backupCount=3,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)
