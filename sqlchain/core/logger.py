"""
==============================
Logging configuration for sqlchain.
==============================

Library modules log through ``logging.getLogger(__name__)`` and never
install handlers themselves. Applications (and the test suite) call
setup_logging() once to get console and/or file output.

Example:
    >>> from sqlchain.core.logger import get_logger, setup_logging
    >>>
    >>> setup_logging(log_level='DEBUG')
    >>> logger = get_logger('sqlchain.database')
    >>> logger.debug("SELECT 1")
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Console formatter that colours the level name and adds a marker.

    Attributes:
        COLORS: Dict mapping log levels to ANSI color codes
        MARKERS: Dict mapping log levels to short prefixes
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    MARKERS = {
        'DEBUG': '🔍',
        'INFO': 'ℹ️ ',
        'WARNING': '⚠️ ',
        'ERROR': '❌',
        'CRITICAL': '🔥'
    }

    def format(self, record):
        """Format record with a coloured level name and a level marker.

        The record is copied first so that other handlers sharing it still
        see the plain level name.
        """
        record = logging.makeLogRecord(record.__dict__)
        levelname = record.levelname
        record.marker = self.MARKERS.get(levelname, '')
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        return super().format(record)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ of calling module)
        level: Optional logging level override (DEBUG/INFO/WARNING/ERROR/CRITICAL)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    return logger


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
    console_output: bool = True,
    use_colors: bool = True
) -> logging.Logger:
    """Configure handlers on the ``sqlchain`` package logger.

    Args:
        log_level: Logging level; defaults to config.log_level
        log_file: Optional log file name (e.g., 'sqlchain.log')
        log_dir: Optional log directory path (defaults to 'logs/')
        console_output: If True, output to console (stdout)
        use_colors: If True, use colored output for console

    Returns:
        The configured ``sqlchain`` logger

    Example:
        >>> setup_logging(log_level='DEBUG', log_file='sqlchain.log', log_dir='logs')
    """
    if log_level is None:
        from sqlchain.core.config import config
        log_level = config.log_level

    level = getattr(logging, log_level.upper())
    package_logger = logging.getLogger('sqlchain')
    package_logger.setLevel(level)

    # Clear existing handlers so repeated calls do not duplicate output
    package_logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)

        if use_colors:
            console_formatter = ColoredFormatter(
                '%(marker)s ' + LOG_FORMAT,
                datefmt=DATE_FORMAT
            )
        else:
            console_formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        console_handler.setFormatter(console_formatter)
        package_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir) if log_dir else Path('logs')
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        package_logger.addHandler(file_handler)

    return package_logger
