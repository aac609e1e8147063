"""
=====================================
Core infrastructure package for sqlchain.
=====================================

Configuration, logging and the exception hierarchy shared by the rest of
the library.

Modules:
    config: Configuration management from environment variables
    logger: Logging configuration and utilities
    errors: Library exceptions

Example:
    >>> from sqlchain.core import config, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Connecting to {config.db_host}")
"""

__all__ = [
    'get_logger', 'setup_logging', 'config', 'Config', 'DatabaseConfig',
    'SqlChainError', 'TemplateArityError', 'NotFoundError'
]

from sqlchain.core.config import Config, DatabaseConfig, config
from sqlchain.core.errors import NotFoundError, SqlChainError, TemplateArityError
from sqlchain.core.logger import get_logger, setup_logging
