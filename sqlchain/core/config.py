"""
===================================
Configuration management for sqlchain.
===================================

Loads settings from environment variables (and a .env file, when one is
found from the current working directory) and exposes them through a
module-level Config instance.

Only the execution facade reads this configuration; the chain engine and
the statement builders are pure and take no settings.

Example:
    >>> from sqlchain import DatabasePool
    >>> from sqlchain.core.config import config
    >>>
    >>> pool = DatabasePool.from_config()  # reads config.db
    >>> print(f"Host: {config.db_host}, Port: {config.db_port}")
"""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

# Load environment variables from the nearest .env file
load_dotenv(dotenv_path=find_dotenv(usecwd=True))

_TRUTHY = {'1', 'true', 'yes', 'on'}


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass
class DatabaseConfig:
    """Database connection settings.

    Attributes:
        host: PostgreSQL server hostname or IP address
        port: PostgreSQL server port number
        user: Database username
        password: Database password
        database: Database name
        pool_size: SQLAlchemy connection pool size
        max_overflow: Connections allowed above pool_size
        echo: Log every statement through SQLAlchemy's own logger
    """

    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5
    max_overflow: int = 10
    echo: bool = False


class Config:
    """Centralized configuration manager.

    Attributes:
        db: DatabaseConfig instance with connection settings
        log_level: Default level for setup_logging()
        camelize_rows: Convert result row keys to camelCase

    Example:
        >>> config = Config()
        >>> config.camelize_rows
        True
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.db = DatabaseConfig(
            host=os.getenv('POSTGRES_HOST', 'localhost'),
            port=int(os.getenv('POSTGRES_PORT', '5432')),
            user=os.getenv('POSTGRES_USER', 'postgres'),
            password=os.getenv('POSTGRES_PASSWORD', ''),
            database=os.getenv('POSTGRES_DB', 'postgres'),
            pool_size=int(os.getenv('SQLCHAIN_POOL_SIZE', '5')),
            max_overflow=int(os.getenv('SQLCHAIN_MAX_OVERFLOW', '10')),
            echo=_env_flag('SQLCHAIN_ECHO', False)
        )

        self.log_level = os.getenv('SQLCHAIN_LOG_LEVEL', 'INFO').upper()
        self.camelize_rows = _env_flag('SQLCHAIN_CAMELIZE_ROWS', True)

    @property
    def db_host(self) -> str:
        """Get database server hostname."""
        return self.db.host

    @property
    def db_port(self) -> int:
        """Get database server port number."""
        return self.db.port


# Global configuration instance
config = Config()
