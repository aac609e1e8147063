"""
=============================
Exceptions raised by sqlchain.
=============================

Only misuse of the template API and empty single-row fetches are reported
through these classes. Errors raised by the database driver (SQLAlchemy and
psycopg2) are never wrapped: they reach the caller unchanged.

Classes:
    SqlChainError: Base class for all library errors
    TemplateArityError: Template pieces and values do not line up
    NotFoundError: A single-row fetch returned no rows
"""


class SqlChainError(Exception):
    """Base exception for sqlchain errors."""
    pass


class TemplateArityError(SqlChainError, ValueError):
    """Exception raised when a template has the wrong number of value slots.

    A template with N values must have exactly N + 1 literal pieces.
    """
    pass


class NotFoundError(SqlChainError):
    """Exception raised when a single-row fetch finds nothing.

    Attributes:
        message: Caller-supplied or default description of the miss
    """

    def __init__(self, message: str = "method find returned no results"):
        super().__init__(message)
        self.message = message
