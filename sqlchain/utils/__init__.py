"""
==========================
Utility Functions Package.
==========================

Helpers shared by the builders and the execution facade.

Modules:
    merge: Template merging for repeated clause calls
    quoting: Table-name and column identifier quoting
    case: snake_case / camelCase conversion
    database_utils: SQLAlchemy engine creation and $n rebinding
"""

__all__ = [
    'merge',
    'quote_identifier',
    'quote_table_name',
    'camel_case',
    'camelize',
    'snake_case'
]

from .case import camel_case, camelize, snake_case
from .merge import merge
from .quoting import quote_identifier, quote_table_name
