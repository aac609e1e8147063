"""
===========================================
sqlchain: composable parameterized SQL.
===========================================

Assemble SQL from reusable keyword-tagged fragments and get back one
statement with globally numbered ``$n`` placeholders plus the ordered
parameter list.

The package is organized as:
    - chain: Template, Fragment and Chain (the composition engine)
    - builders: Immutable SELECT / INSERT / UPDATE / DELETE builders
    - database: Execution facade over SQLAlchemy
    - utils: Merging, quoting and case-conversion helpers
    - core: Configuration, logging and exceptions

Example:
    >>> from sqlchain import EXISTS, SELECT, SelectQueryBuilder
    >>>
    >>> published = SELECT("1").FROM("posts").WHERE("posts.author_id = users.id AND posts.status = {}", "published")
    >>> query = (
    ...     SelectQueryBuilder()
    ...     .SELECT("id, name")
    ...     .FROM("users")
    ...     .WHERE("status = {}", "active")
    ...     .AND(EXISTS(published))
    ... )
    >>> sql, params = query.render()
    >>> params
    ['active', 'published']
"""

__version__ = "1.0.0"
__all__ = [
    # Chain engine
    'Chain', 'Expression', 'Fragment', 'Template',
    'DELETE_FROM', 'EXISTS', 'INSERT_INTO', 'SELECT', 'UPDATE', 'WITH_RECURSIVE',
    # Builders
    'UNSET', 'ConflictAction', 'Page', 'QueryResult',
    'SelectQueryBuilder', 'InsertQueryBuilder', 'UpdateQueryBuilder', 'DeleteQueryBuilder',
    # Execution facade
    'Database', 'DatabasePool', 'DatabasePoolClient',
    # Errors
    'SqlChainError', 'TemplateArityError', 'NotFoundError',
    # Helpers
    'merge', 'quote_table_name'
]

from .builders import (
    UNSET,
    ConflictAction,
    DeleteQueryBuilder,
    InsertQueryBuilder,
    Page,
    QueryResult,
    SelectQueryBuilder,
    UpdateQueryBuilder,
)
from .chain import (
    DELETE_FROM,
    EXISTS,
    INSERT_INTO,
    SELECT,
    UPDATE,
    WITH_RECURSIVE,
    Chain,
    Expression,
    Fragment,
    Template,
)
from .core.errors import NotFoundError, SqlChainError, TemplateArityError
from .database import Database, DatabasePool, DatabasePoolClient
from .utils import merge, quote_table_name
