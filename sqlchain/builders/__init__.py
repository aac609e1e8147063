"""
==========================
Statement builders package.
==========================

Immutable SELECT / INSERT / UPDATE / DELETE builders that render through
the chain engine.

Modules:
    base: Shared builder plumbing, UNSET, and the Executor contract
    select_query_builder: SelectQueryBuilder
    insert_query_builder: InsertQueryBuilder and ConflictAction
    update_query_builder: UpdateQueryBuilder
    delete_query_builder: DeleteQueryBuilder
"""

__all__ = [
    'UNSET', 'Executor', 'Page', 'QueryBuilder', 'QueryResult',
    'SelectQueryBuilder', 'InsertQueryBuilder', 'ConflictAction',
    'UpdateQueryBuilder', 'DeleteQueryBuilder'
]

from .base import UNSET, Executor, Page, QueryBuilder, QueryResult
from .delete_query_builder import DeleteQueryBuilder
from .insert_query_builder import ConflictAction, InsertQueryBuilder
from .select_query_builder import SelectQueryBuilder
from .update_query_builder import UpdateQueryBuilder
