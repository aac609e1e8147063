"""
==================================================
Execution facade: run rendered statements via SQLAlchemy.
==================================================

The chain engine and builders only produce ``(sql, params)`` pairs. This
module sends those pairs to a database through SQLAlchemy and maps the
result rows to dicts (keys camelCased by default).

Classes:
    Database: Runs statements on one SQLAlchemy Connection
    DatabasePool: Runs statements on a pooled Engine, one transaction each,
        and wraps callbacks in BEGIN/COMMIT/ROLLBACK
    DatabasePoolClient: Database bound to the connection of a transaction

Driver errors (sqlalchemy.exc.SQLAlchemyError) are logged and re-raised
unchanged; nothing is retried.

Example:
    >>> from sqlchain import DatabasePool
    >>>
    >>> db = DatabasePool.from_config()
    >>> posts = db.SELECT("id, title").FROM("posts").WHERE({"status": "published"}).list()
    >>>
    >>> def publish(tx):
    ...     post = tx.INSERT_INTO("posts").VALUES({"title": "Hello"}).RETURNING("id").execute()
    ...     tx.UPDATE("users").SET("post_count = post_count + 1").WHERE({"id": 1}).execute()
    ...     return post.rows[0]
    >>>
    >>> db.transaction(publish)
"""

import logging
from typing import Any, Callable, Optional, Sequence, TypeVar

from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.exc import SQLAlchemyError

from sqlchain.builders import (
    DeleteQueryBuilder,
    InsertQueryBuilder,
    QueryResult,
    SelectQueryBuilder,
    UpdateQueryBuilder,
)
from sqlchain.builders.base import ClauseArg
from sqlchain.core.config import Config, config
from sqlchain.utils.case import camelize
from sqlchain.utils.database_utils import create_sqlalchemy_engine, to_text_clause

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Database:
    """Execution facade over a single SQLAlchemy connection.

    Attributes:
        camelize: Convert row keys to camelCase
    """

    def __init__(self, connection: Optional[Connection], camelize: Optional[bool] = None):
        """Initialize the facade.

        Args:
            connection: SQLAlchemy Connection statements run on
            camelize: Convert row keys to camelCase (defaults to config.camelize_rows)
        """
        self._connection = connection
        self.camelize = config.camelize_rows if camelize is None else camelize

    def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
        """
        Execute a rendered statement.

        Args:
            sql: Statement with $1..$N placeholders
            params: Values where params[i - 1] binds to $i

        Returns:
            QueryResult with mapped rows and the driver's rowcount

        Raises:
            SQLAlchemyError: Any driver failure, unchanged
        """
        params = list(params or [])
        statement, binds = to_text_clause(sql, params)

        logger.debug(f"Executing: {sql} ({len(params)} params)")

        try:
            return self._run(statement, binds)
        except SQLAlchemyError as e:
            logger.error(f"❌ Query failed: {sql} - {e}")
            raise

    def _run(self, statement, binds) -> QueryResult:
        return self._to_query_result(self._connection.execute(statement, binds))

    def _to_query_result(self, result: CursorResult) -> QueryResult:
        rows = [dict(row) for row in result.mappings()] if result.returns_rows else []
        if self.camelize:
            rows = camelize(rows)
        return QueryResult(rows=rows, rowcount=result.rowcount)

    # Builder starters

    def SELECT(self, template: ClauseArg, *values: Any) -> SelectQueryBuilder:
        return SelectQueryBuilder(db=self).SELECT(template, *values)

    def INSERT_INTO(self, table: str) -> InsertQueryBuilder:
        return InsertQueryBuilder(db=self).INSERT_INTO(table)

    def UPDATE(self, table: str) -> UpdateQueryBuilder:
        return UpdateQueryBuilder(db=self).UPDATE(table)

    def DELETE_FROM(self, table: str) -> DeleteQueryBuilder:
        return DeleteQueryBuilder(db=self).DELETE_FROM(table)


class DatabasePoolClient(Database):
    """Database bound to the connection of an open transaction."""

    def __init__(self, connection: Connection, camelize: Optional[bool] = None):
        super().__init__(connection, camelize=camelize)

    @property
    def connection(self) -> Connection:
        return self._connection


class DatabasePool(Database):
    """Execution facade over a pooled SQLAlchemy Engine.

    Each query() checks a connection out of the pool and runs in its own
    transaction (committed on success).

    Example:
        >>> engine = create_sqlalchemy_engine(url='sqlite://')
        >>> db = DatabasePool(engine)
        >>> db.query('SELECT $1 AS "answer"', [42]).rows
        [{'answer': 42}]
    """

    def __init__(self, engine: Engine, camelize: Optional[bool] = None):
        super().__init__(None, camelize=camelize)
        self._engine = engine

    @classmethod
    def from_config(cls, settings: Optional[Config] = None, **engine_kwargs: Any) -> 'DatabasePool':
        """Create a pool from Config settings (defaults to the global config)."""
        settings = settings or config
        logger.info(f"Opening connection pool to {settings.db_host}:{settings.db_port}")
        engine = create_sqlalchemy_engine(settings.db, **engine_kwargs)
        return cls(engine, camelize=settings.camelize_rows)

    @property
    def pool(self) -> Engine:
        """The underlying SQLAlchemy Engine."""
        return self._engine

    def _run(self, statement, binds) -> QueryResult:
        with self._engine.begin() as connection:
            return self._to_query_result(connection.execute(statement, binds))

    def transaction(self, callback: Callable[[DatabasePoolClient], T]) -> T:
        """
        Run callback inside BEGIN/COMMIT on one pooled connection.

        Args:
            callback: Receives a DatabasePoolClient; its return value is
                returned after COMMIT

        Returns:
            The callback's return value

        Raises:
            Exception: Whatever the callback or the driver raised, after
                ROLLBACK
        """
        with self._engine.connect() as connection:
            transaction = connection.begin()
            logger.debug("BEGIN")
            try:
                result = callback(DatabasePoolClient(connection, camelize=self.camelize))
            except Exception:
                transaction.rollback()
                logger.warning("⚠️ Transaction rolled back")
                raise
            transaction.commit()
            logger.info("✅ Transaction committed")
            return result

    def dispose(self) -> None:
        """Close all pooled connections."""
        self._engine.dispose()
