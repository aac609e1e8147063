"""
Fixtures for execution facade tests.

Key fixtures:
- sqlite_engine: In-memory SQLite engine with a seeded "blog_posts" table
- db: DatabasePool over sqlite_engine (rows camelCased)
- mock_connection: MagicMock standing in for a SQLAlchemy Connection
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import text

from sqlchain.database import DatabasePool
from sqlchain.utils.database_utils import create_sqlalchemy_engine


@pytest.fixture
def sqlite_engine():
    """Provide an in-memory SQLite engine with sample rows."""
    engine = create_sqlalchemy_engine(url='sqlite://')

    with engine.begin() as connection:
        connection.execute(text(
            'CREATE TABLE "blog_posts" ('
            'id INTEGER PRIMARY KEY, '
            'author_id INTEGER NOT NULL, '
            'title TEXT NOT NULL, '
            'status TEXT NOT NULL)'
        ))
        connection.execute(
            text('INSERT INTO "blog_posts" (id, author_id, title, status) VALUES (:id, :author_id, :title, :status)'),
            [
                {'id': 1, 'author_id': 10, 'title': 'First', 'status': 'published'},
                {'id': 2, 'author_id': 10, 'title': 'Second', 'status': 'draft'},
                {'id': 3, 'author_id': 20, 'title': 'Third', 'status': 'published'},
            ]
        )

    yield engine
    engine.dispose()


@pytest.fixture
def db(sqlite_engine):
    """Provide a DatabasePool over the sample database."""
    return DatabasePool(sqlite_engine, camelize=True)


@pytest.fixture
def mock_connection():
    """Provide a mock Connection whose execute() returns two rows."""
    result = MagicMock()
    result.returns_rows = True
    result.mappings.return_value = [{'user_id': 1, 'first_name': 'Ann'}, {'user_id': 2, 'first_name': 'Bo'}]
    result.rowcount = 2

    connection = MagicMock()
    connection.execute.return_value = result
    return connection
