"""
Shared fixtures and fakes for builder tests.

Key fixtures:
- fake_db: FakeDatabase that records every (sql, params) pair and answers
  with queued results.
"""

import pytest

from sqlchain.builders.base import QueryResult


class FakeDatabase:
    """Executor double matching the Database.query contract."""

    def __init__(self):
        self.calls = []
        self.results = []

    def queue(self, *rows, rowcount=None):
        """Queue the rows returned by the next query() call."""
        rows = [dict(row) for row in rows]
        self.results.append(QueryResult(rows=rows, rowcount=len(rows) if rowcount is None else rowcount))

    def query(self, sql, params=None):
        self.calls.append((sql, list(params or [])))
        if self.results:
            return self.results.pop(0)
        return QueryResult(rows=[], rowcount=0)


@pytest.fixture
def fake_db():
    """Provide a fresh FakeDatabase."""
    return FakeDatabase()
