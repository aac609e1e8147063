"""
Tests for UpdateQueryBuilder.
"""

import pytest

from sqlchain.builders import UNSET, UpdateQueryBuilder
from sqlchain.chain import EXISTS, SELECT


@pytest.mark.unit
def test_update_set_where():
    """Test SET placeholders come before WHERE placeholders."""
    sql, params = (
        UpdateQueryBuilder()
        .UPDATE('posts')
        .SET({'title': 'Hello', 'status': 'published'})
        .WHERE({'id': 7})
        .render()
    )

    assert sql == 'UPDATE "posts" SET "title" = $1, "status" = $2 WHERE ("id" = $3)'
    assert params == ['Hello', 'published', 7]


@pytest.mark.unit
def test_set_template_and_mapping_mix():
    sql, params = (
        UpdateQueryBuilder()
        .UPDATE('posts')
        .SET('view_count = view_count + {}', 1)
        .SET({'updatedAt': 'now'})
        .WHERE('id = {}', 7)
        .AND('deleted IS FALSE')
        .RETURNING('id, view_count')
        .render()
    )

    assert sql == (
        'UPDATE "posts" SET view_count = view_count + $1, "updated_at" = $2 '
        'WHERE (id = $3) AND (deleted IS FALSE) RETURNING id, view_count'
    )
    assert params == [1, 'now', 7]


@pytest.mark.edge_case
def test_unset_assignments_are_skipped():
    """Test a partial update only writes the provided fields."""
    sql, params = UpdateQueryBuilder().UPDATE('posts').SET({'title': 'X', 'status': UNSET}).render()

    assert sql == 'UPDATE "posts" SET "title" = $1'
    assert params == ['X']


@pytest.mark.edge_case
def test_where_exists_subchain():
    """Test a nested EXISTS in an UPDATE continues numbering."""
    sql, params = (
        UpdateQueryBuilder()
        .UPDATE('users')
        .SET({'role': 'author'})
        .WHERE(EXISTS(SELECT('1').FROM('posts').WHERE('posts.author_id = users.id AND posts.status = {}', 'published')))
        .render()
    )

    assert sql == (
        'UPDATE "users" SET "role" = $1 WHERE (EXISTS (SELECT 1 FROM posts '
        'WHERE (posts.author_id = users.id AND posts.status = $2)))'
    )
    assert params == ['author', 'published']


@pytest.mark.edge_case
def test_update_is_immutable():
    base = UpdateQueryBuilder().UPDATE('posts').SET({'status': 'archived'})
    scoped = base.WHERE({'id': 1})

    assert base.render() == ('UPDATE "posts" SET "status" = $1', ['archived'])
    assert scoped.render() == ('UPDATE "posts" SET "status" = $1 WHERE ("id" = $2)', ['archived', 1])


@pytest.mark.integration
def test_execute_reports_rowcount(fake_db):
    fake_db.queue(rowcount=3)

    result = UpdateQueryBuilder(db=fake_db).UPDATE('posts').SET({'status': 'archived'}).execute()

    assert result.rowcount == 3
    assert result.rows == []
    assert fake_db.calls == [('UPDATE "posts" SET "status" = $1', ['archived'])]
