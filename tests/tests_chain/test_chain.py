"""
Tests for sqlchain.chain.chain.

Tests cover:
- Keyword methods and their prefix / parenthesization rules
- Single-pass placeholder numbering across nested chains
- Immutability of chains
- when() conditional appends
- VALUES and UNION helpers
"""

import re

import pytest

from sqlchain.chain import EXISTS, SELECT, Chain, Template
from sqlchain.core.errors import TemplateArityError


def placeholder_numbers(sql):
    return [int(n) for n in re.findall(r"\$(\d+)", sql)]


# ============================================================================
# UNIT TESTS
# ============================================================================


@pytest.mark.unit
def test_builds_sql():
    """Test a basic SELECT ... FROM ... WHERE chain."""
    user_id = 1

    sql, params = SELECT("id, name").FROM("users").WHERE("id = {}", user_id).render()

    assert sql == "SELECT id, name FROM users WHERE (id = $1)"
    assert params == [user_id]


@pytest.mark.unit
def test_where_and_are_parenthesized():
    """Test WHERE and AND wrap their bodies, OR does not."""
    sql, params = (
        Chain()
        .WHERE("a = {}", 1)
        .AND("b = {} OR c = {}", 2, 3)
        .OR("d = {}", 4)
        .render()
    )

    assert sql == "WHERE (a = $1) AND (b = $2 OR c = $3) OR d = $4"
    assert params == [1, 2, 3, 4]


@pytest.mark.unit
def test_keywords_render_their_text():
    """Test multi-word keywords render with spaces."""
    sql, _ = (
        Chain()
        .SELECT("count(*)")
        .FROM("posts")
        .LEFT_JOIN("users ON users.id = posts.author_id")
        .GROUP_BY("users.id")
        .HAVING("count(*) > {}", 5)
        .ORDER_BY("users.id")
        .render()
    )

    assert sql == (
        "SELECT count(*) FROM posts LEFT JOIN users ON users.id = posts.author_id "
        "GROUP BY users.id HAVING (count(*) > $1) ORDER BY users.id"
    )


@pytest.mark.unit
def test_nested_chain_is_parenthesized():
    """Test passing a chain to a keyword method wraps it in parentheses."""
    inner = SELECT("id").FROM("users").WHERE("active = {}", True)

    sql, params = SELECT("*").FROM(inner).AS("u").render()

    assert sql == "SELECT * FROM (SELECT id FROM users WHERE (active = $1)) AS u"
    assert params == [True]


@pytest.mark.unit
def test_exists_subchain_continues_numbering():
    """Test outer WHERE uses $1 and the embedded sub-select uses $2."""
    sub = SELECT("1").FROM("posts").WHERE("posts.author_id = users.id AND posts.status = {}", "published")

    sql, params = (
        SELECT("id")
        .FROM("users")
        .WHERE("role = {}", "author")
        .AND(EXISTS(sub))
        .LIMIT("{}", 10)
        .render()
    )

    assert sql == (
        "SELECT id FROM users WHERE (role = $1) AND (EXISTS (SELECT 1 FROM posts "
        "WHERE (posts.author_id = users.id AND posts.status = $2))) LIMIT $3"
    )
    assert params == ["author", "published", 10]


@pytest.mark.unit
def test_values_renders_one_slot_per_value():
    """Test VALUES(*values) renders a comma separated slot list."""
    sql, params = Chain().INSERT_INTO('"users" ("id", "name")').VALUES(1, "Ann").render()

    assert sql == 'INSERT INTO "users" ("id", "name") VALUES ($1, $2)'
    assert params == [1, "Ann"]


@pytest.mark.edge_case
def test_values_without_arguments():
    """Test VALUES() with no values renders empty parentheses."""
    assert Chain().VALUES().render() == ("VALUES ()", [])


@pytest.mark.unit
def test_union_joins_two_selects():
    """Test UNION continues placeholder numbering into the second select."""
    sql, params = (
        SELECT("id").FROM("a").WHERE("x = {}", 1)
        .UNION
        .SELECT("id").FROM("b").WHERE("y = {}", 2)
        .render()
    )

    assert sql == "SELECT id FROM a WHERE (x = $1) UNION SELECT id FROM b WHERE (y = $2)"
    assert params == [1, 2]


@pytest.mark.unit
def test_update_set_returning():
    """Test the UPDATE-related keywords."""
    sql, params = (
        Chain()
        .UPDATE("posts")
        .SET("title = {}", "Hi")
        .WHERE("id = {}", 3)
        .RETURNING("id")
        .render()
    )

    assert sql == "UPDATE posts SET title = $1 WHERE (id = $2) RETURNING id"
    assert params == ["Hi", 3]


@pytest.mark.unit
def test_delete_from():
    """Test the DELETE FROM keyword."""
    assert Chain().DELETE_FROM("posts").WHERE("id = {}", 1).render() == (
        "DELETE FROM posts WHERE (id = $1)", [1]
    )


@pytest.mark.unit
def test_from_template_has_no_prefix():
    """Test Chain.from_template renders the bare template."""
    assert Chain.from_template("now() - interval {}", "1 day").render() == (
        "now() - interval $1", ["1 day"]
    )


@pytest.mark.unit
def test_append_custom_keyword():
    """Test append() with a keyword that has no dedicated method."""
    sql, params = SELECT("*").FROM("t").WHERE("a = {}", 1).append("FETCH FIRST", "{} ROWS ONLY", 5).render()

    assert sql == "SELECT * FROM t WHERE (a = $1) FETCH FIRST $2 ROWS ONLY"
    assert params == [1, 5]


@pytest.mark.unit
def test_append_accepts_prebuilt_template():
    """Test keyword methods accept a Template instance."""
    template = Template(("id = ", ""), (4,))

    assert Chain().WHERE(template).render() == ("WHERE (id = $1)", [4])


@pytest.mark.unit
def test_render_with_start_index():
    """Test the start index shifts the whole chain."""
    assert SELECT("{}", "x").WHERE("y = {}", "z").render(5) == (
        "SELECT $6 WHERE (y = $7)", ["x", "z"]
    )


# ============================================================================
# IMMUTABILITY AND COMPOSITION
# ============================================================================


@pytest.mark.unit
def test_chain_methods_do_not_mutate():
    """Test every keyword method returns a new chain."""
    base = SELECT("id").FROM("users")
    active = base.WHERE("active = {}", True)
    admins = base.WHERE("role = {}", "admin")

    assert base.render() == ("SELECT id FROM users", [])
    assert active.render() == ("SELECT id FROM users WHERE (active = $1)", [True])
    assert admins.render() == ("SELECT id FROM users WHERE (role = $1)", ["admin"])


@pytest.mark.unit
def test_when_true_applies_callback():
    """Test when() appends when the condition holds."""
    chain = SELECT("id").FROM("users").when(True, lambda c: c.WHERE("id = {}", 1))

    assert chain.render() == ("SELECT id FROM users WHERE (id = $1)", [1])


@pytest.mark.unit
def test_when_false_returns_self():
    """Test when() returns the same chain when the condition fails."""
    chain = SELECT("id").FROM("users")

    assert chain.when(False, lambda c: c.WHERE("id = {}", 1)) is chain


@pytest.mark.edge_case
def test_empty_chain_renders_nothing():
    """Test an empty chain renders to an empty statement."""
    assert Chain().render() == ("", [])
    assert str(Chain()) == ""


@pytest.mark.edge_case
def test_deep_nesting_numbers_strictly_increase():
    """Test placeholder numbers are 1..N across three nesting levels."""
    level3 = SELECT("id").FROM("c").WHERE("z = {}", "z1").AND("z2 = {}", "z2")
    level2 = SELECT("id").FROM("b").WHERE("y = {}", "y1").AND("id IN ({})", level3).AND("y2 = {}", "y2")
    level1 = (
        SELECT("{} AS tag", "tag")
        .FROM("a")
        .WHERE("x = {}", "x1")
        .AND("id IN ({})", level2)
        .AND("x2 = {}", "x2")
    )

    sql, params = level1.render()

    assert placeholder_numbers(sql) == list(range(1, len(params) + 1))
    assert params == ["tag", "x1", "y1", "z1", "z2", "y2", "x2"]


@pytest.mark.edge_case
def test_same_subchain_embedded_twice():
    """Test one chain value embedded twice gets distinct placeholders each time."""
    sub = SELECT("id").FROM("t").WHERE("k = {}", "v")

    sql, params = Chain().WHERE("a IN ({}) OR b IN ({})", sub, sub).render()

    assert sql == "WHERE (a IN (SELECT id FROM t WHERE (k = $1)) OR b IN (SELECT id FROM t WHERE (k = $2)))"
    assert params == ["v", "v"]


@pytest.mark.edge_case
def test_values_rejected_with_nested_chain():
    """Test values cannot be combined with a nested chain argument."""
    with pytest.raises(TypeError):
        Chain().WHERE(SELECT("1"), 2)


@pytest.mark.edge_case
def test_arity_error_from_keyword_method():
    """Test a keyword method rejects mismatched markers and values."""
    with pytest.raises(TemplateArityError):
        Chain().WHERE("a = {} AND b = {}", 1)


@pytest.mark.edge_case
def test_render_is_idempotent():
    """Test rendering the same chain twice is deterministic."""
    chain = SELECT("id").FROM("t").WHERE("a = {}", 1).AND(EXISTS(SELECT("1").WHERE("b = {}", 2)))

    assert chain.render() == chain.render()
