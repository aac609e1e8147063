"""
===============
Chain starters.
===============

Module-level functions that open a new Chain with a leading keyword, so
queries can be written without an explicit ``Chain()``:

    >>> from sqlchain.chain.keywords import EXISTS, SELECT
    >>> inner = SELECT("1").FROM("posts").WHERE("posts.author_id = users.id")
    >>> SELECT("id").FROM("users").WHERE(EXISTS(inner)).render()
    ('SELECT id FROM users WHERE (EXISTS (SELECT 1 FROM posts WHERE (posts.author_id = users.id)))', [])
"""

from typing import Any

from sqlchain.chain.chain import Chain, ChainArg, separated
from sqlchain.chain.fragment import Fragment


def DELETE_FROM(template: ChainArg, *values: Any) -> Chain:
    return Chain().DELETE_FROM(template, *values)


def EXISTS(*values: Any) -> Chain:
    """Open a chain with ``EXISTS (...)``; chains among values are inlined."""
    return Chain((Fragment(separated(values, ", "), "EXISTS (", ")"),))


def INSERT_INTO(template: ChainArg, *values: Any) -> Chain:
    return Chain().INSERT_INTO(template, *values)


def SELECT(template: ChainArg, *values: Any) -> Chain:
    return Chain().SELECT(template, *values)


def UPDATE(template: ChainArg, *values: Any) -> Chain:
    return Chain().UPDATE(template, *values)


def WITH_RECURSIVE(template: ChainArg, *values: Any) -> Chain:
    return Chain().append("WITH RECURSIVE", template, *values)
