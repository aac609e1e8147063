"""
=========================================
Keyword-tagged fragment chains.
=========================================

A Chain is an immutable sequence of Fragments. Every keyword method returns
a new Chain with one more fragment; the original is left untouched, so a
partially built chain can be reused as the base for several queries.

Rendering is a single left-to-right pass with one running placeholder
counter. Nested chains (sub-selects, EXISTS, ...) render from the counter
value at their position, so placeholder numbers stay unique and strictly
increasing at any nesting depth.

Usage:
    from sqlchain.chain import SELECT

    sql, params = (
        SELECT("id, name")
        .FROM("users")
        .WHERE("id = {}", 1)
        .AND("status = {}", "active")
        .render()
    )
    # SELECT id, name FROM users WHERE (id = $1) AND (status = $2)
    # [1, 'active']
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Tuple, Union

from sqlchain.chain.fragment import Expression, Fragment, Rendered
from sqlchain.chain.template import Template, TemplateLike, as_template

ChainArg = Union[TemplateLike, Expression]


@dataclass(frozen=True)
class Chain(Expression):
    """Ordered, immutable sequence of keyword-tagged fragments.

    Attributes:
        fragments: Fragments in rendering order
    """

    fragments: Tuple[Fragment, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "fragments", tuple(self.fragments))

    @classmethod
    def from_template(cls, template: TemplateLike, *values: Any) -> "Chain":
        """Build a chain holding a single unprefixed fragment.

        Example:
            >>> Chain.from_template("now() - interval {}", "1 day").render()
            ('now() - interval $1', ['1 day'])
        """
        return cls((Fragment(as_template(template, values)),))

    def when(self, condition: bool, callback: Callable[["Chain"], "Chain"]) -> "Chain":
        """Apply callback only if condition is true, otherwise return self."""
        return callback(self) if condition else self

    def render(self, index: int = 0) -> Rendered:
        parts: List[str] = []
        params: List[Any] = []

        for fragment in self.fragments:
            fragment_sql, fragment_params = fragment.render(index)
            index += len(fragment_params)
            parts.append(fragment_sql)
            params.extend(fragment_params)

        return " ".join(parts), params

    def append_fragment(self, fragment: Fragment) -> "Chain":
        """Return a new chain with a prebuilt fragment appended."""
        return Chain(self.fragments + (fragment,))

    def append(
        self,
        keyword: str,
        template: ChainArg,
        *values: Any,
        wrap_parens: bool = False
    ) -> "Chain":
        """Return a new chain with a keyword-tagged fragment appended.

        A nested expression is always parenthesized: ``KEYWORD (<expr>)``.
        A template is rendered as ``KEYWORD <body>``, or ``KEYWORD (<body>)``
        when wrap_parens is set.

        Args:
            keyword: SQL keyword text, e.g. "WHERE" or "LEFT JOIN"
            template: Template in any accepted form, or a nested expression
            *values: Values for the template slots
            wrap_parens: Parenthesize the template body

        Returns:
            New Chain instance
        """
        if isinstance(template, Expression):
            if values:
                raise TypeError(f"{keyword} takes no values together with a nested expression")
            fragment = Fragment(Template(("", ""), (template,)), f"{keyword} (", ")")
        elif wrap_parens:
            fragment = Fragment(as_template(template, values), f"{keyword} (", ")")
        else:
            fragment = Fragment(as_template(template, values), f"{keyword} ")

        return self.append_fragment(fragment)

    # Keyword methods

    def AND(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("AND", template, *values, wrap_parens=True)

    def AS(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("AS", template, *values)

    def DELETE_FROM(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("DELETE FROM", template, *values)

    def FROM(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("FROM", template, *values)

    def GROUP_BY(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("GROUP BY", template, *values)

    def HAVING(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("HAVING", template, *values, wrap_parens=True)

    def INSERT_INTO(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("INSERT INTO", template, *values)

    def JOIN(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("JOIN", template, *values)

    def LEFT_JOIN(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("LEFT JOIN", template, *values)

    def LIMIT(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("LIMIT", template, *values)

    def OFFSET(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("OFFSET", template, *values)

    def OR(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("OR", template, *values)

    def ORDER_BY(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("ORDER BY", template, *values)

    def RETURNING(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("RETURNING", template, *values)

    def SELECT(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("SELECT", template, *values)

    def SET(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("SET", template, *values)

    @property
    def UNION(self) -> "Chain":
        return self.append_fragment(Fragment(Template(), "UNION"))

    def UPDATE(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("UPDATE", template, *values)

    def VALUES(self, *values: Any) -> "Chain":
        """Append ``VALUES (...)`` with one slot per value."""
        return self.append_fragment(Fragment(separated(values, ", "), "VALUES (", ")"))

    def WHERE(self, template: ChainArg, *values: Any) -> "Chain":
        return self.append("WHERE", template, *values, wrap_parens=True)


def separated(values: Tuple[Any, ...], separator: str) -> Template:
    """Build a template holding only slots, joined by separator.

    Example:
        >>> separated((1, 2, 3), ", ").strings
        ('', ', ', ', ', '')
    """
    if not values:
        return Template()
    return Template(("",) + (separator,) * (len(values) - 1) + ("",), values)
