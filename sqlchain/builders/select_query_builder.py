"""
========================
SELECT statement builder.
========================

Clauses render in the fixed order SELECT, FROM, JOIN / LEFT JOIN (in
declaration order), WHERE (predicates ANDed, each parenthesized), GROUP BY,
HAVING, ORDER BY, LIMIT, OFFSET. Unset clauses render nothing.

Usage:
    from sqlchain.builders import SelectQueryBuilder

    query = (
        SelectQueryBuilder()
        .SELECT("id, title")
        .FROM("posts")
        .WHERE({"status": "published"})
        .ORDER_BY("created_at DESC")
        .LIMIT(10)
    )
    sql, params = query.render()
    # SELECT id, title FROM "posts" WHERE ("status" = $1) ORDER BY created_at DESC LIMIT $2
    # ['published', 10]
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

from sqlchain.builders.base import (
    ClauseArg,
    Page,
    QueryBuilder,
    Row,
    append_predicates,
    bound_value,
    clause_templates,
    source_template,
)
from sqlchain.chain.chain import Chain
from sqlchain.chain.fragment import Expression
from sqlchain.chain.template import Template, TemplateLike
from sqlchain.core.errors import NotFoundError
from sqlchain.utils.merge import merge
from sqlchain.utils.quoting import quote_table_name

COUNT_COLUMN = 'COUNT(*)::int AS "count"'


@dataclass(frozen=True)
class JoinClause:
    """A JOIN or LEFT JOIN entry, kept in declaration order."""

    keyword: str
    template: Template


@dataclass(frozen=True)
class SelectQueryBuilder(QueryBuilder):
    """Immutable SELECT builder.

    Attributes:
        select: Select-list templates, merged with ", " at render time
        source: FROM clause template
        joins: JOIN / LEFT JOIN clauses
        where: Predicates, ANDed together
        group_by: GROUP BY templates
        having: HAVING predicates, ANDed together
        order_by: ORDER BY templates
        limit: LIMIT value (bound as a parameter)
        offset: OFFSET value (bound as a parameter)
    """

    select: Tuple[Template, ...] = ()
    source: Optional[Template] = None
    joins: Tuple[JoinClause, ...] = ()
    where: Tuple[Template, ...] = ()
    group_by: Tuple[Template, ...] = ()
    having: Tuple[Template, ...] = ()
    order_by: Tuple[Template, ...] = ()
    limit: Optional[int] = None
    offset: Optional[int] = None

    # Clauses

    def SELECT(self, template: ClauseArg, *values: Any) -> 'SelectQueryBuilder':
        added = clause_templates('SELECT', template, values, allow_mapping=False)
        return self._replace(select=self.select + added)

    def FROM(self, table: Union[TemplateLike, Expression], *values: Any) -> 'SelectQueryBuilder':
        """Set the FROM clause.

        A bare table name is quoted with quote_table_name(); with values,
        the argument is used as a raw template, e.g.
        ``FROM("({}) AS recent", subquery)``. A chain or builder passed on
        its own renders as ``FROM (<subquery>)``.
        """
        if isinstance(table, str) and not values:
            source = Template((quote_table_name(table),))
        else:
            source = source_template('FROM', table, values)
        return self._replace(source=source)

    def JOIN(self, template: Union[TemplateLike, Expression], *values: Any) -> 'SelectQueryBuilder':
        join = JoinClause('JOIN', source_template('JOIN', template, values))
        return self._replace(joins=self.joins + (join,))

    def LEFT_JOIN(self, template: Union[TemplateLike, Expression], *values: Any) -> 'SelectQueryBuilder':
        join = JoinClause('LEFT JOIN', source_template('LEFT JOIN', template, values))
        return self._replace(joins=self.joins + (join,))

    def WHERE(self, template: ClauseArg, *values: Any) -> 'SelectQueryBuilder':
        return self._replace(where=self.where + clause_templates('WHERE', template, values))

    def AND(self, template: ClauseArg, *values: Any) -> 'SelectQueryBuilder':
        return self.WHERE(template, *values)

    def GROUP_BY(self, template: ClauseArg, *values: Any) -> 'SelectQueryBuilder':
        added = clause_templates('GROUP BY', template, values, allow_mapping=False)
        return self._replace(group_by=self.group_by + added)

    def HAVING(self, template: ClauseArg, *values: Any) -> 'SelectQueryBuilder':
        return self._replace(having=self.having + clause_templates('HAVING', template, values))

    def ORDER_BY(self, template: ClauseArg, *values: Any) -> 'SelectQueryBuilder':
        added = clause_templates('ORDER BY', template, values, allow_mapping=False)
        return self._replace(order_by=self.order_by + added)

    def LIMIT(self, limit: Optional[int]) -> 'SelectQueryBuilder':
        return self._replace(limit=limit)

    def OFFSET(self, offset: Optional[int]) -> 'SelectQueryBuilder':
        return self._replace(offset=offset)

    # Rendering

    def _from_where(self, chain: Chain) -> Chain:
        """Append FROM, JOINs and WHERE, shared by the listing and count queries."""
        if self.source is not None:
            chain = chain.FROM(self.source)

        for join in self.joins:
            chain = chain.append(join.keyword, join.template)

        return append_predicates(chain, 'WHERE', self.where)

    def to_chain(self) -> Chain:
        chain = Chain()

        if self.select:
            chain = chain.SELECT(merge(self.select, ', '))

        chain = self._from_where(chain)

        if self.group_by:
            chain = chain.GROUP_BY(merge(self.group_by, ', '))

        chain = append_predicates(chain, 'HAVING', self.having)

        if self.order_by:
            chain = chain.ORDER_BY(merge(self.order_by, ', '))

        if self.limit is not None:
            chain = chain.LIMIT(bound_value(self.limit))

        if self.offset is not None:
            chain = chain.OFFSET(bound_value(self.offset))

        return chain

    def to_count_chain(self) -> Chain:
        """
        Build the row-count variant of this query.

        The select list is replaced by ``COUNT(*)::int AS "count"``; FROM,
        JOIN and WHERE are kept; ORDER BY, LIMIT and OFFSET are dropped.
        Grouped queries are wrapped in a sub-select so the count is the
        number of groups.

        Returns:
            Chain rendering the count query
        """
        if self.group_by:
            grouped = self._replace(order_by=(), limit=None, offset=None)
            return Chain().SELECT(COUNT_COLUMN).FROM('({}) AS "grouped"', grouped)

        return self._from_where(Chain().SELECT(COUNT_COLUMN))

    # Terminals

    def list(self) -> List[Row]:
        """Execute the query and return all rows."""
        return self.execute().rows

    def first(self) -> Optional[Row]:
        """Execute with LIMIT 1 and return the row, or None."""
        rows = self.LIMIT(1).list()
        return rows[0] if rows else None

    def find(self, error: Optional[str] = None) -> Row:
        """
        Execute with LIMIT 1 and return the row.

        Args:
            error: Message for the NotFoundError raised on zero rows

        Returns:
            The first row

        Raises:
            NotFoundError: If the query returned no rows
        """
        rows = self.LIMIT(1).list()
        if not rows:
            raise NotFoundError(error) if error else NotFoundError()
        return rows[0]

    def count(self) -> int:
        """Execute the count variant of this query."""
        sql, params = self.to_count_chain().render()
        result = self._executor().query(sql, params)
        return result.rows[0]['count']

    def page(self, page_number: int, page_size: int) -> Page:
        """
        Fetch one page of rows plus the total count.

        Args:
            page_number: Zero-based page number
            page_size: Rows per page

        Returns:
            Page with the rows of the page and the unpaged row count

        Example:
            >>> page = db.SELECT("id").FROM("posts").page(2, 10)
            >>> # LIMIT 10 OFFSET 20, then SELECT COUNT(*)::int ...
        """
        rows = self.LIMIT(page_size).OFFSET(page_number * page_size).list()
        count = self.count()
        return Page(rows=rows, count=count)
