"""
========================
INSERT statement builder.
========================

Clauses render in the order INSERT INTO, column list / VALUES, ON CONFLICT,
SET, RETURNING. The column list and VALUES slots are generated from a
mapping: keys become snake-cased, double-quoted column names and values
become one placeholder each, in the mapping's order.

ON CONFLICT accepts either raw clause text or a ConflictAction token:

    >>> (InsertQueryBuilder()
    ...     .INSERT_INTO("users")
    ...     .VALUES({"id": 1, "name": "John Doe"})
    ...     .ON_CONFLICT("(id) DO UPDATE")
    ...     .SET({"name": "John Doe"})
    ...     .render())
    ('INSERT INTO "users" ("id", "name") VALUES ($1, $2) ON CONFLICT (id) DO UPDATE SET "name" = $3', [1, 'John Doe', 'John Doe'])
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union

from sqlchain.builders.base import UNSET, ClauseArg, QueryBuilder, clause_templates
from sqlchain.chain.chain import Chain, separated
from sqlchain.chain.fragment import Fragment
from sqlchain.chain.template import Template, TemplateLike, as_template
from sqlchain.utils.merge import merge
from sqlchain.utils.quoting import quote_identifier, quote_table_name


class ConflictAction(str, Enum):
    """Fixed ON CONFLICT actions."""

    DO_NOTHING = 'DO NOTHING'
    DO_UPDATE = 'DO UPDATE'


@dataclass(frozen=True)
class InsertQueryBuilder(QueryBuilder):
    """Immutable INSERT builder.

    Attributes:
        table: Quoted target table name
        columns: (quoted column, value) pairs in insertion order
        on_conflict: ON CONFLICT clause body
        assignments: SET templates for the DO UPDATE case
        returning: RETURNING templates
    """

    table: Optional[str] = None
    columns: Tuple[Tuple[str, Any], ...] = ()
    on_conflict: Optional[Template] = None
    assignments: Tuple[Template, ...] = ()
    returning: Tuple[Template, ...] = ()

    def INSERT_INTO(self, table: str) -> 'InsertQueryBuilder':
        return self._replace(table=quote_table_name(table))

    def VALUES(self, values: Mapping[str, Any]) -> 'InsertQueryBuilder':
        """Set the inserted row; replaces any earlier VALUES call."""
        columns = tuple(
            (quote_identifier(key), value)
            for key, value in values.items()
            if value is not UNSET
        )
        return self._replace(columns=columns)

    def ON_CONFLICT(
        self,
        template: Union[ConflictAction, TemplateLike],
        *values: Any
    ) -> 'InsertQueryBuilder':
        if isinstance(template, ConflictAction):
            if values:
                raise TypeError("ON CONFLICT takes no values together with a ConflictAction")
            return self._replace(on_conflict=Template((template.value,)))
        return self._replace(on_conflict=as_template(template, values))

    def SET(self, template: ClauseArg, *values: Any) -> 'InsertQueryBuilder':
        return self._replace(assignments=self.assignments + clause_templates('SET', template, values))

    def RETURNING(self, template: ClauseArg, *values: Any) -> 'InsertQueryBuilder':
        added = clause_templates('RETURNING', template, values, allow_mapping=False)
        return self._replace(returning=self.returning + added)

    def _values_fragment(self) -> Fragment:
        if not self.columns:
            return Fragment(Template(('DEFAULT VALUES',)))

        names = ', '.join(column for column, _ in self.columns)
        slots = separated(tuple(value for _, value in self.columns), ', ')
        return Fragment(slots, f'({names}) VALUES (', ')')

    def to_chain(self) -> Chain:
        chain = Chain()

        if self.table is not None:
            chain = chain.INSERT_INTO(Template((self.table,)))
            chain = chain.append_fragment(self._values_fragment())

        if self.on_conflict is not None:
            chain = chain.append('ON CONFLICT', self.on_conflict)

        if self.assignments:
            chain = chain.SET(merge(self.assignments, ', '))

        if self.returning:
            chain = chain.RETURNING(merge(self.returning, ', '))

        return chain
