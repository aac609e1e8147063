"""
UPDATE statement builder.

Clauses render in the order UPDATE, SET, WHERE, RETURNING. Repeated SET
calls are joined with ", ", repeated WHERE calls with AND.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from sqlchain.builders.base import ClauseArg, QueryBuilder, append_predicates, clause_templates
from sqlchain.chain.chain import Chain
from sqlchain.chain.template import Template
from sqlchain.utils.merge import merge
from sqlchain.utils.quoting import quote_table_name


@dataclass(frozen=True)
class UpdateQueryBuilder(QueryBuilder):
    """Immutable UPDATE builder."""

    table: Optional[str] = None
    assignments: Tuple[Template, ...] = ()
    where: Tuple[Template, ...] = ()
    returning: Tuple[Template, ...] = ()

    def UPDATE(self, table: str) -> 'UpdateQueryBuilder':
        return self._replace(table=quote_table_name(table))

    def SET(self, template: ClauseArg, *values: Any) -> 'UpdateQueryBuilder':
        return self._replace(assignments=self.assignments + clause_templates('SET', template, values))

    def WHERE(self, template: ClauseArg, *values: Any) -> 'UpdateQueryBuilder':
        return self._replace(where=self.where + clause_templates('WHERE', template, values))

    def AND(self, template: ClauseArg, *values: Any) -> 'UpdateQueryBuilder':
        return self.WHERE(template, *values)

    def RETURNING(self, template: ClauseArg, *values: Any) -> 'UpdateQueryBuilder':
        added = clause_templates('RETURNING', template, values, allow_mapping=False)
        return self._replace(returning=self.returning + added)

    def to_chain(self) -> Chain:
        chain = Chain()

        if self.table is not None:
            chain = chain.UPDATE(Template((self.table,)))

        if self.assignments:
            chain = chain.SET(merge(self.assignments, ', '))

        chain = append_predicates(chain, 'WHERE', self.where)

        if self.returning:
            chain = chain.RETURNING(merge(self.returning, ', '))

        return chain
