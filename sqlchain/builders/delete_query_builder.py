"""
DELETE statement builder.

Clauses render in the order DELETE FROM, WHERE, RETURNING.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from sqlchain.builders.base import ClauseArg, QueryBuilder, append_predicates, clause_templates
from sqlchain.chain.chain import Chain
from sqlchain.chain.template import Template
from sqlchain.utils.merge import merge
from sqlchain.utils.quoting import quote_table_name


@dataclass(frozen=True)
class DeleteQueryBuilder(QueryBuilder):
    """Immutable DELETE builder."""

    table: Optional[str] = None
    where: Tuple[Template, ...] = ()
    returning: Tuple[Template, ...] = ()

    def DELETE_FROM(self, table: str) -> 'DeleteQueryBuilder':
        return self._replace(table=quote_table_name(table))

    def WHERE(self, template: ClauseArg, *values: Any) -> 'DeleteQueryBuilder':
        return self._replace(where=self.where + clause_templates('WHERE', template, values))

    def AND(self, template: ClauseArg, *values: Any) -> 'DeleteQueryBuilder':
        return self.WHERE(template, *values)

    def RETURNING(self, template: ClauseArg, *values: Any) -> 'DeleteQueryBuilder':
        added = clause_templates('RETURNING', template, values, allow_mapping=False)
        return self._replace(returning=self.returning + added)

    def to_chain(self) -> Chain:
        chain = Chain()

        if self.table is not None:
            chain = chain.DELETE_FROM(Template((self.table,)))

        chain = append_predicates(chain, 'WHERE', self.where)

        if self.returning:
            chain = chain.RETURNING(merge(self.returning, ', '))

        return chain
