"""
=================================
Shared statement-builder plumbing.
=================================

Every statement builder is a frozen dataclass: clause methods return a copy
with one field replaced (dataclasses.replace), so a partially built query
can be reused as the base for several variants.

Clause arguments come in three shapes, all normalized to Templates when
the clause is added:
    - template + values: ``WHERE("id = {}", 1)``
    - mapping: ``WHERE({"userId": 1})`` -> ``"user_id" = $1``; entries whose
      value is UNSET are dropped, None binds SQL NULL
    - expression: ``WHERE(EXISTS(subquery))`` -> inlined sub-chain

This module also defines the contract of the execution collaborator
(Executor) and its result types.
"""

from abc import abstractmethod
from dataclasses import dataclass, field, replace
from typing import (
    Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple, TypeVar, Union
)

from sqlchain.chain.chain import Chain
from sqlchain.chain.fragment import Expression, Rendered
from sqlchain.chain.template import Template, TemplateLike, as_template
from sqlchain.core.errors import SqlChainError
from sqlchain.utils.quoting import quote_identifier

Row = Dict[str, Any]
ClauseArg = Union[TemplateLike, Mapping[str, Any], Expression]

B = TypeVar('B', bound='QueryBuilder')


class _Unset:
    """Marker for "no value provided" in mapping-shaped clause calls."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'UNSET'

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class QueryResult:
    """Rows returned by the execution facade.

    Attributes:
        rows: Result rows as dicts (empty for statements without rows)
        rowcount: Rows affected as reported by the driver (-1 if unknown)
    """

    rows: List[Row] = field(default_factory=list)
    rowcount: int = -1


@dataclass
class Page:
    """One page of a listing plus the total row count."""

    rows: List[Row]
    count: int


class Executor(Protocol):
    """Anything that can run a rendered statement."""

    def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
        ...


def clause_templates(
    clause: str,
    template: ClauseArg,
    values: Sequence[Any],
    allow_mapping: bool = True
) -> Tuple[Template, ...]:
    """
    Normalize one clause call to the templates stored on the builder.

    Args:
        clause: Clause name, used in error messages
        template: Template, mapping or nested expression
        values: Positional values for a template
        allow_mapping: Whether the clause accepts column -> value mappings

    Returns:
        Tuple of templates (one per mapping entry for mappings)

    Raises:
        TypeError: For values passed with a mapping/expression, or a
            mapping passed to a clause that does not take one
        TemplateArityError: If template pieces and values do not line up
    """
    if isinstance(template, Mapping):
        if not allow_mapping:
            raise TypeError(f"{clause} does not accept a mapping")
        if values:
            raise TypeError(f"{clause} takes no positional values together with a mapping")
        return tuple(
            Template((f"{quote_identifier(key)} = ", ""), (value,))
            for key, value in template.items()
            if value is not UNSET
        )

    if isinstance(template, Expression):
        if values:
            raise TypeError(f"{clause} takes no positional values together with an expression")
        return (Template(("", ""), (template,)),)

    return (as_template(template, values),)


def source_template(clause: str, source: Union[TemplateLike, Expression], values: Sequence[Any]) -> Template:
    """
    Normalize a FROM / JOIN argument.

    A nested expression is parenthesized (``FROM (<subquery>)``), the same
    way Chain.append renders one; anything else goes through as_template.

    Raises:
        TypeError: For values passed together with an expression
    """
    if isinstance(source, Expression):
        if values:
            raise TypeError(f"{clause} takes no positional values together with an expression")
        return Template(("(", ")"), (source,))
    return as_template(source, values)


def append_predicates(chain: Chain, keyword: str, predicates: Sequence[Template]) -> Chain:
    """Append ``KEYWORD (p1) AND (p2) ...``; nothing for no predicates."""
    for i, predicate in enumerate(predicates):
        if i == 0:
            chain = chain.append(keyword, predicate, wrap_parens=True)
        else:
            chain = chain.AND(predicate)
    return chain


def bound_value(value: Any) -> Template:
    """Template consisting of a single slot."""
    return Template(("", ""), (value,))


@dataclass(frozen=True)
class QueryBuilder(Expression):
    """Base class for the statement builders.

    Attributes:
        db: Execution collaborator used by the terminal methods
    """

    db: Optional[Executor] = field(default=None, compare=False, repr=False)

    @abstractmethod
    def to_chain(self) -> Chain:
        """Assemble the accumulated clauses into a Chain in canonical order."""

    def render(self, index: int = 0) -> Rendered:
        return self.to_chain().render(index)

    def when(self: B, condition: bool, callback: Callable[[B], B]) -> B:
        """Apply callback only if condition is true, otherwise return self.

        Example:
            >>> query = builder.when(status is not None, lambda q: q.WHERE({'status': status}))
        """
        return callback(self) if condition else self

    def execute(self) -> QueryResult:
        """Render the statement and run it through the bound database.

        Returns:
            QueryResult from the execution facade

        Raises:
            SqlChainError: If the builder is not bound to a database
        """
        sql, params = self.render()
        return self._executor().query(sql, params)

    def _executor(self) -> Executor:
        if self.db is None:
            raise SqlChainError(f"{type(self).__name__} is not bound to a database")
        return self.db

    def _replace(self: B, **changes: Any) -> B:
        return replace(self, **changes)
