"""
================================
Fragments and the Expression API.
================================

A Fragment is one Template wrapped in optional prefix/suffix text. Rendering
walks the literal pieces and values in lockstep: scalars become "$n"
placeholders, nested expressions are rendered inline starting from the
current placeholder index.

Classes:
    Expression: Anything that renders to (sql, params) from a start index
    Fragment: A Template plus prefix/suffix text

Example:
    >>> Fragment(Template.parse("id = {}", 7), prefix="WHERE (", suffix=")").render()
    ('WHERE (id = $1)', [7])
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Tuple

from sqlchain.chain.template import Template

Rendered = Tuple[str, List[Any]]


class Expression(ABC):
    """Base class for renderable SQL.

    Chains and statement builders are expressions, so either can be placed
    in a value slot and will be inlined instead of bound.
    """

    @abstractmethod
    def render(self, index: int = 0) -> Rendered:
        """Render to SQL text and an ordered parameter list.

        Args:
            index: Number of placeholders already emitted before this
                expression; the first placeholder rendered is index + 1

        Returns:
            Tuple of (sql, params)
        """

    def __str__(self) -> str:
        sql, _ = self.render()
        return sql


@dataclass(frozen=True)
class Fragment:
    """One template, optionally wrapped in keyword text.

    Attributes:
        template: Literal pieces and slot values
        prefix: Text emitted before the body (e.g. "WHERE (")
        suffix: Text emitted after the body (e.g. ")")
    """

    template: Template
    prefix: str = ""
    suffix: str = ""

    def render(self, index: int = 0) -> Rendered:
        parts: List[str] = []
        params: List[Any] = []

        strings = self.template.strings
        values = self.template.values

        for i, text in enumerate(strings):
            parts.append(text)

            if i >= len(values):
                continue

            value = values[i]
            if isinstance(value, Expression):
                nested_sql, nested_params = value.render(index)
                parts.append(nested_sql)
                params.extend(nested_params)
                index += len(nested_params)
            else:
                index += 1
                parts.append(f"${index}")
                params.append(value)

        return f"{self.prefix}{''.join(parts)}{self.suffix}", params

    def __str__(self) -> str:
        sql, _ = self.render()
        return sql
