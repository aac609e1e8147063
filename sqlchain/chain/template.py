"""
=========================================
Literal-text templates with value slots.
=========================================

A Template is the two-array form of a SQL snippet: N + 1 literal pieces
interleaved with N values. Every clause call in sqlchain is normalized to a
Template before it is stored.

Accepted input forms (see as_template):
    - "id = {} AND status = {}" plus values: the text is split on "{}"
    - ["id = ", " AND status = ", ""] plus values: explicit pieces
    - Template(...): an already normalized template

Example:
    >>> t = Template.parse("id = {}", 1)
    >>> t.strings, t.values
    (('id = ', ''), (1,))
"""

from dataclasses import dataclass
from typing import Any, Sequence, Tuple, Union

from sqlchain.core.errors import TemplateArityError

SLOT = "{}"


@dataclass(frozen=True)
class Template:
    """Immutable literal pieces plus the values that sit between them.

    Attributes:
        strings: Literal SQL text pieces (always one more than values)
        values: Scalars to bind, or nested expressions to inline
    """

    strings: Tuple[str, ...] = ("",)
    values: Tuple[Any, ...] = ()

    def __post_init__(self):
        # Accept lists from callers but store tuples
        object.__setattr__(self, "strings", tuple(self.strings))
        object.__setattr__(self, "values", tuple(self.values))

        if len(self.strings) != len(self.values) + 1:
            raise TemplateArityError(
                f"Template has {len(self.strings)} literal pieces for "
                f"{len(self.values)} values; expected {len(self.values) + 1}"
            )

    @classmethod
    def parse(cls, text: str, *values: Any) -> "Template":
        """Split text on "{}" markers and pair the pieces with values.

        Args:
            text: SQL text with one "{}" marker per value
            *values: Values for the markers, in order

        Returns:
            Template instance

        Raises:
            TemplateArityError: If the marker count differs from len(values)
        """
        return cls(tuple(text.split(SLOT)), values)


TemplateLike = Union[str, Sequence[str], Template]


def as_template(template: TemplateLike, values: Sequence[Any] = ()) -> Template:
    """Normalize any accepted template form to a Template.

    Args:
        template: Marker string, sequence of literal pieces, or Template
        values: Positional values for the slots

    Returns:
        Template instance

    Raises:
        TemplateArityError: If pieces and values do not line up
        TypeError: If values are passed alongside a prebuilt Template
    """
    if isinstance(template, Template):
        if values:
            raise TypeError("values cannot be passed together with a prebuilt Template")
        return template

    if isinstance(template, str):
        return Template.parse(template, *values)

    return Template(tuple(template), tuple(values))
