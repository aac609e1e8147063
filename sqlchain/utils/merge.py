"""
========================
Template merging helper.
========================

Builders collect repeated calls of the same clause (SELECT, SET, RETURNING,
ORDER BY, ...) as separate templates and merge them into one at render
time, so that ``SELECT("a").SELECT("b")`` renders exactly like
``SELECT("a, b")``.
"""

from typing import List, Sequence

from sqlchain.chain.template import Template


def merge(items: Sequence[Template], separator: str = "") -> Template:
    """
    Combine several templates into one.

    The last literal piece of each item is joined to the first literal piece
    of the next item with the separator in between. All other pieces and all
    values keep their order.

    Args:
        items: Templates to combine, in order
        separator: Text placed between consecutive items

    Returns:
        Combined template; the empty template for no items and the item
        itself for a single item

    Example:
        >>> merge([Template(("Hello", " ! "), (1,)), Template(("World", " ? "), (2,))])
        Template(strings=('Hello', ' ! World', ' ? '), values=(1, 2))
    """
    if not items:
        return Template()

    if len(items) == 1:
        return items[0]

    strings: List[str] = list(items[0].strings)
    values: List = list(items[0].values)

    for item in items[1:]:
        strings[-1] = strings[-1] + separator + item.strings[0]
        strings.extend(item.strings[1:])
        values.extend(item.values)

    return Template(tuple(strings), tuple(values))
