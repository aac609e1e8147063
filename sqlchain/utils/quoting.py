"""
Identifier quoting helpers.

Only identifiers passed through these helpers are escaped; every other piece
of template text is emitted verbatim.
"""

from sqlchain.utils.case import snake_case


def quote_table_name(name: str) -> str:
    """
    Double-quote a bare table name.

    Names that are already quoted, schema-qualified (contain a dot) or
    contain whitespace (e.g. ``users u``) are returned unchanged.

    Args:
        name: Table name as given by the caller

    Returns:
        Quoted or untouched table name

    Example:
        >>> quote_table_name('users')
        '"users"'
        >>> quote_table_name('public.users')
        'public.users'
    """
    is_already_quoted = len(name) >= 2 and name.startswith('"') and name.endswith('"')
    has_dots = "." in name
    has_whitespace = any(char.isspace() for char in name)

    if is_already_quoted or has_dots or has_whitespace:
        return name
    return f'"{name}"'


def quote_identifier(key: str) -> str:
    """Snake-case a mapping key and wrap it in double quotes ("userId" -> '"user_id"').

    Embedded double quotes are doubled, so the key stays one identifier.
    """
    escaped = snake_case(key).replace('"', '""')
    return f'"{escaped}"'
