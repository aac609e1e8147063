"""
Identifier case conversion.

snake_case is used for column names built from mapping keys, camel_case for
the keys of rows returned by the execution facade.
"""

import re
from typing import Any, Mapping

_CAMEL_BOUNDARY = re.compile(r"([a-zA-Z])(?=[A-Z])")
_SNAKE_BOUNDARY = re.compile(r"[_.-](\w|$)")


def snake_case(text: str) -> str:
    """Convert camelCase to snake_case ("userId" -> "user_id")."""
    return _CAMEL_BOUNDARY.sub(r"\1_", text).lower()


def camel_case(text: str) -> str:
    """Convert snake_case, dotted or dashed text to camelCase ("user_id" -> "userId")."""
    return _SNAKE_BOUNDARY.sub(lambda match: match.group(1).upper(), text)


def camelize(value: Any) -> Any:
    """
    Return a copy of value with every dict key camelCased.

    Lists and dicts are walked recursively, so nested JSON column values
    are converted too. Non-string keys and scalars are left as they are.

    Example:
        >>> camelize([{"user_id": 1, "profile": {"first_name": "Ann"}}])
        [{'userId': 1, 'profile': {'firstName': 'Ann'}}]
    """
    if isinstance(value, Mapping):
        return {
            camel_case(key) if isinstance(key, str) else key: camelize(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [camelize(item) for item in value]
    return value
