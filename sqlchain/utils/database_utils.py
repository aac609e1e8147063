"""
==================================================
SQLAlchemy engine helpers for the execution facade.
==================================================

Builds pooled SQLAlchemy engines from DatabaseConfig settings and converts
rendered ``$n`` statements into SQLAlchemy ``text()`` clauses with named
binds (``:p1``, ``:p2``, ...), which every SQLAlchemy dialect accepts.

Example:
    >>> from sqlchain.utils.database_utils import create_sqlalchemy_engine, to_text_clause
    >>>
    >>> engine = create_sqlalchemy_engine()
    >>> statement, binds = to_text_clause('SELECT * FROM "users" WHERE (id = $1)', [7])
    >>> str(statement)
    'SELECT * FROM "users" WHERE (id = :p1)'
    >>> binds
    {'p1': 7}
"""

import logging
import re
from typing import Any, Dict, Optional, Sequence, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.sql.elements import TextClause

from sqlchain.core.config import DatabaseConfig, config

logger = logging.getLogger(__name__)

# Regions scanned by to_text_clause. Quoted text, dollar-quoted bodies and
# comments are copied verbatim; only $n outside them is a placeholder.
_TOKEN = re.compile(
    r"""
    (?P<literal>'[^']*'|"[^"]*")
    | (?P<dollar>\$(?P<tag>(?:[A-Za-z_]\w*)?)\$.*?\$(?P=tag)\$)
    | (?P<comment>--[^\n]*|/\*.*?\*/)
    | \$(?P<index>\d+)
    | (?P<bind>(?<![:\w\\]):\w+(?!:))
    """,
    re.VERBOSE | re.DOTALL
)

# Same pattern text() uses to find ":name" binds
_BIND_LIKE = re.compile(r"(?<![:\w\\]):\w+(?!:)")


def bind_name(index: int) -> str:
    """Name of the SQLAlchemy bind parameter standing in for ``$index``."""
    return f"p{index}"


def _escape_binds(sql: str) -> str:
    return _BIND_LIKE.sub(lambda match: "\\" + match.group(0), sql)


def to_text_clause(sql: str, params: Sequence[Any]) -> Tuple[TextClause, Dict[str, Any]]:
    """
    Rebind a rendered ``$n`` statement as a SQLAlchemy text clause.

    Only ``$1``..``$N`` (N = len(params)) outside string literals, quoted
    identifiers, dollar-quoted bodies and comments become ``:pN`` binds.
    Any ``:name`` already in the text is escaped so text() keeps it as
    literal SQL.

    Args:
        sql: Statement text with $1..$N placeholders
        params: Values where params[i - 1] binds to $i

    Returns:
        Tuple of (text clause, bind parameter dict)

    Example:
        >>> statement, binds = to_text_clause("SELECT $1::int, '$2'", [5])
        >>> str(statement)
        "SELECT :p1 ::int, '$2'"
    """
    def rebind(match):
        index = match.group('index')
        if index is None:
            # literal, dollar-quoted body, comment or a stray :name
            return _escape_binds(match.group(0))

        if not 1 <= int(index) <= len(params):
            return match.group(0)

        bind = f":{bind_name(int(index))}"
        # ":p1::int" would hide the bind from text(); separate the cast
        following = match.string[match.end():match.end() + 1]
        if following == ':' or following.isalnum() or following == '_':
            bind += ' '
        return bind

    rebound = _TOKEN.sub(rebind, sql)
    binds = {bind_name(i): value for i, value in enumerate(params, start=1)}
    return text(rebound), binds


def create_sqlalchemy_engine(
    db_config: Optional[DatabaseConfig] = None,
    url: Optional[str] = None,
    **engine_kwargs: Any
) -> Engine:
    """
    Create SQLAlchemy engine with connection pooling.

    Args:
        db_config: Connection settings (defaults to config.db)
        url: Explicit SQLAlchemy URL; overrides db_config connection fields
        **engine_kwargs: Extra keyword arguments for sqlalchemy.create_engine

    Returns:
        Configured SQLAlchemy Engine

    Example:
        >>> engine = create_sqlalchemy_engine()
        >>> engine = create_sqlalchemy_engine(url='sqlite://')
    """
    db_config = db_config or config.db

    if url is not None:
        logger.debug(f"Creating engine for explicit URL ({url.split(':', 1)[0]})")
        return create_engine(url, **engine_kwargs)

    connection_url = URL.create(
        drivername='postgresql+psycopg2',
        username=db_config.user,
        password=db_config.password,
        host=db_config.host,
        port=db_config.port,
        database=db_config.database
    )

    options = {
        'echo': db_config.echo,
        'pool_size': db_config.pool_size,
        'max_overflow': db_config.max_overflow,
        'pool_pre_ping': True
    }
    options.update(engine_kwargs)

    logger.debug(
        f"Creating engine for {db_config.host}:{db_config.port}/{db_config.database} "
        f"(pool_size={options['pool_size']})"
    )
    return create_engine(connection_url, **options)
