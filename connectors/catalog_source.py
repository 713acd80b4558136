"""
Catalog source - runs a dialect's catalog queries over a SQLAlchemy engine
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

import psycopg2
from psycopg2.extensions import parse_dsn
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from shared.errors import CatalogConnectionError, QueryError

from .base import CatalogDialect
from .dialect_registry import DialectRegistry

logger = logging.getLogger(__name__)

Row = Tuple[Any, ...]

# Schemes SQLAlchemy no longer accepts, mapped to their current spelling
URL_SCHEME_ALIASES = {
    'postgres': 'postgresql',
    'goracle': 'oracle+oracledb',
}


def to_sqlalchemy_url(connection_string: str) -> Union[str, URL]:
    """
    Turn a user connection string into something ``create_engine`` accepts.

    A string without ``://`` is a libpq keyword DSN (``user=x dbname=y``).
    Its keywords become URL query parameters, which the psycopg2 dialect
    hands to ``psycopg2.connect`` as keyword arguments.

    Raises:
        ValueError: the DSN does not parse
    """
    if '://' not in connection_string:
        try:
            params = parse_dsn(connection_string)
        except psycopg2.ProgrammingError as e:
            raise ValueError(f"invalid libpq connection string: {e}") from e
        return URL.create('postgresql+psycopg2', query=params)

    scheme, rest = connection_string.split('://', 1)
    scheme = URL_SCHEME_ALIASES.get(scheme.lower(), scheme)
    return f"{scheme}://{rest}"


class CatalogSource:
    """Catalog query execution for one database."""

    def __init__(self, engine: Engine, dialect: CatalogDialect):
        self.engine = engine
        self.dialect = dialect

    @classmethod
    def from_url(
        cls,
        connection_string: str,
        registry: Optional[DialectRegistry] = None,
        **engine_kwargs: Any,
    ) -> 'CatalogSource':
        """Create the engine and pick the dialect for ``connection_string``."""
        registry = registry or DialectRegistry.default()
        dialect = registry.for_url(connection_string)

        # malformed URLs (bad port, bad DSN) surface as ValueError
        try:
            engine = create_engine(
                to_sqlalchemy_url(connection_string),
                pool_pre_ping=True,
                **engine_kwargs,
            )
        except (SQLAlchemyError, ValueError, ImportError) as e:
            raise CatalogConnectionError(f"failed to connect to {dialect.name} database: {e}") from e

        logger.info(f"Initialized catalog source for {dialect.name} database")
        return cls(engine, dialect)

    def fetch_tables(self, schema: str) -> List[Row]:
        return self._fetch(
            "tables",
            self.dialect.table_query,
            {"schema": self.dialect.normalize_schema(schema)},
            f"failed to load tables of schema {schema!r}",
        )

    def fetch_columns(self, schema: str, table: str) -> List[Row]:
        return self._fetch(
            "columns",
            self.dialect.column_query,
            {"schema": self.dialect.normalize_schema(schema), "table": table},
            f"failed to load columns of {table}",
        )

    def fetch_foreign_keys(self, schema: str, table: str) -> List[Row]:
        return self._fetch(
            "foreign keys",
            self.dialect.foreign_key_query,
            {"schema": self.dialect.normalize_schema(schema), "table": table},
            f"failed to load foreign keys of {table}",
        )

    def _fetch(self, query_kind: str, query: str, params: Dict[str, str], message: str) -> List[Row]:
        try:
            conn = self.engine.connect()
        except SQLAlchemyError as e:
            raise CatalogConnectionError(
                f"{message}: cannot connect to {self.dialect.name} database: {e}"
            ) from e

        with conn:
            try:
                result = conn.execute(text(query), params)
                rows = [tuple(row) for row in result]
            except SQLAlchemyError as e:
                raise QueryError(f"{message}: {e}", query_kind=query_kind, query=query) from e

        logger.debug(f"Fetched {len(rows)} {query_kind} rows with {params}")
        return rows

    def close(self):
        """Dispose the engine and its pooled connections."""
        self.engine.dispose()

    def __enter__(self) -> 'CatalogSource':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
