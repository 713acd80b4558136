from typing import Dict, Optional, Type

from shared.errors import UnsupportedDialectError

from .base import CatalogDialect
from .mssql_dialect import MSSQLDialect
from .oracle_dialect import OracleDialect
from .postgres_dialect import PostgresDialect

# Connection strings without a scheme are treated as libpq keyword DSNs
DEFAULT_BACKEND = "postgresql"

BUILTIN_DIALECTS: Dict[str, Type[CatalogDialect]] = {
    'postgresql': PostgresDialect,
    'postgres': PostgresDialect,
    'oracle': OracleDialect,
    'goracle': OracleDialect,
    'mssql': MSSQLDialect,
}


def backend_name(connection_string: str) -> str:
    """Return the backend part of a URL scheme (``postgresql+psycopg2://`` → ``postgresql``)."""
    if '://' not in connection_string:
        return DEFAULT_BACKEND
    scheme = connection_string.split('://', 1)[0]
    return scheme.split('+', 1)[0].lower()


class DialectRegistry:
    """Maps connection-string backends to catalog dialects."""

    def __init__(self, dialects: Optional[Dict[str, Type[CatalogDialect]]] = None):
        self._dialects: Dict[str, Type[CatalogDialect]] = dict(dialects or {})

    @classmethod
    def default(cls) -> 'DialectRegistry':
        """Registry with the built-in PostgreSQL, Oracle and SQL Server dialects."""
        return cls(BUILTIN_DIALECTS)

    def register(self, backend: str, dialect_class: Type[CatalogDialect]) -> 'DialectRegistry':
        """Return a copy of this registry that also knows ``backend``."""
        dialects = dict(self._dialects)
        dialects[backend.lower()] = dialect_class
        return DialectRegistry(dialects)

    @property
    def backends(self):
        return sorted(self._dialects)

    def for_backend(self, backend: str) -> CatalogDialect:
        dialect_class = self._dialects.get(backend.lower())
        if not dialect_class:
            raise UnsupportedDialectError(backend, self.backends)
        return dialect_class()

    def for_url(self, connection_string: str) -> CatalogDialect:
        """Factory method to create the dialect matching a connection string."""
        return self.for_backend(backend_name(connection_string))
