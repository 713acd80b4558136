"""Catalog dialects and the SQLAlchemy-backed catalog source."""

from .base import CatalogDialect
from .catalog_source import CatalogSource
from .dialect_registry import DialectRegistry
from .mssql_dialect import MSSQLDialect
from .oracle_dialect import OracleDialect
from .postgres_dialect import PostgresDialect

__all__ = [
    "CatalogDialect",
    "CatalogSource",
    "DialectRegistry",
    "MSSQLDialect",
    "OracleDialect",
    "PostgresDialect",
]
