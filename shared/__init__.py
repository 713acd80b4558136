"""
Shared components for schema-planter: catalog data model and error taxonomy
"""

from .errors import (PlanterError, LoadError, CatalogConnectionError, UnsupportedDialectError,
                     QueryError, ScanError, LinkError, FilterError)
from .models import (Table, Column, ForeignKey, ForeignKeyEndpoints, SchemaGraph,
                     strip_comment_suffix)

__all__ = [
    "PlanterError",
    "LoadError",
    "CatalogConnectionError",
    "UnsupportedDialectError",
    "QueryError",
    "ScanError",
    "LinkError",
    "FilterError",
    "Table",
    "Column",
    "ForeignKey",
    "ForeignKeyEndpoints",
    "SchemaGraph",
    "strip_comment_suffix",
]
