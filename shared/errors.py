#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Error taxonomy for catalog loading and diagram generation.

Every failure raised by the loaders is a PlanterError; the CLI is the only
place that turns one into an exit code.
"""

from typing import Any, Optional, Sequence


class PlanterError(Exception):
    """Base class for all schema-planter errors"""


class LoadError(PlanterError):
    """A schema could not be loaded from the catalog"""


class CatalogConnectionError(LoadError):
    """The catalog database could not be reached"""


class UnsupportedDialectError(CatalogConnectionError):
    """No catalog dialect is registered for a connection string"""

    def __init__(self, backend: str, supported: Sequence[str] = ()):
        self.backend = backend
        self.supported = list(supported)
        message = f"Unsupported database dialect: {backend!r}"
        if self.supported:
            message += f" (supported: {', '.join(sorted(self.supported))})"
        super().__init__(message)


class QueryError(LoadError):
    """A catalog query failed inside the driver"""

    def __init__(self, message: str, query_kind: str = "", query: str = ""):
        self.query_kind = query_kind
        self.query = query
        if query:
            message = f"{message}:\n{query.strip()}"
        super().__init__(message)


class ScanError(LoadError):
    """A catalog row does not decode into the expected shape"""

    def __init__(self, message: str, table: str = "", row: Optional[Sequence[Any]] = None):
        self.table = table
        self.row = tuple(row) if row is not None else None
        if self.row is not None:
            message = f"{message}: {self.row!r}"
        super().__init__(message)


class LinkError(LoadError):
    """A foreign key references a table or column missing from the graph"""

    def __init__(self, message: str, table: str = "", column: Optional[str] = None):
        self.table = table
        self.column = column
        super().__init__(message)


class FilterError(PlanterError):
    """Table filter arguments are malformed"""
