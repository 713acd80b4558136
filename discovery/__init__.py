"""Catalog-to-graph loading, cardinality classification and table filtering."""

from .cardinality import Cardinality, classify, has_composite_primary_key, is_one_to_one
from .column_loader import ColumnLoader
from .foreign_key_loader import ForeignKeyLoader, annotate_foreign_key_columns
from .table_filter import filter_graph, filter_tables
from .table_loader import TableLoader

__all__ = [
    "Cardinality",
    "classify",
    "has_composite_primary_key",
    "is_one_to_one",
    "ColumnLoader",
    "ForeignKeyLoader",
    "annotate_foreign_key_columns",
    "filter_graph",
    "filter_tables",
    "TableLoader",
]
