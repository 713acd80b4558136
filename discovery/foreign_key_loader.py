"""
Foreign key loading and linking.

Linking needs every table's columns, so foreign keys are only loaded once
all columns of the schema are in the graph. Marking source columns as
foreign keys is a separate pass over the finished graph.
"""

import logging
from typing import List

from connectors.catalog_source import CatalogSource, Row
from shared.errors import LinkError, ScanError
from shared.models import ForeignKey, SchemaGraph
from shared.utils import decode_bool, decode_name

logger = logging.getLogger(__name__)

FOREIGN_KEY_ROW_WIDTH = 6


class ForeignKeyLoader:
    """Load the outbound foreign keys of one table and link them to the graph."""

    def __init__(self, source: CatalogSource):
        self.source = source

    def load(self, schema: str, table: str, graph: SchemaGraph) -> List[ForeignKey]:
        """
        Query, decode and link the foreign keys declared on ``schema.table``.

        Raises:
            QueryError: the foreign key query failed
            ScanError: a row does not decode
            LinkError: a referenced table or column is not in ``graph``
        """
        rows = self.source.fetch_foreign_keys(schema, table)
        foreign_keys = [decode_foreign_key_row(table, row) for row in rows]
        for fk in foreign_keys:
            link_foreign_key(fk, graph)
        logger.debug(f"Loaded {len(foreign_keys)} foreign key columns of {schema}.{table}")
        return foreign_keys


def decode_foreign_key_row(table: str, row: Row) -> ForeignKey:
    """(source_col, target_table, target_col, constraint, target_pk, source_pk) → ForeignKey"""
    if len(row) != FOREIGN_KEY_ROW_WIDTH:
        raise ScanError(
            f"failed to scan foreign key of {table}: expected {FOREIGN_KEY_ROW_WIDTH} fields, got {len(row)}",
            table=table,
            row=row,
        )

    source_column, target_table, target_column, constraint_name, is_target_pk, is_source_pk = row
    try:
        return ForeignKey(
            constraint_name=decode_name(constraint_name),
            source_table=table,
            source_column=decode_name(source_column),
            target_table=decode_name(target_table),
            target_column=decode_name(target_column),
            is_source_primary_key=decode_bool(is_source_pk),
            is_target_primary_key=decode_bool(is_target_pk),
        )
    except ValueError as e:
        raise ScanError(f"failed to scan foreign key of {table} ({e})", table=table, row=row) from e


def link_foreign_key(fk: ForeignKey, graph: SchemaGraph):
    """Check that both ends of ``fk`` exist in ``graph``; raise LinkError otherwise."""
    try:
        graph.resolve(fk)
    except LinkError as e:
        raise LinkError(
            f"failed to link foreign key {fk.constraint_name} of {fk.source_table}: {e}",
            table=e.table,
            column=e.column,
        ) from e


def annotate_foreign_key_columns(graph: SchemaGraph) -> int:
    """
    Set ``is_foreign_key`` on every column that is the source of a foreign key.

    The flag is recomputed from scratch, so running this twice is harmless.
    Returns the number of flagged columns.
    """
    source_columns = {(fk.source_table, fk.source_column) for fk in graph.foreign_keys}
    for table in graph:
        for column in table.columns:
            column.is_foreign_key = column.key in source_columns
    return len(source_columns)
