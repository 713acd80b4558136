import logging
from typing import List

from connectors.catalog_source import CatalogSource, Row
from shared.errors import ScanError
from shared.models import Column, strip_comment_suffix
from shared.utils import decode_bool, decode_int, decode_name, decode_optional_text

logger = logging.getLogger(__name__)

COLUMN_ROW_WIDTH = 7


class ColumnLoader:
    """Load the columns of one table, in catalog ordinal order."""

    def __init__(self, source: CatalogSource):
        self.source = source

    def load(self, schema: str, table: str) -> List[Column]:
        """
        Query and decode the columns of ``schema.table``.

        Raises:
            QueryError: the column query failed
            ScanError: a row does not decode; no partial list is returned
        """
        rows = self.source.fetch_columns(schema, table)
        columns = [decode_column_row(table, row) for row in rows]
        logger.debug(f"Loaded {len(columns)} columns of {schema}.{table}")
        return columns


def decode_column_row(table: str, row: Row) -> Column:
    """(ordinal, name, comment, data_type, not_null, is_pk, ddl_type) → Column"""
    if len(row) != COLUMN_ROW_WIDTH:
        raise ScanError(
            f"failed to scan column of {table}: expected {COLUMN_ROW_WIDTH} fields, got {len(row)}",
            table=table,
            row=row,
        )

    ordinal, name, comment, data_type, not_null, is_primary_key, ddl_type = row
    try:
        return Column(
            table=table,
            name=decode_name(name),
            ordinal=decode_int(ordinal),
            comment=strip_comment_suffix(decode_optional_text(comment)),
            data_type=decode_name(data_type),
            ddl_type=decode_name(ddl_type),
            not_null=decode_bool(not_null),
            is_primary_key=decode_bool(is_primary_key),
        )
    except ValueError as e:
        raise ScanError(f"failed to scan column of {table} ({e})", table=table, row=row) from e
