"""
Table filtering by exact table name.

Names are compared with exact, case-sensitive set membership; strings such
as ``table\\d`` or ``ta*`` are literal names, not patterns.
"""

import dataclasses
import logging
from typing import Iterable, List, Sequence

from shared.errors import FilterError
from shared.models import SchemaGraph, Table

from .foreign_key_loader import annotate_foreign_key_columns

logger = logging.getLogger(__name__)


def _name_set(names: Iterable[str]) -> frozenset:
    if isinstance(names, str):
        raise FilterError(f"table names must be a list of names, not the string {names!r}")
    try:
        name_set = frozenset(names)
    except TypeError as e:
        raise FilterError(f"table names must be iterable: {e}") from e
    bad = [name for name in name_set if not isinstance(name, str)]
    if bad:
        raise FilterError(f"table names must be strings, got {bad!r}")
    return name_set


def filter_tables(tables: Sequence[Table], names: Iterable[str], keep_if_matches: bool) -> List[Table]:
    """
    Keep tables whose name is (or, with ``keep_if_matches=False``, is not) in ``names``.

    Retained tables are copies (columns included) that only keep foreign keys
    whose target table also passes the filter. An empty ``names`` returns ``tables`` unchanged.
    """
    name_set = _name_set(names)
    if not name_set:
        return list(tables)

    def keep(name: str) -> bool:
        return (name in name_set) == keep_if_matches

    result = []
    for table in tables:
        if not keep(table.name):
            continue
        result.append(dataclasses.replace(
            table,
            columns=[dataclasses.replace(column) for column in table.columns],
            foreign_keys=[fk for fk in table.foreign_keys if keep(fk.target_table)],
        ))
    return result


def filter_graph(graph: SchemaGraph, include: Iterable[str] = (), exclude: Iterable[str] = ()) -> SchemaGraph:
    """Apply the include filter, then the exclude filter on what remains."""
    include = _name_set(include)
    exclude = _name_set(exclude)
    if not include and not exclude:
        return graph

    tables = graph.tables
    if include:
        tables = filter_tables(tables, include, keep_if_matches=True)
    if exclude:
        tables = filter_tables(tables, exclude, keep_if_matches=False)

    logger.info(f"Filtered schema {graph.schema!r}: {len(graph)} → {len(tables)} tables")
    filtered = SchemaGraph(graph.schema, tables)
    annotate_foreign_key_columns(filtered)
    return filtered
