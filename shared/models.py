#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data Models - tables, columns and foreign keys of one catalog schema

Entities reference each other by name only. SchemaGraph owns the lookup
maps and resolves a foreign key into the entities at either end.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from .errors import LinkError


def strip_comment_suffix(comment: Optional[str]) -> Optional[str]:
    """Drop the tab-delimited annotation some catalogs append to comments"""
    if comment is None:
        return None
    return comment.split("\t", 1)[0]


@dataclass
class Column:
    """Column of a catalog table"""
    table: str
    name: str
    ordinal: int
    data_type: str
    ddl_type: str
    comment: Optional[str] = None
    not_null: bool = False
    is_primary_key: bool = False
    is_foreign_key: bool = False

    @property
    def key(self) -> Tuple[str, str]:
        return (self.table, self.name)


@dataclass
class ForeignKey:
    """One column pair of a foreign key constraint"""
    constraint_name: str
    source_table: str
    source_column: str
    target_table: str
    target_column: str
    is_source_primary_key: bool = False
    is_target_primary_key: bool = False


@dataclass
class Table:
    """Catalog table with its columns (ordinal order) and outbound foreign keys"""
    schema: str
    name: str
    comment: Optional[str] = None
    columns: List[Column] = field(default_factory=list)
    foreign_keys: List[ForeignKey] = field(default_factory=list)

    @property
    def primary_key_columns(self) -> List[Column]:
        return [column for column in self.columns if column.is_primary_key]

    @property
    def other_columns(self) -> List[Column]:
        return [column for column in self.columns if not column.is_primary_key]

    def find_column(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name == name:
                return column
        return None


class ForeignKeyEndpoints(NamedTuple):
    source_table: Table
    source_column: Column
    target_table: Table
    target_column: Column


class SchemaGraph:
    """
    Loaded tables of one schema plus name-based lookup maps.

    The graph is a value produced by one load call. Filtering returns a new
    graph instead of changing this one.
    """

    def __init__(self, schema: str, tables: Iterable[Table]):
        self.schema = schema
        self.tables: List[Table] = list(tables)
        self._tables_by_name: Dict[str, Table] = {table.name: table for table in self.tables}

    def __iter__(self) -> Iterator[Table]:
        return iter(self.tables)

    def __len__(self) -> int:
        return len(self.tables)

    def __repr__(self) -> str:
        return f"SchemaGraph(schema={self.schema!r}, tables={[t.name for t in self.tables]!r})"

    @property
    def table_names(self) -> List[str]:
        return [table.name for table in self.tables]

    @property
    def foreign_keys(self) -> List[ForeignKey]:
        return [fk for table in self.tables for fk in table.foreign_keys]

    def find_table(self, name: str) -> Optional[Table]:
        return self._tables_by_name.get(name)

    def table(self, name: str) -> Table:
        """Return the table called ``name`` or raise LinkError"""
        table = self._tables_by_name.get(name)
        if table is None:
            raise LinkError(f"table {name!r} not found in schema {self.schema!r}", table=name)
        return table

    def column(self, table_name: str, column_name: str) -> Column:
        """Return ``table_name.column_name`` or raise LinkError"""
        column = self.table(table_name).find_column(column_name)
        if column is None:
            raise LinkError(
                f"column {table_name}.{column_name} not found in schema {self.schema!r}",
                table=table_name,
                column=column_name,
            )
        return column

    def resolve(self, fk: ForeignKey) -> ForeignKeyEndpoints:
        return ForeignKeyEndpoints(
            source_table=self.table(fk.source_table),
            source_column=self.column(fk.source_table, fk.source_column),
            target_table=self.table(fk.target_table),
            target_column=self.column(fk.target_table, fk.target_column),
        )

    def foreign_keys_between(self, source_table: str, target_table: str) -> List[ForeignKey]:
        """All foreign key rows from ``source_table`` that point at ``target_table``"""
        return [
            fk for fk in self.table(source_table).foreign_keys
            if fk.target_table == target_table
        ]
