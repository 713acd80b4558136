from abc import ABC, abstractmethod


class CatalogDialect(ABC):
    """
    Catalog queries for one database engine.

    Each query is SQL text with ``:schema`` (and ``:table``) bind parameters
    and must return rows shaped as:

    - table_query: (table_name, description)
    - column_query: (ordinal, name, description, data_type, not_null,
      is_primary_key, ddl_type), ordered by ordinal
    - foreign_key_query: (source_column, target_table, target_column,
      constraint_name, is_target_pk, is_source_pk)
    """

    #: Dialect name as used in logs and error messages
    name: str = ""

    @property
    @abstractmethod
    def table_query(self) -> str:
        """Return the table list query."""
        pass

    @property
    @abstractmethod
    def column_query(self) -> str:
        """Return the per-table column query."""
        pass

    @property
    @abstractmethod
    def foreign_key_query(self) -> str:
        """Return the per-table foreign key query."""
        pass

    def normalize_schema(self, schema: str) -> str:
        """Map a user-supplied schema name to its catalog spelling."""
        return schema

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
