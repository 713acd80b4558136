from .base import CatalogDialect

TABLE_QUERY = """
SELECT
    t.name AS table_name,
    CAST(ep.value AS NVARCHAR(4000)) AS description
FROM sys.tables t
INNER JOIN sys.schemas s ON t.schema_id = s.schema_id
LEFT JOIN sys.extended_properties ep
    ON ep.major_id = t.object_id AND ep.minor_id = 0
    AND ep.class = 1 AND ep.name = 'MS_Description'
WHERE s.name = :schema
AND t.is_ms_shipped = 0
ORDER BY t.name
"""

# identity columns get an IDENTITY marker in ddl_type, mirroring the
# serial/bigserial spelling on PostgreSQL
COLUMN_QUERY = """
SELECT
    c.column_id AS field_ordinal,
    c.name AS column_name,
    CAST(ep.value AS NVARCHAR(4000)) AS description,
    CASE
        WHEN ty.name IN ('varchar', 'char', 'varbinary', 'binary')
            THEN ty.name + '(' + CASE WHEN c.max_length = -1 THEN 'max' ELSE CAST(c.max_length AS VARCHAR(10)) END + ')'
        WHEN ty.name IN ('nvarchar', 'nchar')
            THEN ty.name + '(' + CASE WHEN c.max_length = -1 THEN 'max' ELSE CAST(c.max_length / 2 AS VARCHAR(10)) END + ')'
        WHEN ty.name IN ('decimal', 'numeric')
            THEN ty.name + '(' + CAST(c.precision AS VARCHAR(10)) + ',' + CAST(c.scale AS VARCHAR(10)) + ')'
        ELSE ty.name
    END AS data_type,
    CASE WHEN c.is_nullable = 1 THEN 0 ELSE 1 END AS not_null,
    CASE WHEN EXISTS (
        SELECT 1
        FROM sys.indexes i
        INNER JOIN sys.index_columns ic
            ON ic.object_id = i.object_id AND ic.index_id = i.index_id
        WHERE i.object_id = c.object_id
        AND i.is_primary_key = 1
        AND ic.column_id = c.column_id
    ) THEN 1 ELSE 0 END AS is_primary_key,
    CASE WHEN c.is_identity = 1 THEN ty.name + ' IDENTITY' ELSE ty.name END AS ddl_type
FROM sys.columns c
INNER JOIN sys.tables t ON t.object_id = c.object_id
INNER JOIN sys.schemas s ON s.schema_id = t.schema_id
INNER JOIN sys.types ty ON ty.user_type_id = c.user_type_id
LEFT JOIN sys.extended_properties ep
    ON ep.major_id = c.object_id AND ep.minor_id = c.column_id
    AND ep.class = 1 AND ep.name = 'MS_Description'
WHERE s.name = :schema
AND t.name = :table
ORDER BY c.column_id
"""

FOREIGN_KEY_QUERY = """
SELECT
    sc.name AS source_column,
    tt.name AS target_table,
    tc.name AS target_column,
    fk.name AS constraint_name,
    CASE WHEN EXISTS (
        SELECT 1
        FROM sys.indexes i
        INNER JOIN sys.index_columns ic
            ON ic.object_id = i.object_id AND ic.index_id = i.index_id
        WHERE i.object_id = fkc.referenced_object_id
        AND i.is_primary_key = 1
        AND ic.column_id = fkc.referenced_column_id
    ) THEN 1 ELSE 0 END AS is_target_pk,
    CASE WHEN EXISTS (
        SELECT 1
        FROM sys.indexes i
        INNER JOIN sys.index_columns ic
            ON ic.object_id = i.object_id AND ic.index_id = i.index_id
        WHERE i.object_id = fkc.parent_object_id
        AND i.is_primary_key = 1
        AND ic.column_id = fkc.parent_column_id
    ) THEN 1 ELSE 0 END AS is_source_pk
FROM sys.foreign_keys fk
INNER JOIN sys.foreign_key_columns fkc ON fkc.constraint_object_id = fk.object_id
INNER JOIN sys.tables st ON st.object_id = fkc.parent_object_id
INNER JOIN sys.schemas ss ON ss.schema_id = st.schema_id
INNER JOIN sys.columns sc
    ON sc.object_id = fkc.parent_object_id AND sc.column_id = fkc.parent_column_id
INNER JOIN sys.tables tt ON tt.object_id = fkc.referenced_object_id
INNER JOIN sys.columns tc
    ON tc.object_id = fkc.referenced_object_id AND tc.column_id = fkc.referenced_column_id
WHERE ss.name = :schema
AND st.name = :table
ORDER BY fk.name, fkc.constraint_column_id
"""


class MSSQLDialect(CatalogDialect):
    """SQL Server catalog queries (sys.* views)."""

    name = "mssql"

    @property
    def table_query(self) -> str:
        return TABLE_QUERY

    @property
    def column_query(self) -> str:
        return COLUMN_QUERY

    @property
    def foreign_key_query(self) -> str:
        return FOREIGN_KEY_QUERY
