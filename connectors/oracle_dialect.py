from .base import CatalogDialect

TABLE_QUERY = """
SELECT
    a.table_name,
    b.comments AS description
FROM all_tables a
LEFT JOIN all_tab_comments b
    ON b.owner = a.owner AND b.table_name = a.table_name
WHERE a.owner = :schema
AND INSTR(a.table_name, '$') = 0
ORDER BY a.table_name
"""

COLUMN_QUERY = """
SELECT
    NVL(a.column_id, 0) AS field_ordinal,
    a.column_name,
    b.comments AS description,
    CASE a.data_type
        WHEN 'DATE' THEN 'DATE'
        WHEN 'NUMBER' THEN
            CASE NVL(a.data_precision, 0)
                WHEN 0 THEN 'NUMBER'
                ELSE CASE NVL(a.data_scale, 0)
                        WHEN 0 THEN 'NUMBER(' || a.data_precision || ')'
                        ELSE 'NUMBER(' || a.data_precision || ',' || a.data_scale || ')'
                     END
            END
        ELSE CASE WHEN a.data_length IS NOT NULL
                THEN a.data_type || '(' || a.data_length || ')'
                ELSE a.data_type
             END
    END AS data_type,
    CASE a.nullable WHEN 'Y' THEN 0 ELSE 1 END AS not_null,
    CASE WHEN EXISTS (
        SELECT 1
        FROM all_constraints y
        JOIN all_cons_columns x
            ON x.owner = y.owner AND x.constraint_name = y.constraint_name
        WHERE y.constraint_type = 'P'
        AND x.owner = a.owner
        AND x.table_name = a.table_name
        AND x.column_name = a.column_name
    ) THEN 1 ELSE 0 END AS is_primary_key,
    a.data_type AS ddl_type
FROM all_tab_cols a
LEFT JOIN all_col_comments b
    ON b.owner = a.owner AND b.table_name = a.table_name AND b.column_name = a.column_name
WHERE a.owner = :schema
AND a.table_name = :table
AND a.hidden_column = 'NO'
ORDER BY 1
"""

# r_owner/r_constraint_name point at the referenced key; matching positions
# pair up the columns of a multi-column constraint
FOREIGN_KEY_QUERY = """
SELECT
    src.column_name AS source_column,
    tgt.table_name AS target_table,
    tgt.column_name AS target_column,
    fk.constraint_name AS constraint_name,
    CASE WHEN EXISTS (
        SELECT 1
        FROM all_constraints p
        JOIN all_cons_columns pc
            ON pc.owner = p.owner AND pc.constraint_name = p.constraint_name
        WHERE p.constraint_type = 'P'
        AND p.owner = tgt.owner
        AND p.table_name = tgt.table_name
        AND pc.column_name = tgt.column_name
    ) THEN 1 ELSE 0 END AS is_target_pk,
    CASE WHEN EXISTS (
        SELECT 1
        FROM all_constraints p
        JOIN all_cons_columns pc
            ON pc.owner = p.owner AND pc.constraint_name = p.constraint_name
        WHERE p.constraint_type = 'P'
        AND p.owner = src.owner
        AND p.table_name = src.table_name
        AND pc.column_name = src.column_name
    ) THEN 1 ELSE 0 END AS is_source_pk
FROM all_constraints fk
JOIN all_cons_columns src
    ON src.owner = fk.owner AND src.constraint_name = fk.constraint_name
JOIN all_cons_columns tgt
    ON tgt.owner = fk.r_owner AND tgt.constraint_name = fk.r_constraint_name
    AND tgt.position = src.position
WHERE fk.constraint_type = 'R'
AND fk.owner = :schema
AND fk.table_name = :table
ORDER BY fk.constraint_name, src.position
"""


class OracleDialect(CatalogDialect):
    """Oracle catalog queries (ALL_* dictionary views)."""

    name = "oracle"

    @property
    def table_query(self) -> str:
        return TABLE_QUERY

    @property
    def column_query(self) -> str:
        return COLUMN_QUERY

    @property
    def foreign_key_query(self) -> str:
        return FOREIGN_KEY_QUERY

    def normalize_schema(self, schema: str) -> str:
        # unquoted identifiers are stored upper-case in the dictionary
        return schema.upper()
