from .base import CatalogDialect

TABLE_QUERY = """
SELECT
    c.relname AS table_name,
    pd.description AS description
FROM pg_class c
JOIN ONLY pg_namespace n ON n.oid = c.relnamespace
LEFT JOIN pg_description pd ON pd.objoid = c.oid AND pd.objsubid = 0
WHERE n.nspname = :schema
AND c.relkind IN ('r', 'p')
AND NOT c.relispartition
ORDER BY c.relname
"""

# serial columns are reported with their DDL spelling (serial, bigserial,
# smallserial) in ddl_type and their storage type in data_type
COLUMN_QUERY = """
SELECT
    a.attnum AS field_ordinal,
    a.attname AS column_name,
    pd.description AS description,
    format_type(a.atttypid, a.atttypmod) AS data_type,
    CASE WHEN a.attnotnull THEN 1 ELSE 0 END AS not_null,
    CASE WHEN EXISTS (
        SELECT 1 FROM pg_constraint ct
        WHERE ct.conrelid = c.oid
        AND ct.contype = 'p'
        AND a.attnum = ANY(ct.conkey)
    ) THEN 1 ELSE 0 END AS is_primary_key,
    CASE WHEN a.atttypid = ANY ('{int,int8,int2}'::regtype[])
        AND pg_get_serial_sequence(quote_ident(n.nspname) || '.' || quote_ident(c.relname), a.attname) IS NOT NULL
        AND pg_get_expr(ad.adbin, ad.adrelid) LIKE 'nextval(%'
    THEN CASE a.atttypid
            WHEN 'int'::regtype THEN 'serial'
            WHEN 'int8'::regtype THEN 'bigserial'
            WHEN 'int2'::regtype THEN 'smallserial'
         END
    ELSE format_type(a.atttypid, a.atttypmod)
    END AS ddl_type
FROM pg_attribute a
JOIN ONLY pg_class c ON c.oid = a.attrelid
JOIN ONLY pg_namespace n ON n.oid = c.relnamespace
LEFT JOIN pg_attrdef ad ON ad.adrelid = c.oid AND ad.adnum = a.attnum
LEFT JOIN pg_description pd ON pd.objoid = a.attrelid AND pd.objsubid = a.attnum
WHERE a.attisdropped = false
AND n.nspname = :schema
AND c.relname = :table
AND a.attnum > 0
ORDER BY a.attnum
"""

# conkey/confkey are unnested in lockstep so multi-column constraints yield
# one row per column pair
FOREIGN_KEY_QUERY = """
SELECT
    src.attname AS source_column,
    tgt_cl.relname AS target_table,
    tgt.attname AS target_column,
    con.conname AS constraint_name,
    CASE WHEN EXISTS (
        SELECT 1 FROM pg_index ti
        WHERE ti.indrelid = con.confrelid
        AND ti.indisprimary
        AND tgt.attnum = ANY(ti.indkey)
    ) THEN 1 ELSE 0 END AS is_target_pk,
    CASE WHEN EXISTS (
        SELECT 1 FROM pg_index si
        WHERE si.indrelid = con.conrelid
        AND si.indisprimary
        AND src.attnum = ANY(si.indkey)
    ) THEN 1 ELSE 0 END AS is_source_pk
FROM (
    SELECT
        c.conname,
        c.conrelid,
        c.confrelid,
        unnest(c.conkey) AS source_attnum,
        unnest(c.confkey) AS target_attnum
    FROM pg_constraint c
    JOIN pg_class cl ON cl.oid = c.conrelid
    JOIN pg_namespace ns ON ns.oid = cl.relnamespace
    WHERE ns.nspname = :schema
    AND cl.relname = :table
    AND c.contype = 'f'
) con
JOIN pg_attribute src ON src.attrelid = con.conrelid AND src.attnum = con.source_attnum
JOIN pg_attribute tgt ON tgt.attrelid = con.confrelid AND tgt.attnum = con.target_attnum
JOIN pg_class tgt_cl ON tgt_cl.oid = con.confrelid
ORDER BY con.conname, src.attnum
"""


class PostgresDialect(CatalogDialect):
    """PostgreSQL catalog queries (pg_catalog)."""

    name = "postgres"

    @property
    def table_query(self) -> str:
        return TABLE_QUERY

    @property
    def column_query(self) -> str:
        return COLUMN_QUERY

    @property
    def foreign_key_query(self) -> str:
        return FOREIGN_KEY_QUERY
