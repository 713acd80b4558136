import threading
import time
import unittest

from discovery.table_loader import TableLoader
from shared.errors import LinkError, QueryError, ScanError

from catalog_fixtures import COLUMN_ROWS, FOREIGN_KEY_ROWS, make_source


class TestTableLoader(unittest.TestCase):
    """Two-phase schema loading."""

    def test_load_full_graph(self):
        graph = TableLoader(make_source()).load("public")

        self.assertEqual(graph.schema, "public")
        self.assertEqual(graph.table_names, ["customer", "customer_order", "order_detail", "sku"])
        self.assertEqual(graph.table("sku").comment, "Stock keeping units")
        self.assertEqual(graph.table("customer").comment, "Registered customers")
        self.assertEqual([c.ordinal for c in graph.table("customer").columns], [1, 2, 3])
        self.assertEqual(len(graph.table("order_detail").foreign_keys), 2)
        self.assertEqual(graph.table("customer").foreign_keys, [])
        self.assertTrue(graph.column("order_detail", "sku_id").is_foreign_key)
        self.assertFalse(graph.column("order_detail", "amount").is_foreign_key)

    def test_empty_schema(self):
        graph = TableLoader(make_source(table_rows=[])).load("empty")
        self.assertEqual(len(graph), 0)

    def test_foreign_keys_load_after_all_columns(self):
        events = []
        lock = threading.Lock()
        source = make_source()

        def fetch_columns(schema, table):
            with lock:
                events.append(("columns-start", table))
            time.sleep(0.01)
            with lock:
                events.append(("columns-end", table))
            return list(COLUMN_ROWS[table])

        def fetch_foreign_keys(schema, table):
            with lock:
                events.append(("fks", table))
            return list(FOREIGN_KEY_ROWS.get(table, []))

        source.fetch_columns.side_effect = fetch_columns
        source.fetch_foreign_keys.side_effect = fetch_foreign_keys

        TableLoader(source, max_workers=4).load("public")

        kinds = [kind for kind, _ in events]
        first_fk = kinds.index("fks")
        self.assertEqual(kinds[:first_fk].count("columns-end"), len(COLUMN_ROWS))
        self.assertNotIn("columns-start", kinds[first_fk:])
        # phase 2 is sequential and follows table order
        self.assertEqual([t for k, t in events if k == "fks"],
                         ["customer", "customer_order", "order_detail", "sku"])

    def test_concurrency_is_bounded(self):
        table_rows = [(f"t{i}", None) for i in range(8)]
        column_rows = {name: [(1, "id", None, "int", 1, 1, "int")] for name, _ in table_rows}
        source = make_source(table_rows=table_rows, column_rows=column_rows, foreign_key_rows={})
        lock = threading.Lock()
        state = {"active": 0, "peak": 0}

        def fetch_columns(schema, table):
            with lock:
                state["active"] += 1
                state["peak"] = max(state["peak"], state["active"])
            time.sleep(0.02)
            with lock:
                state["active"] -= 1
            return list(column_rows[table])

        source.fetch_columns.side_effect = fetch_columns

        TableLoader(source, max_workers=2).load("public")

        self.assertLessEqual(state["peak"], 2)
        self.assertEqual(source.fetch_columns.call_count, 8)

    def test_column_failure_drains_and_aborts(self):
        table_rows = [(f"t{i}", None) for i in range(6)]
        source = make_source(table_rows=table_rows, column_rows={}, foreign_key_rows={})
        lock = threading.Lock()
        state = {"active": 0}

        def fetch_columns(schema, table):
            if table == "t0":
                raise QueryError(f"failed to load columns of {table}", "columns", "SELECT ...")
            with lock:
                state["active"] += 1
            time.sleep(0.02)
            with lock:
                state["active"] -= 1
            return []

        source.fetch_columns.side_effect = fetch_columns

        with self.assertRaises(QueryError) as ctx:
            TableLoader(source, max_workers=3).load("public")

        self.assertIn("t0", str(ctx.exception))
        self.assertEqual(state["active"], 0)
        source.fetch_foreign_keys.assert_not_called()

    def test_link_failure_aborts(self):
        source = make_source(foreign_key_rows={
            "customer_order": [("customer_id", "client", "id", "customer_order_client_fkey", 1, 0)],
        })

        with self.assertRaises(LinkError) as ctx:
            TableLoader(source).load("public")

        self.assertEqual(ctx.exception.table, "client")

    def test_bad_table_row(self):
        source = make_source(table_rows=[("customer",)])
        with self.assertRaises(ScanError):
            TableLoader(source).load("public")

        source = make_source(table_rows=[(None, None)])
        with self.assertRaises(ScanError):
            TableLoader(source).load("public")

    def test_table_query_failure(self):
        source = make_source()
        source.fetch_tables.side_effect = QueryError("failed to load tables of schema 'public'", "tables")

        with self.assertRaises(QueryError):
            TableLoader(source).load("public")
        source.fetch_columns.assert_not_called()

    def test_invalid_worker_count(self):
        with self.assertRaises(ValueError):
            TableLoader(make_source(), max_workers=0)


if __name__ == '__main__':
    unittest.main()
