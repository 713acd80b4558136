import unittest

from discovery.table_filter import filter_graph, filter_tables
from discovery.table_loader import TableLoader
from shared.errors import FilterError

from catalog_fixtures import make_fk, make_source, make_table


class TestFilterTables(unittest.TestCase):
    """Exact-name include/exclude filtering."""

    def setUp(self):
        self.tables = [make_table("table1"), make_table("table2")]

    def names(self, tables):
        return [t.name for t in tables]

    def test_keep_if_matches(self):
        cases = [
            (["table1"], ["table1"]),
            (["table2"], ["table2"]),
            (["table1", "table2"], ["table1", "table2"]),
            # literal names, not patterns
            (["t"], []),
            ([r"table\d"], []),
            (["ta*"], []),
            (["[a-z].*1"], []),
            (["^t$"], []),
            (["TABLE1"], []),
        ]
        for names, expected in cases:
            with self.subTest(names=names):
                self.assertEqual(self.names(filter_tables(self.tables, names, True)), expected)

    def test_drop_if_matches(self):
        cases = [
            (["table1"], ["table2"]),
            (["table2"], ["table1"]),
            (["table1", "table2"], []),
            (["t"], ["table1", "table2"]),
            ([r"table\d"], ["table1", "table2"]),
            (["[a-z].*1"], ["table1", "table2"]),
        ]
        for names, expected in cases:
            with self.subTest(names=names):
                self.assertEqual(self.names(filter_tables(self.tables, names, False)), expected)

    def test_empty_names_is_identity(self):
        for keep in (True, False):
            result = filter_tables(self.tables, [], keep)
            self.assertEqual(len(result), 2)
            self.assertIs(result[0], self.tables[0])

    def test_dangling_foreign_keys_are_dropped(self):
        to_kept = make_fk("table1", "id", "table1", "parent_id")
        to_dropped = make_fk("table1", "table2_id", "table2", "id")
        tables = [
            make_table("table1", pk_columns=["id"], other_columns=["parent_id", "table2_id"],
                       foreign_keys=[to_kept, to_dropped]),
            make_table("table2", pk_columns=["id"]),
        ]

        result = filter_tables(tables, ["table1"], True)

        self.assertEqual(result[0].foreign_keys, [to_kept])
        # input untouched
        self.assertEqual(tables[0].foreign_keys, [to_kept, to_dropped])

    def test_bad_names(self):
        with self.assertRaises(FilterError):
            filter_tables(self.tables, "table1", True)
        with self.assertRaises(FilterError):
            filter_tables(self.tables, [1], True)
        with self.assertRaises(FilterError):
            filter_tables(self.tables, None, True)


class TestFilterGraph(unittest.TestCase):
    """Include then exclude on a loaded graph."""

    def setUp(self):
        self.graph = TableLoader(make_source()).load("public")

    def test_no_filters_returns_graph(self):
        self.assertIs(filter_graph(self.graph), self.graph)
        self.assertIs(filter_graph(self.graph, include=[], exclude=[]), self.graph)

    def test_include_then_exclude(self):
        filtered = filter_graph(
            self.graph,
            include=["customer", "customer_order", "order_detail"],
            exclude=["customer"],
        )

        self.assertEqual(filtered.table_names, ["customer_order", "order_detail"])
        self.assertEqual(filtered.table("customer_order").foreign_keys, [])
        self.assertEqual(
            [fk.target_table for fk in filtered.table("order_detail").foreign_keys],
            ["customer_order"],
        )
        self.assertEqual(filtered.schema, "public")

    def test_foreign_key_flags_follow_filtered_graph(self):
        filtered = filter_graph(self.graph, exclude=["customer"])

        self.assertFalse(filtered.column("customer_order", "customer_id").is_foreign_key)
        self.assertTrue(filtered.column("order_detail", "sku_id").is_foreign_key)
        # input graph keeps its flags
        self.assertTrue(self.graph.column("customer_order", "customer_id").is_foreign_key)

    def test_exclude_everything(self):
        filtered = filter_graph(self.graph, exclude=self.graph.table_names)
        self.assertEqual(len(filtered), 0)

    def test_string_argument_rejected(self):
        with self.assertRaises(FilterError):
            filter_graph(self.graph, include="customer")


if __name__ == '__main__':
    unittest.main()
