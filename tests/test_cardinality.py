import unittest

from discovery.cardinality import Cardinality, classify, has_composite_primary_key, is_one_to_one
from discovery.table_loader import TableLoader
from shared.errors import LinkError

from catalog_fixtures import make_fk, make_graph, make_source, make_table


class TestCompositeKey(unittest.TestCase):
    """Composite primary key detection."""

    def test_zero_one_two_three_pk_columns(self):
        cases = [
            ([], False),
            (["id"], False),
            (["order_id", "line_no"], True),
            (["a", "b", "c"], True),
        ]
        for pk_columns, expected in cases:
            with self.subTest(pk_columns=pk_columns):
                table = make_table("t", pk_columns=pk_columns, other_columns=["payload"])
                self.assertEqual(has_composite_primary_key(table), expected)


class TestSimpleKeys(unittest.TestCase):
    """Neither table has a composite key."""

    def setUp(self):
        self.parent = make_table("parent", pk_columns=["id"], other_columns=["code"])

    def classify_child(self, fk):
        child = make_table("child", pk_columns=["id"], other_columns=["parent_id"], foreign_keys=[fk])
        return classify(fk, make_graph(self.parent, child))

    def test_pk_to_pk_is_one_to_one(self):
        fk = make_fk("child", "id", "parent", "id", source_pk=True, target_pk=True)
        self.assertEqual(self.classify_child(fk), Cardinality.ONE_TO_ONE)

    def test_non_key_source_is_one_to_many(self):
        fk = make_fk("child", "parent_id", "parent", "id", source_pk=False, target_pk=True)
        self.assertEqual(self.classify_child(fk), Cardinality.ONE_TO_MANY)

    def test_non_key_target_is_one_to_many(self):
        fk = make_fk("child", "id", "parent", "code", source_pk=True, target_pk=False)
        self.assertEqual(self.classify_child(fk), Cardinality.ONE_TO_MANY)


class TestCompositeKeys(unittest.TestCase):
    """Both tables have two-column primary keys."""

    def build(self, second_source_pk: bool):
        fks = [
            make_fk("shipment_line", "order_id", "order_line", "order_id",
                    source_pk=True, target_pk=True, constraint_name="shipment_line_order_line_fkey"),
            make_fk("shipment_line", "line_no", "order_line", "line_no",
                    source_pk=second_source_pk, target_pk=True, constraint_name="shipment_line_order_line_fkey"),
        ]
        order_line = make_table("order_line", pk_columns=["order_id", "line_no"], other_columns=["qty"])
        if second_source_pk:
            shipment_line = make_table("shipment_line", pk_columns=["order_id", "line_no"],
                                       other_columns=["shipped_at"], foreign_keys=fks)
        else:
            shipment_line = make_table("shipment_line", pk_columns=["order_id", "shipment_no"],
                                       other_columns=["line_no"], foreign_keys=fks)
        return make_graph(order_line, shipment_line), fks

    def test_all_siblings_aligned_is_one_to_one(self):
        graph, fks = self.build(second_source_pk=True)
        for fk in fks:
            self.assertTrue(is_one_to_one(fk, graph))

    def test_one_sibling_not_aligned_demotes_all(self):
        graph, fks = self.build(second_source_pk=False)
        # the first row is aligned on its own but its sibling is not
        self.assertTrue(fks[0].is_source_primary_key and fks[0].is_target_primary_key)
        for fk in fks:
            self.assertFalse(is_one_to_one(fk, graph))

    def test_foreign_keys_to_other_tables_are_not_siblings(self):
        graph, fks = self.build(second_source_pk=True)
        other = make_table("warehouse", pk_columns=["id"])
        extra = make_fk("shipment_line", "shipped_at", "warehouse", "id", source_pk=False, target_pk=True)
        graph.table("shipment_line").foreign_keys.append(extra)
        graph = make_graph(*graph.tables, other)

        self.assertTrue(is_one_to_one(fks[0], graph))
        # composite source, simple target
        self.assertFalse(is_one_to_one(extra, graph))


class TestMixedKeys(unittest.TestCase):
    """Only one side has a composite key."""

    def test_composite_source_simple_target(self):
        fk = make_fk("membership", "user_id", "account", "id", source_pk=True, target_pk=True)
        graph = make_graph(
            make_table("account", pk_columns=["id"]),
            make_table("membership", pk_columns=["user_id", "group_id"], foreign_keys=[fk]),
        )
        self.assertEqual(classify(fk, graph), Cardinality.ONE_TO_MANY)

    def test_simple_source_composite_target(self):
        fk = make_fk("profile", "id", "membership", "user_id", source_pk=True, target_pk=True)
        graph = make_graph(
            make_table("membership", pk_columns=["user_id", "group_id"]),
            make_table("profile", pk_columns=["id"], foreign_keys=[fk]),
        )
        self.assertEqual(classify(fk, graph), Cardinality.ONE_TO_MANY)


class TestLoadedSchema(unittest.TestCase):
    """Classification of the loaded shop schema."""

    def test_shop_relationships(self):
        graph = TableLoader(make_source()).load("public")

        result = {(fk.source_table, fk.target_table): classify(fk, graph) for fk in graph.foreign_keys}

        self.assertEqual(result, {
            ("customer_order", "customer"): Cardinality.ONE_TO_MANY,
            ("order_detail", "customer_order"): Cardinality.ONE_TO_ONE,
            ("order_detail", "sku"): Cardinality.ONE_TO_MANY,
        })

    def test_unlinked_foreign_key(self):
        fk = make_fk("child", "id", "ghost", "id", source_pk=True, target_pk=True)
        graph = make_graph(make_table("child", pk_columns=["id"], foreign_keys=[fk]))
        with self.assertRaises(LinkError):
            is_one_to_one(fk, graph)


if __name__ == '__main__':
    unittest.main()
