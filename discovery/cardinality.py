"""
Relationship cardinality of foreign keys.

A foreign key shares identity with its target (one-to-one) only when the
referencing columns are exactly the source table's key and line up with key
columns of the target. For composite keys every column of the relationship
has to pass that test.
"""

from enum import Enum

from shared.models import ForeignKey, SchemaGraph, Table


class Cardinality(Enum):
    ONE_TO_ONE = "one-to-one"
    ONE_TO_MANY = "one-to-many"


def has_composite_primary_key(table: Table) -> bool:
    """True when two or more columns of ``table`` are primary-key columns."""
    count = 0
    for column in table.columns:
        if column.is_primary_key:
            count += 1
            if count >= 2:
                return True
    return False


def _key_aligned(fk: ForeignKey) -> bool:
    return fk.is_source_primary_key and fk.is_target_primary_key


def is_one_to_one(fk: ForeignKey, graph: SchemaGraph) -> bool:
    """
    Decide whether a linked foreign key is a one-to-one relationship.

    - neither table has a composite key: both columns must be key columns
    - both tables have composite keys: every foreign key column from the
      source table to the target table must be key-aligned
    - only one side composite: one-to-many

    Raises:
        LinkError: ``fk`` references a table missing from ``graph``
    """
    source_composite = has_composite_primary_key(graph.table(fk.source_table))
    target_composite = has_composite_primary_key(graph.table(fk.target_table))

    if not source_composite and not target_composite:
        return _key_aligned(fk)

    if source_composite and target_composite:
        siblings = graph.foreign_keys_between(fk.source_table, fk.target_table)
        return all(_key_aligned(sibling) for sibling in siblings)

    return False


def classify(fk: ForeignKey, graph: SchemaGraph) -> Cardinality:
    if is_one_to_one(fk, graph):
        return Cardinality.ONE_TO_ONE
    return Cardinality.ONE_TO_MANY
