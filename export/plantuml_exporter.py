"""
Export a loaded schema graph as a PlantUML entity-relationship diagram.
"""

import logging
from pathlib import Path
from typing import List, Union

from discovery.cardinality import is_one_to_one
from shared.models import Column, ForeignKey, SchemaGraph, Table

logger = logging.getLogger(__name__)

HEADER = [
    "@startuml",
    "hide circle",
    "skinparam linetype ortho",
]
FOOTER = ["@enduml"]

ONE_TO_ONE = "||-||"
ONE_TO_MANY = "}--"


class PlantUMLExporter:
    """Render tables as PlantUML entities and foreign keys as relations."""

    def __init__(self, graph: SchemaGraph):
        self.graph = graph

    def render(self) -> str:
        lines: List[str] = list(HEADER)

        for table in self.graph:
            lines.append("")
            lines.extend(self._render_entity(table))

        relations = self._render_relations()
        if relations:
            lines.append("")
            lines.extend(relations)

        lines.extend(FOOTER)
        return "\n".join(lines) + "\n"

    def export(self, output_file: Union[str, Path]) -> Path:
        """Write the diagram to ``output_file`` (UTF-8)."""
        path = Path(output_file)
        path.write_text(self.render(), encoding='utf-8')
        logger.info(f"✅ PlantUML diagram exported: {path}")
        return path

    def _render_entity(self, table: Table) -> List[str]:
        lines = [f'entity "{table.name}" {{']
        if table.comment:
            lines.append(f"  {table.comment}")
            lines.append("  ..")
        for column in table.primary_key_columns:
            lines.append(f"  + {column.name} [PK]{self._comment_suffix(column)}")
        lines.append("  --")
        for column in table.other_columns:
            marker = "# " if column.is_foreign_key else ""
            lines.append(f"  {marker}{column.name}{self._comment_suffix(column)}")
        lines.append("}")
        return lines

    @staticmethod
    def _comment_suffix(column: Column) -> str:
        return f" : {column.comment}" if column.comment else ""

    def _render_relations(self) -> List[str]:
        return [self._render_relation(fk) for fk in self.graph.foreign_keys]

    def _render_relation(self, fk: ForeignKey) -> str:
        symbol = ONE_TO_ONE if is_one_to_one(fk, self.graph) else ONE_TO_MANY
        return f"{fk.source_table} {symbol} {fk.target_table}"
