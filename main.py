#!/usr/bin/env python3
"""
schema-planter - PlantUML ER diagrams from a live database catalog

Usage:
    planter postgresql://user@localhost/shop                 # public schema to stdout
    planter "user=planter dbname=planter" -s sales -o er.pu  # libpq DSN, file output
    planter oracle+oracledb://scott:tiger@db/orcl -s SCOTT -t EMP -t DEPT
    planter mssql+pyodbc://... -s dbo -x sysdiagrams
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, Sequence

from rich.console import Console

from config.settings import get_settings
from connectors.catalog_source import CatalogSource
from connectors.dialect_registry import DialectRegistry
from discovery.table_filter import filter_graph
from discovery.table_loader import TableLoader
from export.plantuml_exporter import PlantUMLExporter
from shared.errors import PlanterError
from shared.models import SchemaGraph
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

error_console = Console(stderr=True)


def load_graph(
    connection_string: str,
    schema: str,
    include: Iterable[str] = (),
    exclude: Iterable[str] = (),
    max_workers: int = 16,
    registry: Optional[DialectRegistry] = None,
) -> SchemaGraph:
    """Load ``schema`` from the catalog and apply the table filters."""
    with CatalogSource.from_url(connection_string, registry=registry) as source:
        graph = TableLoader(source, max_workers=max_workers).load(schema)

    return filter_graph(graph, include=include, exclude=exclude)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='planter',
        description="Generate a PlantUML ER diagram from a database schema",
    )
    parser.add_argument(
        'conn',
        nargs='?',
        help="Connection string (SQLAlchemy URL or libpq DSN); "
             "defaults to DATABASE_CONNECTION_STRING",
    )
    parser.add_argument('-s', '--schema', help="Schema name (default: PLANTER_SCHEMA or 'public')")
    parser.add_argument('-o', '--output', type=Path, help="Output file path (default: stdout)")
    parser.add_argument(
        '-t', '--table',
        action='append',
        default=[],
        dest='tables',
        metavar='NAME',
        help="Only include this table (repeatable, exact name)",
    )
    parser.add_argument(
        '-x', '--exclude',
        action='append',
        default=[],
        dest='excludes',
        metavar='NAME',
        help="Exclude this table (repeatable, exact name)",
    )
    parser.add_argument('--max-workers', type=int, help="Concurrent column queries (default: 16)")
    parser.add_argument('--log-level', help="Console log level (default: LOG_LEVEL or WARNING)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValueError as e:
        error_console.print(f"Configuration error: {e}", style="bold red", markup=False, highlight=False)
        return 2

    setup_logging(settings.logging, level=args.log_level)

    connection_string = args.conn or settings.database.connection_string
    if not connection_string:
        parser.error("a connection string is required (argument or DATABASE_CONNECTION_STRING)")

    max_workers = args.max_workers if args.max_workers is not None else settings.loader.max_workers
    if max_workers < 1:
        parser.error(f"--max-workers must be at least 1, got {max_workers}")

    try:
        graph = load_graph(
            connection_string,
            schema=args.schema or settings.database.schema,
            include=args.tables,
            exclude=args.excludes,
            max_workers=max_workers,
        )
        exporter = PlantUMLExporter(graph)
        if args.output:
            exporter.export(args.output)
        else:
            sys.stdout.write(exporter.render())
    except (PlanterError, OSError) as e:
        error_console.print(f"Error: {e}", style="bold red", markup=False, highlight=False)
        return 1

    return 0


def run():
    sys.exit(main())


if __name__ == '__main__':
    run()
