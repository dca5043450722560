"""Command-line inspection of the federated catalog."""

from __future__ import annotations

import time
from typing import Dict, List, Optional, Tuple

import click
import duckdb
import pyarrow as pa

from ..catalog import CatalogError, TableIdentifier
from ..catalog.catalog import FederatedCatalog
from ..catalog.schema import CatalogTable, Column, DataType, TableType
from ..commands import (
    Command,
    CreateTableLikeCommand,
    DescribeTableCommand,
    ShowColumnsCommand,
    ShowTablesCommand,
)
from ..config import Config, ExternalCatalogConfig, NativeCatalogConfig, load_config
from ..session import Session, build_session
from ..utils.logging import LOG_FORMATS, LOG_LEVELS, setup_logging


class ResultPrinter:
    """Formats Arrow tables for CLI display."""

    def __init__(self, emit):
        self.emit = emit

    def display(self, table: pa.Table, elapsed_ms: float) -> None:
        rows = self._build_rows(table)
        headers = list(table.schema.names)
        if headers:
            for line in self._format_table(headers, rows):
                self.emit(line)
        summary = f"{table.num_rows} rows in {elapsed_ms:.2f} ms"
        self.emit(summary)

    def _build_rows(self, table: pa.Table) -> List[List[object]]:
        columns = [table.column(index).to_pylist() for index in range(table.num_columns)]
        rows: List[List[object]] = []
        row_index = 0
        while row_index < table.num_rows:
            rows.append([column[row_index] for column in columns])
            row_index += 1
        return rows

    def _format_table(self, headers: List[str], rows: List[List[object]]) -> List[str]:
        widths = self._compute_widths(headers, rows)
        border = self._build_border(widths)
        lines: List[str] = [border, self._format_row(headers, widths), border]
        for row in rows:
            lines.append(self._format_row(self._stringify_row(row), widths))
        lines.append(border)
        return lines

    def _compute_widths(self, headers: List[str], rows: List[List[object]]) -> List[int]:
        widths = [len(header) for header in headers]
        for row in rows:
            col_index = 0
            while col_index < len(row):
                text = self._stringify_cell(row[col_index])
                if len(text) > widths[col_index]:
                    widths[col_index] = len(text)
                col_index += 1
        return widths

    def _build_border(self, widths: List[int]) -> str:
        parts: List[str] = ["+"]
        for width in widths:
            parts.append("-" * (width + 2))
            parts.append("+")
        return "".join(parts)

    def _format_row(self, values: List[str], widths: List[int]) -> str:
        parts: List[str] = ["|"]
        index = 0
        while index < len(values):
            padded = values[index].ljust(widths[index])
            parts.append(f" {padded} ")
            parts.append("|")
            index += 1
        return "".join(parts)

    def _stringify_row(self, row: List[object]) -> List[str]:
        return [self._stringify_cell(value) for value in row]

    def _stringify_cell(self, value: object) -> str:
        if value is None:
            return "NULL"
        # Multi-line cells such as SHOW TABLES information print on one line.
        return str(value).replace("\n", " ").strip()


def parse_partition_spec(values: Tuple[str, ...]) -> Optional[Dict[str, str]]:
    """Parse repeated ``key=value`` options into a partition spec."""
    if not values:
        return None
    spec: Dict[str, str] = {}
    for value in values:
        key, sep, part = value.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got '{value}'", param_hint="--partition")
        spec[key.strip()] = part.strip()
    return spec


def _build_default_config() -> Config:
    return Config(
        native=NativeCatalogConfig(databases=["default"]),
        external=ExternalCatalogConfig(
            name="store", type="duckdb", config={"path": ":memory:", "read_only": False}
        ),
    )


def _seed_demo_data(session: Session) -> None:
    external = session.catalog.external
    connection = external.connection
    connection.execute("CREATE SCHEMA IF NOT EXISTS store")
    connection.execute(
        """
        CREATE TABLE IF NOT EXISTS store.orders (
            id INTEGER NOT NULL,
            customer VARCHAR,
            amount DOUBLE
        )
        """
    )
    _seed_native_tables(session.catalog)


def _seed_native_tables(catalog: FederatedCatalog) -> None:
    users = CatalogTable(
        identifier=TableIdentifier("demo_users", "default"),
        table_type=TableType.MANAGED,
        schema=[
            Column("id", DataType.INT, nullable=False),
            Column("name", DataType.STRING),
            Column("city", DataType.STRING, comment="home city"),
        ],
        provider="parquet",
    )
    catalog.create_table(users, ignore_if_exists=True)


def _prepare_session(config_path: Optional[str]) -> Tuple[Session, Optional[str]]:
    if config_path:
        return build_session(load_config(config_path)), None
    session = build_session(_build_default_config())
    _seed_demo_data(session)
    return session, "Using in-memory demo catalogs (native: default, external: store)."


def _run(ctx: click.Context, command: Command) -> None:
    session: Session = ctx.obj["session"]
    printer = ResultPrinter(click.echo)
    try:
        start = time.time()
        table = session.execute_to_table(command)
        elapsed = (time.time() - start) * 1000
    except (CatalogError, duckdb.Error) as exc:
        click.echo(f"error: {exc}", err=True)
        ctx.exit(1)
    finally:
        session.close()
    printer.display(table, elapsed)


@click.group()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="Path to YAML config file. Defaults to an in-memory demo.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS),
    default="text",
    show_default=True,
    help="Log record format.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Also append log records to this file.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    log_level: str,
    log_format: str,
    log_file: Optional[str],
) -> None:
    """Inspect native and external catalogs through one interface."""
    setup_logging(level=log_level, log_format=log_format, log_file=log_file)
    session, note = _prepare_session(config_path)
    if note:
        click.echo(note, err=True)
    ctx.ensure_object(dict)
    ctx.obj["session"] = session


@cli.command("tables")
@click.option("--database", default=None, help="Database to list, current one by default.")
@click.option("--pattern", default=None, help="Table name pattern, e.g. 'ord*|users'.")
@click.option("--extended", is_flag=True, help="Add an information column.")
@click.option("--partition", multiple=True, help="Partition value as key=value.")
@click.pass_context
def tables(ctx, database, pattern, extended, partition) -> None:
    """SHOW TABLES."""
    spec = parse_partition_spec(partition)
    if spec is not None and pattern is None:
        raise click.UsageError("--partition requires --pattern naming the table")
    _run(ctx, ShowTablesCommand(database, pattern, extended, spec))


@cli.command("databases")
@click.pass_context
def databases(ctx) -> None:
    """List the databases of both catalogs."""
    session: Session = ctx.obj["session"]
    try:
        start = time.time()
        names = session.catalog.list_databases()
        elapsed = (time.time() - start) * 1000
    except duckdb.Error as exc:
        click.echo(f"error: {exc}", err=True)
        ctx.exit(1)
    finally:
        session.close()
    table = pa.table({"namespace": pa.array(names, type=pa.string())})
    ResultPrinter(click.echo).display(table, elapsed)


@cli.command("describe")
@click.argument("table")
@click.option("--extended", is_flag=True, help="Append detailed table information.")
@click.option("--partition", multiple=True, help="Partition value as key=value.")
@click.pass_context
def describe(ctx, table, extended, partition) -> None:
    """DESCRIBE TABLE."""
    spec = parse_partition_spec(partition)
    _run(ctx, DescribeTableCommand(TableIdentifier.parse(table), spec, extended))


@cli.command("columns")
@click.argument("table")
@click.option("--database", default=None, help="Database qualifier.")
@click.pass_context
def columns(ctx, table, database) -> None:
    """SHOW COLUMNS."""
    _run(ctx, ShowColumnsCommand(TableIdentifier.parse(table), database))


@cli.command("create-like")
@click.argument("target")
@click.argument("source")
@click.option("--location", default=None, help="Location of the new table.")
@click.option("--if-not-exists", is_flag=True, help="Do nothing if target exists.")
@click.pass_context
def create_like(ctx, target, source, location, if_not_exists) -> None:
    """CREATE TABLE target LIKE source."""
    command = CreateTableLikeCommand(
        TableIdentifier.parse(target), TableIdentifier.parse(source), location, if_not_exists
    )
    _run(ctx, command)
