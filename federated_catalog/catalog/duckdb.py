"""DuckDB-backed external catalog."""

from typing import Any, Dict, List, Optional
import duckdb
import logging

from .base import BackendKind, CatalogBackend, filter_pattern
from .errors import (
    CatalogError,
    NoSuchDatabaseError,
    NoSuchTableError,
    UnsupportedOperationError,
)
from .schema import (
    CatalogTable,
    CatalogTablePartition,
    Column,
    StorageFormat,
    TableIdentifier,
    TableType,
    map_type,
)

logger = logging.getLogger(__name__)

_HIDDEN_SCHEMAS = ("information_schema", "pg_catalog")


class DuckDBCatalog(CatalogBackend):
    """External catalog reading table metadata from a DuckDB store.

    Each DuckDB schema is exposed as one database. The store is read through
    its metadata functions only; it has no partition introspection and no
    writer, so get_partition and create_table are unsupported.
    """

    kind = BackendKind.EXTERNAL

    def __init__(self, name: str, config: Dict[str, Any]):
        """Initialize DuckDB catalog.

        Config should include:
            - path: Path to DuckDB database file (or :memory: for in-memory)
            - read_only: Whether to open in read-only mode (default: True)
        """
        super().__init__(name, config)
        self.connection = None
        self.db_path = config.get("path", ":memory:")
        self.read_only = config.get("read_only", True)
        self._connected = False

    def connect(self) -> None:
        """Establish connection to DuckDB."""
        logger.info(f"Connecting to DuckDB at '{self.db_path}'")
        self.connection = duckdb.connect(self.db_path, read_only=self.read_only)
        self._connected = True
        logger.info(f"Successfully connected to DuckDB: {self.name}")

    def disconnect(self) -> None:
        """Close DuckDB connection."""
        if self.connection:
            self.connection.close()
            logger.info(f"Disconnected from DuckDB: {self.name}")
            self.connection = None
            self._connected = False

    def is_connected(self) -> bool:
        return self._connected

    def ensure_connected(self) -> None:
        """Connect lazily on first metadata access."""
        if not self.is_connected():
            self.connect()

    def list_databases(self) -> List[str]:
        """List schemas of the attached database."""
        self.ensure_connected()
        result = self.connection.execute(
            """
            SELECT DISTINCT schema_name
            FROM duckdb_schemas()
            WHERE database_name = current_database()
            ORDER BY schema_name
            """
        ).fetchall()
        databases = []
        for row in result:
            if row[0] not in _HIDDEN_SCHEMAS:
                databases.append(row[0])
        return databases

    def database_exists(self, database: str) -> bool:
        return self._schema_name(database) is not None

    def list_tables(
        self, database: str, pattern: Optional[str] = None
    ) -> List[TableIdentifier]:
        """List tables and views in a schema."""
        schema = self._require_schema(database)
        result = self.connection.execute(
            """
            SELECT table_name FROM duckdb_tables()
            WHERE database_name = current_database() AND schema_name = ?
            UNION
            SELECT view_name FROM duckdb_views()
            WHERE database_name = current_database() AND schema_name = ? AND NOT internal
            ORDER BY 1
            """,
            [schema, schema],
        ).fetchall()
        names = []
        for row in result:
            names.append(row[0])
        if pattern is not None:
            names = filter_pattern(names, pattern)
        tables = []
        for name in names:
            tables.append(TableIdentifier(table=name, database=schema))
        return tables

    def get_table_metadata(self, identifier: TableIdentifier) -> CatalogTable:
        """Build a table descriptor from DuckDB's metadata functions."""
        if identifier.database is None:
            raise CatalogError(f"Table {identifier} is not qualified with a database")
        schema = self._require_schema(identifier.database)

        row = self.connection.execute(
            """
            SELECT table_name, comment, NULL
            FROM duckdb_tables()
            WHERE database_name = current_database()
              AND schema_name = ? AND lower(table_name) = lower(?)
            """,
            [schema, identifier.table],
        ).fetchone()
        table_type = TableType.MANAGED
        if row is None:
            row = self.connection.execute(
                """
                SELECT view_name, comment, sql
                FROM duckdb_views()
                WHERE database_name = current_database()
                  AND schema_name = ? AND lower(view_name) = lower(?)
                  AND NOT internal
                """,
                [schema, identifier.table],
            ).fetchone()
            table_type = TableType.VIEW
        if row is None:
            raise NoSuchTableError(schema, identifier.table)

        table_name, comment, view_text = row
        return CatalogTable(
            identifier=TableIdentifier(table=table_name, database=schema),
            table_type=table_type,
            schema=self._get_columns(schema, table_name),
            storage=StorageFormat(location_uri=self._location()),
            provider="duckdb",
            comment=comment or None,
            view_text=view_text,
        )

    def _get_columns(self, schema: str, table: str) -> List[Column]:
        """Read columns in declaration order."""
        result = self.connection.execute(
            """
            SELECT column_name, data_type, is_nullable, comment
            FROM duckdb_columns()
            WHERE database_name = current_database()
              AND schema_name = ? AND table_name = ?
            ORDER BY column_index
            """,
            [schema, table],
        ).fetchall()

        columns = []
        for row in result:
            columns.append(
                Column(
                    name=row[0],
                    data_type=map_type(row[1]),
                    nullable=bool(row[2]),
                    comment=row[3] or None,
                )
            )
        return columns

    def get_partition(
        self, identifier: TableIdentifier, spec: Dict[str, str]
    ) -> CatalogTablePartition:
        raise UnsupportedOperationError(
            f"Partition lookup is not supported on external table: {identifier}"
        )

    def create_table(self, table: CatalogTable, ignore_if_exists: bool) -> None:
        raise UnsupportedOperationError(
            f"Cannot create table {table.identifier}: catalog {self.name} is read-only"
        )

    def _location(self) -> Optional[str]:
        if self.db_path == ":memory:":
            return None
        return self.db_path

    def _schema_name(self, database: str) -> Optional[str]:
        """Stored spelling of a schema name, matched case-insensitively."""
        for name in self.list_databases():
            if name.lower() == database.lower():
                return name
        return None

    def _require_schema(self, database: str) -> str:
        schema = self._schema_name(database)
        if schema is None:
            raise NoSuchDatabaseError(database)
        return schema

    def __enter__(self):
        """Context manager entry."""
        self.ensure_connected()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()
        return False
