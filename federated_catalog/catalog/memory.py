"""In-memory native session catalog."""

import logging
import time
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from .base import BackendKind, CatalogBackend, filter_pattern
from .errors import (
    CatalogError,
    NoSuchDatabaseError,
    NoSuchPartitionError,
    NoSuchTableError,
    TableAlreadyExistsError,
)
from .schema import CatalogTable, CatalogTablePartition, TableIdentifier, TableType

logger = logging.getLogger(__name__)


class InMemoryCatalog(CatalogBackend):
    """Native session catalog keeping descriptors in memory.

    Database and table names are matched case-insensitively and stored
    lower-cased, the way the engine's own session catalog does.
    """

    kind = BackendKind.NATIVE

    def __init__(self, name: str = "native", config: Optional[Dict[str, Any]] = None):
        """Initialize native catalog.

        Config may include:
            - databases: Databases to create up front (default: ["default"])
            - warehouse_dir: Root of managed table locations
        """
        super().__init__(name, config)
        self.warehouse_dir = self.config.get("warehouse_dir", "spark-warehouse")
        self.databases: Dict[str, Dict[str, CatalogTable]] = {}
        self.partitions: Dict[Tuple[str, str], List[CatalogTablePartition]] = {}
        for database in self.config.get("databases", ["default"]):
            self.create_database(database)

    def create_database(self, database: str, ignore_if_exists: bool = True) -> None:
        """Register a database.

        Args:
            database: Database name
            ignore_if_exists: Do nothing if it is already registered
        """
        key = database.lower()
        if key in self.databases:
            if ignore_if_exists:
                return
            raise CatalogError(f"Database '{database}' already exists")
        self.databases[key] = {}
        logger.info(f"Created database '{key}' in catalog {self.name}")

    def list_databases(self) -> List[str]:
        return sorted(self.databases.keys())

    def database_exists(self, database: str) -> bool:
        return database.lower() in self.databases

    def list_tables(
        self, database: str, pattern: Optional[str] = None
    ) -> List[TableIdentifier]:
        tables = self._tables_of(database)
        names = sorted(tables.keys())
        if pattern is not None:
            names = filter_pattern(names, pattern)
        identifiers = []
        for name in names:
            identifiers.append(TableIdentifier(table=name, database=database.lower()))
        return identifiers

    def get_table_metadata(self, identifier: TableIdentifier) -> CatalogTable:
        database = self._require_database_name(identifier)
        tables = self._tables_of(database)
        table = tables.get(identifier.table.lower())
        if table is None:
            raise NoSuchTableError(database, identifier.table)
        return table

    def create_table(self, table: CatalogTable, ignore_if_exists: bool) -> None:
        database = self._require_database_name(table.identifier)
        tables = self._tables_of(database)
        key = table.identifier.table.lower()
        if self.table_exists(table.identifier):
            if ignore_if_exists:
                logger.info(f"Table {table.identifier} already exists, skipping create")
                return
            raise TableAlreadyExistsError(database, table.identifier.table)

        identifier = TableIdentifier(table=key, database=database.lower())
        storage = table.storage
        if table.table_type == TableType.MANAGED and storage.location_uri is None:
            storage = replace(storage, location_uri=self.default_table_path(identifier))
        create_time = table.create_time
        if create_time is None:
            create_time = int(time.time() * 1000)
        tables[key] = replace(
            table, identifier=identifier, storage=storage, create_time=create_time
        )
        logger.info(f"Created {table.table_type.value} table {identifier} in catalog {self.name}")

    def default_table_path(self, identifier: TableIdentifier) -> str:
        """Location of a managed table that was created without one."""
        if identifier.database == "default":
            return f"{self.warehouse_dir}/{identifier.table}"
        return f"{self.warehouse_dir}/{identifier.database}.db/{identifier.table}"

    def create_partitions(
        self,
        identifier: TableIdentifier,
        partitions: List[CatalogTablePartition],
        ignore_if_exists: bool = False,
    ) -> None:
        """Add partitions to a partitioned table.

        Args:
            identifier: Database-qualified table
            partitions: Partitions to add, each with a full spec
            ignore_if_exists: Skip partitions that already exist
        """
        table = self.get_table_metadata(identifier)
        key = (table.identifier.database, table.identifier.table)
        existing = self.partitions.setdefault(key, [])
        for partition in partitions:
            spec = self._normalize_spec(table, partition.spec)
            if self._find_partition(existing, spec) is not None:
                if ignore_if_exists:
                    continue
                raise CatalogError(
                    f"Partition already exists in table {table.identifier}: {spec}"
                )
            existing.append(replace(partition, spec=spec))
        table.tracks_partitions_in_catalog = True

    def get_partition(
        self, identifier: TableIdentifier, spec: Dict[str, str]
    ) -> CatalogTablePartition:
        table = self.get_table_metadata(identifier)
        normalized = self._normalize_spec(table, spec)
        key = (table.identifier.database, table.identifier.table)
        partition = self._find_partition(self.partitions.get(key, []), normalized)
        if partition is None:
            raise NoSuchPartitionError(table.identifier.unquoted_string(), spec)
        return partition

    def _normalize_spec(self, table: CatalogTable, spec: Dict[str, str]) -> Dict[str, str]:
        """Order a full partition spec by the table's partition columns."""
        if not table.partition_column_names:
            raise CatalogError(f"Table {table.identifier} is not partitioned")
        lowered = {}
        for name, value in spec.items():
            lowered[name.lower()] = value
        if set(lowered) != {name.lower() for name in table.partition_column_names}:
            raise CatalogError(
                f"Partition spec {spec} does not match the partition columns "
                f"{table.partition_column_names} of table {table.identifier}"
            )
        normalized = {}
        for name in table.partition_column_names:
            normalized[name] = lowered[name.lower()]
        return normalized

    def _find_partition(
        self, partitions: List[CatalogTablePartition], spec: Dict[str, str]
    ) -> Optional[CatalogTablePartition]:
        for partition in partitions:
            if partition.spec == spec:
                return partition
        return None

    def _require_database_name(self, identifier: TableIdentifier) -> str:
        if identifier.database is None:
            raise CatalogError(f"Table {identifier} is not qualified with a database")
        return identifier.database

    def _tables_of(self, database: str) -> Dict[str, CatalogTable]:
        tables = self.databases.get(database.lower())
        if tables is None:
            raise NoSuchDatabaseError(database)
        return tables

    def __repr__(self) -> str:
        return f"InMemoryCatalog(name={self.name}, databases={len(self.databases)})"
