"""The engine's stock catalog commands.

These are the structured statements produced by the host engine's parser.
Run on their own they only see temporary views and the native catalog; the
adapters in ``tables`` wrap them to cover the external catalog as well.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, TYPE_CHECKING

import pyarrow as pa

from ..catalog.catalog import FederatedCatalog
from ..catalog.errors import CatalogError, ConflictingDatabaseError
from ..catalog.schema import CatalogTable, Column, TableIdentifier, TableType
from .base import Command, Row, string_field
from .formatter import MetadataFormatter

if TYPE_CHECKING:
    from ..session.session import Session


def lookup_native_table(catalog: FederatedCatalog, identifier: TableIdentifier) -> CatalogTable:
    """Temporary view if one matches, else the native catalog's table."""
    if catalog.is_temporary_table(identifier):
        return catalog.get_temp_view_or_permanent_table_metadata(identifier)
    return catalog.native.get_table_metadata(catalog.qualify(identifier))


def merge_database(
    session: "Session", table_name: TableIdentifier, database_name: Optional[str]
) -> TableIdentifier:
    """Combine a table's own qualifier with an explicit database qualifier.

    Raises:
        ConflictingDatabaseError: If both are given and differ
    """
    if database_name is None:
        return table_name
    resolver = session.conf.resolver
    if table_name.database is not None and not resolver(table_name.database, database_name):
        raise ConflictingDatabaseError(database_name, table_name.database)
    return table_name.with_database(database_name)


@dataclass
class ShowTablesCommand(Command):
    """SHOW TABLES [EXTENDED] [IN database] [LIKE pattern] [PARTITION (...)]."""

    database_name: Optional[str] = None
    table_identifier_pattern: Optional[str] = None
    is_extended: bool = False
    partition_spec: Optional[Dict[str, str]] = None

    @property
    def output(self) -> pa.Schema:
        fields = [
            string_field("database"),
            string_field("tableName"),
            pa.field("isTemporary", pa.bool_(), nullable=False),
        ]
        if self.is_extended or self.partition_spec is not None:
            fields.append(string_field("information"))
        return pa.schema(fields)

    def run(self, session: "Session") -> List[Row]:
        catalog = session.catalog
        formatter = MetadataFormatter()
        database = self.database_name or catalog.current_database
        rows: List[Row] = []
        if self.partition_spec is None:
            tables = catalog.native.list_tables(database, self.table_identifier_pattern)
            for identifier in tables:
                information = None
                if self.is_extended:
                    table = catalog.native.get_table_metadata(identifier)
                    information = formatter.table_info(table)
                rows.append(
                    formatter.show_tables_row(identifier.database, identifier.table, False, information)
                )
            return rows

        identifier = TableIdentifier(table=self.table_identifier_pattern, database=database)
        table = catalog.native.get_table_metadata(identifier)
        partition = catalog.native.get_partition(identifier, self.partition_spec)
        rows.append(
            formatter.show_tables_row(
                table.identifier.database,
                table.identifier.table,
                False,
                formatter.partition_info(partition),
            )
        )
        return rows


@dataclass
class DescribeTableCommand(Command):
    """DESCRIBE [EXTENDED] table [PARTITION (...)]."""

    table: TableIdentifier
    partition_spec: Optional[Dict[str, str]] = None
    is_extended: bool = False

    output = pa.schema(
        [
            string_field("col_name", comment="name of the column"),
            string_field("data_type", comment="data type of the column"),
            string_field("comment", nullable=True, comment="comment of the column"),
        ]
    )

    def run(self, session: "Session") -> List[Row]:
        catalog = session.catalog
        result: List[Row] = []
        if catalog.is_temporary_table(self.table):
            if self.partition_spec is not None:
                raise CatalogError(
                    f"DESC PARTITION is not allowed on a temporary view: {self.table}"
                )
            view = catalog.get_temp_view_or_permanent_table_metadata(self.table)
            self._describe_schema(view.schema, result)
            return result

        metadata = catalog.native.get_table_metadata(catalog.qualify(self.table))
        self._describe_schema(metadata.schema, result)
        self._describe_partition_info(metadata, result)
        if self.partition_spec is not None:
            self._describe_detailed_partition_info(catalog, metadata, result)
        elif self.is_extended:
            self._append(result, "", "", "")
            self._append(result, "# Detailed Table Information", "", "")
            for key, value in MetadataFormatter().table_properties(metadata).items():
                self._append(result, key, value, "")
        return result

    def _describe_schema(self, schema: List[Column], buffer: List[Row]) -> None:
        for column in schema:
            self._append(buffer, column.name, column.simple_type_name(), column.comment)

    def _describe_partition_info(self, table: CatalogTable, buffer: List[Row]) -> None:
        if not table.partition_column_names:
            return
        self._append(buffer, "# Partition Information", "", "")
        self._append(buffer, "# col_name", "data_type", "comment")
        self._describe_schema(table.partition_columns(), buffer)

    def _describe_detailed_partition_info(
        self, catalog: FederatedCatalog, table: CatalogTable, buffer: List[Row]
    ) -> None:
        if table.table_type == TableType.VIEW:
            raise CatalogError(f"DESC PARTITION is not allowed on a view: {table.identifier}")
        partition = catalog.native.get_partition(table.identifier, self.partition_spec)
        if not self.is_extended:
            return
        formatter = MetadataFormatter()
        self._append(buffer, "", "", "")
        self._append(buffer, "# Detailed Partition Information", "", "")
        self._append(buffer, "Database", table.identifier.database, "")
        self._append(buffer, "Table", table.identifier.table, "")
        for key, value in formatter.partition_properties(partition).items():
            self._append(buffer, key, value, "")
        self._append(buffer, "", "", "")
        self._append(buffer, "# Storage Information", "", "")
        if table.bucket_spec is not None:
            for key, value in formatter.bucket_properties(table.bucket_spec).items():
                self._append(buffer, key, value, "")
        for key, value in formatter.storage_properties(table.storage).items():
            self._append(buffer, key, value, "")

    def _append(
        self, buffer: List[Row], column: str, data_type: str, comment: Optional[str]
    ) -> None:
        buffer.append((column, data_type, comment))


@dataclass
class ShowColumnsCommand(Command):
    """SHOW COLUMNS (FROM | IN) table [(FROM | IN) database]."""

    table_name: TableIdentifier
    database_name: Optional[str] = None

    output = pa.schema([string_field("col_name")])

    def run(self, session: "Session") -> List[Row]:
        lookup_table = merge_database(session, self.table_name, self.database_name)
        table = lookup_native_table(session.catalog, lookup_table)
        return [(column.name,) for column in table.schema]


@dataclass
class CreateTableLikeCommand(Command):
    """CREATE TABLE [IF NOT EXISTS] target LIKE source [LOCATION path]."""

    target_table: TableIdentifier
    source_table: TableIdentifier
    location: Optional[str] = None
    if_not_exists: bool = False

    def run(self, session: "Session") -> List[Row]:
        catalog = session.catalog
        source = lookup_native_table(catalog, self.source_table)
        if source.table_type == TableType.VIEW:
            provider = session.conf.default_data_source
        else:
            provider = source.provider
        catalog.create_table(self.new_table_desc(source, provider), self.if_not_exists)
        return []

    def new_table_desc(self, source: CatalogTable, provider: Optional[str]) -> CatalogTable:
        """Descriptor of the target table cloned from source.

        A location makes the new table EXTERNAL, otherwise it is MANAGED and
        the native catalog picks its location.
        """
        table_type = TableType.EXTERNAL if self.location else TableType.MANAGED
        bucket_spec = source.bucket_spec
        if bucket_spec is not None:
            bucket_spec = replace(
                bucket_spec,
                bucket_column_names=list(bucket_spec.bucket_column_names),
                sort_column_names=list(bucket_spec.sort_column_names),
            )
        return CatalogTable(
            identifier=self.target_table,
            table_type=table_type,
            storage=replace(
                source.storage,
                location_uri=self.location or None,
                properties=dict(source.storage.properties),
            ),
            schema=[replace(column) for column in source.schema],
            provider=provider,
            partition_column_names=list(source.partition_column_names),
            bucket_spec=bucket_spec,
        )
