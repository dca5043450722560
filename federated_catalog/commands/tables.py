"""Catalog commands that see both the native and the external catalog.

Each adapter wraps the engine's default command, reads the statement from it
and answers from whichever backend owns the table, in the default command's
output shape.
"""

import logging
from typing import List, Optional, TYPE_CHECKING

import pyarrow as pa

from ..catalog.base import BackendKind
from ..catalog.errors import UnsupportedOperationError
from ..catalog.schema import CatalogTable, TableIdentifier, TableType
from .base import DelegatingCommand, Row, string_field
from .bridge import DelegateBridge
from .default import (
    CreateTableLikeCommand,
    DescribeTableCommand,
    ShowColumnsCommand,
    ShowTablesCommand,
    merge_database,
)
from .formatter import MetadataFormatter
from .resolver import CatalogResolver

if TYPE_CHECKING:
    from ..session.session import Session

logger = logging.getLogger(__name__)


class ShowTablesAdapter(DelegatingCommand):
    """SHOW TABLES over both catalogs."""

    delegate: ShowTablesCommand

    def run(self, session: "Session") -> List[Row]:
        catalog = session.catalog
        resolver = CatalogResolver(catalog)
        formatter = MetadataFormatter()
        database = self.delegate.database_name or catalog.current_database
        backend = catalog.backend(resolver.resolve_database(database))
        rows: List[Row] = []

        if self.delegate.partition_spec is None:
            tables = catalog.list_tables(database, self.delegate.table_identifier_pattern)
            for identifier in tables:
                is_temp = resolver.is_temporary(identifier)
                information = None
                if self.delegate.is_extended:
                    table = catalog.get_temp_view_or_permanent_table_metadata(identifier)
                    information = formatter.table_info(table)
                rows.append(
                    formatter.show_tables_row(identifier.database, identifier.table, is_temp, information)
                )
            return rows

        # The parser only accepts PARTITION together with a table name.
        identifier = TableIdentifier(
            table=self.delegate.table_identifier_pattern, database=database
        )
        table = backend.get_table_metadata(identifier).identifier
        partition = backend.get_partition(identifier, self.delegate.partition_spec)
        rows.append(
            formatter.show_tables_row(
                table.database,
                table.table,
                resolver.is_temporary(table),
                formatter.partition_info(partition),
            )
        )
        return rows


class DescribeTableAdapter(DelegatingCommand):
    """DESCRIBE over both catalogs, with a nullable column added."""

    delegate: DescribeTableCommand

    # Column names are based on Hive.
    output = pa.schema(
        [
            string_field("col_name", comment="name of the column"),
            string_field("data_type", comment="data type of the column"),
            string_field("nullable", comment="whether the column is nullable"),
            string_field("comment", nullable=True, comment="comment of the column"),
        ]
    )

    def run(self, session: "Session") -> List[Row]:
        catalog = session.catalog
        resolver = CatalogResolver(catalog)
        table = self.delegate.table

        if resolver.is_temporary(table):
            schema = catalog.get_temp_view_or_permanent_table_metadata(table).schema
            return DelegateBridge(self.delegate).run(session, schema)

        kind = resolver.resolve_catalog(table)
        if kind == BackendKind.EXTERNAL:
            if self.delegate.partition_spec is not None:
                raise UnsupportedOperationError(
                    f"DESC PARTITION is not supported on external table: {table}"
                )
            return self._describe_external(catalog.get_table_metadata(table))
        elif kind == BackendKind.NATIVE:
            schema = catalog.get_table_metadata(table).schema
            return DelegateBridge(self.delegate).run(session, schema)
        raise ValueError(f"Unknown backend kind: {kind}")

    def _describe_external(self, metadata: CatalogTable) -> List[Row]:
        formatter = MetadataFormatter()
        result: List[Row] = []
        formatter.describe_schema(metadata.schema, result)
        if self.delegate.is_extended:
            formatter.describe_formatted_table_info(metadata, result)
        return result


class ShowColumnsAdapter(DelegatingCommand):
    """SHOW COLUMNS over both catalogs."""

    delegate: ShowColumnsCommand

    def run(self, session: "Session") -> List[Row]:
        catalog = session.catalog
        resolver = CatalogResolver(catalog)
        lookup_table = merge_database(
            session, self.delegate.table_name, self.delegate.database_name
        )
        if resolver.is_temporary(lookup_table):
            table = catalog.get_temp_view_or_permanent_table_metadata(lookup_table)
        else:
            backend = catalog.backend(resolver.resolve_catalog(lookup_table))
            table = backend.get_table_metadata(catalog.qualify(lookup_table))
        return [(column.name,) for column in table.schema]


class CreateTableLikeAdapter(DelegatingCommand):
    """CREATE TABLE LIKE from a table of either catalog into the native one."""

    delegate: CreateTableLikeCommand

    def run(self, session: "Session") -> List[Row]:
        catalog = session.catalog
        source = catalog.get_temp_view_or_permanent_table_metadata(self.delegate.source_table)
        provider = self._new_provider(session, source)
        new_table = self.delegate.new_table_desc(source, provider)
        logger.info(
            f"Creating {new_table.table_type.value} table {new_table.identifier} "
            f"like {source.identifier} with provider {provider}"
        )
        catalog.create_table(new_table, self.delegate.if_not_exists)
        return []

    def _new_provider(self, session: "Session", source: CatalogTable) -> Optional[str]:
        if source.table_type == TableType.VIEW:
            return session.conf.default_data_source
        kind = CatalogResolver(session.catalog).resolve_catalog(source.identifier)
        if kind == BackendKind.EXTERNAL:
            # TODO: use a dedicated provider once the external store has a writer
            return session.conf.default_data_source
        elif kind == BackendKind.NATIVE:
            return source.provider
        raise ValueError(f"Unknown backend kind: {kind}")
