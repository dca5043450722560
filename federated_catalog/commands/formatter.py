"""Normalizes catalog descriptors into command output rows and text."""

import time
from typing import Dict, List, Optional

from ..catalog.schema import (
    BucketSpec,
    CatalogTable,
    CatalogTablePartition,
    Column,
    StorageFormat,
    TableType,
)
from .base import Row


def format_time(epoch_millis: int) -> str:
    return time.strftime("%a %b %d %H:%M:%S %Z %Y", time.localtime(epoch_millis / 1000))


def _format_last_access(epoch_millis: int) -> str:
    if epoch_millis <= 0:
        return "UNKNOWN"
    return format_time(epoch_millis)


def _quoted_list(names: List[str]) -> str:
    return "[" + ", ".join(f"`{name}`" for name in names) + "]"


def _pairs(values: Dict[str, str]) -> str:
    return ", ".join(f"{key}={value}" for key, value in values.items())


class MetadataFormatter:
    """Turns table, column and partition descriptors into output rows.

    Descriptive property maps list their keys in one canonical order so that
    both backends describe tables the same way. A key is left out when the
    descriptor has no value for it.
    """

    def schema_tree(self, schema: List[Column]) -> str:
        lines = ["root"]
        for column in schema:
            nullable = str(column.nullable).lower()
            lines.append(
                f" |-- {column.name}: {column.simple_type_name()} (nullable = {nullable})"
            )
        return "\n".join(lines) + "\n"

    def storage_properties(self, storage: StorageFormat) -> Dict[str, str]:
        properties: Dict[str, str] = {}
        if storage.location_uri:
            properties["Location"] = storage.location_uri
        if storage.serde:
            properties["Serde Library"] = storage.serde
        if storage.input_format:
            properties["InputFormat"] = storage.input_format
        if storage.output_format:
            properties["OutputFormat"] = storage.output_format
        if storage.compressed:
            properties["Compressed"] = ""
        if storage.properties:
            properties["Storage Properties"] = f"[{_pairs(storage.properties)}]"
        return properties

    def bucket_properties(self, bucket_spec: BucketSpec) -> Dict[str, str]:
        properties = {
            "Num Buckets": str(bucket_spec.num_buckets),
            "Bucket Columns": _quoted_list(bucket_spec.bucket_column_names),
        }
        if bucket_spec.sort_column_names:
            properties["Sort Columns"] = _quoted_list(bucket_spec.sort_column_names)
        return properties

    def table_properties(self, table: CatalogTable) -> Dict[str, str]:
        """Descriptive property map of a table in canonical key order."""
        properties: Dict[str, str] = {}
        if table.identifier.database is not None:
            properties["Database"] = table.identifier.database
        properties["Table"] = table.identifier.table
        if table.owner:
            properties["Owner"] = table.owner
        if table.create_time is not None:
            properties["Created Time"] = format_time(table.create_time)
        properties["Last Access"] = _format_last_access(table.last_access_time)
        properties["Type"] = table.table_type.value
        if table.provider:
            properties["Provider"] = table.provider
        if table.bucket_spec is not None:
            properties.update(self.bucket_properties(table.bucket_spec))
        if table.comment:
            properties["Comment"] = table.comment
        if table.table_type == TableType.VIEW and table.view_text:
            properties["View Text"] = table.view_text
        if table.properties:
            properties["Table Properties"] = f"[{_pairs(table.properties)}]"
        properties.update(self.storage_properties(table.storage))
        if table.tracks_partitions_in_catalog:
            properties["Partition Provider"] = "Catalog"
        if table.partition_column_names:
            properties["Partition Columns"] = _quoted_list(table.partition_column_names)
        if table.schema:
            properties["Schema"] = self.schema_tree(table.schema)
        return properties

    def partition_properties(self, partition: CatalogTablePartition) -> Dict[str, str]:
        """Descriptive property map of a partition in canonical key order."""
        properties = {"Partition Values": f"[{_pairs(partition.spec)}]"}
        properties.update(self.storage_properties(partition.storage))
        if partition.parameters:
            properties["Partition Parameters"] = "{" + _pairs(partition.parameters) + "}"
        if partition.create_time is not None:
            properties["Created Time"] = format_time(partition.create_time)
        properties["Last Access"] = _format_last_access(partition.last_access_time)
        return properties

    def simple_string(self, properties: Dict[str, str]) -> str:
        lines = []
        for key, value in properties.items():
            if value:
                lines.append(f"{key}: {value}")
            else:
                lines.append(key)
        return "\n".join(lines)

    def table_info(self, table: CatalogTable) -> str:
        """Human-readable description used by SHOW TABLE EXTENDED."""
        return self.simple_string(self.table_properties(table))

    def partition_info(self, partition: CatalogTablePartition) -> str:
        return self.simple_string(self.partition_properties(partition))

    def show_tables_row(
        self, database: Optional[str], table: str, is_temporary: bool, information: Optional[str] = None
    ) -> Row:
        if information is None:
            return (database or "", table, is_temporary)
        return (database or "", table, is_temporary, f"{information}\n")

    def describe_schema(self, schema: List[Column], buffer: List[Row]) -> None:
        """Append one DESCRIBE row per column, in declaration order."""
        for column in schema:
            self.append(
                buffer,
                column.name,
                column.simple_type_name(),
                column.comment,
                str(column.nullable).lower(),
            )

    def describe_formatted_table_info(self, table: CatalogTable, buffer: List[Row]) -> None:
        self.append(buffer, "", "", "")
        self.append(buffer, "# Detailed Table Information", "", "")
        for key, value in self.table_properties(table).items():
            self.append(buffer, key, value, "")

    def append(
        self,
        buffer: List[Row],
        column: str,
        data_type: str,
        comment: Optional[str],
        nullable: str = "",
    ) -> None:
        buffer.append((column, data_type, nullable, comment))
