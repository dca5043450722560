"""Catalog metadata classes shared by both backends."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional


class DataType(Enum):
    """Column data types, valued by their simple type name."""

    TINYINT = "tinyint"
    SMALLINT = "smallint"
    INT = "int"
    BIGINT = "bigint"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    STRING = "string"
    BINARY = "binary"
    BOOLEAN = "boolean"
    DATE = "date"
    TIMESTAMP = "timestamp"


_TYPE_NAMES: Dict[str, DataType] = {
    "TINYINT": DataType.TINYINT,
    "UTINYINT": DataType.SMALLINT,
    "SMALLINT": DataType.SMALLINT,
    "USMALLINT": DataType.INT,
    "INT": DataType.INT,
    "INTEGER": DataType.INT,
    "UINTEGER": DataType.BIGINT,
    "BIGINT": DataType.BIGINT,
    "UBIGINT": DataType.DECIMAL,
    "HUGEINT": DataType.DECIMAL,
    "FLOAT": DataType.FLOAT,
    "REAL": DataType.FLOAT,
    "DOUBLE": DataType.DOUBLE,
    "DECIMAL": DataType.DECIMAL,
    "NUMERIC": DataType.DECIMAL,
    "VARCHAR": DataType.STRING,
    "CHAR": DataType.STRING,
    "TEXT": DataType.STRING,
    "STRING": DataType.STRING,
    "UUID": DataType.STRING,
    "BLOB": DataType.BINARY,
    "BINARY": DataType.BINARY,
    "BOOLEAN": DataType.BOOLEAN,
    "BOOL": DataType.BOOLEAN,
    "DATE": DataType.DATE,
    "TIMESTAMP": DataType.TIMESTAMP,
    "DATETIME": DataType.TIMESTAMP,
}


def map_type(type_str: str) -> DataType:
    """Map a backend type string to DataType.

    Type parameters and modifiers are ignored, so ``DECIMAL(10,2)`` maps to
    DECIMAL and ``TIMESTAMP WITH TIME ZONE`` to TIMESTAMP.

    Args:
        type_str: Type text as reported by the backend

    Returns:
        Mapped DataType, STRING when the type is unknown
    """
    base = type_str.upper().split("(")[0].strip()
    if base.startswith("TIMESTAMP"):
        return DataType.TIMESTAMP
    base = base.split(" ")[0]
    return _TYPE_NAMES.get(base, DataType.STRING)


class TableType(Enum):
    """Kind of catalog table."""

    MANAGED = "MANAGED"
    EXTERNAL = "EXTERNAL"
    VIEW = "VIEW"


@dataclass(frozen=True)
class TableIdentifier:
    """Table name with an optional database qualifier."""

    table: str
    database: Optional[str] = None

    @classmethod
    def parse(cls, name: str) -> "TableIdentifier":
        """Parse ``db.table`` or ``table``."""
        parts = name.split(".", 1)
        if len(parts) == 2:
            return cls(table=parts[1], database=parts[0])
        return cls(table=parts[0])

    def with_database(self, database: Optional[str]) -> "TableIdentifier":
        return replace(self, database=database)

    def unquoted_string(self) -> str:
        if self.database is not None:
            return f"{self.database}.{self.table}"
        return self.table

    def __str__(self) -> str:
        if self.database is not None:
            return f"`{self.database}`.`{self.table}`"
        return f"`{self.table}`"


@dataclass
class Column:
    """Column metadata."""

    name: str
    data_type: DataType
    nullable: bool = True
    comment: Optional[str] = None

    def simple_type_name(self) -> str:
        return self.data_type.value

    def __repr__(self) -> str:
        return f"Column({self.name}, {self.data_type.value})"


@dataclass
class StorageFormat:
    """Where and how a table or partition stores its data."""

    location_uri: Optional[str] = None
    input_format: Optional[str] = None
    output_format: Optional[str] = None
    serde: Optional[str] = None
    compressed: bool = False
    properties: Dict[str, str] = field(default_factory=dict)


@dataclass
class BucketSpec:
    """Bucketing layout of a table."""

    num_buckets: int
    bucket_column_names: List[str]
    sort_column_names: List[str] = field(default_factory=list)


@dataclass
class CatalogTable:
    """Table descriptor returned by a catalog backend."""

    identifier: TableIdentifier
    table_type: TableType
    schema: List[Column] = field(default_factory=list)
    storage: StorageFormat = field(default_factory=StorageFormat)
    provider: Optional[str] = None
    partition_column_names: List[str] = field(default_factory=list)
    bucket_spec: Optional[BucketSpec] = None
    owner: str = ""
    create_time: Optional[int] = None  # epoch millis
    last_access_time: int = -1
    comment: Optional[str] = None
    properties: Dict[str, str] = field(default_factory=dict)
    view_text: Optional[str] = None
    tracks_partitions_in_catalog: bool = False

    @property
    def database(self) -> Optional[str]:
        return self.identifier.database

    def get_column(self, name: str) -> Optional[Column]:
        """Get column by name."""
        for col in self.schema:
            if col.name.lower() == name.lower():
                return col
        return None

    def partition_columns(self) -> List[Column]:
        """Columns named as partition columns, in partition order."""
        columns = []
        for name in self.partition_column_names:
            column = self.get_column(name)
            if column is not None:
                columns.append(column)
        return columns

    def __repr__(self) -> str:
        return f"CatalogTable({self.identifier.unquoted_string()}, {self.table_type.value})"


@dataclass
class CatalogTablePartition:
    """One partition of a partitioned table."""

    spec: Dict[str, str]
    storage: StorageFormat = field(default_factory=StorageFormat)
    parameters: Dict[str, str] = field(default_factory=dict)
    create_time: Optional[int] = None
    last_access_time: int = -1

    def __repr__(self) -> str:
        return f"CatalogTablePartition({self.spec})"
