"""Catalog backends and metadata classes."""

from .base import BackendKind, CatalogBackend
from .catalog import FederatedCatalog
from .duckdb import DuckDBCatalog
from .errors import (
    CatalogError,
    ConflictingDatabaseError,
    NoSuchDatabaseError,
    NoSuchPartitionError,
    NoSuchTableError,
    TableAlreadyExistsError,
    UnsupportedOperationError,
)
from .memory import InMemoryCatalog
from .schema import (
    BucketSpec,
    CatalogTable,
    CatalogTablePartition,
    Column,
    DataType,
    StorageFormat,
    TableIdentifier,
    TableType,
)

__all__ = [
    "BackendKind",
    "CatalogBackend",
    "FederatedCatalog",
    "DuckDBCatalog",
    "InMemoryCatalog",
    "CatalogError",
    "ConflictingDatabaseError",
    "NoSuchDatabaseError",
    "NoSuchPartitionError",
    "NoSuchTableError",
    "TableAlreadyExistsError",
    "UnsupportedOperationError",
    "BucketSpec",
    "CatalogTable",
    "CatalogTablePartition",
    "Column",
    "DataType",
    "StorageFormat",
    "TableIdentifier",
    "TableType",
]
