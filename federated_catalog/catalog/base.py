"""Base catalog backend interface."""

import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from .schema import CatalogTable, CatalogTablePartition, TableIdentifier


class BackendKind(Enum):
    """The two catalog backends a database can belong to."""

    NATIVE = "native"
    EXTERNAL = "external"


def filter_pattern(names: Iterable[str], pattern: str) -> List[str]:
    """Filter names by a SHOW TABLES style pattern.

    ``*`` matches any run of characters and ``|`` separates alternatives.
    Matching is case-insensitive. Result keeps the order of ``names`` and
    drops duplicates.

    Args:
        names: Candidate names
        pattern: Pattern such as ``sales_*|orders``

    Returns:
        Matching names
    """
    regexes = []
    for sub_pattern in pattern.strip().split("|"):
        sub_pattern = sub_pattern.strip()
        if not sub_pattern:
            continue
        parts = [re.escape(part) for part in sub_pattern.split("*")]
        regexes.append(re.compile(".*".join(parts) + r"\Z", re.IGNORECASE))

    matched: List[str] = []
    for name in names:
        if name in matched:
            continue
        for regex in regexes:
            if regex.match(name):
                matched.append(name)
                break
    return matched


class CatalogBackend(ABC):
    """Abstract base class for catalog backends."""

    kind: BackendKind

    def __init__(self, name: str, config: Optional[Dict[str, Any]] = None):
        """Initialize backend.

        Args:
            name: Unique name for this backend
            config: Configuration dictionary
        """
        self.name = name
        if config is None:
            config = {}
        self.config = config

    @abstractmethod
    def list_databases(self) -> List[str]:
        """List all databases registered in this backend."""
        pass

    @abstractmethod
    def database_exists(self, database: str) -> bool:
        """Check whether this backend registers a database."""
        pass

    @abstractmethod
    def list_tables(
        self, database: str, pattern: Optional[str] = None
    ) -> List[TableIdentifier]:
        """List tables of a database.

        Args:
            database: Database name
            pattern: Optional name pattern, see filter_pattern

        Returns:
            Database-qualified table identifiers
        """
        pass

    @abstractmethod
    def get_table_metadata(self, identifier: TableIdentifier) -> CatalogTable:
        """Get the descriptor of a database-qualified table.

        Raises:
            NoSuchDatabaseError: If the database is unknown
            NoSuchTableError: If the table is unknown
        """
        pass

    @abstractmethod
    def get_partition(
        self, identifier: TableIdentifier, spec: Dict[str, str]
    ) -> CatalogTablePartition:
        """Get one partition of a table.

        Raises:
            NoSuchPartitionError: If no partition matches
            UnsupportedOperationError: If the backend has no partitions
        """
        pass

    @abstractmethod
    def create_table(self, table: CatalogTable, ignore_if_exists: bool) -> None:
        """Create a table from a database-qualified descriptor.

        Raises:
            TableAlreadyExistsError: If it exists and ignore_if_exists is False
        """
        pass

    def table_exists(self, identifier: TableIdentifier) -> bool:
        """Check whether a database-qualified table exists."""
        if identifier.database is None:
            return False
        if not self.database_exists(identifier.database):
            return False
        for existing in self.list_tables(identifier.database):
            if existing.table.lower() == identifier.table.lower():
                return True
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name})"
