"""Errors raised by catalog lookups and catalog commands."""

from typing import Dict


class CatalogError(Exception):
    """Base class for catalog failures."""

    pass


class NoSuchDatabaseError(CatalogError):
    """Raised when no backend registers a database."""

    def __init__(self, database: str):
        super().__init__(f"Database '{database}' not found")
        self.database = database


class NoSuchTableError(CatalogError):
    """Raised when a table does not exist in its database."""

    def __init__(self, database: str, table: str):
        super().__init__(f"Table or view '{table}' not found in database '{database}'")
        self.database = database
        self.table = table


class NoSuchPartitionError(CatalogError):
    """Raised when a partition spec matches no partition."""

    def __init__(self, identifier: str, spec: Dict[str, str]):
        values = ", ".join(f"{k}={v}" for k, v in spec.items())
        super().__init__(f"Partition not found in table {identifier}: [{values}]")
        self.identifier = identifier
        self.spec = spec


class TableAlreadyExistsError(CatalogError):
    """Raised when creating a table that already exists."""

    def __init__(self, database: str, table: str):
        super().__init__(f"Table or view '{table}' already exists in database '{database}'")
        self.database = database
        self.table = table


class ConflictingDatabaseError(CatalogError):
    """Raised when a command receives two different database qualifiers."""

    def __init__(self, database: str, qualifier: str):
        super().__init__(
            f"SHOW COLUMNS with conflicting databases: '{database}' != '{qualifier}'"
        )
        self.database = database
        self.qualifier = qualifier


class UnsupportedOperationError(CatalogError):
    """Raised when a backend lacks the requested capability."""

    pass
