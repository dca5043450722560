"""Catalog routing metadata calls across the native and external backends."""

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from .base import BackendKind, CatalogBackend, filter_pattern
from .errors import CatalogError, NoSuchDatabaseError, TableAlreadyExistsError
from .schema import CatalogTable, CatalogTablePartition, TableIdentifier, TableType

logger = logging.getLogger(__name__)


class FederatedCatalog:
    """Session-level catalog over a native and an optional external backend.

    Temporary views live here, scoped to the session, and shadow persistent
    tables of the same name. Every other lookup is routed to the backend that
    registers the identifier's database.
    """

    def __init__(
        self,
        native: CatalogBackend,
        external: Optional[CatalogBackend] = None,
        current_database: str = "default",
    ):
        """Initialize catalog.

        Args:
            native: Native session catalog, target of all table creation
            external: Catalog fronting the external table store
            current_database: Database used for unqualified identifiers
        """
        self.native = native
        self.external = external
        self.temp_views: Dict[str, CatalogTable] = {}
        self._current_database = current_database

    @property
    def current_database(self) -> str:
        return self._current_database

    def set_current_database(self, database: str) -> None:
        """Switch the current database.

        Raises:
            NoSuchDatabaseError: If no backend registers the database
        """
        if self.catalog_of(database) is None:
            raise NoSuchDatabaseError(database)
        self._current_database = database

    def backend(self, kind: BackendKind) -> CatalogBackend:
        """Get the backend of a kind."""
        if kind == BackendKind.NATIVE:
            return self.native
        if kind == BackendKind.EXTERNAL:
            if self.external is None:
                raise CatalogError("No external catalog is configured")
            return self.external
        raise ValueError(f"Unknown backend kind: {kind}")

    def catalog_of(self, database: Optional[str] = None) -> Optional[BackendKind]:
        """Find the backend registering a database.

        The external backend is checked first, so it owns a name both register.

        Args:
            database: Database name, current database when None

        Returns:
            Owning backend kind, None if neither registers it
        """
        if database is None:
            database = self._current_database
        if self.external is not None and self.external.database_exists(database):
            return self.external.kind
        if self.native.database_exists(database):
            return self.native.kind
        return None

    def require_catalog_of(self, database: Optional[str] = None) -> BackendKind:
        """Find the backend registering a database, failing if there is none.

        Raises:
            NoSuchDatabaseError: If neither backend registers the database
        """
        if database is None:
            database = self._current_database
        kind = self.catalog_of(database)
        if kind is None:
            raise NoSuchDatabaseError(database)
        logger.debug(f"Database '{database}' resolved to {kind.value} catalog")
        return kind

    def list_databases(self) -> List[str]:
        databases = list(self.native.list_databases())
        if self.external is not None:
            for database in self.external.list_databases():
                if database not in databases:
                    databases.append(database)
        return databases

    def qualify(self, identifier: TableIdentifier) -> TableIdentifier:
        """Fill in the current database when the identifier has none."""
        if identifier.database is None:
            return identifier.with_database(self._current_database)
        return identifier

    def create_temp_view(
        self, name: str, view: CatalogTable, replace_existing: bool = True
    ) -> None:
        """Register a session-scoped view.

        Args:
            name: Unqualified view name
            view: Descriptor of the view, its identifier is rewritten to name
            replace_existing: Overwrite a view of the same name
        """
        key = name.lower()
        if key in self.temp_views and not replace_existing:
            raise TableAlreadyExistsError("", name)
        self.temp_views[key] = replace(
            view, identifier=TableIdentifier(table=name), table_type=TableType.VIEW
        )

    def is_temporary_table(self, identifier: TableIdentifier) -> bool:
        """Check whether an identifier names a temporary view."""
        return identifier.database is None and identifier.table.lower() in self.temp_views

    def list_tables(
        self, database: Optional[str] = None, pattern: Optional[str] = None
    ) -> List[TableIdentifier]:
        """List tables of a database followed by matching temporary views.

        Raises:
            NoSuchDatabaseError: If no backend registers the database
        """
        if database is None:
            database = self._current_database
        backend = self._backend_for(database)
        tables = backend.list_tables(database, pattern)
        view_names = sorted(self.temp_views.keys())
        if pattern is not None:
            view_names = filter_pattern(view_names, pattern)
        for name in view_names:
            tables.append(self.temp_views[name].identifier)
        return tables

    def get_table_metadata(self, identifier: TableIdentifier) -> CatalogTable:
        """Get a persistent table's descriptor from its owning backend."""
        qualified = self.qualify(identifier)
        backend = self._backend_for(qualified.database)
        return backend.get_table_metadata(qualified)

    def get_temp_view_or_permanent_table_metadata(
        self, identifier: TableIdentifier
    ) -> CatalogTable:
        """Get a temporary view if one matches, else the persistent table."""
        if self.is_temporary_table(identifier):
            return self.temp_views[identifier.table.lower()]
        return self.get_table_metadata(identifier)

    def get_partition(
        self, identifier: TableIdentifier, spec: Dict[str, str]
    ) -> CatalogTablePartition:
        """Get one partition from the table's owning backend."""
        qualified = self.qualify(identifier)
        backend = self._backend_for(qualified.database)
        return backend.get_partition(qualified, spec)

    def create_table(self, table: CatalogTable, ignore_if_exists: bool) -> None:
        """Create a table in the native catalog.

        Raises:
            NoSuchDatabaseError: If the native catalog lacks the database
            TableAlreadyExistsError: If it exists and ignore_if_exists is False
        """
        qualified = self.qualify(table.identifier)
        if not self.native.database_exists(qualified.database):
            raise NoSuchDatabaseError(qualified.database)
        self.native.create_table(replace(table, identifier=qualified), ignore_if_exists)

    def _backend_for(self, database: str) -> CatalogBackend:
        return self.backend(self.require_catalog_of(database))

    def __repr__(self) -> str:
        return (
            f"FederatedCatalog(native={self.native!r}, external={self.external!r}, "
            f"temp_views={len(self.temp_views)})"
        )
