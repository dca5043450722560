"""Decides which catalog backend owns an identifier."""

from typing import Optional

from ..catalog.base import BackendKind
from ..catalog.catalog import FederatedCatalog
from ..catalog.schema import TableIdentifier


class CatalogResolver:
    """Resolves identifiers to a backend kind.

    Callers must check is_temporary first: a temporary view is never routed
    to a persistent backend.
    """

    def __init__(self, catalog: FederatedCatalog):
        self.catalog = catalog

    def is_temporary(self, identifier: TableIdentifier) -> bool:
        return self.catalog.is_temporary_table(identifier)

    def resolve_catalog(self, identifier: TableIdentifier) -> BackendKind:
        """Backend owning the identifier's database.

        Raises:
            NoSuchDatabaseError: If neither backend registers the database
        """
        return self.resolve_database(identifier.database)

    def resolve_database(self, database: Optional[str]) -> BackendKind:
        return self.catalog.require_catalog_of(database)
