"""Tests for routing across the native and external catalogs."""

import pytest

from federated_catalog.catalog import (
    CatalogError,
    CatalogTable,
    Column,
    DataType,
    FederatedCatalog,
    InMemoryCatalog,
    NoSuchDatabaseError,
    TableAlreadyExistsError,
    TableIdentifier,
    TableType,
)
from federated_catalog.catalog.base import BackendKind


def test_catalog_of(catalog):
    """Each database belongs to the backend registering it."""
    assert catalog.catalog_of("sales") == BackendKind.NATIVE
    assert catalog.catalog_of("store") == BackendKind.EXTERNAL
    assert catalog.catalog_of("missing") is None
    assert catalog.catalog_of() == BackendKind.NATIVE


def test_external_wins_shared_database_name(external_catalog):
    """A database registered by both backends belongs to the external one."""
    native = InMemoryCatalog("native", {"databases": ["default", "store"]})
    federated = FederatedCatalog(native, external_catalog)
    assert federated.catalog_of("store") == BackendKind.EXTERNAL


def test_without_external_catalog():
    """Only native databases resolve when no external catalog is configured."""
    federated = FederatedCatalog(InMemoryCatalog())
    assert federated.catalog_of("default") == BackendKind.NATIVE
    assert federated.catalog_of("store") is None
    with pytest.raises(CatalogError):
        federated.backend(BackendKind.EXTERNAL)


def test_list_databases(catalog):
    """Databases of both backends are listed."""
    databases = catalog.list_databases()
    assert "default" in databases
    assert "sales" in databases
    assert "store" in databases


def test_set_current_database(catalog):
    """The current database must be registered somewhere."""
    catalog.set_current_database("store")
    assert catalog.current_database == "store"
    assert catalog.qualify(TableIdentifier("orders")) == TableIdentifier("orders", "store")
    with pytest.raises(NoSuchDatabaseError):
        catalog.set_current_database("missing")


def test_temp_view_shadows_table(catalog, recent_view):
    """An unqualified temp view name wins over a same-named table."""
    catalog.create_temp_view("customers", recent_view)
    catalog.set_current_database("sales")

    assert catalog.is_temporary_table(TableIdentifier("customers"))
    assert not catalog.is_temporary_table(TableIdentifier("customers", "sales"))

    shadowed = catalog.get_temp_view_or_permanent_table_metadata(TableIdentifier("customers"))
    assert shadowed.table_type == TableType.VIEW
    persistent = catalog.get_temp_view_or_permanent_table_metadata(
        TableIdentifier("customers", "sales")
    )
    assert persistent.table_type == TableType.MANAGED


def test_create_temp_view_without_replace(catalog, recent_view):
    """Registering an existing view name fails unless replacing."""
    with pytest.raises(TableAlreadyExistsError):
        catalog.create_temp_view("RECENT", recent_view, replace_existing=False)
    catalog.create_temp_view("RECENT", recent_view)
    assert catalog.is_temporary_table(TableIdentifier("recent"))


def test_list_tables_includes_temp_views(catalog):
    """Temporary views follow the database's own tables."""
    tables = catalog.list_tables("store")
    assert tables == [
        TableIdentifier("order_items", "store"),
        TableIdentifier("orders", "store"),
        TableIdentifier("recent"),
    ]
    assert catalog.list_tables("store", "ord*") == [
        TableIdentifier("order_items", "store"),
        TableIdentifier("orders", "store"),
    ]


def test_list_tables_unknown_database(catalog):
    """Listing an unregistered database fails."""
    with pytest.raises(NoSuchDatabaseError):
        catalog.list_tables("missing")


def test_get_table_metadata_routes_by_database(catalog):
    """Metadata comes from the backend owning the database."""
    orders = catalog.get_table_metadata(TableIdentifier("orders", "store"))
    customers = catalog.get_table_metadata(TableIdentifier("customers", "sales"))
    assert orders.provider == "duckdb"
    assert customers.provider == "parquet"


def test_create_table_goes_to_native(catalog, native_catalog):
    """Unqualified creates land in the current native database."""
    table = CatalogTable(
        identifier=TableIdentifier("fresh"),
        table_type=TableType.MANAGED,
        schema=[Column("x", DataType.INT)],
    )
    catalog.create_table(table, ignore_if_exists=False)
    assert native_catalog.table_exists(TableIdentifier("fresh", "default"))


def test_create_table_in_external_database(catalog):
    """The external store cannot receive new tables."""
    table = CatalogTable(identifier=TableIdentifier("t", "store"), table_type=TableType.MANAGED)
    with pytest.raises(NoSuchDatabaseError):
        catalog.create_table(table, ignore_if_exists=False)
