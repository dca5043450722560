"""Shared fixtures: a native catalog, a DuckDB external catalog and a session."""

import pytest

from federated_catalog.catalog import (
    BucketSpec,
    CatalogTable,
    CatalogTablePartition,
    Column,
    DataType,
    DuckDBCatalog,
    FederatedCatalog,
    InMemoryCatalog,
    StorageFormat,
    TableIdentifier,
    TableType,
)
from federated_catalog.config import SessionConfig
from federated_catalog.session import Session


@pytest.fixture
def native_catalog():
    """Native catalog with a plain and a partitioned table in 'sales'."""
    catalog = InMemoryCatalog(
        "native", {"databases": ["default", "sales"], "warehouse_dir": "/warehouse"}
    )
    catalog.create_table(
        CatalogTable(
            identifier=TableIdentifier("customers", "sales"),
            table_type=TableType.MANAGED,
            schema=[
                Column("id", DataType.INT, nullable=False, comment="customer id"),
                Column("name", DataType.STRING),
                Column("region", DataType.STRING),
            ],
            provider="parquet",
            bucket_spec=BucketSpec(4, ["id"]),
        ),
        ignore_if_exists=False,
    )
    catalog.create_table(
        CatalogTable(
            identifier=TableIdentifier("events", "sales"),
            table_type=TableType.MANAGED,
            schema=[
                Column("event_id", DataType.BIGINT, nullable=False),
                Column("payload", DataType.STRING),
                Column("dt", DataType.STRING, nullable=False),
            ],
            provider="orc",
            partition_column_names=["dt"],
        ),
        ignore_if_exists=False,
    )
    catalog.create_partitions(
        TableIdentifier("events", "sales"),
        [
            CatalogTablePartition(
                spec={"dt": "2024-01-01"},
                storage=StorageFormat(location_uri="/warehouse/sales.db/events/dt=2024-01-01"),
            )
        ],
    )
    return catalog


@pytest.fixture
def external_catalog():
    """In-memory DuckDB store with a 'store' schema."""
    catalog = DuckDBCatalog("store", {"path": ":memory:", "read_only": False})
    catalog.connect()

    conn = catalog.connection
    conn.execute("CREATE SCHEMA store")
    conn.execute(
        """
        CREATE TABLE store.orders (
            id INTEGER NOT NULL,
            amount DOUBLE,
            note VARCHAR
        )
        """
    )
    conn.execute("COMMENT ON COLUMN store.orders.note IS 'free text'")
    conn.execute(
        """
        CREATE TABLE store.order_items (
            order_id INTEGER,
            sku VARCHAR
        )
        """
    )

    yield catalog

    catalog.disconnect()


@pytest.fixture
def recent_view():
    """Temporary view with a non-null and a nullable column."""
    return CatalogTable(
        identifier=TableIdentifier("recent"),
        table_type=TableType.VIEW,
        schema=[
            Column("a", DataType.INT, nullable=False),
            Column("b", DataType.STRING, nullable=True),
        ],
        view_text="SELECT a, b FROM sales.events",
    )


@pytest.fixture
def catalog(native_catalog, external_catalog, recent_view):
    """Federated catalog with the temporary view 'recent' registered."""
    federated = FederatedCatalog(native_catalog, external_catalog, current_database="default")
    federated.create_temp_view("recent", recent_view)
    return federated


@pytest.fixture
def session(catalog):
    """Session using the default 'parquet' provider."""
    return Session(catalog, SessionConfig(default_data_source="parquet"))
