"""Tests for SHOW TABLES over both catalogs."""

import pytest

from federated_catalog.catalog import NoSuchDatabaseError, UnsupportedOperationError
from federated_catalog.commands import ShowTablesAdapter, ShowTablesCommand


def test_show_native_tables(session):
    """Native tables are listed with temp views after them."""
    rows = session.execute(ShowTablesCommand(database_name="sales"))
    assert rows == [
        ("sales", "customers", False),
        ("sales", "events", False),
        ("", "recent", True),
    ]


def test_show_external_tables(session):
    """External tables are listed the same way."""
    rows = session.execute(ShowTablesCommand(database_name="store", table_identifier_pattern="order*"))
    assert rows == [
        ("store", "order_items", False),
        ("store", "orders", False),
    ]


def test_show_tables_current_database(session):
    """Without a database the current one is listed."""
    session.catalog.set_current_database("store")
    rows = session.execute(ShowTablesCommand(table_identifier_pattern="orders"))
    assert rows == [("store", "orders", False)]


def test_not_extended_has_three_columns(session):
    """Plain SHOW TABLES never has an information column."""
    command = ShowTablesCommand(database_name="store")
    rows = session.execute(command)
    assert all(len(row) == 3 for row in rows)
    assert ShowTablesAdapter(command).output.names == ["database", "tableName", "isTemporary"]


@pytest.mark.parametrize("database", ["sales", "store"])
def test_extended_information_ends_with_newline(session, database):
    """Extended rows carry table information ending in a newline."""
    rows = session.execute(ShowTablesCommand(database_name=database, is_extended=True))
    assert rows
    for row in rows:
        assert len(row) == 4
        assert row[3].endswith("\n")
        assert f"Table: {row[1]}" in row[3]


def test_extended_external_information(session):
    """Information of an external table comes from the external catalog."""
    rows = session.execute(
        ShowTablesCommand(database_name="store", table_identifier_pattern="orders", is_extended=True)
    )
    assert len(rows) == 1
    information = rows[0][3]
    assert information.startswith("Database: store\nTable: orders\n")
    assert "Provider: duckdb" in information
    assert "|-- id: int (nullable = false)" in information


def test_show_native_partition(session):
    """A partition spec yields exactly one row describing that partition."""
    rows = session.execute(
        ShowTablesCommand(
            database_name="sales",
            table_identifier_pattern="events",
            partition_spec={"dt": "2024-01-01"},
        )
    )
    assert len(rows) == 1
    database, table, is_temp, information = rows[0]
    assert (database, table, is_temp) == ("sales", "events", False)
    assert information.startswith("Partition Values: [dt=2024-01-01]")
    assert information.endswith("\n")


def test_show_external_partition_unsupported(session):
    """The external catalog cannot look up partitions."""
    command = ShowTablesCommand(
        database_name="store",
        table_identifier_pattern="orders",
        partition_spec={"id": "1"},
    )
    with pytest.raises(UnsupportedOperationError):
        session.execute(command)


def test_show_tables_unknown_database(session):
    """Unregistered databases fail."""
    with pytest.raises(NoSuchDatabaseError):
        session.execute(ShowTablesCommand(database_name="missing"))


def test_default_command_sees_native_catalog_only(session):
    """Run directly, the default command cannot see the external catalog."""
    with pytest.raises(NoSuchDatabaseError):
        ShowTablesCommand(database_name="store").run(session)
    rows = ShowTablesCommand(database_name="sales").run(session)
    assert [row[1] for row in rows] == ["customers", "events"]
