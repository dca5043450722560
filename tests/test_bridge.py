"""Tests for nullability reconciliation of default DESCRIBE output."""

from federated_catalog.catalog import Column, DataType
from federated_catalog.commands import Command, DelegateBridge


class _FixedRowsCommand(Command):
    """Stands in for a default command returning canned rows."""

    def __init__(self, rows):
        self.rows = rows

    def run(self, session):
        return list(self.rows)


SCHEMA = [
    Column("a", DataType.INT, nullable=False),
    Column("b", DataType.STRING, nullable=True),
]


def test_rows_matched_by_name(session):
    """Rows in a different order than the schema still get the right flag."""
    delegate = _FixedRowsCommand([("b", "string", None), ("a", "int", "key")])
    rows = DelegateBridge(delegate).run(session, SCHEMA)
    assert rows == [
        ("b", "string", "true", None),
        ("a", "int", "false", "key"),
    ]


def test_unknown_name_falls_back_to_position(session):
    """Rows naming no schema column use the column at their position."""
    delegate = _FixedRowsCommand([("x", "int", None), ("B", "string", None)])
    rows = DelegateBridge(delegate).run(session, SCHEMA)
    assert rows == [
        ("x", "int", "false", None),
        ("B", "string", "true", None),
    ]


def test_rows_beyond_schema_have_empty_nullable(session):
    """Detail rows after the schema's columns get an empty nullable cell."""
    delegate = _FixedRowsCommand(
        [("a", "int", None), ("b", "string", None), ("", "", ""), ("Type", "VIEW", "")]
    )
    rows = DelegateBridge(delegate).run(session, SCHEMA)
    assert rows[2:] == [("", "", "", ""), ("Type", "VIEW", "", "")]
