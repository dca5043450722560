"""Catalog metadata commands."""

from .base import Command, DelegatingCommand, Row, rows_to_table
from .bridge import DelegateBridge
from .default import (
    CreateTableLikeCommand,
    DescribeTableCommand,
    ShowColumnsCommand,
    ShowTablesCommand,
)
from .formatter import MetadataFormatter
from .resolver import CatalogResolver
from .rules import adapt_command
from .tables import (
    CreateTableLikeAdapter,
    DescribeTableAdapter,
    ShowColumnsAdapter,
    ShowTablesAdapter,
)

__all__ = [
    "Command",
    "DelegatingCommand",
    "Row",
    "rows_to_table",
    "DelegateBridge",
    "CreateTableLikeCommand",
    "DescribeTableCommand",
    "ShowColumnsCommand",
    "ShowTablesCommand",
    "MetadataFormatter",
    "CatalogResolver",
    "adapt_command",
    "CreateTableLikeAdapter",
    "DescribeTableAdapter",
    "ShowColumnsAdapter",
    "ShowTablesAdapter",
]
