"""Replaces default catalog commands with their federated adapters."""

from typing import Dict, Type

from .base import Command, DelegatingCommand
from .default import (
    CreateTableLikeCommand,
    DescribeTableCommand,
    ShowColumnsCommand,
    ShowTablesCommand,
)
from .tables import (
    CreateTableLikeAdapter,
    DescribeTableAdapter,
    ShowColumnsAdapter,
    ShowTablesAdapter,
)

_ADAPTERS: Dict[Type[Command], Type[DelegatingCommand]] = {
    ShowTablesCommand: ShowTablesAdapter,
    DescribeTableCommand: DescribeTableAdapter,
    ShowColumnsCommand: ShowColumnsAdapter,
    CreateTableLikeCommand: CreateTableLikeAdapter,
}


def adapt_command(command: Command) -> Command:
    """Wrap a default command in its adapter; other commands pass through."""
    adapter = _ADAPTERS.get(type(command))
    if adapter is None:
        return command
    return adapter(command)
