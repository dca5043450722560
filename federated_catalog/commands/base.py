"""Command interface shared by default commands and their adapters."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple, TYPE_CHECKING

import pyarrow as pa

if TYPE_CHECKING:
    from ..session.session import Session

Row = Tuple[Any, ...]


def string_field(name: str, nullable: bool = False, comment: Optional[str] = None) -> pa.Field:
    """Build a string output field, with column comment metadata if given."""
    metadata = None
    if comment is not None:
        metadata = {"comment": comment}
    return pa.field(name, pa.string(), nullable=nullable, metadata=metadata)


class Command(ABC):
    """A catalog statement that produces rows."""

    output: pa.Schema = pa.schema([])

    @abstractmethod
    def run(self, session: "Session") -> List[Row]:
        """Execute the command.

        Args:
            session: Session providing the catalog and configuration

        Returns:
            Rows shaped like ``output``
        """
        pass

    @property
    def name(self) -> str:
        return self.__class__.__name__


class DelegatingCommand(Command):
    """Command wrapping a default command it can fall back on."""

    def __init__(self, delegate: Command):
        self.delegate = delegate

    @property
    def output(self) -> pa.Schema:
        return self.delegate.output

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.delegate!r})"


def rows_to_table(rows: List[Row], schema: pa.Schema) -> pa.Table:
    """Materialize command rows as an Arrow table of the command's schema."""
    arrays = []
    index = 0
    while index < len(schema):
        values = [row[index] for row in rows]
        arrays.append(pa.array(values, type=schema.field(index).type))
        index += 1
    return pa.Table.from_arrays(arrays, schema=schema)
