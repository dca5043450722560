"""Runs the default DESCRIBE command and fills in column nullability."""

import logging
from typing import List, Optional, TYPE_CHECKING

from ..catalog.schema import Column
from .base import Command, Row

if TYPE_CHECKING:
    from ..session.session import Session

logger = logging.getLogger(__name__)


class DelegateBridge:
    """Adapts default DESCRIBE rows to the four-column DESCRIBE shape.

    The default command emits ``(col_name, data_type, comment)``. The first
    ``len(schema)`` rows describe the schema's columns and get their
    nullability from it; any rows after them (partition and detail sections)
    get an empty nullable cell.
    """

    def __init__(self, delegate: Command):
        self.delegate = delegate

    def run(self, session: "Session", schema: List[Column]) -> List[Row]:
        delegate_rows = self.delegate.run(session)
        column_rows = delegate_rows[: len(schema)]
        extended_rows = delegate_rows[len(schema):]

        result: List[Row] = []
        for index, row in enumerate(column_rows):
            column = self._match_column(session, schema, row[0], index)
            result.append((row[0], row[1], str(column.nullable).lower(), row[2]))
        for row in extended_rows:
            result.append((row[0], row[1], "", row[2]))
        return result

    def _match_column(
        self, session: "Session", schema: List[Column], name: str, index: int
    ) -> Column:
        """Column of the schema a row describes: by name, else by position."""
        column = self._find_by_name(session, schema, name)
        if column is None:
            logger.debug(f"No column named '{name}' in schema, using position {index}")
            column = schema[index]
        return column

    def _find_by_name(
        self, session: "Session", schema: List[Column], name: str
    ) -> Optional[Column]:
        resolver = session.conf.resolver
        for column in schema:
            if resolver(column.name, name):
                return column
        return None
