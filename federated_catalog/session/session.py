"""Session running catalog commands against a federated catalog."""

from __future__ import annotations

import time
from typing import List, Optional

import pyarrow as pa

from ..catalog import DuckDBCatalog, FederatedCatalog, InMemoryCatalog
from ..catalog.base import CatalogBackend
from ..commands import Command, Row, adapt_command, rows_to_table
from ..config import Config, ExternalCatalogConfig, SessionConfig
from ..utils.logging import get_contextual_logger


class Session:
    """Holds the catalog and settings one statement executes with."""

    def __init__(self, catalog: FederatedCatalog, conf: Optional[SessionConfig] = None):
        if conf is None:
            conf = SessionConfig()
        self.catalog = catalog
        self.conf = conf

    def execute(self, command: Command) -> List[Row]:
        """Run a parsed catalog command through its federated adapter."""
        adapted = adapt_command(command)
        logger = get_contextual_logger(__name__, {"command": adapted.name})
        start = time.time()
        rows = adapted.run(self)
        elapsed = (time.time() - start) * 1000
        logger.debug(f"{adapted.name} returned {len(rows)} rows in {elapsed:.2f} ms")
        return rows

    def execute_to_table(self, command: Command) -> pa.Table:
        """Run a command and materialize its rows with the command's schema."""
        adapted = adapt_command(command)
        return rows_to_table(self.execute(command), adapted.output)

    def close(self) -> None:
        """Disconnect the external catalog if it holds a connection."""
        external = self.catalog.external
        if isinstance(external, DuckDBCatalog):
            external.disconnect()

    def __repr__(self) -> str:
        return f"Session(current_database={self.catalog.current_database})"


def build_session(config: Config) -> Session:
    """Build backends from configuration and open a session over them."""
    native = InMemoryCatalog(
        "native",
        {
            "databases": config.native.databases,
            "warehouse_dir": config.native.warehouse_dir,
        },
    )
    external = None
    if config.external is not None:
        external = _create_external_catalog(config.external)
    catalog = FederatedCatalog(native, external)
    catalog.set_current_database(config.session.current_database)
    return Session(catalog, config.session)


def _create_external_catalog(ext_config: ExternalCatalogConfig) -> CatalogBackend:
    if ext_config.type == "duckdb":
        catalog = DuckDBCatalog(ext_config.name, ext_config.config)
        catalog.connect()
        return catalog
    raise ValueError(f"Unsupported external catalog type: {ext_config.type}")
