"""Configuration management for the federated catalog."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
import yaml
from pathlib import Path


Resolver = Callable[[str, str], bool]


def case_sensitive_resolution(a: str, b: str) -> bool:
    return a == b


def case_insensitive_resolution(a: str, b: str) -> bool:
    return a.lower() == b.lower()


@dataclass
class SessionConfig:
    """Session settings consumed by catalog commands."""

    current_database: str = "default"
    default_data_source: str = "parquet"  # provider for tables cloned from views
    case_sensitive: bool = False

    @property
    def resolver(self) -> Resolver:
        """Name-equality function for database and column names."""
        if self.case_sensitive:
            return case_sensitive_resolution
        return case_insensitive_resolution


@dataclass
class NativeCatalogConfig:
    """Configuration for the native session catalog."""

    databases: List[str] = field(default_factory=lambda: ["default"])
    warehouse_dir: str = "spark-warehouse"


@dataclass
class ExternalCatalogConfig:
    """Configuration for the external catalog."""

    name: str
    type: str  # "duckdb"
    config: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Config:
    """Main configuration class."""

    session: SessionConfig = field(default_factory=SessionConfig)
    native: NativeCatalogConfig = field(default_factory=NativeCatalogConfig)
    external: Optional[ExternalCatalogConfig] = None


def load_config(config_path: str) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Parsed configuration

    Example YAML format:
        session:
          current_database: default
          default_data_source: parquet
          case_sensitive: false

        native:
          databases: [default, sales]
          warehouse_dir: /data/warehouse

        external:
          name: store
          type: duckdb
          path: /data/store.duckdb
          read_only: true
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    session = SessionConfig(**data.get("session", {}))
    native = NativeCatalogConfig(**data.get("native", {}))

    external = None
    external_data = data.get("external")
    if external_data:
        external_data = dict(external_data)
        ext_type = external_data.pop("type")
        name = external_data.pop("name", ext_type)
        external = ExternalCatalogConfig(name=name, type=ext_type, config=external_data)

    return Config(session=session, native=native, external=external)
