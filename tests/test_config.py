"""Tests for configuration loading."""

import pytest
import tempfile
from pathlib import Path
from federated_catalog.config import load_config, Config, SessionConfig


def _write_config(text):
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        f.write(text)
        return f.name


def test_load_full_config():
    """Test loading every section."""
    config_path = _write_config(
        """
session:
  current_database: sales
  default_data_source: orc
  case_sensitive: true
native:
  databases: [default, sales]
  warehouse_dir: /data/warehouse
external:
  name: store
  type: duckdb
  path: /data/store.duckdb
  read_only: true
"""
    )
    try:
        config = load_config(config_path)

        assert config.session.current_database == "sales"
        assert config.session.default_data_source == "orc"
        assert config.session.case_sensitive is True
        assert config.native.databases == ["default", "sales"]
        assert config.native.warehouse_dir == "/data/warehouse"
        assert config.external.name == "store"
        assert config.external.type == "duckdb"
        assert config.external.config == {"path": "/data/store.duckdb", "read_only": True}
    finally:
        Path(config_path).unlink()


def test_load_minimal_config():
    """Test loading minimal configuration with defaults."""
    config_path = _write_config(
        """
external:
  type: duckdb
  path: ":memory:"
"""
    )
    try:
        config = load_config(config_path)

        assert config.session.current_database == "default"
        assert config.session.default_data_source == "parquet"
        assert config.native.databases == ["default"]
        assert config.external.name == "duckdb"
        assert config.external.config == {"path": ":memory:"}
    finally:
        Path(config_path).unlink()


def test_load_empty_config():
    """An empty file yields the defaults without an external catalog."""
    config_path = _write_config("")
    try:
        config = load_config(config_path)
        assert config.external is None
        assert config.session == SessionConfig()
    finally:
        Path(config_path).unlink()


def test_config_file_not_found():
    """Test error when config file doesn't exist."""
    with pytest.raises(FileNotFoundError):
        load_config("/nonexistent/config.yaml")


def test_resolver_follows_case_sensitivity():
    """The name resolver honours case_sensitive."""
    assert SessionConfig().resolver("Sales", "sales")
    assert not SessionConfig(case_sensitive=True).resolver("Sales", "sales")
    assert SessionConfig(case_sensitive=True).resolver("sales", "sales")


def test_config_defaults():
    """Test that default values are applied correctly."""
    config = Config()

    assert config.external is None
    assert config.native.warehouse_dir == "spark-warehouse"
    assert config.session.case_sensitive is False
