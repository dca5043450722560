"""Configuration management."""

from .config import (
    Config,
    ExternalCatalogConfig,
    NativeCatalogConfig,
    SessionConfig,
    load_config,
)

__all__ = [
    "Config",
    "ExternalCatalogConfig",
    "NativeCatalogConfig",
    "SessionConfig",
    "load_config",
]
