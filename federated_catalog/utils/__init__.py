"""Shared utilities."""

from .logging import LOG_FORMATS, LOG_LEVELS, get_contextual_logger, setup_logging

__all__ = ["LOG_FORMATS", "LOG_LEVELS", "get_contextual_logger", "setup_logging"]
