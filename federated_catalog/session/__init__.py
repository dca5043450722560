"""Command execution sessions."""

from .session import Session, build_session

__all__ = ["Session", "build_session"]
