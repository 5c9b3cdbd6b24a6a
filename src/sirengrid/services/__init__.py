"""Service layer for editor state."""

from .pattern_store import PatternStore

__all__ = ["PatternStore"]
