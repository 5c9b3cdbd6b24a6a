"""Protocol definitions for the observer pattern."""

from .events import PatternEvent
from .observers import PatternObserver

__all__ = ["PatternEvent", "PatternObserver"]
