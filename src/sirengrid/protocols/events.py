"""Domain events for observer pattern."""

from enum import Enum


class PatternEvent(Enum):
    """
    Events emitted by the pattern store.

    Every event carries the store itself; observers read whatever state
    they need from it.
    """

    PATTERN_LOADED = "pattern_loaded"        # Siren setting loaded into the grid (full replace)
    PATTERN_RESIZED = "pattern_resized"      # Grid dimensions changed
    PATTERN_CLEARED = "pattern_cleared"      # All cells reset
    CELL_UPDATED = "cell_updated"            # One cell changed
    SELECTION_CHANGED = "selection_changed"  # Selected color, tempo or row changed
