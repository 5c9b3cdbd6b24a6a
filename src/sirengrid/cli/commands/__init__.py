"""CLI commands for sirengrid."""

from .export import export_command
from .grid import grid
from .info import info

__all__ = ["export_command", "grid", "info"]
