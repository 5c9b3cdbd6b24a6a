"""Command-line interface for sirengrid."""

from .main import cli

__all__ = ["cli"]
