"""Conversion between siren settings and grid patterns."""

from .grid import (
    ChannelUpdate,
    apply_channel_updates,
    export,
    export_channel_updates,
    load_siren,
)

__all__ = [
    "ChannelUpdate",
    "apply_channel_updates",
    "export",
    "export_channel_updates",
    "load_siren",
]
