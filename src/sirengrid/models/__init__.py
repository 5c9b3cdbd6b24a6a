"""Data models for siren lighting descriptors and grid patterns."""

from .cell import CellUpdate, GridCell
from .channel import (
    ALL_SLOTS,
    EXTRA_SLOTS,
    FIXED_ROLE_SLOTS,
    SLOT_ROWS,
    ChannelSlot,
    LightChannel,
    default_channel,
    extra_slot,
    slot_for_row,
)
from .config import EditorConfig
from .descriptor import LightingDescriptor
from .pattern import LightingPattern
from .setting import SirenSetting

__all__ = [
    "ALL_SLOTS",
    "EXTRA_SLOTS",
    "FIXED_ROLE_SLOTS",
    "SLOT_ROWS",
    # Models
    "CellUpdate",
    "ChannelSlot",
    "EditorConfig",
    "GridCell",
    "LightChannel",
    "LightingDescriptor",
    "LightingPattern",
    "SirenSetting",
    # Helpers
    "default_channel",
    "extra_slot",
    "slot_for_row",
]
