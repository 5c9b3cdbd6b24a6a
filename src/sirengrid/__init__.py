"""Sirengrid: carcols.meta siren settings as an editable light grid."""

__version__ = "0.1.0"

from .converter import export, load_siren
from .descriptor import parse, write_descriptor
from .models import (
    CellUpdate,
    ChannelSlot,
    EditorConfig,
    GridCell,
    LightChannel,
    LightingDescriptor,
    LightingPattern,
    SirenSetting,
)
from .services import PatternStore

__all__ = [
    "__version__",
    # Core operations
    "export",
    "load_siren",
    "parse",
    "write_descriptor",
    # Editor state
    "PatternStore",
    # Models
    "CellUpdate",
    "ChannelSlot",
    "EditorConfig",
    "GridCell",
    "LightChannel",
    "LightingDescriptor",
    "LightingPattern",
    "SirenSetting",
]
