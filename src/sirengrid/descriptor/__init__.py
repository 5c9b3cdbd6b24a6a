"""Reading and writing the carcols.meta siren section."""

from .dimensions import REFERENCE_BPM, infer_dimensions
from .parser import parse, parse_light, parse_siren_setting
from .writer import write_descriptor

__all__ = [
    "REFERENCE_BPM",
    "infer_dimensions",
    "parse",
    "parse_light",
    "parse_siren_setting",
    "write_descriptor",
]
