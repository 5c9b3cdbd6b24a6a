"""Color Normalization - Single source of truth for light colors.

Every color that enters the application goes through `normalize_color`:
the descriptor parser, grid cells, partial cell updates and the editor's
selected color. A channel colored `red` in a carcols.meta and a cell
painted red from the palette therefore serialize identically.

## Representations

### 1. Descriptor color (carcols.meta)
**Format**: `0xAARRGGBB` (e.g. `0xFFFF0000`), sometimes a palette name.

### 2. Canonical color
**Format**: `#RRGGBB`, uppercase (e.g. `#FF0000`).
**Used by**: `LightChannel`, `GridCell`, the pattern store.

The alpha byte of a descriptor color is dropped on the way in and written
back as `FF` on the way out.

Eight hex digits are read by marker: `0xAARRGGBB` as carcols.meta writes
them, `#RRGGBBAA` as CSS color pickers do.

### 3. No color
**Format**: the sentinel `"none"`. A channel or cell with this color is
inactive.

Example:
    ```python
    from sirengrid.colors import normalize_color

    normalize_color("0xFFFF0000")  # '#FF0000'
    normalize_color("Light-Blue")  # '#00FFFF'
    normalize_color(None)          # 'none'
    ```
"""

import re
from functools import lru_cache

NO_COLOR = "none"

# Palette names are matched case-insensitively with separators removed,
# so "light-blue", "Light Blue" and "lightblue" are the same entry.
PALETTE: dict[str, str] = {
    "red": "#FF0000",
    "blue": "#0066FF",
    "white": "#FFFFFF",
    "amber": "#FFB800",
    "purple": "#8000FF",
    "green": "#00FF00",
    "lightblue": "#00FFFF",
    "pink": "#FF00FF",
}

HEX_MARKERS = ("0x", "0X", "#")

_HEX_DIGITS = re.compile(r"^[0-9A-Fa-f]+$")
_CANONICAL = re.compile(r"^#[0-9A-F]{6}$")


def _palette_key(name: str) -> str:
    return re.sub(r"[\s_\-]", "", name).lower()


@lru_cache(maxsize=512)
def normalize_color(value: str | None) -> str:
    """Canonicalize a raw color value.

    Args:
        value: Raw color (hex with a `0x`/`#` marker, palette name, `none`,
            or None when the source had no color at all)

    Returns:
        `#RRGGBB` for hex input and palette names, `"none"` for absent
        colors, otherwise the stripped input unchanged.

    Example:
        >>> normalize_color("0xFFFF0000")
        '#FF0000'
        >>> normalize_color("#FF0000")
        '#FF0000'
        >>> normalize_color("#FF000080")
        '#FF0000'
        >>> normalize_color("red")
        '#FF0000'
    """
    if value is None:
        return NO_COLOR

    raw = value.strip()
    if not raw or raw.lower() == NO_COLOR:
        return NO_COLOR

    for marker in HEX_MARKERS:
        if raw.startswith(marker):
            digits = raw[len(marker):]
            if _HEX_DIGITS.match(digits):
                # Alpha is not part of the canonical form
                if len(digits) == 8 and marker == "#":
                    return f"#{digits[:6].upper()}"
                if len(digits) == 8:
                    return f"#{digits[2:].upper()}"
                if len(digits) == 6:
                    return f"#{digits.upper()}"
            return f"#{digits}"

    return PALETTE.get(_palette_key(raw), raw)


def is_canonical_hex(color: str) -> bool:
    """Check whether a color is in `#RRGGBB` form."""
    return bool(_CANONICAL.match(color))


def palette_names() -> list[str]:
    """Display names of the fixed palette, in palette order."""
    return ["red", "blue", "white", "amber", "purple", "green", "light-blue", "pink"]


def to_descriptor_color(color: str) -> str:
    """Convert a canonical color back to the carcols `0xAARRGGBB` form.

    Non-hex values (raw names the palette does not know) are written back
    unchanged so a load/save cycle does not invent a color for them.

    Example:
        >>> to_descriptor_color("#FF0000")
        '0xFFFF0000'
    """
    normalized = normalize_color(color)
    if is_canonical_hex(normalized):
        return f"0xFF{normalized[1:]}"
    return normalized


__all__ = [
    "HEX_MARKERS",
    "NO_COLOR",
    "PALETTE",
    "is_canonical_hex",
    "normalize_color",
    "palette_names",
    "to_descriptor_color",
]
