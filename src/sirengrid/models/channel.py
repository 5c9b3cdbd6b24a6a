"""Light channel model and the closed table of channel slots."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sirengrid.colors import NO_COLOR, normalize_color

DEFAULT_INTENSITY = 3.5
DEFAULT_FALLOFF_MAX = 50.0
DEFAULT_FALLOFF_EXPONENT = 1.0
DEFAULT_INNER_CONE_ANGLE = 2.29061
DEFAULT_OUTER_CONE_ANGLE = 70.0
DEFAULT_OFFSET = 0.0
DEFAULT_TEXTURE_NAME = "VehicleLight_sirenlight"
DEFAULT_SEQUENCER_BPM = 600
# 2000 grid columns at most; faster tempos are treated as unreadable
MAX_SEQUENCER_BPM = 60000

EXTRA_SLOT_COUNT = 32


class ChannelSlot(str, Enum):
    """The 38 named light channels of a siren setting, in grid row order."""

    LEFT_HEADLIGHT = "left_headlight"
    RIGHT_HEADLIGHT = "right_headlight"
    LEFT_TAIL_LIGHT = "left_tail_light"
    RIGHT_TAIL_LIGHT = "right_tail_light"
    LEFT_INDICATOR = "left_indicator"
    RIGHT_INDICATOR = "right_indicator"
    EXTRA_1 = "extra_1"
    EXTRA_2 = "extra_2"
    EXTRA_3 = "extra_3"
    EXTRA_4 = "extra_4"
    EXTRA_5 = "extra_5"
    EXTRA_6 = "extra_6"
    EXTRA_7 = "extra_7"
    EXTRA_8 = "extra_8"
    EXTRA_9 = "extra_9"
    EXTRA_10 = "extra_10"
    EXTRA_11 = "extra_11"
    EXTRA_12 = "extra_12"
    EXTRA_13 = "extra_13"
    EXTRA_14 = "extra_14"
    EXTRA_15 = "extra_15"
    EXTRA_16 = "extra_16"
    EXTRA_17 = "extra_17"
    EXTRA_18 = "extra_18"
    EXTRA_19 = "extra_19"
    EXTRA_20 = "extra_20"
    EXTRA_21 = "extra_21"
    EXTRA_22 = "extra_22"
    EXTRA_23 = "extra_23"
    EXTRA_24 = "extra_24"
    EXTRA_25 = "extra_25"
    EXTRA_26 = "extra_26"
    EXTRA_27 = "extra_27"
    EXTRA_28 = "extra_28"
    EXTRA_29 = "extra_29"
    EXTRA_30 = "extra_30"
    EXTRA_31 = "extra_31"
    EXTRA_32 = "extra_32"

    @property
    def is_extra(self) -> bool:
        """Check if this is one of the positionally assigned extra slots."""
        return self.value.startswith("extra_")

    @property
    def row(self) -> int:
        """Grid row this slot is drawn on."""
        return SLOT_ROWS[self]


# Headlights at rows 0-1, tail lights 2-3, indicators 4-5, extras 1..32 at 6-37
ALL_SLOTS: tuple[ChannelSlot, ...] = tuple(ChannelSlot)
SLOT_ROWS: dict[ChannelSlot, int] = {slot: row for row, slot in enumerate(ALL_SLOTS)}

FIXED_ROLE_SLOTS: tuple[ChannelSlot, ...] = tuple(slot for slot in ChannelSlot if not slot.is_extra)
EXTRA_SLOTS: tuple[ChannelSlot, ...] = tuple(slot for slot in ChannelSlot if slot.is_extra)


def extra_slot(number: int) -> ChannelSlot:
    """
    Get the n-th extra slot (1-based).

    Raises:
        ValueError: If number is outside 1..32
    """
    if not 1 <= number <= EXTRA_SLOT_COUNT:
        raise ValueError(f"Extra slot {number} out of range (1-{EXTRA_SLOT_COUNT})")
    return EXTRA_SLOTS[number - 1]


def slot_for_row(row: int) -> ChannelSlot | None:
    """Get the slot drawn on a grid row, or None for rows past the 38 slots."""
    if 0 <= row < len(ALL_SLOTS):
        return ALL_SLOTS[row]
    return None


class LightChannel(BaseModel):
    """One named light's color, intensity and optics configuration.

    Optics fields are carried through unmodified; only `color` and
    `intensity` are edited through the grid.
    """

    model_config = ConfigDict(frozen=True)

    color: str = Field(default=NO_COLOR, description="#RRGGBB, raw color name, or 'none'")
    intensity: float = Field(default=DEFAULT_INTENSITY, ge=0.0, description="Light intensity")
    falloff_max: float = Field(default=DEFAULT_FALLOFF_MAX)
    falloff_exponent: float = Field(default=DEFAULT_FALLOFF_EXPONENT)
    inner_cone_angle: float = Field(default=DEFAULT_INNER_CONE_ANGLE)
    outer_cone_angle: float = Field(default=DEFAULT_OUTER_CONE_ANGLE)
    offset: float = Field(default=DEFAULT_OFFSET)
    texture_name: str = Field(default=DEFAULT_TEXTURE_NAME)
    sequencer_bpm: int = Field(default=DEFAULT_SEQUENCER_BPM, description="Blink rate")

    @field_validator("color", mode="before")
    @classmethod
    def validate_color(cls, v: str | None) -> str:
        """Normalize the color through the shared palette table."""
        return normalize_color(v)

    @property
    def is_active(self) -> bool:
        """Check if the channel emits light."""
        return self.color != NO_COLOR


def default_channel() -> LightChannel:
    """Canonical value of an absent or inactive channel."""
    return _DEFAULT_CHANNEL


_DEFAULT_CHANNEL = LightChannel()
