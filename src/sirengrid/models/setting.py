"""Siren setting model: one named lighting profile with 38 channel slots."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .channel import (
    ALL_SLOTS,
    DEFAULT_FALLOFF_EXPONENT,
    DEFAULT_FALLOFF_MAX,
    DEFAULT_INNER_CONE_ANGLE,
    DEFAULT_OFFSET,
    DEFAULT_OUTER_CONE_ANGLE,
    DEFAULT_SEQUENCER_BPM,
    DEFAULT_TEXTURE_NAME,
    ChannelSlot,
    LightChannel,
    default_channel,
)


def _create_default_channels() -> dict[ChannelSlot, LightChannel]:
    """Create the full set of 38 default channels."""
    return {slot: default_channel() for slot in ALL_SLOTS}


class SirenSetting(BaseModel):
    """A named lighting profile from a descriptor.

    Slot identity (the ChannelSlot key) is what joins a channel to its grid
    row; the dict always holds all 38 slots in row order.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0, description="Ordinal assigned by parse order")
    name: str = Field(default="", description="Setting name")
    source_id: int | None = Field(
        default=None, description="<id value> of the source item, written back on export"
    )
    time_multiplier: float = Field(default=1.0)
    light_falloff_max: float = Field(default=DEFAULT_FALLOFF_MAX)
    light_falloff_exponent: float = Field(default=DEFAULT_FALLOFF_EXPONENT)
    light_inner_cone_angle: float = Field(default=DEFAULT_INNER_CONE_ANGLE)
    light_outer_cone_angle: float = Field(default=DEFAULT_OUTER_CONE_ANGLE)
    light_offset: float = Field(default=DEFAULT_OFFSET)
    texture_name: str = Field(default=DEFAULT_TEXTURE_NAME)
    sequencer_bpm: int = Field(default=DEFAULT_SEQUENCER_BPM, description="Blink rate")
    channels: dict[ChannelSlot, LightChannel] = Field(
        default_factory=_create_default_channels, description="All 38 channel slots"
    )

    @model_validator(mode="before")
    @classmethod
    def default_name(cls, data: Any) -> Any:
        """Name unnamed settings after their ordinal."""
        if isinstance(data, dict):
            name = (data.get("name") or "").strip()
            data = {**data, "name": name or f"Siren {data.get('id', 0)}"}
        return data

    @field_validator("channels", mode="after")
    @classmethod
    def fill_missing_channels(cls, v: dict[ChannelSlot, LightChannel]) -> dict[ChannelSlot, LightChannel]:
        """Ensure every slot is present, in row order."""
        return {slot: v.get(slot, default_channel()) for slot in ALL_SLOTS}

    def channel(self, slot: ChannelSlot) -> LightChannel:
        """Get the channel in a slot."""
        return self.channels[slot]

    def with_channel(self, slot: ChannelSlot, channel: LightChannel) -> "SirenSetting":
        """Return a copy with one slot replaced."""
        channels = dict(self.channels)
        channels[slot] = channel
        return self.model_copy(update={"channels": channels})

    @property
    def active_slots(self) -> list[ChannelSlot]:
        """Slots whose channel has a color, in row order."""
        return [slot for slot, channel in self.channels.items() if channel.is_active]

    @property
    def active_channel_count(self) -> int:
        """Number of channels that emit light."""
        return len(self.active_slots)

    @classmethod
    def default_channels(cls) -> dict[ChannelSlot, LightChannel]:
        """Default value for all 38 slots."""
        return _create_default_channels()

    @classmethod
    def create_empty(cls, setting_id: int = 0, name: str = "") -> "SirenSetting":
        """Create a setting with every field and channel at its default."""
        return cls(id=setting_id, name=name)
