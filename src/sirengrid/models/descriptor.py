"""Lighting descriptor model: the parsed content of one carcols.meta."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .setting import SirenSetting

# Floor values for the grid; see sirengrid.descriptor.dimensions
MIN_ROWS = 32
MIN_COLUMNS = 20

UNKNOWN_VEHICLE = "Unknown Vehicle"


class LightingDescriptor(BaseModel):
    """Vehicle name plus its ordered siren settings and derived grid size.

    Invariants:
        - siren setting ids are 0..n-1 in document order
        - total_rows >= 32 and >= the largest active-channel count
        - total_columns >= 20
    """

    model_config = ConfigDict(frozen=True)

    vehicle_name: str = Field(default=UNKNOWN_VEHICLE)
    siren_settings: list[SirenSetting] = Field(default_factory=list)
    total_rows: int = Field(default=MIN_ROWS, ge=MIN_ROWS)
    total_columns: int = Field(default=MIN_COLUMNS, ge=MIN_COLUMNS)

    @model_validator(mode="after")
    def validate_settings(self) -> "LightingDescriptor":
        """Check setting ids and that every active channel has a row."""
        for index, setting in enumerate(self.siren_settings):
            if setting.id != index:
                raise ValueError(
                    f"Siren setting at position {index} has id {setting.id}; ids must be 0..n-1"
                )
            if setting.active_channel_count > self.total_rows:
                raise ValueError(
                    f"Siren setting {setting.id} has {setting.active_channel_count} active "
                    f"channels but the grid has only {self.total_rows} rows"
                )
        return self

    def get_setting(self, setting_id: int) -> SirenSetting | None:
        """Get a siren setting by id, or None if there is no such setting."""
        if 0 <= setting_id < len(self.siren_settings):
            return self.siren_settings[setting_id]
        return None

    def with_setting(self, setting: SirenSetting) -> "LightingDescriptor":
        """Return a copy with the setting of the same id replaced."""
        if self.get_setting(setting.id) is None:
            raise ValueError(f"No siren setting with id {setting.id}")
        settings = list(self.siren_settings)
        settings[setting.id] = setting
        return self.model_copy(
            update={
                "siren_settings": settings,
                "total_rows": max(self.total_rows, setting.active_channel_count),
            }
        )

    @property
    def setting_count(self) -> int:
        return len(self.siren_settings)

    @classmethod
    def create_new(cls, vehicle_name: str = UNKNOWN_VEHICLE) -> "LightingDescriptor":
        """Create a descriptor holding one default siren setting."""
        return cls(
            vehicle_name=vehicle_name,
            siren_settings=[SirenSetting.create_empty(0, vehicle_name)],
        )
