"""Grid cell model representing one editable light step."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sirengrid.colors import NO_COLOR, normalize_color

DEFAULT_DIRECTION = 0
DEFAULT_MULTIPLES = 1
DEFAULT_CELL_INTENSITY = 3.5
DEFAULT_SCALE_FACTOR = 100.0

# Cell attributes with no counterpart in the descriptor format
GRID_ONLY_ATTRIBUTES = ("direction", "multiples", "scale_factor")


class GridCell(BaseModel):
    """One cell of the lighting grid.

    A cell whose color is "none" is inactive. The model is frozen so
    patterns can share cells between snapshots.
    """

    model_config = ConfigDict(frozen=True)

    color: str = Field(default=NO_COLOR, description="#RRGGBB or 'none'")
    direction: int = Field(default=DEFAULT_DIRECTION, description="Light direction")
    multiples: int = Field(default=DEFAULT_MULTIPLES, ge=1, description="Light multiples")
    intensity: float = Field(default=DEFAULT_CELL_INTENSITY, ge=0.0, description="Intensity")
    scale_factor: float = Field(default=DEFAULT_SCALE_FACTOR, ge=0.0, description="Scale factor")

    @field_validator("color", mode="before")
    @classmethod
    def validate_color(cls, v: str | None) -> str:
        """Apply the shared palette table."""
        return normalize_color(v)

    @property
    def is_active(self) -> bool:
        """Check if the cell is lit."""
        return self.color != NO_COLOR

    @property
    def has_grid_only_values(self) -> bool:
        """Check if direction, multiples or scale factor differ from their defaults."""
        return bool(self.grid_only_changes())

    def grid_only_changes(self) -> set[str]:
        """Names of grid-only attributes holding non-default values."""
        changed = set()
        if self.direction != DEFAULT_DIRECTION:
            changed.add("direction")
        if self.multiples != DEFAULT_MULTIPLES:
            changed.add("multiples")
        if self.scale_factor != DEFAULT_SCALE_FACTOR:
            changed.add("scale_factor")
        return changed

    def merged(self, update: "CellUpdate") -> "GridCell":
        """Return a copy with the fields set in `update` applied."""
        changes = update.changes()
        if not changes:
            return self
        return GridCell.model_validate({**self.model_dump(), **changes})

    @classmethod
    def default(cls) -> "GridCell":
        """Get the default (inactive) cell."""
        return _DEFAULT_CELL


class CellUpdate(BaseModel):
    """Partial update for a grid cell; unset fields keep their prior value.

    Example:
        >>> CellUpdate(color="red").changes()
        {'color': '#FF0000'}
    """

    model_config = ConfigDict(frozen=True)

    color: str | None = None
    direction: int | None = None
    multiples: int | None = Field(default=None, ge=1)
    intensity: float | None = Field(default=None, ge=0.0)
    scale_factor: float | None = Field(default=None, ge=0.0)

    @field_validator("color", mode="before")
    @classmethod
    def validate_color(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return normalize_color(v)

    def changes(self) -> dict:
        """Fields that were explicitly set, as a dict."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


_DEFAULT_CELL = GridCell()
