"""Editor configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from sirengrid.colors import NO_COLOR, normalize_color
from sirengrid.utils.persistence import PydanticPersistence

from .channel import DEFAULT_SEQUENCER_BPM, MAX_SEQUENCER_BPM
from .descriptor import MIN_COLUMNS, MIN_ROWS

DEFAULT_CONFIG_DIR = Path.home() / ".sirengrid"


class EditorConfig(BaseModel):
    """Editor defaults and export behavior."""

    # Grid used before any descriptor is loaded
    default_rows: int = Field(default=MIN_ROWS, gt=0, description="Rows of the empty grid")
    default_columns: int = Field(default=MIN_COLUMNS, gt=0, description="Columns of the empty grid")
    default_bpm: int = Field(
        default=DEFAULT_SEQUENCER_BPM, gt=0, le=MAX_SEQUENCER_BPM, description="Initial tempo"
    )
    default_color: str = Field(
        default="red", validate_default=True, description="Initially selected paint color"
    )

    # Export
    strict_export: bool = Field(
        default=False,
        description=(
            "Fail the export when cells carry direction, multiples or scale factor "
            "values the descriptor cannot store (default: log a warning and drop them)"
        ),
    )

    @field_validator("default_color", mode="after")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Store the paint color in canonical form."""
        color = normalize_color(v)
        if color == NO_COLOR:
            raise ValueError("default color cannot be 'none'")
        return color

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "EditorConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.sirengrid/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_DIR / "config.json"

        return PydanticPersistence.load_json_or_default(path, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_CONFIG_DIR / "config.json"

        PydanticPersistence.save_json(self, path)
