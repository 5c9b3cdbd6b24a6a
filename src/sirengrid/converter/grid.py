"""Mapping between siren settings and the editor grid.

Each of the 38 channel slots owns one grid row (see `SLOT_ROWS`). Loading
paints a slot's color across every column of its row. Exporting reads
each row back: the first lit cell, scanning left to right, decides the
channel's color and intensity; a row with no lit cell leaves the channel
as it was in the loaded descriptor.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field

from sirengrid.descriptor import write_descriptor
from sirengrid.exceptions import UnsupportedCellAttributeError
from sirengrid.models import (
    ALL_SLOTS,
    SLOT_ROWS,
    ChannelSlot,
    GridCell,
    LightingDescriptor,
    LightingPattern,
    SirenSetting,
)

logger = logging.getLogger(__name__)


class ChannelUpdate(BaseModel):
    """Color and intensity read back from one grid row."""

    model_config = ConfigDict(frozen=True)

    color: str = Field(description="Normalized color of the row's first lit cell")
    intensity: float = Field(ge=0.0)

    @classmethod
    def from_cell(cls, cell: GridCell) -> "ChannelUpdate":
        return cls(color=cell.color, intensity=cell.intensity)


def load_siren(descriptor: LightingDescriptor, siren_id: int) -> LightingPattern:
    """
    Build the grid for one siren setting.

    The grid is `total_rows x total_columns` of the descriptor. Every
    active slot whose row fits in the grid is lit across all columns with
    the channel's color and intensity; all other cells are default.

    Args:
        descriptor: Parsed descriptor
        siren_id: Id of the siren setting to show

    Returns:
        The pattern; all-default when no setting has that id
    """
    pattern = LightingPattern.create_default(descriptor.total_rows, descriptor.total_columns)

    setting = descriptor.get_setting(siren_id)
    if setting is None:
        logger.warning(
            f"No siren setting with id {siren_id} in '{descriptor.vehicle_name}', "
            f"loading an empty grid"
        )
        return pattern

    for slot in setting.active_slots:
        row = SLOT_ROWS[slot]
        if row >= pattern.rows:
            logger.debug(f"Slot {slot.value} (row {row}) does not fit in {pattern.rows} rows")
            continue
        channel = setting.channel(slot)
        pattern = pattern.with_row(row, GridCell(color=channel.color, intensity=channel.intensity))

    logger.info(
        f"Loaded siren setting {setting.id} '{setting.name}' into a "
        f"{pattern.rows}x{pattern.columns} grid ({setting.active_channel_count} lit rows)"
    )
    return pattern


def _check_grid_only_values(pattern: LightingPattern, strict: bool) -> None:
    """Report cells whose direction, multiples or scale factor would be lost."""
    cells = []
    attributes: set[str] = set()
    for row, column, cell in pattern.iter_cells():
        changed = cell.grid_only_changes()
        if changed:
            cells.append((row, column))
            attributes |= changed

    if not cells:
        return

    error = UnsupportedCellAttributeError(cells, attributes)
    if strict:
        raise error
    logger.warning(f"{error.user_message}; exporting color and intensity only")


def export_channel_updates(
    pattern: LightingPattern, strict: bool = False
) -> dict[ChannelSlot, ChannelUpdate]:
    """
    Read channel colors back out of a grid.

    Args:
        pattern: The edited grid
        strict: Raise instead of warn when cells hold values the
            descriptor cannot store

    Returns:
        Updates for slots whose row has at least one lit cell

    Raises:
        UnsupportedCellAttributeError: In strict mode, if any cell has a
            non-default direction, multiples or scale factor
    """
    _check_grid_only_values(pattern, strict)

    updates: dict[ChannelSlot, ChannelUpdate] = {}
    for slot in ALL_SLOTS:
        row = SLOT_ROWS[slot]
        lit = [cell for cell in pattern.row(row) if cell.is_active]
        if not lit:
            continue

        first = lit[0]
        if any(cell.color != first.color or cell.intensity != first.intensity for cell in lit[1:]):
            logger.debug(
                f"Row {row} ({slot.value}) mixes colors/intensities, "
                f"using the first lit cell ({first.color}, {first.intensity})"
            )
        updates[slot] = ChannelUpdate.from_cell(first)

    return updates


def apply_channel_updates(
    setting: SirenSetting, updates: dict[ChannelSlot, ChannelUpdate]
) -> SirenSetting:
    """Return a copy of `setting` with new color and intensity for each updated slot."""
    channels = dict(setting.channels)
    for slot, update in updates.items():
        channels[slot] = channels[slot].model_copy(
            update={"color": update.color, "intensity": update.intensity}
        )
    return setting.model_copy(update={"channels": channels})


def export(
    pattern: LightingPattern,
    descriptor: LightingDescriptor,
    siren_id: int,
    strict: bool = False,
) -> str:
    """
    Merge an edited grid into a descriptor and serialize it.

    Args:
        pattern: The edited grid
        descriptor: The descriptor the grid was loaded from
        siren_id: Id of the setting the grid edits
        strict: See `export_channel_updates`

    Returns:
        carcols.meta text for the whole descriptor

    Raises:
        UnsupportedCellAttributeError: In strict mode, carrying `siren_id`
    """
    try:
        updates = export_channel_updates(pattern, strict=strict)
    except UnsupportedCellAttributeError as e:
        raise e.with_context(siren_id=siren_id)

    setting = descriptor.get_setting(siren_id)
    if setting is None:
        logger.warning(
            f"No siren setting with id {siren_id} in '{descriptor.vehicle_name}', "
            f"writing the descriptor unchanged"
        )
        return write_descriptor(descriptor)

    updated = apply_channel_updates(setting, updates)
    logger.info(f"Exporting siren setting {siren_id}: {len(updates)} channels from the grid")
    return write_descriptor(descriptor.with_setting(updated))
