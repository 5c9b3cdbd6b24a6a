"""Pattern store holding the editor's grid and cursor state."""

import logging
from typing import Optional

from sirengrid.colors import NO_COLOR, normalize_color
from sirengrid.converter import export, load_siren
from sirengrid.descriptor import parse
from sirengrid.models import (
    CellUpdate,
    EditorConfig,
    GridCell,
    LightingDescriptor,
    LightingPattern,
)
from sirengrid.models.channel import MAX_SEQUENCER_BPM
from sirengrid.protocols import PatternEvent, PatternObserver
from sirengrid.utils import ObserverManager

logger = logging.getLogger(__name__)


class PatternStore:
    """
    Holds the grid being edited and the descriptor it came from.

    The store owns one `LightingPattern` value. Every mutation builds a
    new pattern and swaps it in, so a pattern obtained from `pattern`
    is never changed afterwards.

    Mutations never raise for bad coordinates or sizes: out-of-range
    cells are logged and ignored, negative sizes are clamped to zero.
    Repeating the same mutation leaves the same state.

    Event-Driven Architecture:
        Each mutation emits a PatternEvent to registered observers, which
        receive the store itself and read whatever state they need.

    Threading:
        Single-threaded. Call from the editor's thread only.
    """

    def __init__(self, config: Optional[EditorConfig] = None):
        """
        Initialize the store with an empty grid.

        Args:
            config: Editor defaults; EditorConfig() if not given
        """
        self.config = config or EditorConfig()

        self._pattern = LightingPattern.create_default(
            self.config.default_rows, self.config.default_columns
        )
        self._descriptor: Optional[LightingDescriptor] = None
        self._current_siren_setting = 0
        self._selected_color = normalize_color(self.config.default_color)
        self._bpm = self.config.default_bpm
        self._current_row = 0

        self._observers = ObserverManager[PatternObserver](observer_type_name="pattern")
        logger.info(
            f"PatternStore initialized ({self._pattern.rows}x{self._pattern.columns} grid)"
        )

    # =================================================================
    # State
    # =================================================================

    @property
    def pattern(self) -> LightingPattern:
        """Current grid (immutable snapshot)."""
        return self._pattern

    @property
    def descriptor(self) -> Optional[LightingDescriptor]:
        """Descriptor the grid was loaded from, if any."""
        return self._descriptor

    @property
    def rows(self) -> int:
        return self._pattern.rows

    @property
    def columns(self) -> int:
        return self._pattern.columns

    @property
    def current_siren_setting(self) -> int:
        """Id of the siren setting the grid edits."""
        return self._current_siren_setting

    @property
    def selected_color(self) -> str:
        """Paint color in canonical form."""
        return self._selected_color

    @property
    def bpm(self) -> int:
        return self._bpm

    @property
    def current_row(self) -> int:
        return self._current_row

    def get_cell(self, row: int, column: int) -> GridCell:
        """
        Get a cell (read-only).

        Raises:
            IndexError: If the coordinates are outside the grid
        """
        return self._pattern.cell(row, column)

    # =================================================================
    # Event System
    # =================================================================

    def register_observer(self, observer: PatternObserver) -> None:
        """
        Register an observer to receive pattern events.

        Args:
            observer: Object implementing PatternObserver protocol
        """
        self._observers.register(observer)

    def unregister_observer(self, observer: PatternObserver) -> None:
        """
        Unregister an observer.

        Args:
            observer: Previously registered observer
        """
        self._observers.unregister(observer)

    def _notify_observers(self, event: PatternEvent) -> None:
        self._observers.notify("on_pattern_event", event, self)

    # =================================================================
    # Grid editing
    # =================================================================

    def set_dimensions(self, rows: int, columns: int) -> None:
        """
        Resize the grid.

        Cells still inside the new size keep their values; cells outside it
        are dropped, new cells are default. Negative sizes become 0.

        Args:
            rows: New row count
            columns: New column count
        """
        rows = max(0, rows)
        columns = max(0, columns)
        self._pattern = self._pattern.resized(rows, columns)
        if self._current_row >= rows:
            self._current_row = max(0, rows - 1)

        logger.info(f"Grid resized to {rows}x{columns}")
        self._notify_observers(PatternEvent.PATTERN_RESIZED)

    def set_total_columns(self, columns: int) -> None:
        """Change the column count, keeping the rows."""
        self.set_dimensions(self.rows, columns)

    def set_total_rows(self, rows: int) -> None:
        """Change the row count, keeping the columns."""
        self.set_dimensions(rows, self.columns)

    def set_cell(self, row: int, column: int, update: CellUpdate) -> None:
        """
        Merge a partial update into one cell.

        Fields left unset in `update` keep their current value. Coordinates
        outside the grid are ignored.

        Args:
            row: Row index
            column: Column index
            update: Fields to change
        """
        if not self._pattern.in_range(row, column):
            logger.warning(
                f"Ignoring update of cell ({row}, {column}) outside the "
                f"{self.rows}x{self.columns} grid"
            )
            return

        cell = self._pattern.cell(row, column).merged(update)
        self._pattern = self._pattern.with_cell(row, column, cell)

        logger.debug(f"Cell ({row}, {column}) set to {cell}")
        self._notify_observers(PatternEvent.CELL_UPDATED)

    def paint_cell(self, row: int, column: int) -> None:
        """Give one cell the selected color."""
        self.set_cell(row, column, CellUpdate(color=self._selected_color))

    def erase_cell(self, row: int, column: int) -> None:
        """Reset one cell to the default (unlit) cell."""
        if not self._pattern.in_range(row, column):
            logger.warning(
                f"Ignoring erase of cell ({row}, {column}) outside the "
                f"{self.rows}x{self.columns} grid"
            )
            return

        self._pattern = self._pattern.with_cell(row, column, GridCell.default())
        logger.debug(f"Cell ({row}, {column}) erased")
        self._notify_observers(PatternEvent.CELL_UPDATED)

    def apply_to_column(self, column: int, update: CellUpdate) -> None:
        """
        Merge light properties into every lit cell of one column.

        The update's color is ignored so each cell keeps its own; unlit
        cells are left alone. A column outside the grid is ignored.

        Args:
            column: Column index
            update: Intensity, direction, multiples and/or scale factor
        """
        if not 0 <= column < self.columns:
            logger.warning(
                f"Ignoring column update of column {column} outside the "
                f"{self.columns}-column grid"
            )
            return

        properties = CellUpdate(**{k: v for k, v in update.changes().items() if k != "color"})
        pattern = self._pattern
        changed = 0
        for row in range(pattern.rows):
            cell = pattern.cell(row, column)
            if cell.is_active:
                pattern = pattern.with_cell(row, column, cell.merged(properties))
                changed += 1

        if not changed:
            logger.debug(f"Column {column} has no lit cells, nothing to update")
            return

        self._pattern = pattern
        logger.debug(f"Applied {properties.changes()} to {changed} cells of column {column}")
        self._notify_observers(PatternEvent.CELL_UPDATED)

    def set_pattern(self, pattern: LightingPattern) -> None:
        """
        Replace the whole grid, e.g. with a pattern kept from earlier.

        The grid takes the pattern's dimensions; the descriptor and the
        current siren setting are kept for export.
        """
        self._pattern = pattern
        if self._current_row >= pattern.rows:
            self._current_row = max(0, pattern.rows - 1)

        logger.info(f"Grid replaced ({pattern.rows}x{pattern.columns})")
        self._notify_observers(PatternEvent.PATTERN_LOADED)

    def clear(self) -> None:
        """Reset every cell, keeping the dimensions."""
        self._pattern = self._pattern.cleared()
        logger.info("Grid cleared")
        self._notify_observers(PatternEvent.PATTERN_CLEARED)

    # =================================================================
    # Loading
    # =================================================================

    def load_siren(self, descriptor: LightingDescriptor, siren_id: int) -> None:
        """
        Replace the grid with one siren setting of a descriptor.

        The grid takes the descriptor's dimensions and the tempo of the
        setting. An unknown id gives an empty grid of the same size.

        Args:
            descriptor: Parsed descriptor, kept for export
            siren_id: Id of the setting to edit
        """
        self._pattern = load_siren(descriptor, siren_id)
        self._descriptor = descriptor
        self._current_siren_setting = siren_id
        self._current_row = 0

        setting = descriptor.get_setting(siren_id)
        if setting is not None:
            self._bpm = setting.sequencer_bpm

        self._notify_observers(PatternEvent.PATTERN_LOADED)

    def load_descriptor_text(self, text: str) -> bool:
        """
        Parse carcols.meta text and load its first siren setting.

        Args:
            text: Raw descriptor text

        Returns:
            True if loaded, False if the text holds no siren settings
            (the store is left unchanged)
        """
        descriptor = parse(text)
        if descriptor is None:
            logger.warning("Descriptor text could not be loaded, keeping the current grid")
            return False

        self.load_siren(descriptor, 0)
        return True

    def reload_current_siren(self) -> bool:
        """
        Reload the current siren setting from the stored descriptor.

        Returns:
            False if no descriptor has been loaded
        """
        if self._descriptor is None:
            logger.debug("No descriptor loaded, nothing to reload")
            return False

        self.load_siren(self._descriptor, self._current_siren_setting)
        return True

    def select_siren_setting(self, siren_id: int) -> None:
        """Switch to another siren setting, reloading the grid if a descriptor is loaded."""
        self._current_siren_setting = siren_id
        if not self.reload_current_siren():
            self._notify_observers(PatternEvent.SELECTION_CHANGED)

    # =================================================================
    # Cursor state
    # =================================================================

    def set_selected_color(self, color: str) -> None:
        """Set the paint color; palette names and hex forms are normalized."""
        self._selected_color = normalize_color(color)
        if self._selected_color == NO_COLOR:
            logger.debug("Selected color is 'none'; painting will erase cells")
        self._notify_observers(PatternEvent.SELECTION_CHANGED)

    def set_bpm(self, bpm: int) -> None:
        """Set the tempo, clamped to 1..MAX_SEQUENCER_BPM."""
        if bpm < 1:
            logger.warning(f"Tempo {bpm} bpm is below 1, using 1")
            bpm = 1
        elif bpm > MAX_SEQUENCER_BPM:
            logger.warning(f"Tempo {bpm} bpm is above {MAX_SEQUENCER_BPM}, using {MAX_SEQUENCER_BPM}")
            bpm = MAX_SEQUENCER_BPM
        self._bpm = int(bpm)
        self._notify_observers(PatternEvent.SELECTION_CHANGED)

    def set_current_row(self, row: int) -> None:
        """Move the row cursor; rows outside the grid are ignored."""
        if not 0 <= row < self.rows:
            logger.warning(f"Ignoring row cursor {row} outside the {self.rows}-row grid")
            return
        self._current_row = row
        self._notify_observers(PatternEvent.SELECTION_CHANGED)

    # =================================================================
    # Export
    # =================================================================

    def export_descriptor(self, strict: Optional[bool] = None) -> str:
        """
        Serialize the current grid merged into its descriptor.

        The current tempo is written to the edited siren setting. Without
        a loaded descriptor, a new one holding a single default setting is
        used.

        Args:
            strict: Fail on cell values the format cannot store;
                defaults to config.strict_export

        Returns:
            carcols.meta text

        Raises:
            UnsupportedCellAttributeError: In strict mode, see
                `sirengrid.converter.export_channel_updates`
        """
        if strict is None:
            strict = self.config.strict_export

        descriptor = self._descriptor
        siren_id = self._current_siren_setting
        if descriptor is None:
            logger.info("No descriptor loaded, exporting into a new descriptor")
            descriptor = LightingDescriptor.create_new()
            siren_id = 0

        setting = descriptor.get_setting(siren_id)
        if setting is not None and setting.sequencer_bpm != self._bpm:
            descriptor = descriptor.with_setting(
                setting.model_copy(update={"sequencer_bpm": self._bpm})
            )

        return export(self._pattern, descriptor, siren_id, strict=strict)
