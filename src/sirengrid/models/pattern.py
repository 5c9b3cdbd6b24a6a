"""Lighting pattern model representing the dense row x column grid."""

import logging
from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field

from .cell import GridCell

logger = logging.getLogger(__name__)


def _create_default_cells(rows: int, columns: int) -> dict[int, dict[int, GridCell]]:
    default = GridCell.default()
    return {row: {column: default for column in range(columns)} for row in range(rows)}


class LightingPattern(BaseModel):
    """The grid of light cells shown in the editor.

    Every operation returns a new pattern; cells are frozen and shared
    between the old and new value, so keeping an old pattern around is a
    free snapshot.

    A missing in-range cell reads as the default cell.
    """

    model_config = ConfigDict(frozen=True)

    rows: int = Field(default=0, ge=0, description="Number of rows")
    columns: int = Field(default=0, ge=0, description="Number of columns")
    cells: dict[int, dict[int, GridCell]] = Field(
        default_factory=dict, description="row -> column -> cell"
    )

    def in_range(self, row: int, column: int) -> bool:
        """Check if (row, column) lies inside the grid."""
        return 0 <= row < self.rows and 0 <= column < self.columns

    def cell(self, row: int, column: int) -> GridCell:
        """
        Get the cell at (row, column).

        Raises:
            IndexError: If the coordinates are outside the grid
        """
        if not self.in_range(row, column):
            raise IndexError(
                f"Cell ({row}, {column}) out of range ({self.rows}x{self.columns} grid)"
            )
        return self.cells.get(row, {}).get(column, GridCell.default())

    def row(self, row: int) -> list[GridCell]:
        """Get the cells of one row in column order (empty for rows outside the grid)."""
        if not 0 <= row < self.rows:
            return []
        cells = self.cells.get(row, {})
        default = GridCell.default()
        return [cells.get(column, default) for column in range(self.columns)]

    def iter_cells(self) -> Iterator[tuple[int, int, GridCell]]:
        """Yield (row, column, cell) over the whole grid, row-major."""
        for row in range(self.rows):
            for column, cell in enumerate(self.row(row)):
                yield row, column, cell

    @property
    def active_cell_count(self) -> int:
        """Number of lit cells."""
        return sum(1 for _, _, cell in self.iter_cells() if cell.is_active)

    def with_cell(self, row: int, column: int, cell: GridCell) -> "LightingPattern":
        """
        Return a copy with one cell replaced.

        Raises:
            IndexError: If the coordinates are outside the grid
        """
        if not self.in_range(row, column):
            raise IndexError(
                f"Cell ({row}, {column}) out of range ({self.rows}x{self.columns} grid)"
            )
        cells = dict(self.cells)
        cells[row] = {**cells.get(row, {}), column: cell}
        return self.model_copy(update={"cells": cells})

    def with_row(self, row: int, cell: GridCell) -> "LightingPattern":
        """Return a copy with every column of `row` set to `cell`."""
        if not 0 <= row < self.rows:
            raise IndexError(f"Row {row} out of range (0-{self.rows - 1})")
        cells = dict(self.cells)
        cells[row] = {column: cell for column in range(self.columns)}
        return self.model_copy(update={"cells": cells})

    def resized(self, rows: int, columns: int) -> "LightingPattern":
        """Return a pattern of the new size.

        Cells whose (row, column) is still in range are carried over;
        cells outside the new size are discarded and new cells are default.
        """
        cells = _create_default_cells(rows, columns)
        kept = 0
        for row, row_cells in self.cells.items():
            if row >= rows:
                continue
            for column, cell in row_cells.items():
                if column < columns:
                    cells[row][column] = cell
                    kept += 1
        logger.debug(
            f"Resized pattern {self.rows}x{self.columns} -> {rows}x{columns} ({kept} cells kept)"
        )
        return LightingPattern(rows=rows, columns=columns, cells=cells)

    def cleared(self) -> "LightingPattern":
        """Return a pattern of the same size with every cell default."""
        return LightingPattern.create_default(self.rows, self.columns)

    @classmethod
    def create_default(cls, rows: int, columns: int) -> "LightingPattern":
        """Create a dense pattern of default cells."""
        return cls(rows=rows, columns=columns, cells=_create_default_cells(rows, columns))
