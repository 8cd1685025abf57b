"""Board representation for the Tetris playfield."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from .piece import Piece


# Dimensions of the standard Tetris board.
ROWS = 20
COLUMNS = 10

# Returned by ``Board.cell_at`` for positions a piece may never occupy.
BLOCKED = -1
EMPTY = 0

Grid = NDArray[np.uint8]


def create_empty_grid(rows: int = ROWS, columns: int = COLUMNS) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((rows, columns), dtype=np.uint8)


class Board:
    """Tetris board holding the locked cells.

    ``grid[row, col]`` holds ``0`` for an empty cell or the type id of the
    piece that was locked there.  Row ``0`` is the top of the well.
    """

    def __init__(self, rows: int = ROWS, columns: int = COLUMNS) -> None:
        self.rows = rows
        self.columns = columns
        self.grid: Grid = create_empty_grid(rows, columns)

    def cell_at(self, x: int, y: int) -> int:
        """Return the value at column ``x`` and row ``y`` for collision tests.

        Positions left or right of the well, or below its floor, report
        :data:`BLOCKED`.  Positions above the top row report :data:`EMPTY` so
        pieces can spawn and rotate partially outside the visible area.
        """

        if not 0 <= x < self.columns or y >= self.rows:
            return BLOCKED
        if y < 0:
            return EMPTY
        return int(self.grid[y, x])

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.rows and 0 <= col < self.columns:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.rows and 0 <= col < self.columns:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def merge_piece(self, piece: "Piece") -> None:
        """Copy the piece's blocks into the grid at its current offset.

        The caller must have checked the piece does not collide.  Blocks still
        above the top row are dropped.
        """

        for x, y, value in piece.cells():
            if y >= 0:
                self.grid[y, x] = value

    def clear_full_lines(self) -> int:
        """Clear completed rows and return how many were removed.

        Remaining rows keep their order and slide down; the same number of
        empty rows is inserted at the top.
        """

        full_rows = np.all(self.grid != 0, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.columns), dtype=self.grid.dtype)
            self.grid[:] = np.vstack((new_rows, remaining))
        return cleared

    def reset(self) -> None:
        """Empty every cell."""

        self.grid.fill(0)

    def filled_rows(self) -> int:
        """Return the number of rows holding at least one block."""

        return int(np.count_nonzero(np.any(self.grid != 0, axis=1)))

    def to_lists(self) -> list[list[int]]:
        return [[int(v) for v in row] for row in self.grid]
