"""Utility helpers for the Tetris engine."""

from __future__ import annotations

from typing import List, Optional

from .board import BLOCKED, Board
from .piece import Piece


BASE_DROP_INTERVAL_MS = 1000
MIN_DROP_INTERVAL_MS = 100
LEVEL_STEP_MS = 100
POINTS_PER_LEVEL = 1000
LINE_SCORE = 100


def drop_interval_ms(level: int) -> int:
    """Return the automatic drop interval in milliseconds for ``level``.

    Level ``1`` drops once per second; each further level is 100ms faster
    until the 100ms floor is reached at level ``10``.
    """

    return max(MIN_DROP_INTERVAL_MS, BASE_DROP_INTERVAL_MS - (level - 1) * LEVEL_STEP_MS)


def line_clear_score(lines: int) -> int:
    """Return the points awarded for clearing ``lines`` rows in one lock."""

    return LINE_SCORE * lines * lines


def collides(board: Board, piece: Piece) -> bool:
    """Return ``True`` if any block of ``piece`` overlaps a wall, the floor or a
    locked cell of ``board``.

    Blocks above the top row never collide on their own.  The scan stops at
    the first offending block.
    """

    for y, row in enumerate(piece.matrix):
        for x, value in enumerate(row):
            if value == 0:
                continue
            cell = board.cell_at(piece.x + x, piece.y + y)
            if cell == BLOCKED or cell != 0:
                return True
    return False


def render_grid(board: Board, active: Optional[Piece] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece).
    """

    grid = board.to_lists()
    if active is not None:
        for x, y, value in active.cells():
            if 0 <= y < board.rows and 0 <= x < board.columns:
                grid[y][x] = value
    return grid
