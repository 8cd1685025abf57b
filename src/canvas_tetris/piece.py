"""Active falling piece.

A :class:`Piece` owns a private, writable copy of a catalogue matrix together
with the board offset of that matrix's top-left corner.  Rotation mutates the
matrix in place; moving the piece is left to the game engine, which needs to
revert a move whenever it collides.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from .shapes import Matrix, shape_for


@dataclass
class Piece:
    """Rotatable square matrix plus an ``(x, y)`` board offset."""

    matrix: Matrix
    x: int = 0
    y: int = 0

    @classmethod
    def from_type(cls, type_id: int, x: int = 0, y: int = 0) -> "Piece":
        """Return a piece holding a fresh copy of shape ``type_id``."""

        return cls(np.array(shape_for(type_id), dtype=np.uint8), x, y)

    @property
    def size(self) -> int:
        """Side length of the square matrix."""

        return int(self.matrix.shape[0])

    @property
    def width(self) -> int:
        return int(self.matrix.shape[1])

    def rotate(self, direction: int) -> None:
        """Rotate the matrix 90 degrees in place.

        Parameters
        ----------
        direction:
            ``+1`` rotates clockwise, ``-1`` counter-clockwise.  Only the sign
            is used.

        The matrix is transposed and then either every row is reversed
        (clockwise) or the row order is reversed (counter-clockwise).
        """

        if direction == 0:
            raise ValueError("Rotation direction must be non-zero")
        m = self.matrix
        n = self.size
        for y in range(n):
            for x in range(y):
                m[x, y], m[y, x] = m[y, x], m[x, y]
        if direction > 0:
            m[:] = m[:, ::-1].copy()
        else:
            m[:] = m[::-1].copy()

    def cells(self) -> Iterator[Tuple[int, int, int]]:
        """Yield ``(x, y, value)`` for every block in board coordinates."""

        for y, row in enumerate(self.matrix):
            for x, value in enumerate(row):
                if value != 0:
                    yield self.x + x, self.y + y, int(value)
