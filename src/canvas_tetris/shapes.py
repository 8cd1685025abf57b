"""Tetromino catalogue.

Each of the seven pieces is stored as a small square matrix whose non-zero
entries hold the piece's type id.  The id doubles as the colour index used by
the renderers, so a locked block on the board still knows which piece it came
from.
"""

from __future__ import annotations

import random
from typing import Dict, List, Optional

import numpy as np
from numpy.typing import NDArray

Matrix = NDArray[np.uint8]

NUM_SHAPES = 7

SHAPE_NAMES: Dict[int, str] = {
    1: "Z",
    2: "J",
    3: "S",
    4: "T",
    5: "L",
    6: "O",
    7: "I",
}

# Fill colours indexed by cell value.  Index ``0`` is the empty cell.
COLORS: List[Optional[str]] = [
    None,
    "#FF0D72",  # Z - red
    "#0DC2FF",  # J - blue
    "#0DFF72",  # S - green
    "#F538FF",  # T - purple
    "#FF8E0D",  # L - orange
    "#FFE138",  # O - yellow
    "#3877FF",  # I - light blue
]

_BASE_SHAPES: Dict[int, List[List[int]]] = {
    1: [
        [1, 1, 0],
        [0, 1, 1],
        [0, 0, 0],
    ],
    2: [
        [0, 2, 0],
        [0, 2, 0],
        [2, 2, 0],
    ],
    3: [
        [0, 3, 3],
        [3, 3, 0],
        [0, 0, 0],
    ],
    4: [
        [0, 4, 0],
        [4, 4, 4],
        [0, 0, 0],
    ],
    5: [
        [0, 5, 0],
        [0, 5, 0],
        [0, 5, 5],
    ],
    6: [
        [6, 6],
        [6, 6],
    ],
    7: [
        [0, 0, 0, 0],
        [7, 7, 7, 7],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ],
}


def _freeze(rows: List[List[int]]) -> Matrix:
    matrix = np.array(rows, dtype=np.uint8)
    matrix.flags.writeable = False
    return matrix


SHAPES: Dict[int, Matrix] = {type_id: _freeze(rows) for type_id, rows in _BASE_SHAPES.items()}


def shape_for(type_id: int) -> Matrix:
    """Return the canonical, read-only matrix for ``type_id``.

    Raises:
        KeyError: If ``type_id`` is not in ``1..7``.
    """

    return SHAPES[type_id]


def random_shape_type(rng: Optional[random.Random] = None) -> int:
    """Return a shape id chosen uniformly from ``1..7``."""

    source = rng if rng is not None else random
    return source.randint(1, NUM_SHAPES)


__all__ = [
    "COLORS",
    "Matrix",
    "NUM_SHAPES",
    "SHAPES",
    "SHAPE_NAMES",
    "random_shape_type",
    "shape_for",
]
