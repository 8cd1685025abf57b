import numpy as np
import pytest

from canvas_tetris.piece import Piece
from canvas_tetris.shapes import SHAPES, shape_for


def test_from_type_copies_catalog_matrix():
    piece = Piece.from_type(4)
    piece.matrix[0, 0] = 9
    assert shape_for(4)[0, 0] == 0


def test_catalog_is_read_only():
    with pytest.raises(ValueError):
        SHAPES[1][0, 0] = 3


def test_rotate_clockwise_t_piece():
    piece = Piece.from_type(4)
    piece.rotate(1)
    assert piece.matrix.tolist() == [[0, 4, 0], [0, 4, 4], [0, 4, 0]]


def test_rotate_counter_clockwise_t_piece():
    piece = Piece.from_type(4)
    piece.rotate(-1)
    assert piece.matrix.tolist() == [[0, 4, 0], [4, 4, 0], [0, 4, 0]]


def test_rotate_i_piece_becomes_vertical():
    piece = Piece.from_type(7)
    piece.rotate(1)
    assert piece.matrix.tolist() == [[0, 0, 7, 0]] * 4


@pytest.mark.parametrize("type_id", range(1, 8))
@pytest.mark.parametrize("direction", [1, -1])
def test_four_rotations_restore_matrix(type_id, direction):
    piece = Piece.from_type(type_id)
    for _ in range(4):
        piece.rotate(direction)
    assert np.array_equal(piece.matrix, shape_for(type_id))


def test_rotate_then_reverse_is_identity():
    piece = Piece.from_type(5)
    piece.rotate(1)
    piece.rotate(-1)
    assert np.array_equal(piece.matrix, shape_for(5))


def test_rotate_rejects_zero_direction():
    with pytest.raises(ValueError):
        Piece.from_type(1).rotate(0)


def test_cells_are_in_board_coordinates():
    piece = Piece.from_type(6, x=4, y=18)
    assert sorted(piece.cells()) == [(4, 18, 6), (4, 19, 6), (5, 18, 6), (5, 19, 6)]
