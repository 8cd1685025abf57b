"""Falling-block puzzle game engine with canvas and pygame front-ends."""

from .board import Board, COLUMNS, ROWS
from .piece import Piece
from .shapes import COLORS, SHAPES, random_shape_type, shape_for
from .engine import GameEngine, GameEvent, GameStatus
from .loop import LoopDriver
from .controls import handle_key
from .utils import collides, drop_interval_ms, render_grid

__all__ = [
    "Board",
    "COLORS",
    "COLUMNS",
    "GameEngine",
    "GameEvent",
    "GameStatus",
    "LoopDriver",
    "Piece",
    "ROWS",
    "SHAPES",
    "collides",
    "drop_interval_ms",
    "handle_key",
    "random_shape_type",
    "render_grid",
    "shape_for",
]
