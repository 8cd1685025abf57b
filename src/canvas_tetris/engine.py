"""Game engine: the state machine behind a Tetris session.

:class:`GameEngine` owns the board, the active and upcoming pieces, the score
and level, and the automatic drop timer.  Front-ends never touch that state
directly; they call the command methods below and read the public attributes
(or :meth:`GameEngine.snapshot`) when drawing.

Commands return ``True`` when they changed the session so callers know a
redraw is needed.  Every command except :meth:`GameEngine.restart`,
:meth:`GameEngine.pause` and :meth:`GameEngine.resume` is ignored unless the
game is running.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from .board import COLUMNS, ROWS, Board
from .piece import Piece
from .shapes import SHAPE_NAMES, random_shape_type
from .utils import (
    BASE_DROP_INTERVAL_MS,
    POINTS_PER_LEVEL,
    collides,
    drop_interval_ms,
    line_clear_score,
)


LOGGER = logging.getLogger(__name__)


class GameStatus(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GameEvent(str, Enum):
    """Notifications published to subscribers."""

    LOCKED = "locked"
    LINES_CLEARED = "lines_cleared"
    LEVEL_UP = "level_up"
    GAME_OVER = "game_over"
    RESTARTED = "restarted"
    PAUSED = "paused"
    RESUMED = "resumed"


Listener = Callable[[GameEvent, "GameEngine"], None]


class GameEngine:
    """Mutable state and rules for one Tetris session."""

    def __init__(
        self,
        rows: int = ROWS,
        columns: int = COLUMNS,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.board = Board(rows, columns)
        self.rng = rng if rng is not None else random.Random(seed)
        self._listeners: List[Listener] = []
        self.active: Piece
        self.next_type: int
        self.score = 0
        self.level = 1
        self.drop_interval_ms = BASE_DROP_INTERVAL_MS
        self.drop_counter_ms = 0.0
        self.status = GameStatus.RUNNING
        self.lines = 0
        self.last_cleared = 0
        self._start_session()

    # Observers --------------------------------------------------------
    def subscribe(self, listener: Listener) -> None:
        """Call ``listener(event, engine)`` for every published event."""

        self._listeners.append(listener)

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event, self)

    # State queries ----------------------------------------------------
    @property
    def running(self) -> bool:
        return self.status is GameStatus.RUNNING

    @property
    def paused(self) -> bool:
        return self.status is GameStatus.PAUSED

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    def snapshot(self) -> Dict[str, Any]:
        """Return a plain copy of the state a renderer needs."""

        return {
            "board": self.board.to_lists(),
            "active": {
                "matrix": [[int(v) for v in row] for row in self.active.matrix],
                "x": self.active.x,
                "y": self.active.y,
            },
            "next": self.next_type,
            "score": self.score,
            "level": self.level,
            "lines": self.lines,
            "drop_interval_ms": self.drop_interval_ms,
            "status": self.status.value,
        }

    # Session lifecycle ------------------------------------------------
    def _start_session(self) -> None:
        self.board.reset()
        self.score = 0
        self.level = 1
        self.lines = 0
        self.last_cleared = 0
        self.drop_interval_ms = drop_interval_ms(self.level)
        self.drop_counter_ms = 0.0
        self.status = GameStatus.RUNNING
        self.next_type = random_shape_type(self.rng)
        self.spawn()

    def restart(self) -> None:
        """Start a fresh game, whatever the current state."""

        self._start_session()
        LOGGER.info("New game started")
        self._emit(GameEvent.RESTARTED)

    def pause(self) -> bool:
        if self.status is not GameStatus.RUNNING:
            return False
        self.status = GameStatus.PAUSED
        LOGGER.debug("Paused")
        self._emit(GameEvent.PAUSED)
        return True

    def resume(self) -> bool:
        if self.status is not GameStatus.PAUSED:
            return False
        self.status = GameStatus.RUNNING
        self.drop_counter_ms = 0.0
        LOGGER.debug("Resumed")
        self._emit(GameEvent.RESUMED)
        return True

    def toggle_pause(self) -> bool:
        """Pause a running game or resume a paused one."""

        if self.paused:
            return self.resume()
        return self.pause()

    def spawn(self) -> Piece:
        """Promote the upcoming shape to the active piece.

        The new piece is centred horizontally on the top row.  If it already
        overlaps locked blocks the session ends; the board is left untouched.
        """

        piece = Piece.from_type(self.next_type)
        piece.x = self.board.columns // 2 - piece.width // 2
        piece.y = 0
        self.active = piece
        self.next_type = random_shape_type(self.rng)
        if collides(self.board, self.active):
            self.status = GameStatus.GAME_OVER
            LOGGER.info("Game over. Final score: %d", self.score)
            self._emit(GameEvent.GAME_OVER)
        return piece

    # Commands ---------------------------------------------------------
    def move_horizontal(self, direction: int) -> bool:
        """Shift the active piece one column left (``-1``) or right (``+1``)."""

        if not self.running:
            return False
        self.active.x += direction
        if collides(self.board, self.active):
            self.active.x -= direction
            return False
        return True

    def soft_drop(self) -> bool:
        """Move the active piece down one row, locking it if it cannot fall."""

        if not self.running:
            return False
        self.active.y += 1
        if collides(self.board, self.active):
            self.active.y -= 1
            self._lock()
        self.drop_counter_ms = 0.0
        return True

    def hard_drop(self) -> bool:
        """Drop the active piece as far as it goes and lock it."""

        if not self.running:
            return False
        while not collides(self.board, self.active):
            self.active.y += 1
        self.active.y -= 1
        self._lock()
        return True

    def rotate(self, direction: int = 1) -> bool:
        """Rotate the active piece, kicking it sideways if it collides.

        Kicks move the piece by ``+1, -2, +3, -4, ...`` columns in turn (each
        relative to the previous attempt).  Once the next offset would exceed
        the matrix width the rotation is undone.
        """

        if not self.running:
            return False
        piece = self.active
        start_x = piece.x
        offset = 1
        piece.rotate(direction)
        while collides(self.board, piece):
            piece.x += offset
            offset = -(offset + (1 if offset > 0 else -1))
            if offset > piece.width:
                piece.rotate(-direction)
                piece.x = start_x
                return False
        return True

    def tick(self, delta_ms: float) -> bool:
        """Advance the drop timer by ``delta_ms`` and apply gravity if due."""

        if not self.running:
            return False
        self.drop_counter_ms += delta_ms
        if self.drop_counter_ms > self.drop_interval_ms:
            return self.soft_drop()
        return False

    # Locking ----------------------------------------------------------
    def _lock(self) -> None:
        self.board.merge_piece(self.active)
        LOGGER.debug(
            "Locked %s at (%d, %d)",
            SHAPE_NAMES.get(int(self.active.matrix.max()), "?"),
            self.active.x,
            self.active.y,
        )
        cleared = self.board.clear_full_lines()
        self.last_cleared = cleared
        if cleared:
            self._score_lines(cleared)
        self.drop_counter_ms = 0.0
        self._emit(GameEvent.LOCKED)
        self.spawn()

    def _score_lines(self, cleared: int) -> None:
        self.lines += cleared
        self.score += line_clear_score(cleared)
        LOGGER.debug("Cleared %d row(s). Score: %d", cleared, self.score)
        self._emit(GameEvent.LINES_CLEARED)
        if self.score >= self.level * POINTS_PER_LEVEL:
            self.level += 1
            self.drop_interval_ms = drop_interval_ms(self.level)
            LOGGER.info("Level %d, drop interval %dms", self.level, self.drop_interval_ms)
            self._emit(GameEvent.LEVEL_UP)
