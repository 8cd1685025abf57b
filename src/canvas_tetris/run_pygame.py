"""Simple pygame front-end for the Tetris engine.

This module provides a desktop version of the canvas game.  pygame has no
``requestAnimationFrame``, so :class:`GameRunner` keeps a small frame queue:
the :class:`~canvas_tetris.loop.LoopDriver` schedules its callbacks into the
queue and the pygame loop drains it once per rendered frame.

Controls: arrow keys and space as in the browser, ``P`` toggles pause,
``Enter`` or ``R`` starts a new game, ``Esc`` quits.
"""

from __future__ import annotations

from typing import List, Optional

import pygame

from .board import Board
from .controls import KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_SPACE, KEY_UP, handle_key
from .engine import GameEngine, GameEvent
from .loop import FrameCallback, LoopDriver
from .shapes import COLORS, shape_for

# Size of a single board cell in pixels
CELL_SIZE = 30
# Size of a preview cell in pixels
NEXT_CELL_SIZE = 25
# Frames per second to run the game loop at
FPS = 60
# Width of the side panel holding the preview
PANEL_WIDTH = 5 * NEXT_CELL_SIZE

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)

PYGAME_KEYS = {
    pygame.K_LEFT: KEY_LEFT,
    pygame.K_RIGHT: KEY_RIGHT,
    pygame.K_DOWN: KEY_DOWN,
    pygame.K_UP: KEY_UP,
    pygame.K_SPACE: KEY_SPACE,
}


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


# Mapping from the integer stored in the board grid to a colour
CELL_COLORS = {0: BACKGROUND}
for _value, _color in enumerate(COLORS):
    if _color is not None:
        CELL_COLORS[_value] = hex_to_rgb(_color)


_LOG_BUFFER: list[str] = []


def log(msg: str) -> None:
    """Keep diagnostics in an in-memory buffer for debugging."""

    _LOG_BUFFER.append(msg)


def draw_matrix(
    screen: pygame.Surface, matrix, offset_x: float, offset_y: float, size: int, origin_x: int = 0
) -> None:
    """Render the non-empty cells of ``matrix`` at the given cell offset."""

    for y, row in enumerate(matrix):
        for x, value in enumerate(row):
            if value == 0:
                continue
            rect = pygame.Rect(
                origin_x + int((x + offset_x) * size), int((y + offset_y) * size), size, size
            )
            pygame.draw.rect(screen, CELL_COLORS[int(value)], rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_board(screen: pygame.Surface, board: Board) -> None:
    """Render the existing board grid."""

    for r in range(board.rows):
        for c in range(board.columns):
            rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, CELL_COLORS[int(board.grid[r, c])], rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_game(screen: pygame.Surface, engine: GameEngine) -> None:
    """Render the board, the active piece and the next-piece preview."""

    screen.fill(BACKGROUND)
    draw_board(screen, engine.board)
    active = engine.active
    draw_matrix(screen, active.matrix, active.x, active.y, CELL_SIZE)
    preview = shape_for(engine.next_type)
    offset = 0 if len(preview) == 4 else 0.5
    draw_matrix(
        screen, preview, offset, offset, NEXT_CELL_SIZE, origin_x=engine.board.columns * CELL_SIZE
    )


def caption(engine: GameEngine) -> str:
    if engine.game_over:
        state = "Game Over - "
    elif engine.paused:
        state = "Paused - "
    else:
        state = ""
    return f"Tetris - {state}Score: {engine.score} Level: {engine.level}"


class GameRunner:
    """Own the pygame window and feed frames to a :class:`LoopDriver`."""

    def __init__(self, engine: Optional[GameEngine] = None) -> None:
        self.engine = engine or GameEngine()
        self.engine.subscribe(self._on_event)
        self._frames: List[FrameCallback] = []
        self.driver = LoopDriver(self.engine, self.schedule, cancel=self.cancel)
        self._screen: Optional[pygame.Surface] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def schedule(self, callback: FrameCallback) -> FrameCallback:
        """Queue ``callback`` for the next frame; the callback is its handle."""

        self._frames.append(callback)
        return callback

    def cancel(self, handle: FrameCallback) -> None:
        if handle in self._frames:
            self._frames.remove(handle)

    def run_frame(self, timestamp_ms: float) -> None:
        """Deliver ``timestamp_ms`` to every callback queued so far."""

        frames, self._frames = self._frames, []
        for callback in frames:
            callback(timestamp_ms)

    def _on_event(self, event: GameEvent, engine: GameEngine) -> None:
        if event is GameEvent.LINES_CLEARED:
            log(f"Cleared {engine.last_cleared} row(s). Score: {engine.score}")
        elif event is GameEvent.LEVEL_UP:
            log(f"Level {engine.level}")
        elif event is GameEvent.GAME_OVER:
            log(f"Game over. Score: {engine.score}")

    def restart(self) -> None:
        self.driver.stop()
        self.engine.restart()
        self.driver.start()
        log("Game started")

    def handle_event(self, event: pygame.event.Event) -> None:
        """Process one pygame event."""

        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self._running = False
            elif event.key in (pygame.K_RETURN, pygame.K_r):
                self.restart()
            elif event.key == pygame.K_p:
                if not self.engine.game_over:
                    self.driver.toggle_pause()
                    log("Paused" if self.engine.paused else "Resumed")
            elif event.key in PYGAME_KEYS:
                handle_key(self.engine, PYGAME_KEYS[event.key])

    def run(self) -> None:
        pygame.init()
        width = self.engine.board.columns * CELL_SIZE + PANEL_WIDTH
        height = self.engine.board.rows * CELL_SIZE
        self._screen = pygame.display.set_mode((width, height))
        clock = pygame.time.Clock()

        self.restart()
        self._running = True
        while self._running:
            clock.tick(FPS)
            # Even when paused, process events so the window remains responsive
            for event in pygame.event.get():
                self.handle_event(event)
            self.run_frame(pygame.time.get_ticks())
            draw_game(self._screen, self.engine)
            pygame.display.set_caption(caption(self.engine))
            pygame.display.flip()

        self.driver.stop()
        pygame.quit()
        log("Game stopped")


def main() -> None:
    GameRunner().run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
