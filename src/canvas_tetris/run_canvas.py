"""Canvas-based web front-end for Tetris.

This renderer draws directly to the HTML5 canvas via PyScript/pyodide's JS
bridge.  The page is expected to provide:

* ``<canvas id="tetris">`` for the well and ``<canvas id="next">`` for the
  preview,
* ``#score`` and ``#level`` text elements,
* ``#start-button`` and ``#pause-button`` buttons,
* an optional ``#diagnostics`` element that receives log lines.

The browser objects are looked up from pyodide's ``js`` module the first time
:meth:`Runner.setup` runs unless they were passed in explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .controls import KEY_COMMANDS, KEY_NAMES, handle_key
from .engine import GameEngine, GameEvent
from .loop import FrameCallback, LoopDriver
from .shapes import COLORS, shape_for


LOGGER = logging.getLogger(__name__)

BLOCK_SIZE = 30
NEXT_BLOCK_SIZE = 25
BACKGROUND = "#000"
BORDER_WIDTH = 0.05

PAUSE_LABEL = "Pause"
RESUME_LABEL = "Resume"


def draw_matrix(ctx, matrix, offset_x: float, offset_y: float, size: int) -> None:
    """Draw every non-empty cell of ``matrix`` with its top-left at the given
    offset (in cells)."""

    for y, row in enumerate(matrix):
        for x, value in enumerate(row):
            if value == 0:
                continue
            px = (x + offset_x) * size
            py = (y + offset_y) * size
            ctx.fillStyle = COLORS[int(value)]
            ctx.fillRect(px, py, size, size)
            ctx.strokeStyle = BACKGROUND
            ctx.lineWidth = BORDER_WIDTH * size
            ctx.strokeRect(px, py, size, size)


def preview_offset(matrix) -> tuple[float, float]:
    """Return the cell offset that centres ``matrix`` in the preview box."""

    rows, cols = len(matrix), len(matrix[0])
    return (0 if cols == 4 else 0.5, 0 if rows == 4 else 0.5)


@dataclass
class Runner:
    document: Any = None
    window: Any = None
    proxy: Optional[Callable[[Any], Any]] = None
    # Wraps one-shot frame callbacks; pyodide frees these after the call.
    once: Optional[Callable[[Any], Any]] = None
    engine: Optional[GameEngine] = None
    driver: Optional[LoopDriver] = None
    started: bool = False

    def _bind_browser(self) -> None:
        if self.document is None or self.window is None:
            from js import document, window  # type: ignore

            self.document = self.document or document
            self.window = self.window or window
        if self.proxy is None or self.once is None:
            from pyodide.ffi import create_once_callable, create_proxy  # type: ignore

            self.proxy = self.proxy or create_proxy
            self.once = self.once or create_once_callable

    def _element(self, element_id: str):
        return self.document.getElementById(element_id)

    def _log(self, msg: str) -> None:
        LOGGER.info(msg)
        el = self._element("diagnostics")
        if el:
            div = self.document.createElement("div")
            div.textContent = msg
            el.prepend(div)

    # Labels -----------------------------------------------------------
    def _update_score(self) -> None:
        el = self._element("score")
        if el and self.engine:
            el.textContent = str(self.engine.score)

    def _update_level(self) -> None:
        """Update the level readout in the DOM if present."""
        el = self._element("level")
        if el and self.engine:
            el.textContent = str(self.engine.level)

    def _set_pause_label(self, paused: bool) -> None:
        el = self._element("pause-button")
        if el:
            el.textContent = RESUME_LABEL if paused else PAUSE_LABEL

    # Engine events ----------------------------------------------------
    def _on_event(self, event: GameEvent, engine: GameEngine) -> None:
        if event in (GameEvent.LOCKED, GameEvent.LINES_CLEARED):
            self._update_score()
        elif event is GameEvent.LEVEL_UP:
            self._update_level()
        elif event is GameEvent.RESTARTED:
            self._update_score()
            self._update_level()
            self._set_pause_label(False)
        elif event is GameEvent.GAME_OVER:
            self._log(f"Game over. Score: {engine.score}")
            self.window.alert(f"Game over! Score: {engine.score}")

    # Drawing ----------------------------------------------------------
    def _ctx(self, element_id: str):
        canvas = self._element(element_id)
        if not canvas:
            return None, None
        return canvas, canvas.getContext("2d")

    def _draw(self) -> None:
        if not self.engine:
            return
        canvas, ctx = self._ctx("tetris")
        if ctx is not None:
            ctx.fillStyle = BACKGROUND
            ctx.fillRect(0, 0, canvas.width, canvas.height)
            draw_matrix(ctx, self.engine.board.grid, 0, 0, BLOCK_SIZE)
            active = self.engine.active
            draw_matrix(ctx, active.matrix, active.x, active.y, BLOCK_SIZE)

        canvas, ctx = self._ctx("next")
        if ctx is not None:
            ctx.fillStyle = BACKGROUND
            ctx.fillRect(0, 0, canvas.width, canvas.height)
            matrix = shape_for(self.engine.next_type)
            ox, oy = preview_offset(matrix)
            draw_matrix(ctx, matrix, ox, oy, NEXT_BLOCK_SIZE)

    def _render(self, _engine: GameEngine) -> None:
        self._draw()

    # Loop plumbing ----------------------------------------------------
    def _schedule(self, callback: FrameCallback):
        def run(ts: float) -> None:
            try:
                callback(ts)
            except Exception as exc:  # pragma: no cover - defensive guard
                # Keep the page alive: report the failure and start over.
                LOGGER.exception("Frame failed")
                self._log(f"Crash detected: {exc}")
                self.restart()

        return self.window.requestAnimationFrame(self.once(run))

    def _cancel(self, handle) -> None:
        self.window.cancelAnimationFrame(handle)

    # DOM handlers -----------------------------------------------------
    def _on_key(self, evt) -> None:
        if not self.started or not self.engine:
            return
        key = getattr(evt, "keyCode", None)
        if key not in KEY_COMMANDS:
            key = KEY_NAMES.get(getattr(evt, "key", None))
        if key is None:
            return
        if self.engine.running and hasattr(evt, "preventDefault"):
            evt.preventDefault()
        if handle_key(self.engine, key):
            self._draw()

    def _on_start_click(self, _evt=None) -> None:
        self.restart()

    def _on_pause_click(self, _evt=None) -> None:
        self.toggle_pause()

    # Public API -------------------------------------------------------
    def setup(self) -> None:
        """Bind DOM handlers and draw the initial board.

        The game does not start falling until the start button is pressed.
        """

        self._bind_browser()
        if self.engine is None:
            self.engine = GameEngine()
        self.engine.subscribe(self._on_event)
        self.driver = LoopDriver(
            self.engine, self._schedule, render=self._render, cancel=self._cancel
        )
        self.document.addEventListener("keydown", self.proxy(self._on_key))
        for element_id, handler in (
            ("start-button", self._on_start_click),
            ("pause-button", self._on_pause_click),
        ):
            el = self._element(element_id)
            if el:
                el.addEventListener("click", self.proxy(handler))
        self._update_score()
        self._update_level()
        self._draw()
        self._log("Ready")

    def restart(self) -> None:
        """Start a new game and (re)start the animation loop."""

        if self.driver is None or self.engine is None:
            self.setup()
        self.driver.stop()
        self.engine.restart()
        self.started = True
        self.driver.start()
        self._draw()
        self._log("Game started")

    def toggle_pause(self) -> None:
        if not self.started or self.driver is None or self.engine is None:
            self._log("Pause ignored: not running")
            return
        if self.engine.game_over:
            self._log("Pause ignored: game over")
            return
        self.driver.toggle_pause()
        self._set_pause_label(self.engine.paused)
        self._log("Paused" if self.engine.paused else "Resumed")

    def stop(self) -> None:
        if not self.started or self.driver is None:
            self._log("Stop ignored: not running")
            return
        self.driver.stop()
        self.started = False
        self._log("Game stopped")


runner = Runner()


def main() -> None:
    runner.setup()


def start() -> None:
    runner.restart()


def pause() -> None:
    runner.toggle_pause()


def stop() -> None:
    runner.stop()
