"""Frame loop that feeds elapsed time into a :class:`GameEngine`.

The driver knows nothing about browsers or pygame.  It is handed a
``schedule`` callable that arranges for ``callback(timestamp_ms)`` to run on
the next display frame (``window.requestAnimationFrame`` in the browser, a
frame queue on the desktop, a list in tests) and optionally a ``cancel``
callable for the handle ``schedule`` returns.

The loop stops rescheduling itself as soon as the engine is paused or the
game is over; :meth:`LoopDriver.resume` and :meth:`LoopDriver.start` pick it
up again.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .engine import GameEngine


LOGGER = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]
Scheduler = Callable[[FrameCallback], Any]


class LoopDriver:
    """Call :meth:`GameEngine.tick` once per scheduled frame."""

    def __init__(
        self,
        engine: GameEngine,
        schedule: Scheduler,
        render: Optional[Callable[[GameEngine], None]] = None,
        cancel: Optional[Callable[[Any], None]] = None,
    ) -> None:
        self.engine = engine
        self._schedule = schedule
        self._render = render
        self._cancel = cancel
        self._handle: Any = None
        self._pending = False
        self._generation = 0
        self.active = False
        self.last_ts: Optional[float] = None

    @property
    def scheduled(self) -> bool:
        """``True`` while a frame callback is outstanding."""

        return self._pending

    def _request_frame(self) -> None:
        if self._pending:
            return
        self._pending = True
        generation = self._generation

        def callback(timestamp_ms: float) -> None:
            # Frames requested before the last stop() belong to a dead loop.
            if generation == self._generation:
                self.frame(timestamp_ms)

        self._handle = self._schedule(callback)

    def start(self) -> None:
        """Begin (or continue) delivering frames to the engine."""

        self.active = True
        self.last_ts = None
        self._request_frame()
        LOGGER.debug("Loop started")

    def stop(self) -> None:
        """Stop the loop and cancel any outstanding frame."""

        self.active = False
        self._generation += 1
        if self._pending and self._cancel is not None and self._handle is not None:
            self._cancel(self._handle)
        self._pending = False
        self._handle = None
        LOGGER.debug("Loop stopped")

    def pause(self) -> bool:
        return self.engine.pause()

    def resume(self) -> bool:
        """Resume the engine and restart frame delivery.

        The timestamp baseline is dropped so the first frame after resuming
        reports zero elapsed time instead of the whole pause.
        """

        if not self.engine.resume():
            return False
        self.start()
        return True

    def toggle_pause(self) -> bool:
        if self.engine.paused:
            return self.resume()
        return self.pause()

    def frame(self, timestamp_ms: float) -> None:
        """Handle one display frame at ``timestamp_ms``."""

        self._pending = False
        self._handle = None
        if not self.active or not self.engine.running:
            return
        if self.last_ts is None:
            self.last_ts = timestamp_ms
        delta = timestamp_ms - self.last_ts
        self.last_ts = timestamp_ms
        self.engine.tick(delta)
        if self._render is not None:
            self._render(self.engine)
        if self.engine.running:
            self._request_frame()
