"""Keyboard bindings shared by the front-ends."""

from __future__ import annotations

from typing import Callable, Dict, Union

from .engine import GameEngine


# DOM ``keyCode`` values.
KEY_SPACE = 32
KEY_LEFT = 37
KEY_UP = 38
KEY_RIGHT = 39
KEY_DOWN = 40

Command = Callable[[GameEngine], bool]

KEY_COMMANDS: Dict[int, Command] = {
    KEY_LEFT: lambda engine: engine.move_horizontal(-1),
    KEY_RIGHT: lambda engine: engine.move_horizontal(1),
    KEY_DOWN: lambda engine: engine.soft_drop(),
    KEY_UP: lambda engine: engine.rotate(1),
    KEY_SPACE: lambda engine: engine.hard_drop(),
}

# DOM ``KeyboardEvent.key`` names for the same keys.
KEY_NAMES: Dict[str, int] = {
    "ArrowLeft": KEY_LEFT,
    "ArrowRight": KEY_RIGHT,
    "ArrowDown": KEY_DOWN,
    "ArrowUp": KEY_UP,
    " ": KEY_SPACE,
}


def handle_key(engine: GameEngine, key: Union[int, str, None]) -> bool:
    """Apply the command bound to ``key``.

    ``key`` may be a ``keyCode`` or a ``KeyboardEvent.key`` name.  Unknown
    keys, and any key while the game is paused or over, are ignored.
    Returns ``True`` if the command changed the game.
    """

    if not engine.running:
        return False
    if isinstance(key, str):
        code = KEY_NAMES.get(key)
    else:
        code = key
    command = KEY_COMMANDS.get(code) if code is not None else None
    if command is None:
        return False
    return command(engine)
