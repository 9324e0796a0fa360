from __future__ import annotations

import curses
from collections.abc import Callable

from sshpick.engine import SelectionEngine
from sshpick.models import Effect, Key, Resize

SPECIAL_KEYS: dict[int, str] = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_ENTER: "enter",
    curses.KEY_BACKSPACE: "backspace",
    curses.KEY_DC: "delete",
    10: "enter",
    13: "enter",
    27: "esc",
    127: "backspace",
    8: "backspace",
    3: "ctrl+c",
}


def key_name(key: int | str) -> str | None:
    """Engine key name for a curses key (``getch`` int or ``get_wch`` str)."""
    if isinstance(key, str):
        if len(key) != 1:
            return None
        code = ord(key)
        if code in SPECIAL_KEYS:
            return SPECIAL_KEYS[code]
        if key.isprintable():
            return key
        return None
    if key in SPECIAL_KEYS:
        return SPECIAL_KEYS[key]
    if 32 <= key <= 126:
        return chr(key)
    return None


class InputController:
    def __init__(self, engine: SelectionEngine, screen_size: Callable[[], tuple[int, int]]) -> None:
        self.engine = engine
        self._screen_size = screen_size

    def notify_resize(self) -> None:
        height, width = self._screen_size()
        self.engine.dispatch(Resize(width=width, height=height))

    def handle_key(self, key: int | str) -> Effect | None:
        if key == curses.KEY_RESIZE:
            self.notify_resize()
            return None

        name = key_name(key)
        if name is None:
            return None
        return self.engine.dispatch(Key(name))
