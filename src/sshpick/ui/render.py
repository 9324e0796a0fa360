from __future__ import annotations

from collections.abc import Callable

import curses

from sshpick.models import SelectionState
from sshpick.ui.layout import (
    STYLE_ERROR,
    STYLE_HELP,
    STYLE_ITEM,
    STYLE_SELECTED,
    STYLE_TITLE,
    build_view,
)


class Renderer:
    def __init__(self, state: SelectionState, stdscr_getter: Callable[[], curses.window | None]) -> None:
        self.state = state
        self._stdscr_getter = stdscr_getter
        self._attrs: dict[str, int] = {}

    def init_styles(self) -> None:
        self._attrs = {
            STYLE_TITLE: curses.A_BOLD,
            STYLE_HELP: curses.A_DIM,
            STYLE_ITEM: curses.A_NORMAL,
            STYLE_SELECTED: curses.A_BOLD | curses.A_REVERSE,
            STYLE_ERROR: curses.A_BOLD,
        }
        if not curses.has_colors():
            return
        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK
        curses.init_pair(1, curses.COLOR_MAGENTA, background)
        curses.init_pair(2, curses.COLOR_RED, background)
        self._attrs[STYLE_TITLE] |= curses.color_pair(1)
        self._attrs[STYLE_ERROR] |= curses.color_pair(2)

    def draw(self) -> None:
        stdscr = self._stdscr_getter()
        if stdscr is None:
            return

        stdscr.erase()
        h, w = stdscr.getmaxyx()
        for y, line in enumerate(build_view(self.state)):
            if y >= h:
                break
            if w <= 1:
                continue
            stdscr.addnstr(y, 0, line.text, w - 1, self._attrs.get(line.style, curses.A_NORMAL))
        stdscr.refresh()
