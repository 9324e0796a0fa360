from __future__ import annotations

import curses
import logging
import subprocess
from collections.abc import Mapping

from sshpick.engine import SelectionEngine
from sshpick.errors import EditorLaunchError
from sshpick.input import InputController
from sshpick.models import EditorFinished, Effect, Host, LaunchEditor, Quit, SelectionState
from sshpick.ui.render import Renderer

logger = logging.getLogger(__name__)


def run_editor_process(argv: tuple[str, ...]) -> None:
    try:
        result = subprocess.run(list(argv), check=False)
    except OSError as exc:
        raise EditorLaunchError(f"failed to start editor {argv[0]}: {exc}") from exc
    if result.returncode != 0:
        raise EditorLaunchError(f"editor {argv[0]} exited with status {result.returncode}")


class PickerApp:
    def __init__(
        self,
        stdscr: curses.window | None,
        hosts: list[Host],
        local_forward: str = "",
        config_path: str = "",
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.stdscr = stdscr
        self.state = SelectionState.from_hosts(hosts, local_forward=local_forward, config_path=config_path)
        self.engine = SelectionEngine(self.state, environ=environ)
        self.input = InputController(self.engine, self._screen_size)
        self.renderer = Renderer(self.state, self._get_stdscr)

    def _get_stdscr(self) -> curses.window | None:
        return self.stdscr

    def _screen_size(self) -> tuple[int, int]:
        if self.stdscr is None:
            return 0, 0
        return self.stdscr.getmaxyx()

    @property
    def chosen_host(self) -> Host | None:
        return self.state.chosen_host

    def run(self) -> Host | None:
        if self.stdscr is None:
            raise RuntimeError("stdscr is required to run PickerApp")

        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.set_escdelay(25)
        self.stdscr.keypad(True)
        self.renderer.init_styles()
        self.input.notify_resize()

        while True:
            self.renderer.draw()
            try:
                key = self.stdscr.get_wch()
            except KeyboardInterrupt:
                key = "\x03"
            except curses.error:
                continue
            if self.handle_effect(self.input.handle_key(key)):
                break
        return self.chosen_host

    def handle_effect(self, effect: Effect | None) -> bool:
        """Carry out ``effect``; True when the session is over."""
        if isinstance(effect, Quit):
            return True
        if isinstance(effect, LaunchEditor):
            self.engine.dispatch(self._launch_editor(effect.argv))
        return False

    def _launch_editor(self, argv: tuple[str, ...]) -> EditorFinished:
        logger.debug("Launching editor: %s", argv)
        if self.stdscr is None:
            return self._run_editor(argv)

        curses.def_prog_mode()
        curses.endwin()
        try:
            return self._run_editor(argv)
        finally:
            curses.reset_prog_mode()
            try:
                curses.curs_set(0)
            except curses.error:
                pass
            self.stdscr.keypad(True)
            self.input.notify_resize()

    def _run_editor(self, argv: tuple[str, ...]) -> EditorFinished:
        try:
            run_editor_process(argv)
        except EditorLaunchError as exc:
            return EditorFinished(error=str(exc))
        return EditorFinished()
