"""Selection state machine.

The engine consumes one event at a time and returns at most one effect for
the caller to carry out. It never touches the terminal or spawns processes
itself, so every transition can be driven from tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from sshpick.editor import editor_command
from sshpick.errors import EditorLaunchError, NoHostsError, PatternError
from sshpick.hostfilter import filter_hosts
from sshpick.models import (
    FILTER_QUERY_MAX,
    MODE_BROWSE,
    MODE_FILTER,
    Effect,
    EditorFinished,
    Event,
    Key,
    LaunchEditor,
    Quit,
    Resize,
    SelectionState,
)

logger = logging.getLogger(__name__)

BROWSE_QUIT_KEYS = ("ctrl+c", "q", "esc")
BROWSE_NEXT_KEYS = ("j", "l", "down")
BROWSE_PREV_KEYS = ("k", "h", "up")
BROWSE_CLEAR_FILTER_KEYS = ("backspace", "delete")


def clamp_cursor(cursor: int, length: int) -> int:
    if length == 0:
        return 0
    if cursor >= length:
        return length - 1
    return cursor


class SelectionEngine:
    def __init__(
        self,
        state: SelectionState,
        build_editor_command: Callable[[str, int], list[str]] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.state = state
        self._environ = environ
        self._build_editor_command = build_editor_command or self._default_editor_command

    def _default_editor_command(self, path: str, line: int) -> list[str]:
        return editor_command(path, line, self._environ)

    @property
    def finished(self) -> bool:
        return self.state.chosen_host is not None

    def dispatch(self, event: Event) -> Effect | None:
        if isinstance(event, Resize):
            self.state.width = event.width
            self.state.height = event.height
            self.state.ready = True
            return None
        if isinstance(event, EditorFinished):
            if event.error:
                logger.debug("Editor finished with error: %s", event.error)
            self.state.error = event.error or ""
            return None
        if isinstance(event, Key):
            # The previous message lasts until the next key press.
            self.state.error = ""
            try:
                if self.state.mode == MODE_FILTER:
                    return self.handle_filter_key(event.name)
                return self.handle_browse_key(event.name)
            except (NoHostsError, EditorLaunchError) as exc:
                self.state.error = str(exc)
        return None

    def apply_filter(self, pattern: str) -> bool:
        try:
            filtered = filter_hosts(self.state.all_hosts, pattern)
        except PatternError as exc:
            self.state.filter_error = exc.reason
            return False
        self.state.filter_error = ""
        self.state.visible_hosts = filtered
        self.state.cursor = clamp_cursor(self.state.cursor, len(filtered))
        return True

    def move_cursor(self, delta: int) -> None:
        count = len(self.state.visible_hosts)
        if count == 0:
            return
        self.state.cursor = (self.state.cursor + delta) % count

    def confirm(self) -> Effect:
        host = self.state.current_host()
        if host is None:
            raise NoHostsError()
        self.state.chosen_host = host
        return Quit()

    def launch_editor(self) -> Effect:
        host = self.state.current_host()
        if host is None or not self.state.config_path:
            raise EditorLaunchError("no config file to edit")
        argv = self._build_editor_command(self.state.config_path, max(1, host.source_line))
        return LaunchEditor(argv=tuple(argv))

    def handle_browse_key(self, key: str) -> Effect | None:
        if key in BROWSE_QUIT_KEYS:
            return Quit()
        if key in BROWSE_NEXT_KEYS:
            self.move_cursor(1)
        elif key in BROWSE_PREV_KEYS:
            self.move_cursor(-1)
        elif key == "enter":
            return self.confirm()
        elif key == "n":
            self.state.show_notes = not self.state.show_notes
        elif key == "/":
            self.state.mode = MODE_FILTER
            self.state.filter_query = self.state.committed_filter
        elif key == "e":
            return self.launch_editor()
        elif key in BROWSE_CLEAR_FILTER_KEYS:
            if self.state.committed_filter:
                self.state.committed_filter = ""
                self.state.filter_query = ""
                self.apply_filter("")
        return None

    def handle_filter_key(self, key: str) -> Effect | None:
        if key == "esc":
            self.state.mode = MODE_BROWSE
            self.state.filter_error = ""
            self.state.filter_query = self.state.committed_filter
            self.apply_filter(self.state.committed_filter)
            return None
        if key == "enter":
            pattern = self.state.filter_query
            if not self.apply_filter(pattern):
                return None
            self.state.committed_filter = pattern
            self.state.mode = MODE_BROWSE
            return None
        if key == "ctrl+c":
            return Quit()
        if key == "backspace":
            if self.state.filter_query:
                self.state.filter_query = self.state.filter_query[:-1]
                self.apply_filter(self.state.filter_query)
            return None
        if len(key) == 1 and key.isprintable():
            if len(self.state.filter_query) < FILTER_QUERY_MAX:
                self.state.filter_query += key
                self.apply_filter(self.state.filter_query)
        return None
