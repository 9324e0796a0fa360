from __future__ import annotations

import logging
import os
import shlex
from collections.abc import Callable, Mapping

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vi"

LineArgs = Callable[[str, int], list[str]]


def _code_args(path: str, line: int) -> list[str]:
    return ["--goto", f"{path}:{line}:1"]


def _vi_args(path: str, line: int) -> list[str]:
    return [f"+{line}", path]


def _nano_args(path: str, line: int) -> list[str]:
    return [f"+{line},1", path]


def _sublime_args(path: str, line: int) -> list[str]:
    return [f"{path}:{line}"]


def _plain_args(path: str, line: int) -> list[str]:
    return [path]


EDITOR_LINE_ARGS: dict[str, LineArgs] = {
    "code": _code_args,
    "code-insiders": _code_args,
    "cursor": _code_args,
    "vim": _vi_args,
    "nvim": _vi_args,
    "vi": _vi_args,
    "nano": _nano_args,
    "subl": _sublime_args,
    "sublime_text": _sublime_args,
}


def editor_argv(environ: Mapping[str, str] | None = None) -> list[str]:
    """The user's editor command split into argv ($VISUAL, then $EDITOR, then vi)."""
    env = os.environ if environ is None else environ
    value = env.get("VISUAL", "").strip() or env.get("EDITOR", "").strip() or DEFAULT_EDITOR
    try:
        argv = shlex.split(value)
    except ValueError:
        argv = [DEFAULT_EDITOR]
    if not argv:
        argv = [DEFAULT_EDITOR]
    return argv


def editor_command(path: str, line: int, environ: Mapping[str, str] | None = None) -> list[str]:
    """Command line opening ``path`` at ``line`` in the user's editor.

    The line-jump convention is picked from the editor's basename; unknown
    editors just get the path.
    """
    argv = editor_argv(environ)
    bin_, base_args = argv[0], argv[1:]
    line_args = EDITOR_LINE_ARGS.get(os.path.basename(bin_), _plain_args)
    cmd = [bin_, *base_args, *line_args(path, max(1, line))]
    logger.debug("Editor command: %s", shlex.join(cmd))
    return cmd
