from __future__ import annotations

import logging
import os
import subprocess

from sshpick.errors import ExecError

logger = logging.getLogger(__name__)


def build_ssh_argv(alias: str, local_forward: str = "") -> list[str]:
    argv = ["ssh"]
    if local_forward:
        argv += ["-L", local_forward]
    argv.append(alias)
    return argv


def which_executable(name: str) -> str | None:
    for p in os.environ.get("PATH", "").split(os.pathsep):
        candidate = os.path.join(p, name)
        if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
            return candidate
    return None


def run_ssh_child(argv: list[str]) -> int:
    logger.debug("Running %s as a child process", argv)
    try:
        result = subprocess.run(argv, check=False, stdin=None, stdout=None, stderr=None)
    except OSError as exc:
        raise ExecError(argv, str(exc)) from exc
    return result.returncode


def exec_ssh(alias: str, local_forward: str = "") -> int:
    """Replace this process with ssh, or run it as a child when exec is unavailable.

    Only returns when the fallback child ran; the value is its exit status.
    """
    argv = build_ssh_argv(alias, local_forward)
    binary = which_executable("ssh")
    if binary is None:
        raise ExecError(argv, "ssh binary not found in PATH")

    if hasattr(os, "execv"):
        logger.debug("Exec %s", argv)
        try:
            os.execv(binary, argv)
        except OSError as exc:
            logger.warning("exec of %s failed (%s); falling back to a child process", binary, exc)

    return run_ssh_child([binary, *argv[1:]])
