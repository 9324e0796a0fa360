from __future__ import annotations


class SshPickError(Exception):
    """Base class for errors raised by sshpick."""


class PatternError(SshPickError):
    """A filter pattern failed to compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(reason)
        self.pattern = pattern
        self.reason = reason


class NoHostsError(SshPickError):
    """Confirm was pressed while the visible list was empty."""

    def __init__(self, message: str = "no hosts to select") -> None:
        super().__init__(message)


class EditorLaunchError(SshPickError):
    """The external editor could not be started or exited abnormally."""


class ExecError(SshPickError):
    """Handing the terminal over to ssh failed."""

    def __init__(self, argv: list[str], reason: str) -> None:
        super().__init__(f"{' '.join(argv)}: {reason}")
        self.argv = argv
        self.reason = reason
