from __future__ import annotations

from dataclasses import dataclass, field

MODE_BROWSE = "browse"
MODE_FILTER = "filter"

FILTER_QUERY_MAX = 256


@dataclass
class Host:
    alias: str
    hostname: str = ""
    resolved_address: str = ""
    user: str = ""
    port: str = ""
    local_forwards: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    source_path: str = ""
    source_line: int = 0


@dataclass(frozen=True)
class Key:
    name: str


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class EditorFinished:
    error: str | None = None


Event = Key | Resize | EditorFinished


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class LaunchEditor:
    argv: tuple[str, ...]


Effect = Quit | LaunchEditor


@dataclass
class SelectionState:
    all_hosts: list[Host] = field(default_factory=list)
    visible_hosts: list[Host] = field(default_factory=list)
    cursor: int = 0
    top_index: int = 0
    mode: str = MODE_BROWSE
    filter_query: str = ""
    committed_filter: str = ""
    filter_error: str = ""
    show_notes: bool = False
    chosen_host: Host | None = None
    error: str = ""
    ready: bool = False
    width: int = 0
    height: int = 0
    local_forward: str = ""
    config_path: str = ""

    @classmethod
    def from_hosts(cls, hosts: list[Host], local_forward: str = "", config_path: str = "") -> SelectionState:
        return cls(
            all_hosts=hosts,
            visible_hosts=hosts,
            local_forward=local_forward,
            config_path=config_path,
        )

    def current_host(self) -> Host | None:
        if not self.visible_hosts:
            return None
        return self.visible_hosts[self.cursor]
