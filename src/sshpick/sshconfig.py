"""Streaming parser for OpenSSH client configuration files.

Only ``Host``, ``Hostname``, ``User``, ``Port`` and ``LocalForward`` are
interpreted. Every other directive is tokenized and then ignored. Comment
text met while a block is being read becomes a note on each alias the
block expands to.
"""

from __future__ import annotations

import ipaddress
import logging
import socket
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from sshpick.models import Host

logger = logging.getLogger(__name__)

WILDCARD_CHARS = frozenset("*?!")
BLOCK_FIELDS = ("hostname", "user", "port")

Resolver = Callable[[str], str]


def default_config_path() -> Path:
    return Path.home() / ".ssh" / "config"


def resolve_address(hostname: str) -> str:
    """Best-effort address for ``hostname``; empty string when unresolvable."""
    if not hostname:
        return ""
    try:
        return str(ipaddress.ip_address(hostname))
    except ValueError:
        pass
    try:
        results = socket.getaddrinfo(hostname, None)
    except (OSError, UnicodeError, ValueError) as exc:
        logger.debug("Could not resolve %s: %s", hostname, exc)
        return ""
    if not results:
        return ""
    return str(results[0][4][0])


def extract_local_forward_port(arg: str) -> str:
    """Return the bind port of a ``LocalForward`` bind spec.

    ``[::1]:2222`` gives ``2222``, ``8080:localhost:9090`` gives ``9090`` and a
    bare ``8080`` is returned as is.
    """
    arg = arg.strip()
    if not arg:
        return ""
    idx = arg.find("]:")
    if idx >= 0 and idx + 2 < len(arg):
        return arg[idx + 2 :].strip()
    idx = arg.rfind(":")
    if idx >= 0 and idx + 1 < len(arg):
        return arg[idx + 1 :].strip()
    return arg


def is_wildcard(alias: str) -> bool:
    return any(ch in WILDCARD_CHARS for ch in alias)


def split_comment(line: str) -> tuple[str, str]:
    """Split a stripped line at its first ``#`` into (directive, comment)."""
    idx = line.find("#")
    if idx < 0:
        return line, ""
    return line[:idx].strip(), line[idx + 1 :].strip()


@dataclass
class BlockAccumulator:
    aliases: list[str] = field(default_factory=list)
    fields: dict[str, str] = field(default_factory=dict)
    local_forwards: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    host_line: int = 0

    def is_open(self) -> bool:
        return bool(self.aliases)

    def apply(self, key: str, parts: list[str], value: str) -> None:
        if key in BLOCK_FIELDS:
            self.fields[key] = value
        elif key == "localforward":
            port = extract_local_forward_port(parts[1])
            if port:
                self.local_forwards.append(port)

    def materialize(self, source_path: str, resolve: Resolver) -> list[Host]:
        hosts: list[Host] = []
        for alias in self.aliases:
            if is_wildcard(alias):
                logger.debug("Skipping pattern alias %s (line %d)", alias, self.host_line)
                continue
            hostname = self.fields.get("hostname", "")
            hosts.append(
                Host(
                    alias=alias,
                    hostname=hostname,
                    resolved_address=resolve(hostname),
                    user=self.fields.get("user", ""),
                    port=self.fields.get("port", ""),
                    local_forwards=list(self.local_forwards),
                    notes=list(self.notes),
                    source_path=source_path,
                    source_line=self.host_line,
                )
            )
            logger.debug("Parsed host %s from %s:%d", alias, source_path, self.host_line)
        return hosts


def _commit(block: BlockAccumulator, source_path: str, resolve: Resolver, out: list[Host]) -> BlockAccumulator:
    # Text seen before the first Host line stays pending and lands in the first block.
    if not block.is_open():
        return block
    out.extend(block.materialize(source_path, resolve))
    return BlockAccumulator()


def parse_ssh_config(path: str | Path, resolve: Resolver = resolve_address) -> list[Host]:
    """Parse ``path`` into one :class:`Host` per non-pattern alias.

    Raises ``FileNotFoundError`` when the file is missing and ``OSError`` for
    any other read failure.
    """
    source_path = str(path)
    hosts: list[Host] = []
    block = BlockAccumulator()

    with open(path, encoding="utf-8", errors="replace") as f:
        for line_no, raw in enumerate(f, start=1):
            line = raw.strip()
            if not line:
                continue
            if line.startswith("#"):
                note = line[1:].strip()
                if note:
                    block.notes.append(note)
                continue

            line, comment = split_comment(line)
            # Pending notes are committed with the block, so a comment trailing
            # a Host line lands on the block that line closes.
            if comment:
                block.notes.append(comment)
            parts = line.split()
            if len(parts) < 2:
                continue

            key = parts[0].lower()
            if key == "host":
                block = _commit(block, source_path, resolve, hosts)
                block.aliases = parts[1:]
                block.host_line = line_no
            else:
                block.apply(key, parts, line[len(parts[0]) :].strip())

    _commit(block, source_path, resolve, hosts)
    logger.debug("Loaded %d hosts from %s", len(hosts), source_path)
    return hosts
