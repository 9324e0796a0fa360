from __future__ import annotations

import re

from sshpick.errors import PatternError
from sshpick.models import Host


def host_matches(host: Host, regex: re.Pattern[str]) -> bool:
    for value in (host.alias, host.hostname, host.resolved_address, host.user, host.port):
        if regex.search(value):
            return True
    if any(regex.search(port) for port in host.local_forwards):
        return True
    return any(regex.search(note) for note in host.notes)


def filter_hosts(hosts: list[Host], pattern: str) -> list[Host]:
    """Hosts with any searchable field matching ``pattern``, in input order.

    A blank pattern returns ``hosts`` itself. Raises :class:`PatternError` if
    the pattern does not compile.
    """
    pattern = pattern.strip()
    if not pattern:
        return hosts
    try:
        regex = re.compile(pattern)
    except re.error as exc:
        raise PatternError(pattern, str(exc)) from exc
    return [h for h in hosts if host_matches(h, regex)]
