from __future__ import annotations

from dataclasses import dataclass

from sshpick.models import MODE_FILTER, Host, SelectionState

TITLE = "Pick an SSH host"
HELP = "Use h/j/k/l or arrows | / filter (regex) | e edit in $EDITOR | n notes | Enter connect | q quit"

STYLE_TITLE = "title"
STYLE_HELP = "help"
STYLE_ITEM = "item"
STYLE_SELECTED = "selected"
STYLE_ERROR = "error"


@dataclass(frozen=True)
class Line:
    text: str
    style: str = STYLE_ITEM


def format_host_row(host: Host) -> str:
    parts = [
        f"{host.alias:<15}",
        f"Hostname: {host.hostname:<25}",
    ]
    if host.port:
        parts.append(f"Port: {host.port:<5}")
    parts.append(f"User: {host.user:<10}")
    if host.resolved_address:
        parts.append(f"IP: {host.resolved_address}")
    if len(host.local_forwards) == 1:
        parts.append(host.local_forwards[0])
    elif len(host.local_forwards) > 1:
        parts.append("LocalForward: " + ",".join(host.local_forwards))
    return "  ".join(parts)


def note_lines(host: Host) -> list[Line]:
    return [Line(f"    > {note}", STYLE_HELP) for note in host.notes if note]


def host_block(state: SelectionState, idx: int) -> list[Line]:
    host = state.visible_hosts[idx]
    row = format_host_row(host)
    if idx == state.cursor:
        lines = [Line(f"> {row}", STYLE_SELECTED)]
    else:
        lines = [Line(f"  {row}", STYLE_ITEM)]
    if state.show_notes:
        lines.extend(note_lines(host))
    return lines


def header_lines(state: SelectionState) -> list[Line]:
    lines = [Line(TITLE, STYLE_TITLE), Line(HELP, STYLE_HELP)]
    if state.local_forward:
        lines.append(Line(f"Forwarding: {state.local_forward}", STYLE_HELP))
    if state.committed_filter and state.mode != MODE_FILTER:
        lines.append(Line(f"Filter: /{state.committed_filter}/  (press / to edit, Backspace to clear)", STYLE_HELP))
    if state.mode == MODE_FILTER:
        lines.append(Line(f"/ {state.filter_query}  (Enter to apply, Esc to cancel)", STYLE_HELP))
        if state.filter_error:
            lines.append(Line(f"Invalid regex: {state.filter_error}", STYLE_ERROR))
    lines.append(Line(""))
    return lines


def footer_lines(state: SelectionState) -> list[Line]:
    if not state.error:
        return []
    return [Line(""), Line(state.error, STYLE_ERROR)]


def empty_message(state: SelectionState) -> Line:
    if state.committed_filter.strip():
        return Line("No hosts match current filter", STYLE_ERROR)
    return Line(f"No hosts found in {state.config_path or '~/.ssh/config'}", STYLE_ERROR)


def ensure_visible(state: SelectionState, rows: int) -> None:
    """Move ``top_index`` so the cursor's block fits in ``rows`` body lines."""
    if not state.visible_hosts:
        state.top_index = 0
        return
    rows = max(1, rows)
    state.top_index = min(state.top_index, len(state.visible_hosts) - 1)
    if state.cursor < state.top_index:
        state.top_index = state.cursor
        return
    while state.top_index < state.cursor:
        used = sum(len(host_block(state, i)) for i in range(state.top_index, state.cursor + 1))
        if used <= rows:
            break
        state.top_index += 1


def build_view(state: SelectionState) -> list[Line]:
    if not state.ready:
        return [Line("loading...")]

    lines = header_lines(state)
    footer = footer_lines(state)
    if not state.visible_hosts:
        return lines + [empty_message(state)] + footer

    body_rows = state.height - len(lines) - len(footer) if state.height > 0 else len(state.visible_hosts)
    ensure_visible(state, body_rows)
    body: list[Line] = []
    for idx in range(state.top_index, len(state.visible_hosts)):
        block = host_block(state, idx)
        if body and len(body) + len(block) > body_rows:
            break
        body.extend(block)
    return lines + body + footer
