from __future__ import annotations

import argparse
import curses
import locale
import logging
import os
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from sshpick.app import PickerApp
from sshpick.errors import ExecError
from sshpick.handoff import exec_ssh
from sshpick.models import Host
from sshpick.sshconfig import default_config_path, parse_ssh_config

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="sshpick: pick a host from your ssh config and connect")
    parser.add_argument(
        "-F",
        "--config",
        default="",
        help="Path to ssh config (default: ~/.ssh/config)",
    )
    parser.add_argument(
        "-L",
        "--local-forward",
        default="",
        help="Local port forward passed to ssh -L (e.g. 8080:localhost:8080)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", default="", help="Write log records to this file instead of stderr")
    return parser.parse_args(argv)


def setup_logging(verbose: bool = False, log_file: str = "") -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler = RichHandler(console=console, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def resolve_config_path(value: str) -> Path:
    if not value:
        return default_config_path()
    return Path(os.path.expanduser(value))


def load_hosts(path: Path) -> list[Host]:
    """Hosts from ``path``; a missing file yields no hosts. Other read errors exit 1."""
    try:
        return parse_ssh_config(path)
    except FileNotFoundError:
        logger.info("No ssh config at %s", path)
        return []
    except OSError as exc:
        console.print(f"[red]Error:[/red] reading config {path}: {exc}")
        raise SystemExit(1) from exc


def pick_host(hosts: list[Host], local_forward: str, config_path: str) -> Host | None:
    def wrapped(stdscr: curses.window) -> Host | None:
        app = PickerApp(stdscr=stdscr, hosts=hosts, local_forward=local_forward, config_path=config_path)
        return app.run()

    return curses.wrapper(wrapped)


def main(argv: list[str] | None = None) -> None:
    locale.setlocale(locale.LC_ALL, "")
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    config_path = resolve_config_path(args.config)
    hosts = load_hosts(config_path)
    host = pick_host(hosts, args.local_forward, str(config_path))
    if host is None or not host.alias:
        return

    try:
        status = exec_ssh(host.alias, args.local_forward)
    except ExecError as exc:
        console.print(f"[red]Error:[/red] ssh: {exc.reason}")
        raise SystemExit(1) from exc
    if status != 0:
        sys.exit(status)
