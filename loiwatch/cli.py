"""
CLI (Command Line Interface).

This module provides the terminal commands, e.g.:

    loiwatch sync [--dry-run]
    loiwatch parse page.html
    loiwatch diff old.json new.json
    loiwatch messages outbox.jsonl

Note:
- `sync` is the scheduled job: fetch, diff, publish, save snapshot
- the other commands work on local files and never touch the network
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

import requests
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from loiwatch.config import Config
from loiwatch.diff import diff_indexes
from loiwatch.errors import LoiWatchError
from loiwatch.index import build_index
from loiwatch.message import format_change_message
from loiwatch.model import ChangeEvent, ChangeType, index_to_dict
from loiwatch.parse import DEFAULT_CONTENT_SELECTOR, parse_loi_page
from loiwatch.storage import load_snapshot
from loiwatch.sync import run_sync

console = Console()

CHANGE_STYLES = {
    ChangeType.ADDED: "green",
    ChangeType.UPDATED: "yellow",
    ChangeType.REMOVED: "red",
}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _print_changes(changes: list[ChangeEvent]) -> None:
    """
    Render change events as a table (or a short note if there are none).
    """
    if not changes:
        console.print("No changes.")
        return

    table = Table(title=f"Changes ({len(changes)})", box=box.SIMPLE)
    table.add_column("Change")
    table.add_column("Group")
    table.add_column("Location")
    table.add_column("Day")
    table.add_column("Times")

    for ev in changes:
        style = CHANGE_STYLES[ev.change_type]
        loc = ev.location
        # page text is not rich markup
        cells = [escape(x) for x in (ev.group, loc.location, loc.day, loc.times)]
        table.add_row(f"[{style}]{ev.change_type.value}[/]", *cells)

    console.print(table)


def _cmd_sync(args: argparse.Namespace) -> int:
    defaults = Config()
    config = Config(
        page_url=args.url or defaults.page_url,
        snapshot_path=args.snapshot or defaults.snapshot_path,
        outbox_path=args.outbox or defaults.outbox_path,
        webhook_url=args.webhook,
        content_selector=args.selector,
        max_workers=args.workers,
    )

    result = run_sync(config, dry_run=args.dry_run)
    _print_changes(result.changes)
    return 0


def _cmd_parse(args: argparse.Namespace) -> int:
    """
    Parse a saved HTML page and print (or write) its index as JSON.
    """
    html = Path(args.html_file).read_text(encoding="utf-8")
    index = build_index(parse_loi_page(html, args.selector))
    payload = json.dumps(index_to_dict(index), indent=2, ensure_ascii=False)

    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload, encoding="utf-8")
        console.print(f"Index written to: {out}")
    else:
        print(payload)
    return 0


def _cmd_diff(args: argparse.Namespace) -> int:
    baseline = load_snapshot(args.baseline)
    current = load_snapshot(args.current)
    _print_changes(diff_indexes(baseline, current))
    return 0


def _load_outbox(path: Path) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line:
            out.append(json.loads(line))
    return out


def _cmd_messages(args: argparse.Namespace) -> int:
    """
    Render every queued change in an outbox file as message text.
    """
    path = Path(args.outbox)
    if not path.exists():
        console.print(f"Outbox not found: {path}")
        return 1

    for i, data in enumerate(_load_outbox(path)):
        if i:
            print()
        print(format_change_message(ChangeEvent.from_dict(data), link=args.link, max_length=args.max_length))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    defaults = Config()
    parser = argparse.ArgumentParser(prog="loiwatch", description="Locations of interest change tracker")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_sync = sub.add_parser("sync", help="Fetch the page, publish changes, save snapshot")
    p_sync.add_argument("--url", type=str, default=None, help="Page URL to watch")
    p_sync.add_argument("--snapshot", type=Path, default=None, help="Snapshot JSON file")
    p_sync.add_argument("--outbox", type=Path, default=None, help="Outbox file for change messages")
    p_sync.add_argument("--webhook", type=str, default=None, help="POST changes to this URL instead of the outbox")
    p_sync.add_argument("--selector", type=str, default=DEFAULT_CONTENT_SELECTOR, help="CSS selector of the content region")
    p_sync.add_argument("--workers", type=int, default=defaults.max_workers, help="Parallel publish workers")
    p_sync.add_argument("--dry-run", action="store_true", help="Show changes without publishing or saving")

    p_parse = sub.add_parser("parse", help="Parse a saved HTML page into index JSON")
    p_parse.add_argument("html_file", type=str, help="HTML file")
    p_parse.add_argument("--selector", type=str, default=DEFAULT_CONTENT_SELECTOR, help="CSS selector of the content region")
    p_parse.add_argument("--out", type=str, default=None, help="Write JSON to this file instead of stdout")

    p_diff = sub.add_parser("diff", help="Show changes between two snapshot files")
    p_diff.add_argument("baseline", type=str, help="Older snapshot JSON")
    p_diff.add_argument("current", type=str, help="Newer snapshot JSON")

    p_messages = sub.add_parser("messages", help="Render queued changes as message text")
    p_messages.add_argument("outbox", type=str, help="Outbox file (one JSON change per line)")
    p_messages.add_argument("--link", type=str, default=defaults.link_url, help="Reference link appended to each message")
    p_messages.add_argument("--max-length", type=int, default=defaults.message_max_length, help="Maximum message length")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    handlers = {
        "sync": _cmd_sync,
        "parse": _cmd_parse,
        "diff": _cmd_diff,
        "messages": _cmd_messages,
    }
    handler = handlers.get(args.command)
    if handler is None:
        raise SystemExit(2)

    try:
        code = handler(args)
    except (LoiWatchError, requests.RequestException, OSError, ValueError) as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1)

    raise SystemExit(code)
