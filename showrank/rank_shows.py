#!/usr/bin/env python
"""
rank_shows.py – rank a show collection from the terminal

Usage:
    showrank rank                      # interactive: 1 / 2 pick, s skip, q quit
    showrank rank --focus --limit 10   # work on shows with few comparisons first
    showrank next --pool festival
    showrank board --html outputs/rankings.html
    showrank status
    showrank add my-new-show --pool set
"""

from __future__ import annotations

import argparse
import pathlib
import random
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from showrank.core.config import RankingConfig, load_config
from showrank.core.html_generation import generate_leaderboard_html
from showrank.core.models import Item
from showrank.core.session import RankingSession
from showrank.core.store import CollectionStore
from showrank.utils.io_helpers import ensure_utf8_windows, write_utf8
from showrank.utils.logging_helper import get_logger
from showrank.utils.paths import DEFAULT_COLLECTION

console = Console()
log = get_logger()

CHOICES = ["1", "2", "s", "q"]


def open_session(store: CollectionStore, config: RankingConfig, pool: Optional[str],
                 rng: Optional[random.Random] = None) -> RankingSession:
    return RankingSession(
        store.items,
        store.ratings.values(),
        store.comparisons,
        config=config,
        rng=rng,
        persist=store.save_decision,
        pool=pool,
    )


def show_pair(session: RankingSession) -> None:
    first, second = session.current
    console.print(Panel.fit(
        f"[bold cyan]1[/] {escape(first.label)}\n[bold magenta]2[/] {escape(second.label)}",
        title=f"Which was better? ({session.pool})",
    ))


def print_board(session: RankingSession) -> None:
    table = Table(title=f"Rankings – {session.pool}")
    table.add_column("#", justify="right")
    table.add_column("Show")
    table.add_column("Elo", justify="right")
    table.add_column("Comparisons", justify="right")
    for rank, (item, record) in enumerate(session.leaderboard(), 1):
        table.add_row(str(rank), escape(item.label), f"{record.score:.0f}", str(record.comparisons_seen))
    console.print(table)


def cmd_rank(session: RankingSession, focus: Optional[bool], limit: int) -> int:
    if focus is None:
        focus = session.config.focus_under_ranked
    decided = 0
    while limit <= 0 or decided < limit:
        if session.next_pair(focus_under_ranked=focus) is None:
            if focus:
                console.print("[green]Every show has its first few comparisons.[/]")
            else:
                console.print("[green]That's all for now! Your rankings are up to date.[/]")
            break
        show_pair(session)
        answer = Prompt.ask("Pick", choices=CHOICES, default="s")
        if answer == "q":
            session.pass_pair()
            break
        if answer == "s":
            session.skip()
        else:
            first, second = session.current
            session.record(first.id if answer == "1" else second.id)
        decided += 1

    if session.pending_writes:
        console.print(f"[yellow]⚠ {len(session.pending_writes)} decision(s) not saved yet, retrying…[/]")
        session.flush_pending()
        if session.pending_writes:
            console.print("[red]✗ Some decisions could not be saved; see the session log[/]")
            return 1
    console.print(f"[dim]{decided} decision(s) this session[/]")
    return 0


def cmd_next(session: RankingSession, focus: Optional[bool]) -> int:
    pair = session.next_pair(focus_under_ranked=focus)
    if pair is None:
        console.print("Nothing left to compare.")
    else:
        console.print(f"{escape(pair[0].label)}  vs  {escape(pair[1].label)}")
    return 0


def cmd_board(session: RankingSession, html_out: Optional[pathlib.Path]) -> int:
    print_board(session)
    if html_out is not None:
        html = generate_leaderboard_html(session.pool, session.leaderboard(),
                                         session.progress(), session.is_complete())
        write_utf8(html_out, html)
        log.info("Saved leaderboard → %s", html_out)
    return 0


def cmd_status(session: RankingSession) -> int:
    verdict = "[green]complete[/]" if session.is_complete() else "[yellow]in progress[/]"
    console.print(
        f"Pool [bold]{session.pool}[/]: {len(session.items)} shows, "
        f"{len(session.comparisons)} comparisons, {session.progress():.0%} – {verdict}"
    )
    return 0


def cmd_add(store: CollectionStore, config: RankingConfig, item_id: str, pool: str,
            title: Optional[str]) -> int:
    item = Item(item_id, pool, {"title": title} if title else {})
    session = RankingSession(store.items, store.ratings.values(), store.comparisons,
                             config=config, pool=pool)
    anchor = session.add_item(item)
    store.add_item(item)
    store.save()
    if anchor is None:
        console.print(f"Added {escape(item.label)}; nothing to compare it with yet.")
    else:
        console.print(f"Added {escape(item.label)}. Compare it first with [bold]{escape(anchor.label)}[/].")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="showrank", description="Pairwise ranking for your shows")
    ap.add_argument("--data", type=pathlib.Path, default=DEFAULT_COLLECTION,
                    help="Collection JSON file")
    ap.add_argument("--config", type=pathlib.Path, default=None,
                    help="YAML file with ranking settings")
    ap.add_argument("--seed", type=int, default=None,
                    help="Seed for the randomised pick among top pairs")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("rank", help="Compare shows interactively")
    p.add_argument("--pool", default=None)
    p.add_argument("--focus", action="store_true", help="Prioritise shows with few comparisons")
    p.add_argument("--limit", type=int, default=0, help="Stop after N decisions (0 = no limit)")

    p = sub.add_parser("next", help="Print the next pair without deciding it")
    p.add_argument("--pool", default=None)
    p.add_argument("--focus", action="store_true")

    p = sub.add_parser("board", help="Show the leaderboard")
    p.add_argument("--pool", default=None)
    p.add_argument("--html", type=pathlib.Path, default=None, help="Also write an HTML report")

    p = sub.add_parser("status", help="Progress and completion for a pool")
    p.add_argument("--pool", default=None)

    p = sub.add_parser("add", help="Add a show and suggest its first comparison")
    p.add_argument("id")
    p.add_argument("--pool", default=None)
    p.add_argument("--title", default=None)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ensure_utf8_windows()
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
        store = CollectionStore(args.data).load()
        rng = random.Random(args.seed) if args.seed is not None else None

        if args.command == "add":
            return cmd_add(store, config, args.id, args.pool or config.default_pool, args.title)

        session = open_session(store, config, args.pool, rng)
        if args.command == "rank":
            return cmd_rank(session, args.focus or None, args.limit)
        if args.command == "next":
            return cmd_next(session, args.focus or None)
        if args.command == "board":
            return cmd_board(session, args.html)
        return cmd_status(session)
    except (ValueError, FileNotFoundError, RuntimeError) as e:
        console.print(f"[red]✗ {escape(str(e))}[/]")
        log.error("%s failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
