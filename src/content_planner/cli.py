#!/usr/bin/env python3
"""
Command line entrypoint.

Usage:
  content-planner serve [--host HOST] [--port PORT]
  content-planner init-db
  content-planner seed [--url URL]
  content-planner show [--url URL] [--mode list|calendar|category] [--search TEXT]
                       [--category C] [--priority P] [--funnel F] [--status S]
  content-planner set-status ID STATUS [--url URL]

Reads DATABASE_URL / PORT etc. from the environment (and .env if present).
"""
from __future__ import annotations

import argparse
import dataclasses
import os
import sys
from typing import List, Optional

from content_planner.config import Settings, configure_logging
from content_planner.schemas import STATUSES
from content_planner.services.store import ArticleStore, StoreState
from content_planner.view.planning import PlanningView
from content_planner.view.render import ViewMode, ViewModel
from content_planner.view.sources import HttpSource


def format_view(vm: ViewModel) -> str:
    """Plain-text rendering of a view model, one line per article."""
    if vm.empty:
        return vm.message or ""
    lines: List[str] = []
    for group in vm.groups:
        header = group.label
        if group.quarter is not None:
            header += f"  (Q{group.quarter})"
        if vm.mode is ViewMode.CATEGORY:
            header += f"  [{group.count} articles]"
        lines.append(header)
        for row in group.rows:
            r = row.record
            lines.append(
                f"  {r.article_id:<6} {r.status:<12} {r.priority or '-':<7} "
                f"wk{r.week if r.week is not None else '-':<3} {r.title}"
            )
    lines.append(f"{vm.total} article(s)")
    return "\n".join(lines)


def _default_url(settings: Settings) -> str:
    return os.getenv("PLANNER_URL", f"http://localhost:{settings.port}")


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    from content_planner.main import run

    overrides = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    run(dataclasses.replace(settings, **overrides))
    return 0


def cmd_init_db(args: argparse.Namespace, settings: Settings) -> int:
    store = ArticleStore.from_settings(settings)
    state = store.initialize()
    store.dispose()
    print(f"store: {state.value}")
    return 0 if state is StoreState.READY else 1


def cmd_seed(args: argparse.Namespace, settings: Settings) -> int:
    with HttpSource(args.url or _default_url(settings)) as source:
        view = PlanningView(source)
        view.load()
    if view.using_fallback:
        print("Store unavailable; nothing was seeded.")
        return 1
    print(f"Store holds {len(view.all_records)} article(s).")
    return 0


def cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    with HttpSource(args.url or _default_url(settings)) as source:
        view = PlanningView(source, mode=args.mode)
        view.load()
        view.refresh_stats()
    view.set_filter(
        search=args.search or "",
        category=args.category,
        priority=args.priority,
        funnel=args.funnel,
        status=args.status,
    )
    print(format_view(view.render()))
    s = view.stats
    print(
        f"total={s.total} high={s.high_priority} medium={s.medium_priority} low={s.low_priority}"
        + ("  (offline fallback)" if view.using_fallback else "")
    )
    return 0


def cmd_set_status(args: argparse.Namespace, settings: Settings) -> int:
    with HttpSource(args.url or _default_url(settings)) as source:
        view = PlanningView(source)
        view.load()
        ok = view.change_status(args.id, args.status)
    if not ok:
        print(f"Failed to update article {args.id}.")
        return 1
    print(f"Article {args.id} is now {args.status}.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="content-planner", description="Content planning dashboard")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("serve", help="Run the API and dashboard")
    p.add_argument("--host", default=None)
    p.add_argument("--port", type=int, default=None)
    p.set_defaults(func=cmd_serve)

    p = sub.add_parser("init-db", help="Create the schema and check connectivity")
    p.set_defaults(func=cmd_init_db)

    for name, func, help_text in (
        ("seed", cmd_seed, "Seed an empty store with the built-in plan"),
        ("show", cmd_show, "Print a filtered view"),
        ("set-status", cmd_set_status, "Change one article's status"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--url", default=None, help="Server base URL (default: PLANNER_URL or localhost:PORT)")
        p.set_defaults(func=func)
        if name == "show":
            p.add_argument("--mode", choices=[m.value for m in ViewMode], default=ViewMode.LIST.value)
            p.add_argument("--search", default=None)
            p.add_argument("--category", default=None)
            p.add_argument("--priority", default=None)
            p.add_argument("--funnel", default=None)
            p.add_argument("--status", default=None)
        if name == "set-status":
            p.add_argument("id", type=int)
            p.add_argument("status", choices=STATUSES)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
