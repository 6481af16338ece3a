"""
CLI tool — classify a selection and list or run its lookup actions.

Usage:
    python -m ioc_pivot 8.8.8.8
    python -m ioc_pivot "hxxps://evil[.]example/login" --json
    python -m ioc_pivot --run "Search 8.8.8.8 as a ip on Shodan"
    python -m ioc_pivot --run "Scan example.com as a domain on urlscan.io"

Scanner keys and disabled searchers come from the environment / .env
(URLSCAN_API_KEY, VIRUSTOTAL_API_KEY, HYBRID_ANALYSIS_API_KEY, DISABLED_SEARCHERS).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from ioc_pivot.config import get_settings
from ioc_pivot.dispatcher import Dispatcher
from ioc_pivot.models.schemas import ApiKeys
from ioc_pivot.selector import Selector


def _build_dispatcher(opened: list[str], errors: list[str]) -> Dispatcher:
    settings = get_settings()
    return Dispatcher(
        open_url=opened.append,
        notify=errors.append,
        load_searcher_states=lambda: settings.searcher_states,
        load_api_keys=lambda: ApiKeys.from_settings(settings),
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="ioc_pivot",
        description="Find lookup actions for an indicator (IP, domain, URL, hash, ...)",
    )
    parser.add_argument("text", nargs="?", help="Selected text to classify")
    parser.add_argument("--run", "-r", metavar="ID", help="Execute a menu entry id")
    parser.add_argument("--json", "-j", action="store_true", help="Output JSON instead of text")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    args = parser.parse_args(argv)

    settings = get_settings()
    level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    )

    if not args.text and not args.run:
        parser.error("either text or --run is required")

    opened: list[str] = []
    errors: list[str] = []
    dispatcher = _build_dispatcher(opened, errors)

    # ── Execute a chosen entry ──
    if args.run:
        asyncio.run(dispatcher.handle_click(args.run))
        if args.json:
            print(json.dumps({"urls": opened, "errors": errors}, indent=2))
        else:
            for url in opened:
                print(url)
            for message in errors:
                print(f"❌ {message}", file=sys.stderr)
        return 1 if errors else 0

    # ── List entries for a selection ──
    selector = Selector(args.text)
    entries = dispatcher.build_menu(args.text)
    if args.json:
        print(json.dumps(
            {
                "query": selector.query,
                "type": selector.type.value if selector.type else None,
                "entries": [e.model_dump() for e in entries],
            },
            indent=2,
        ))
        return 0

    kind = selector.type.value if selector.type else "text"
    print(f"\n  {selector.query}  →  {kind}\n")
    if not entries:
        print("  (no actions)")
    for entry in entries:
        print(f"  {entry.title:<50} {entry.id}")
    return 0
