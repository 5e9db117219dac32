"""
CLI (Command Line Interface).

Quick terminal commands for checking the conference catalog, e.g.:

    conftrip lookup <query>
    conftrip status <query> [--now YYYY-MM-DD]
    conftrip list
    conftrip detect <text>
    conftrip live <name>

Note:
- The catalog path can be overridden via CONFTRIP_CATALOG_PATH or --catalog
- This CLI is intentionally simple and prints plain text
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime
from pathlib import Path

from conftrip.advisory import catalog_summary, conference_warning, visa_required
from conftrip.catalog import Catalog
from conftrip.config import ConfigError, Settings, get_settings
from conftrip.dates import classify
from conftrip.live import format_live_context, search_conference_info
from conftrip.matching import detect_mention, lookup
from conftrip.model import CatalogEntry, CatalogError
from conftrip.resolver import ConferenceResolver


def _print_entry(entry: CatalogEntry) -> None:
    loc = entry.location
    place = ", ".join(x for x in (loc.city, loc.state, loc.country) if x)
    airports = loc.airport + (f" / {loc.airport_alt}" if loc.airport_alt else "")

    print(f"{entry.name} [{entry.slug}]")
    print(f"  Dates    : {entry.dates}")
    print(f"  Location : {place} ({airports})")
    if loc.venue:
        print(f"  Venue    : {loc.venue}")
    if entry.recommended_arrival or entry.recommended_departure:
        print(f"  Stay     : {entry.recommended_arrival} -> {entry.recommended_departure}")
    if entry.visa_notes:
        print(f"  Visa     : {entry.visa_notes}")
    if entry.website:
        print(f"  Website  : {entry.website}")


def _parse_now(value: str) -> datetime:
    # argparse turns ArgumentTypeError into a usage error
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def _cmd_lookup(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    Resolve a query and print the matching conference.
    """
    query = (args.query or "").strip()
    if not query:
        print("Please provide a conference name or slug.")
        return 1

    entry = lookup(catalog, query)
    if entry is None:
        print("No match.")
        return 0

    _print_entry(entry)
    return 0


def _cmd_status(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    Print upcoming / ongoing / past for the matched conference.
    """
    query = (args.query or "").strip()
    if not query:
        print("Please provide a conference name or slug.")
        return 1

    entry = lookup(catalog, query)
    if entry is None:
        print("No match.")
        return 0

    now = args.now
    status = classify(entry, now)
    print(f"{entry.name} ({entry.dates}): {status.value}")

    warning = conference_warning(entry, now)
    if warning:
        print(warning)

    needs_visa = visa_required(entry.visa_notes)
    if needs_visa is not None:
        print(f"Visa required (US passport): {'yes' if needs_visa else 'no'}")
    return 0


def _cmd_list(args: argparse.Namespace, catalog: Catalog) -> int:
    summary = catalog_summary(catalog)
    if not summary:
        print("Catalog is empty.")
        return 0
    print(summary)
    return 0


def _cmd_detect(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    Detect a conference mention in free text (e.g. a tweet).
    """
    entry = detect_mention(catalog, args.text)
    if entry is None:
        print("No conference mentioned.")
        return 0
    print(f"{entry.slug} | {entry.name}")
    return 0


def _cmd_live(args: argparse.Namespace, catalog: Catalog, settings: Settings) -> int:
    """
    Resolve with web-search fallback for unknown or TBC conferences.
    """
    name = (args.name or "").strip()
    if not name:
        print("Please provide a conference name.")
        return 1

    resolver = ConferenceResolver(
        catalog, live_search=lambda q: search_conference_info(q, settings=settings)
    )
    res = resolver.resolve(name)
    if res.live is not None:
        print(format_live_context(res.live))
        return 0
    if res.entry is not None:
        _print_entry(res.entry)
        return 0

    print(f"{datetime.now().year} dates not yet announced for {name!r}.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="conftrip", description="Conference catalog CLI")
    parser.add_argument("--catalog", type=Path, default=None, help="Path to a conferences JSON file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_lookup = sub.add_parser("lookup", help="Find a conference by slug, name or keywords")
    p_lookup.add_argument("query", type=str, help="Slug, name or keywords (e.g. 'token2049 singapore')")

    p_status = sub.add_parser("status", help="Show whether a conference is upcoming, ongoing or past")
    p_status.add_argument("query", type=str, help="Slug, name or keywords")
    p_status.add_argument("--now", type=_parse_now, default=None, help="Reference date YYYY-MM-DD (default: today)")

    sub.add_parser("list", help="List all known conferences")

    p_detect = sub.add_parser("detect", help="Detect a conference mention in text")
    p_detect.add_argument("text", type=str, help="Free text, e.g. a tweet")

    p_live = sub.add_parser("live", help="Resolve with live web search fallback")
    p_live.add_argument("name", type=str, help="Conference name")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        settings = get_settings()
        catalog = Catalog(args.catalog or settings.catalog_path)
        catalog.load()
    except (ConfigError, CatalogError) as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    if args.command == "lookup":
        raise SystemExit(_cmd_lookup(args, catalog))
    if args.command == "status":
        raise SystemExit(_cmd_status(args, catalog))
    if args.command == "list":
        raise SystemExit(_cmd_list(args, catalog))
    if args.command == "detect":
        raise SystemExit(_cmd_detect(args, catalog))
    if args.command == "live":
        raise SystemExit(_cmd_live(args, catalog, settings))

    raise SystemExit(2)
