"""CLI entrypoint for the paper bot: run the Slack app or query the catalog locally."""

from __future__ import annotations

import argparse
import logging
import os

from dotenv import load_dotenv

from bot import handle_message
from catalog_feed import CatalogRefresher, bootstrap_catalog, load_from_file
from engine import lookup, search
from render import render_result
from store import SnapshotStore


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Look up and search WG21 papers")
    parser.add_argument(
        "--index-file",
        default=None,
        help="Load the catalog from this local JSON file instead of fetching it",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("serve", help="Run the Slack app (default)")

    lookup_parser = subparsers.add_parser("lookup", help="Look up one paper by identifier")
    lookup_parser.add_argument("paper_id")

    search_parser = subparsers.add_parser("search", help="Free-text search, newest first")
    search_parser.add_argument("--type", default=None, help="Only return documents of this type (e.g. paper, issue)")
    search_parser.add_argument("query", nargs="+")

    message_parser = subparsers.add_parser("message", help="Dispatch a chat message as the bot would")
    message_parser.add_argument("text")

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "serve"
    return args


def load_store(index_file: str | None) -> SnapshotStore:
    store = SnapshotStore()
    if index_file:
        if not load_from_file(store, index_file):
            raise SystemExit(f"Could not load catalog from {index_file}")
    elif not bootstrap_catalog(store):
        raise SystemExit("Could not load the paper catalog")
    return store


def serve(store: SnapshotStore, refresh: bool) -> None:
    """Start the refresher (unless the catalog came from a pinned file) and the Slack app."""
    from slack_app import build_app  # noqa: PLC0415

    if refresh:
        CatalogRefresher(store).start()

    app = build_app(store)
    port = int(os.getenv("PORT", "3000"))
    logging.info("Paperbot is running on port %s", port)
    app.start(port=port)


def main(argv: list[str] | None = None) -> None:
    """Initialize config and run the selected command."""
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    args = parse_args(argv)
    store = load_store(args.index_file)
    snapshot = store.current()

    if args.command == "lookup":
        print(render_result(lookup(snapshot, args.paper_id), snapshot.catalog))
    elif args.command == "search":
        print(render_result(search(snapshot, " ".join(args.query), args.type), snapshot.catalog))
    elif args.command == "message":
        # Behaves like a direct message, so no mention is needed.
        print(handle_message(args.text, None, "im", snapshot) or "")
    else:
        serve(store, refresh=args.index_file is None)


if __name__ == "__main__":
    main()
