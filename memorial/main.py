"""
Memorial Planner - command line entry point.

Runs the API server, and gives visitors and administrators a terminal
front end over it: browse a category, keep a wishlist, download the
service plan, and add or delete curated items.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from memorial.client.api import ContentClient
from memorial.client.browser import (
    ContentBrowser,
    ViewStatus,
    render_category,
    render_wishlist,
)
from memorial.client.local_storage import FileLocalStorage
from memorial.client.selection import AddOutcome, SelectionStore
from memorial.config import get_settings
from memorial.core.errors import ApiError, NotFoundError


def notice(message: str) -> None:
    """Show a notice to the person at the terminal."""
    print(f"! {message}")


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="memorial",
        description="Plan a funeral service from curated readings, music and prayers.",
    )
    parser.add_argument(
        "--api-url",
        default=settings.api_base_url,
        help="Base URL of the Memorial Planner API.",
    )
    parser.add_argument(
        "--storage",
        default=settings.wishlist_path,
        help="Local storage file holding the wishlist.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the API server.")
    serve.add_argument("--host", default=settings.api_host)
    serve.add_argument("--port", type=int, default=settings.api_port)

    browse = commands.add_parser("browse", help="List the items of a category.")
    browse.add_argument("category")
    browse.add_argument(
        "--expand",
        action="append",
        default=[],
        metavar="ITEM_ID",
        help="Show the full text of an item (repeatable).",
    )

    add = commands.add_parser("add", help="Add an item to the wishlist.")
    add.add_argument("category")
    add.add_argument("item_id")

    remove = commands.add_parser("remove", help="Remove an item from the wishlist.")
    remove.add_argument("category")
    remove.add_argument("item_id")

    commands.add_parser("wishlist", help="Show the wishlist.")

    generate = commands.add_parser("generate", help="Download the service plan PDF.")
    generate.add_argument(
        "--output",
        default=".",
        help="Directory to save the document into.",
    )

    admin_add = commands.add_parser("admin-add", help="Add a curated item.")
    admin_add.add_argument("category")
    admin_add.add_argument("--title", required=True)
    admin_add.add_argument("--content", help="Body text (text categories).")
    admin_add.add_argument("--link", help="Media link (music).")

    admin_delete = commands.add_parser("admin-delete", help="Delete a curated item.")
    admin_delete.add_argument("category")
    admin_delete.add_argument("item_id")

    return parser


async def run_command(args: argparse.Namespace, client: ContentClient) -> int:
    """Run a client command against the API."""
    selection = SelectionStore(FileLocalStorage(args.storage), notify=notice)
    browser = ContentBrowser(client, selection, notify=notice)

    if args.command == "browse":
        view = await browser.load(args.category)
        for item_id in args.expand:
            browser.toggle(item_id)
        print(render_category(view))
        return 1 if view.status == ViewStatus.ERROR else 0

    if args.command == "add":
        view = await browser.load(args.category)
        if view.status == ViewStatus.ERROR:
            print(view.message)
            return 1
        outcome = browser.add(args.item_id)
        if outcome == AddOutcome.ADDED:
            print(f"Added {view.get_row(args.item_id).title} to your wishlist.")
        return 0 if outcome is not None else 1

    if args.command == "remove":
        if browser.remove(args.category, args.item_id):
            print("Removed from your wishlist.")
        else:
            print("That item is not in your wishlist.")
        return 0

    if args.command == "wishlist":
        print(render_wishlist(browser.wishlist_panel()))
        return 0

    if args.command == "generate":
        print("Generating...")
        path = await browser.generate(args.output)
        if path is None:
            return 1
        print(f"Saved {path}")
        return 0

    if args.command == "admin-add":
        item = await client.create_item(
            args.category, args.title, content=args.content, link=args.link
        )
        print(f"Created {args.category} item {item['id']}: {item['title']}")
        return 0

    if args.command == "admin-delete":
        result = await client.delete_item(args.category, args.item_id)
        print(result["message"])
        return 0

    raise ValueError(f"Unknown command: {args.command}")


async def _run_client(args: argparse.Namespace) -> int:
    async with ContentClient(args.api_url) as client:
        try:
            return await run_command(args, client)
        except (ApiError, NotFoundError) as e:
            notice(e.message)
            return 1


def serve(host: str, port: int) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("memorial.api.app:app", host=host, port=port)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # One line per request is noise in a terminal session
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if args.command == "serve":
        serve(args.host, args.port)
        return 0

    return asyncio.run(_run_client(args))


if __name__ == "__main__":
    sys.exit(main())
