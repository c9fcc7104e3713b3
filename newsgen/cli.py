"""CLI entry point for newsgen."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .config import CONTENT_TYPE, ORDER, OUTPUT_DIR, TEMPLATES_DIR, ContentfulSettings


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="newsgen",
        description="Build static news pages from Contentful entries.",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"newsgen {__version__}",
    )

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_build = sub.add_parser("build", help="Fetch entries and write the site")
    p_build.add_argument("--templates", "-t", type=Path, default=TEMPLATES_DIR, help="Template directory")
    p_build.add_argument("--out", "-o", type=Path, default=OUTPUT_DIR, help="Output directory")
    p_build.add_argument("--content-type", default=CONTENT_TYPE, help="Content type id to query")
    p_build.add_argument("--order", default=ORDER, help="Sort order, e.g. -fields.date")
    p_build.add_argument("--verbose", action="store_true", help="Log each request and page")

    p_entries = sub.add_parser("entries", help="List entries without writing files")
    p_entries.add_argument("--content-type", default=CONTENT_TYPE, help="Content type id to query")
    p_entries.add_argument("--order", default=ORDER, help="Sort order")
    p_entries.add_argument("--limit", "-n", type=int, default=20, help="Number of entries to show")
    p_entries.add_argument("--verbose", action="store_true", help="Log each request")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = ContentfulSettings.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.cmd == "build":
        return _cmd_build(args, settings)
    if args.cmd == "entries":
        return _cmd_entries(args, settings)

    parser.print_help()
    return 2


def _cmd_build(args: Any, settings: ContentfulSettings) -> int:
    async def _run() -> int:
        from .site.build import build_site
        from .source.client import ContentfulClient
        from .source.entries import ContentfulSource

        try:
            async with ContentfulClient(settings) as client:
                result = await build_site(
                    ContentfulSource(client),
                    templates_dir=args.templates,
                    out_dir=args.out,
                    content_type=args.content_type,
                    order=args.order,
                )
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print("✓ Site built")
        print(f"  Output: {result.out_dir}")
        print(f"  Entries: {result.entries}")
        print(f"  Pages: {len(result.pages)}")
        print(f"  Size: {result.total_bytes / 1024:.1f} KB")
        return 0

    return asyncio.run(_run())


def _cmd_entries(args: Any, settings: ContentfulSettings) -> int:
    async def _run() -> int:
        from .source.client import ContentfulClient
        from .source.entries import get_entries

        try:
            async with ContentfulClient(settings) as client:
                entries = await get_entries(client, args.content_type, args.order)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        if not entries:
            print("No entries found")
            return 0

        print(f"{len(entries)} entries in {args.content_type}:\n")
        for entry in entries[: max(0, int(args.limit))]:
            print(f"  {entry.date:20} {entry.category}/{entry.id}  {entry.title}")
        return 0

    return asyncio.run(_run())


if __name__ == "__main__":
    app()
