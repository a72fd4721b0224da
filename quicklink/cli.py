#!/usr/bin/env python3
"""
Command-line interface for QuickLink.

Usage:
    quicklink shorten <url> [--validity MIN] [--custom-code CODE]
    quicklink get <code>
    quicklink visit <code> [--referrer URL]
    quicklink list
    quicklink stats

Storage defaults come from the same environment as the server
(STORAGE_BACKEND, STORAGE_PATH, STORAGE_KEY, REDIS_URL, BASE_URL).
"""

import argparse
import json
import sys
from typing import List, Optional

from config import load_config
from .link_store import LinkStore
from .service import ShortenerService
from .shortcode import ShortCodeGenerator
from .storage import create_storage
from .storage.base import StorageError
from .common.logging_config import setup_logging
from .common.timestamps import to_iso


class QuickLinkCLI:
    """Command-line interface for QuickLink."""

    def __init__(self, service: ShortenerService, out=None):
        """Initialize CLI.

        Args:
            service: Shortener service to drive
            out: Output stream (stdout if not given)
        """
        self.service = service
        self.out = out or sys.stdout

    def _print(self, text: str) -> None:
        print(text, file=self.out)

    def shorten(
        self,
        url: str,
        validity: Optional[float] = None,
        custom_code: Optional[str] = None,
    ) -> int:
        """Shorten a URL."""
        try:
            record = self.service.shorten(url, validity_minutes=validity, custom_code=custom_code)
        except ValueError as e:
            self._print(f"Error: {e}")
            return 1

        self._print(record.short)
        self._print(f"Code:    {record.code}")
        self._print(f"Expires: {to_iso(record.expiry)}")
        return 0

    def get(self, code: str) -> int:
        """Print a record without recording a visit."""
        record = self.service.get_link(code)
        if record is None:
            self._print(f"Short code '{code}' not found")
            return 1

        self._print(json.dumps(record.to_dict(), indent=2))
        return 0

    def visit(self, code: str, referrer: str = "") -> int:
        """Record a visit and print the original URL."""
        original = self.service.resolve(code, referrer=referrer)
        if original is None:
            self._print(f"Short code '{code}' not found")
            return 1

        self._print(original)
        return 0

    def list(self) -> int:
        """List every record in storage order."""
        records = self.service.list_links()
        if not records:
            self._print("No URLs yet.")
            return 0

        for record in records:
            self._print(f"{record.short}\t{record.clicks}\t{record.original}")
        return 0

    def stats(self) -> int:
        """Print collection statistics."""
        self._print(json.dumps(self.service.get_statistics(), indent=2))
        return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="quicklink",
        description="Create short links and inspect their click statistics",
    )
    parser.add_argument("--storage", choices=["file", "memory", "redis"], help="Storage backend")
    parser.add_argument("--path", help="JSON file for the file backend")
    parser.add_argument("--redis-url", help="Redis URL for the redis backend")
    parser.add_argument("--origin", help="Origin used to build short links")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    shorten = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten.add_argument("url", help="URL to shorten")
    shorten.add_argument("--validity", type=float, help="Validity in minutes")
    shorten.add_argument("--custom-code", help="Custom short code")

    get = subparsers.add_parser("get", help="Show a short link")
    get.add_argument("code", help="Short code")

    visit = subparsers.add_parser("visit", help="Resolve a short link, recording a visit")
    visit.add_argument("code", help="Short code")
    visit.add_argument("--referrer", default="", help="Referrer to record")

    subparsers.add_parser("list", help="List all short links")
    subparsers.add_parser("stats", help="Show statistics")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    config = load_config()

    # Keep stdout for command output
    logger = setup_logging(level="DEBUG" if args.verbose else "WARNING")

    try:
        storage = create_storage(
            args.storage or config.storage_backend,
            path=args.path or config.storage_path,
            key=config.storage_key,
            redis_url=args.redis_url or config.redis_url,
            logger=logger,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    store = LinkStore(
        storage=storage,
        origin=args.origin or config.base_url,
        route_prefix=config.route_prefix,
        generator=ShortCodeGenerator(default_length=config.short_code_length),
        logger=logger,
    )
    service = ShortenerService(
        store=store,
        logger=logger,
        default_validity_minutes=config.default_validity_minutes,
    )
    cli = QuickLinkCLI(service)

    try:
        if args.command == "shorten":
            return cli.shorten(args.url, validity=args.validity, custom_code=args.custom_code)
        if args.command == "get":
            return cli.get(args.code)
        if args.command == "visit":
            return cli.visit(args.code, referrer=args.referrer)
        if args.command == "list":
            return cli.list()
        return cli.stats()
    except StorageError as e:
        print(f"Storage error: {e}", file=sys.stderr)
        return 1
    finally:
        service.close()


if __name__ == "__main__":
    sys.exit(main())
