import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional, Tuple

from .extract_links import find_link
from .fetcher import DEFAULT_USER_AGENT, Fetcher, fetch_html
from .infer_url import find_url_by_pattern
from .models import DEFAULT_TIMEOUT_MS, Direction, FindOptions, LinkResult, Method


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="next-link")
    subparsers = parser.add_subparsers(dest="command", required=True)

    find = subparsers.add_parser("find", help="Find next/previous page links for a URL")
    find.add_argument("url", help="Page URL")
    find.add_argument(
        "--direction",
        choices=["next", "prev", "both"],
        default="both",
    )
    find.add_argument(
        "--method",
        action="append",
        choices=[method.value for method in Method],
        help="Detection method, in priority order (repeatable)",
    )
    find.add_argument("--class-name-regex", default=None)
    find.add_argument("--timeout-ms", type=int, default=DEFAULT_TIMEOUT_MS)
    find.add_argument(
        "--no-verify",
        action="store_true",
        help="Skip the HEAD check for URLs inferred from the page number",
    )
    find.add_argument(
        "--no-url-fallback",
        action="store_true",
        help="Do not infer links from the URL when the page has none",
    )

    return parser


def build_options(args: argparse.Namespace) -> FindOptions:
    values = {
        "timeout_ms": args.timeout_ms,
        "verify_exists": not args.no_verify,
        "class_name_regex": args.class_name_regex,
    }
    if args.method:
        values["methods"] = args.method
    return FindOptions(**values)


def requested_directions(args: argparse.Namespace) -> List[Direction]:
    if args.direction == "both":
        return [Direction.NEXT, Direction.PREV]
    return [Direction(args.direction)]


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stdout,
    )
    args = build_parser().parse_args(argv)

    if args.command == "find":
        result = asyncio.run(find(args))
        print(json.dumps(result.model_dump(), ensure_ascii=True))
        found = result.next_url is not None or result.prev_url is not None
        sys.exit(0 if found else 1)


async def find(args: argparse.Namespace, fetcher: Optional[Fetcher] = None) -> LinkResult:
    options = build_options(args)
    if fetcher is None:
        async with Fetcher(timeout_ms=options.timeout_ms, user_agent=DEFAULT_USER_AGENT) as own_fetcher:
            return await _find(args, options, own_fetcher)
    return await _find(args, options, fetcher)


async def _find(args: argparse.Namespace, options: FindOptions, fetcher: Fetcher) -> LinkResult:
    html = await fetch_html(args.url, options, fetcher=fetcher)
    if html is None:
        logging.info("No HTML for %s, relying on URL inference", args.url)

    found = {}
    for direction in requested_directions(args):
        found[direction] = await _find_direction(args, options, fetcher, html, direction)

    next_url, next_source = found.get(Direction.NEXT, (None, None))
    prev_url, prev_source = found.get(Direction.PREV, (None, None))
    return LinkResult(
        url=args.url,
        next_url=next_url,
        next_source=next_source,
        prev_url=prev_url,
        prev_source=prev_source,
    )


async def _find_direction(
    args: argparse.Namespace,
    options: FindOptions,
    fetcher: Fetcher,
    html: Optional[str],
    direction: Direction,
) -> Tuple[Optional[str], Optional[str]]:
    if html is not None:
        url = find_link(html, args.url, direction, options)
        if url:
            return url, "html"

    if args.no_url_fallback:
        return None, None

    url = await find_url_by_pattern(args.url, direction, options, fetcher)
    if url:
        return url, "url_pattern"
    return None, None
