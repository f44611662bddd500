from typing import List, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from .fetcher import Fetcher
from .models import Direction, FindOptions, coerce_options
from .patterns import PAGE_QUERY_KEYS, PAGE_VALUE_RE, PATH_PAGE_NUMBER


async def find_next_by_url(url: str, options=None, *, fetcher: Optional[Fetcher] = None) -> Optional[str]:
    return await find_url_by_pattern(url, Direction.NEXT, coerce_options(options), fetcher)


async def find_prev_by_url(url: str, options=None, *, fetcher: Optional[Fetcher] = None) -> Optional[str]:
    return await find_url_by_pattern(url, Direction.PREV, coerce_options(options), fetcher)


async def find_url_by_pattern(
    url: str,
    direction: Direction,
    options: FindOptions,
    fetcher: Optional[Fetcher] = None,
) -> Optional[str]:
    if fetcher is None and options.verify_exists:
        async with Fetcher(timeout_ms=options.timeout_ms) as own_fetcher:
            return await _find_url_by_pattern(url, direction, options, own_fetcher)
    return await _find_url_by_pattern(url, direction, options, fetcher)


async def _find_url_by_pattern(
    url: str,
    direction: Direction,
    options: FindOptions,
    fetcher: Optional[Fetcher],
) -> Optional[str]:
    # Query parameter first; the path is tried when it yields nothing that exists.
    for build_candidate in (build_query_candidate, build_path_candidate):
        try:
            candidate = build_candidate(url, direction)
        except ValueError as exc:
            options.report("warn", f"Invalid URL provided for page inference '{url}': {exc}")
            return None
        if candidate is None:
            continue
        if await _confirm(candidate, options, fetcher):
            return candidate
    return None


async def _confirm(candidate: str, options: FindOptions, fetcher: Optional[Fetcher]) -> bool:
    if not options.verify_exists:
        return True
    return await fetcher.exists(candidate)


def build_query_candidate(url: str, direction: Direction) -> Optional[str]:
    parsed = _split_checked(url)
    query_pairs = parse_qsl(parsed.query, keep_blank_values=True)

    target = _find_page_param(query_pairs)
    if target is None:
        return None
    key, current = target

    adjacent = _adjacent(current, direction)
    if adjacent is None:
        return None

    updated = _replace_param(query_pairs, key, str(adjacent))
    return urlunsplit(parsed._replace(query=urlencode(updated)))


def build_path_candidate(url: str, direction: Direction) -> Optional[str]:
    parsed = _split_checked(url)
    path = parsed.path
    if path.endswith("/"):
        path = path[:-1]

    match = PATH_PAGE_NUMBER.match(path)
    if not match:
        return None

    adjacent = _adjacent(int(match.group("number")), direction)
    if adjacent is None:
        return None

    # Origin only: userinfo is not carried over.
    host = parsed.netloc.rpartition("@")[2]
    new_url = f"{parsed.scheme}://{host}{match.group('prefix')}{adjacent}"
    if parsed.query:
        new_url += f"?{parsed.query}"
    if parsed.fragment:
        new_url += f"#{parsed.fragment}"
    return new_url


def _split_checked(url: str):
    parsed = urlsplit(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("expected an absolute URL")
    # Raises ValueError for a non-numeric or out-of-range port.
    parsed.port
    return parsed


def _find_page_param(query_pairs: List[Tuple[str, str]]) -> Optional[Tuple[str, int]]:
    for key in PAGE_QUERY_KEYS:
        value = next((v for k, v in query_pairs if k == key), None)
        if value and PAGE_VALUE_RE.fullmatch(value.strip()):
            return key, int(value)
    return None


def _adjacent(current: int, direction: Direction) -> Optional[int]:
    adjacent = current + 1 if direction is Direction.NEXT else current - 1
    # Pages are 1-indexed.
    if adjacent <= 0:
        return None
    return adjacent


def _replace_param(
    query_pairs: List[Tuple[str, str]],
    key: str,
    value: str,
) -> List[Tuple[str, str]]:
    updated = []
    replaced = False
    for k, v in query_pairs:
        if k != key:
            updated.append((k, v))
        elif not replaced:
            updated.append((k, value))
            replaced = True
    return updated
