import re
from typing import Optional
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from .attributes import extract_attribute
from .models import FindOptions


SPECIAL_SCHEMES = {"http", "https", "ws", "wss", "ftp"}
FORBIDDEN_HOST_RE = re.compile(r"[\s<>^|\\\"`{}%]")
# Leading/trailing C0 controls and spaces are dropped from hrefs, as browsers do.
HREF_STRIP = "".join(chr(code) for code in range(0x21))
PATH_SAFE = "/%:@!$&'()*+,;=~"
QUERY_SAFE = PATH_SAFE + "?"
NON_NAVIGABLE_PREFIXES = ("javascript:", "mailto:", "tel:", "data:")


def resolve_href(attributes: str, base_url: str, options: FindOptions) -> Optional[str]:
    href = extract_attribute(attributes, "href")
    if not href or _is_skippable_href(href):
        return None
    try:
        return to_absolute_url(href, base_url)
    except ValueError as exc:
        options.report("warn", f"Invalid URL '{href}' for base '{base_url}': {exc}")
        return None


def _is_skippable_href(href: str) -> bool:
    return href.strip(HREF_STRIP).lower().startswith(NON_NAVIGABLE_PREFIXES)


def to_absolute_url(href: str, base_url: str) -> str:
    """Resolve ``href`` against ``base_url``; raise ``ValueError`` if the result is unusable."""
    absolute = urljoin(base_url, href.strip(HREF_STRIP))
    parts = urlsplit(absolute)
    if not parts.scheme:
        raise ValueError("missing scheme")

    if parts.scheme in SPECIAL_SCHEMES:
        host = parts.hostname
        if not host:
            raise ValueError("missing host")
        if FORBIDDEN_HOST_RE.search(host):
            raise ValueError(f"invalid host {host!r}")
        # Raises ValueError for a non-numeric or out-of-range port.
        parts.port
        parts = parts._replace(
            path=quote(parts.path or "/", safe=PATH_SAFE),
            query=quote(parts.query, safe=QUERY_SAFE),
            fragment=quote(parts.fragment, safe=QUERY_SAFE),
        )

    return urlunsplit(parts)
