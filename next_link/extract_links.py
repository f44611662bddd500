from typing import Mapping, Optional, Union

from bs4 import BeautifulSoup

from . import patterns
from .attributes import extract_attribute
from .models import Direction, FindOptions, Method, coerce_options
from .resolve_url import resolve_href


OptionsArg = Union[FindOptions, Mapping, None]


def find_next(html: str, base_url: str, options: OptionsArg = None) -> Optional[str]:
    """Return the absolute URL of the next page linked from ``html``, or None."""
    return find_link(html, base_url, Direction.NEXT, coerce_options(options))


def find_prev(html: str, base_url: str, options: OptionsArg = None) -> Optional[str]:
    """Return the absolute URL of the previous page linked from ``html``, or None."""
    return find_link(html, base_url, Direction.PREV, coerce_options(options))


def find_link(
    html: str,
    base_url: str,
    direction: Direction,
    options: FindOptions,
) -> Optional[str]:
    for method in options.methods:
        url = run_strategy(method, html, base_url, direction, options)
        if url:
            return url
    return None


def run_strategy(
    method: Method,
    html: str,
    base_url: str,
    direction: Direction,
    options: FindOptions,
) -> Optional[str]:
    if method is Method.REL:
        return find_link_by_rel(html, base_url, direction, options)
    if method is Method.PAGINATION:
        return find_link_by_pagination(html, base_url, direction, options)
    if method is Method.TEXT:
        return find_link_by_text(html, base_url, direction, options)
    if method is Method.CLASS_NAME:
        return find_link_by_class_name(html, base_url, direction, options)
    if method is Method.ARIA_LABEL:
        return find_link_by_aria_label(html, base_url, direction, options)
    if method is Method.ALT:
        return find_link_by_alt(html, base_url, direction, options)
    raise ValueError(f"Unknown method: {method!r}")


def find_link_by_rel(
    html: str,
    base_url: str,
    direction: Direction,
    options: FindOptions,
) -> Optional[str]:
    rel_re = patterns.REL[direction]
    for match in patterns.LINK_TAG.finditer(html):
        attributes = match.group("attributes")
        if not attributes or not rel_re.search(attributes):
            continue
        url = resolve_href(attributes, base_url, options)
        if url:
            return url
    return None


def find_link_by_pagination(
    html: str,
    base_url: str,
    direction: Direction,
    options: FindOptions,
) -> Optional[str]:
    li_re = patterns.PAGINATION_LI[direction]
    fallback_re = patterns.PAGINATION_FALLBACK[direction]

    for container in patterns.PAGINATION_CONTAINER.finditer(html):
        container_html = container.group("container")
        if not container_html:
            continue
        for structure_re in (li_re, fallback_re):
            match = structure_re.search(container_html)
            if not match:
                continue
            url = resolve_href(match.group("attributes"), base_url, options)
            if url:
                return url
    return None


def find_link_by_text(
    html: str,
    base_url: str,
    direction: Direction,
    options: FindOptions,
) -> Optional[str]:
    text_re = patterns.TEXT[direction]
    for match in patterns.ANCHOR_TAG.finditer(html):
        inner = match.group("inner")
        if not inner:
            continue
        text = _clean_text(inner)
        if not text or not text_re.fullmatch(text):
            continue
        url = resolve_href(match.group("attributes"), base_url, options)
        if url:
            return url
    return None


def find_link_by_class_name(
    html: str,
    base_url: str,
    direction: Direction,
    options: FindOptions,
) -> Optional[str]:
    default_re = patterns.CLASS_NAME[direction]
    class_re = options.class_name_regex or default_re

    for match in patterns.ANCHOR_START_TAG.finditer(html):
        attributes = match.group("attributes")
        class_attr = extract_attribute(attributes, "class")
        id_attr = extract_attribute(attributes, "id")
        by_class = bool(class_attr) and class_re.search(class_attr) is not None
        by_id = bool(id_attr) and default_re.search(id_attr) is not None
        if not (by_class or by_id):
            continue
        url = resolve_href(attributes, base_url, options)
        if url:
            return url
    return None


def find_link_by_aria_label(
    html: str,
    base_url: str,
    direction: Direction,
    options: FindOptions,
) -> Optional[str]:
    text_re = patterns.TEXT[direction]
    for match in patterns.ANCHOR_START_TAG.finditer(html):
        attributes = match.group("attributes")
        label = extract_attribute(attributes, "aria-label")
        if not label or not text_re.fullmatch(label.strip()):
            continue
        url = resolve_href(attributes, base_url, options)
        if url:
            return url
    return None


def find_link_by_alt(
    html: str,
    base_url: str,
    direction: Direction,
    options: FindOptions,
) -> Optional[str]:
    text_re = patterns.TEXT[direction]
    for match in patterns.ANCHOR_TAG.finditer(html):
        inner = match.group("inner")
        if not inner:
            continue
        for img in patterns.IMG_TAG.finditer(inner):
            alt = extract_attribute(img.group(0), "alt")
            if not alt or not text_re.fullmatch(alt.strip()):
                continue
            # The anchor's href is the link, not the image source.
            url = resolve_href(match.group("attributes"), base_url, options)
            if url:
                return url
            break
    return None


def _clean_text(fragment: str) -> str:
    if "<" not in fragment and "&" not in fragment:
        return fragment.strip()
    return BeautifulSoup(fragment, "html.parser").get_text().strip()
