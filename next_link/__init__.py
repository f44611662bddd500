import logging

from .extract_links import find_next, find_prev
from .fetcher import FetchError, Fetcher, fetch_html
from .infer_url import find_next_by_url, find_prev_by_url
from .models import Direction, FindOptions, Method


logging.getLogger("next_link").addHandler(logging.NullHandler())

__all__ = [
    "Direction",
    "FetchError",
    "Fetcher",
    "FindOptions",
    "Method",
    "fetch_html",
    "find_next",
    "find_next_by_url",
    "find_prev",
    "find_prev_by_url",
]
