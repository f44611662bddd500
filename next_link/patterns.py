import re
from types import MappingProxyType

from .models import Direction


_FLAGS = re.IGNORECASE
_BLOCK_FLAGS = re.IGNORECASE | re.DOTALL


def _by_direction(next_pattern: str, prev_pattern: str, flags: int = _FLAGS):
    return MappingProxyType(
        {
            Direction.NEXT: re.compile(next_pattern, flags),
            Direction.PREV: re.compile(prev_pattern, flags),
        }
    )


REL = _by_direction(
    r"(?<![\w-])rel\s*=\s*(['\"])[^'\"]*?\bnext\b[^'\"]*?\1",
    r"(?<![\w-])rel\s*=\s*(['\"])[^'\"]*?\b(?:prev|previous)\b[^'\"]*?\1",
)

# Whole-string phrases, applied with fullmatch to trimmed text.
TEXT = _by_direction(
    r"\s*(?:"
    r"next(?:\s*page)?|older|forward"
    r"|(?:次|つぎ)(?:のページ)?(?:へ)?"
    r"|(?:下|后)\s*一?\s*(?:页|頁)"
    r"|다음(?:\s*페이지)?"
    r"|[»>→›]"
    r")\s*[»>→›]*\s*",
    r"\s*[«<←‹]*\s*(?:"
    r"(?:prev|previous)(?:\s*page)?|newer|back"
    r"|前(?:のページ)?(?:へ)?"
    r"|(?:上|前)\s*一?\s*(?:页|頁)"
    r"|이전(?:\s*페이지)?"
    r"|[«<←‹]"
    r")\s*",
)

CLASS_NAME = _by_direction(r"next", r"prev|previous")

_CURRENT_CLASS = r"class\s*=\s*['\"][^'\"]*(?:current|active)[^'\"]*['\"]"
_CURRENT_MARK = (
    rf"(?:<(?:span|a|strong)\s[^>]*(?:{_CURRENT_CLASS}|aria-current\s*=\s*['\"]page['\"])[^>]*>"
    r"|<strong\s*>)"
)

PAGINATION_LI = _by_direction(
    # <li class="current">1</li> <li><a href="/page/2">2</a></li>
    rf"<li\s[^>]*{_CURRENT_CLASS}[^>]*>(?:(?!</li>).)*</li>\s*<li\b[^>]*>\s*<a\s+(?P<attributes>[^>]+)>",
    # <li><a href="/page/1">1</a></li> <li class="current">2</li>
    rf"<li\b[^>]*>\s*<a\s+(?P<attributes>[^>]+)>(?:(?!</li>).)*?</a>\s*</li>\s*<li\s[^>]*{_CURRENT_CLASS}[^>]*>",
    _BLOCK_FLAGS,
)

# Looser adjacency for containers without list items: an anchor right after
# or right before the marked current element. Best effort on flat markup.
PAGINATION_FALLBACK = _by_direction(
    rf"{_CURRENT_MARK}[^<]*</(?:span|a|strong)>\s*<a\s+(?P<attributes>[^>]+)>",
    rf"<a\s+(?P<attributes>[^>]+)>(?:(?!</a>).)*?</a>\s*{_CURRENT_MARK}",
    _BLOCK_FLAGS,
)

LINK_TAG = re.compile(r"<(?:a|link)\s+(?P<attributes>[^>]*?)/?>", _FLAGS)
ANCHOR_TAG = re.compile(r"<a\s+(?P<attributes>[^>]+)>(?P<inner>.*?)</a>", _BLOCK_FLAGS)
ANCHOR_START_TAG = re.compile(r"<a\s+(?P<attributes>[^>]+)>", _FLAGS)
PAGINATION_CONTAINER = re.compile(
    r"<(?:div|nav|ul)\s[^>]*(?:class|id)\s*=\s*['\"][^'\"]*(?:pagination|pager|page-nav)[^'\"]*['\"][^>]*>"
    r"(?P<container>.*?)</(?:div|nav|ul)>",
    _BLOCK_FLAGS,
)
IMG_TAG = re.compile(r"<img\b[^>]*>", _FLAGS)

PATH_PAGE_NUMBER = re.compile(r"^(?P<prefix>.*[/\-_])(?P<number>\d+)$")
PAGE_QUERY_KEYS = ("page", "p", "index")
PAGE_VALUE_RE = re.compile(r"[+-]?[0-9]+")
