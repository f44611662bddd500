import re
from functools import lru_cache
from typing import Optional, Pattern


@lru_cache(maxsize=None)
def attribute_pattern(name: str) -> Pattern[str]:
    # The name must start the attribute, so "href" never matches "data-href".
    return re.compile(
        rf"(?<![\w-]){re.escape(name)}\s*=\s*(['\"])(?P<value>(?:(?!\1).)*)\1",
        re.IGNORECASE | re.DOTALL,
    )


def extract_attribute(attributes: str, name: str) -> Optional[str]:
    """Return the first quoted value of ``name`` in a raw attribute string.

    The value is returned verbatim: no entity decoding, no trimming. An
    unterminated or mismatched quote counts as absent.
    """
    match = attribute_pattern(name).search(attributes)
    if not match:
        return None
    return match.group("value")
