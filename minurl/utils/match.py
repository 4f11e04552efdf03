"""
Pattern list matching for index filenames and query names.
"""

import re
from collections.abc import Iterable


def any_match(value: str, patterns: Iterable[str | re.Pattern[str]]) -> bool:
    """
    Check whether ``value`` matches any entry of ``patterns``.

    Strings must be equal to ``value``; compiled patterns match when they
    are found anywhere in it (``re.search``), so anchor them if needed.
    """
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            if pattern.search(value):
                return True
        elif pattern == value:
            return True
    return False
