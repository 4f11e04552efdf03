"""
minurl: normalize URLs into canonical strings.

>>> from minurl import URL, normalize, CAREFUL_PROFILE
>>> normalize(URL("http://www.example.com:80/index.html?b=&a=1#"))
'http://example.com?a=1&b'
"""

import sys

from minurl.exceptions import InvalidURLError, MinURLError, URLParseError
from minurl.models.options import Options
from minurl.normalize import normalize
from minurl.profiles import CAREFUL_PROFILE, COMMON_PROFILE, PROFILES, FrozenExportsModule
from minurl.url import URL, QueryParams, URLLike

__all__ = [
    "CAREFUL_PROFILE",
    "COMMON_PROFILE",
    "PROFILES",
    "URL",
    "InvalidURLError",
    "MinURLError",
    "Options",
    "QueryParams",
    "URLLike",
    "URLParseError",
    "normalize",
]

sys.modules[__name__].__class__ = FrozenExportsModule
