"""
Named option profiles.

CAREFUL_PROFILE only applies changes that are safe for every protocol.
COMMON_PROFILE is more aggressive for web URLs and is also the fallback for
any option a caller leaves undefined.
"""

import sys
from types import MappingProxyType, ModuleType
from typing import Any

from minurl.models.options import Options

DEFAULT_PORTS = MappingProxyType({"ftps": 990, "git": 9418, "scp": 22, "sftp": 22, "ssh": 22})
INDEX_FILENAMES = ("index.html",)
QUERY_NAMES: tuple[str, ...] = ()


def is_web_url(url: Any) -> bool:
    """True for http and https URLs."""
    return url.scheme in ("http", "https")


def is_mailto_url(url: Any) -> bool:
    """True for mailto URLs, whose queries are safe to rewrite."""
    return url.scheme == "mailto"


def has_form_query(url: Any) -> bool:
    """True for schemes whose query is a list of form-encoded pairs."""
    return is_mailto_url(url) or url.scheme in ("http", "https", "ws", "wss")


CAREFUL_PROFILE = Options(
    clone=True,
    default_ports=DEFAULT_PORTS,
    index_filenames=INDEX_FILENAMES,
    plus_queries=True,
    query_names=QUERY_NAMES,
    remove_auth=False,
    remove_default_port=True,
    remove_empty_hash=True,
    remove_empty_queries=is_mailto_url,
    remove_empty_query_names=is_mailto_url,
    remove_empty_query_values=is_mailto_url,
    remove_empty_segment_names=False,
    remove_hash=False,
    remove_index_filename=False,
    remove_query_names=False,
    remove_query_oddities=True,
    remove_root_trailing_slash=True,
    remove_trailing_slash=False,
    remove_www=False,
    sort_queries=is_mailto_url,
    stringify=True,
)

COMMON_PROFILE = Options(
    clone=True,
    default_ports=DEFAULT_PORTS,
    index_filenames=INDEX_FILENAMES,
    plus_queries=True,
    query_names=QUERY_NAMES,
    remove_auth=False,
    remove_default_port=True,
    remove_empty_hash=True,
    remove_empty_queries=has_form_query,
    remove_empty_query_names=is_mailto_url,
    remove_empty_query_values=is_mailto_url,
    remove_empty_segment_names=False,
    remove_hash=False,
    remove_index_filename=is_web_url,
    remove_query_names=False,
    remove_query_oddities=True,
    remove_root_trailing_slash=True,
    remove_trailing_slash=False,
    remove_www=is_web_url,
    sort_queries=has_form_query,
    stringify=True,
)

PROFILES = MappingProxyType({"careful": CAREFUL_PROFILE, "common": COMMON_PROFILE})

FROZEN_EXPORTS = frozenset({"CAREFUL_PROFILE", "COMMON_PROFILE", "PROFILES"})


class FrozenExportsModule(ModuleType):
    """Module type that refuses to re-bind or delete the profile exports."""

    def __setattr__(self, name: str, value: Any) -> None:
        if name in FROZEN_EXPORTS:
            raise AttributeError(f"cannot reassign {self.__name__}.{name}")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if name in FROZEN_EXPORTS:
            raise AttributeError(f"cannot delete {self.__name__}.{name}")
        super().__delattr__(name)


sys.modules[__name__].__class__ = FrozenExportsModule
