"""
Pytest configuration and fixtures for minurl tests.
"""

import logging
from collections.abc import Callable, Iterator
from typing import Any

import pytest
import structlog

from minurl.models.options import Options

# Every option switched off; tests turn on what they exercise
ALL_OFF: dict[str, Any] = {
    "clone": False,
    "default_ports": {},
    "index_filenames": (),
    "plus_queries": False,
    "query_names": (),
    "remove_auth": False,
    "remove_default_port": False,
    "remove_empty_hash": False,
    "remove_empty_queries": False,
    "remove_empty_query_names": False,
    "remove_empty_query_values": False,
    "remove_empty_segment_names": False,
    "remove_hash": False,
    "remove_index_filename": False,
    "remove_query_names": False,
    "remove_query_oddities": False,
    "remove_root_trailing_slash": False,
    "remove_trailing_slash": False,
    "remove_www": False,
    "sort_queries": False,
    "stringify": True,
}


def _http_only(url: Any) -> bool:
    return url.scheme in ("http", "https")


@pytest.fixture
def http_only() -> Callable[[Any], bool]:
    """Predicate option that only applies to http and https URLs."""
    return _http_only


@pytest.fixture
def make_options() -> Callable[..., Options]:
    """
    Build an Options bundle with everything off except the given overrides.
    """

    def _make(**overrides: Any) -> Options:
        return Options(**{**ALL_OFF, **overrides})

    return _make


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """
    Undo configure_logging() side effects after a test.
    """
    root = logging.getLogger()
    handlers = root.handlers[:]
    root_level = root.level
    package_level = logging.getLogger("minurl").level

    yield

    root.handlers[:] = handlers
    root.setLevel(root_level)
    logging.getLogger("minurl").setLevel(package_level)
    structlog.reset_defaults()
