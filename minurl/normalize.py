"""
URL normalization pipeline.

Steps run in a fixed order, each gated by its resolved option, and later
steps see the effects of earlier ones. Trailing-slash handling comes last
because it works on the serialized string.
"""

import copy
import re
from collections.abc import Mapping
from typing import Any

from minurl.exceptions import InvalidURLError
from minurl.logging import get_logger
from minurl.models.options import Options, normalize_port_keys
from minurl.resolver import resolve_option
from minurl.url import URLLike
from minurl.utils.host import strip_www
from minurl.utils.match import any_match

logger = get_logger(__name__)

# Single-pass substitutions: "?var&&" and "?var&=" are left alone
EMPTY_QUERY_VALUE = re.compile(r"([^&])=&")
TRAILING_EQUALS = re.compile(r"([^&])=$")
TRAILING_QUESTION = re.compile(r"\?#?(?:.+)?$")
MULTIPLE_SLASHES = re.compile(r"/{2,}")
ENCODED_SPACE = "%20"


def _remove_index_filename(url: URLLike, options: Options | None) -> None:
    index_filenames = resolve_option(options, "index_filenames", url)
    last_segment = url.path.split("/")[-1]
    if last_segment and any_match(last_segment, index_filenames):
        url.path = url.path[: -len(last_segment)]


def _normalize_hash(url: URLLike, options: Options | None) -> None:
    if resolve_option(options, "remove_hash", url):
        url.fragment = None
    elif not url.fragment and url.href.endswith("#"):
        if resolve_option(options, "remove_empty_hash", url):
            url.fragment = None


def _normalize_query_params(url: URLLike, options: Options | None) -> None:
    params = url.search_params

    if url.supports_sort and resolve_option(options, "sort_queries", url):
        params.sort()

    remove_empty_queries = resolve_option(options, "remove_empty_queries", url)
    remove_empty_query_names = resolve_option(options, "remove_empty_query_names", url)
    remove_empty_query_values = resolve_option(options, "remove_empty_query_values", url)

    if remove_empty_queries or remove_empty_query_names or remove_empty_query_values:
        pairs = list(params)
        url.query = None

        for name, value in pairs:
            is_removable_query = remove_empty_queries and name == "" and value == ""
            is_removable_name = remove_empty_query_names and name == "" and value != ""
            is_removable_value = remove_empty_query_values and name != "" and value == ""
            if not (is_removable_query or is_removable_name or is_removable_value):
                params.append(name, value)

    if resolve_option(options, "remove_query_names", url):
        query_names = resolve_option(options, "query_names", url)
        for name in params.keys():
            if any_match(name, query_names):
                params.delete(name)


def _remove_query_oddities(url: URLLike) -> None:
    if url.query:
        query = EMPTY_QUERY_VALUE.sub(r"\1&", url.query)
        url.query = TRAILING_EQUALS.sub(r"\1", query)
    elif TRAILING_QUESTION.search(url.href):
        # Drops a dangling "?"
        url.query = None


def _replace_path(url: URLLike, path: str) -> str:
    """Serialize ``url`` with its path swapped for ``path``, query and fragment untouched."""
    before, found, after = url.href.partition(url.host + url.path)
    if not found:
        return url.href
    return before + url.host + path + after


def _stringify(url: URLLike, options: Options | None) -> str:
    path = url.path
    if resolve_option(options, "remove_trailing_slash", url):
        # "//" is an empty segment, not a trailing slash
        if path.endswith("/") and not path.endswith("//"):
            return _replace_path(url, path[:-1])
    elif resolve_option(options, "remove_root_trailing_slash", url):
        if path == "/":
            return _replace_path(url, "")
    return url.href


def normalize(
    url: URLLike,
    options: Options | Mapping[str, Any] | None = None,
) -> Any:
    """
    Normalize a URL into its canonical form.

    Parameters
    ----------
    url : URLLike
        URL object to normalize. Strings are rejected; parse them with
        ``minurl.URL`` first.
    options : Options | Mapping[str, Any] | None
        Option bundle, e.g. ``CAREFUL_PROFILE`` or ``{"removeWWW": False}``.
        Undefined options fall back to ``COMMON_PROFILE``.

    Returns
    -------
    str | URLLike
        The canonical string, or the URL object itself when ``stringify``
        resolves false (a copy when ``clone`` resolves true).

    Raises
    ------
    InvalidURLError
        If ``url`` does not satisfy the URL capability contract.

    Examples
    --------
    >>> normalize(URL("http://www.example.com:80/dir/index.html?b=2&a=1#"))
    'http://example.com/dir/?a=1&b=2'
    """
    if not isinstance(url, URLLike):
        raise InvalidURLError(f"Invalid URL: expected a URL object, got {type(url).__name__}")

    options = Options.coerce(options)

    if resolve_option(options, "clone", url):
        url = copy.deepcopy(url)

    if resolve_option(options, "remove_auth", url):
        url.password = ""
        url.username = ""

    if resolve_option(options, "remove_default_port", url):
        # Predicate-valued maps bypass validation
        default_ports = normalize_port_keys(resolve_option(options, "default_ports", url))
        if url.port is not None and default_ports.get(url.scheme) == url.port:
            url.port = None

    if resolve_option(options, "remove_index_filename", url):
        _remove_index_filename(url, options)

    if resolve_option(options, "remove_empty_segment_names", url):
        url.path = MULTIPLE_SLASHES.sub("/", url.path)

    _normalize_hash(url, options)

    if url.query and url.supports_search_params:
        _normalize_query_params(url, options)

    if resolve_option(options, "remove_query_oddities", url):
        _remove_query_oddities(url)

    if url.query and resolve_option(options, "plus_queries", url):
        url.query = url.query.replace(ENCODED_SPACE, "+")

    if resolve_option(options, "remove_www", url) and url.hostname:
        url.hostname = strip_www(url.hostname)

    if not resolve_option(options, "stringify", url):
        logger.debug("URL normalized", href=url.href, stringify=False)
        return url

    result = _stringify(url, options)
    logger.debug("URL normalized", href=result)
    return result
