"""
Mutable URL model with a live query-parameter view.

Splits with urllib.parse and serializes the way browsers do, keeping an
explicit empty query or fragment (``http://h/?#``) apart from an absent one.
"""

import re
from collections.abc import Iterator
from typing import Protocol, runtime_checkable
from urllib.parse import quote, quote_plus, unquote_plus, urlsplit

from minurl.exceptions import URLParseError

# Schemes with a host and a hierarchical path, mapped to their default port
SPECIAL_SCHEMES: dict[str, int | None] = {
    "file": None,
    "ftp": 21,
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
}

# Characters left as-is when percent-encoding each component.
# "%" is safe everywhere so existing escapes survive re-encoding.
_USERINFO_SAFE = "!$%&'()*+,-.;=_~"
_PATH_SAFE = "!$%&'()*+,-./:;=@[\\]^_|~"
_OPAQUE_PATH_SAFE = "".join(chr(c) for c in range(0x20, 0x7F))
_QUERY_SAFE = "!$%&'()*+,-./:;=?@[\\]^_`{|}~"
_SPECIAL_QUERY_SAFE = _QUERY_SAFE.replace("'", "")
_FRAGMENT_SAFE = "!#$%&'()*+,-./:;=?@[\\]^_{|}~"

_SCHEME_RE = re.compile(r"[a-z][a-z0-9+.\-]*")

_SINGLE_DOT = (".", "%2e")
_DOUBLE_DOT = ("..", ".%2e", "%2e.", "%2e%2e")


@runtime_checkable
class URLLike(Protocol):
    """
    Minimal URL capability contract accepted by normalize().

    ``supports_search_params`` and ``supports_sort`` describe the optional
    ``search_params`` view; implementations without one set them to False.
    """

    supports_search_params: bool
    supports_sort: bool
    scheme: str
    username: str
    password: str
    hostname: str | None
    port: int | None
    path: str
    query: str | None
    fragment: str | None

    @property
    def host(self) -> str: ...

    @property
    def href(self) -> str: ...


def parse_query(query: str) -> list[tuple[str, str]]:
    """
    Parse a form-urlencoded query string into ordered (name, value) pairs.

    Empty chunks (``a&&b``) are skipped, a chunk without ``=`` has an empty value.
    """
    pairs = []
    for chunk in query.split("&"):
        if not chunk:
            continue
        name, _, value = chunk.partition("=")
        pairs.append((unquote_plus(name), unquote_plus(value)))
    return pairs


def serialize_query(pairs: list[tuple[str, str]]) -> str:
    """Serialize (name, value) pairs as a form-urlencoded query string."""
    return "&".join(
        f"{quote_plus(name, safe='*')}={quote_plus(value, safe='*')}" for name, value in pairs
    )


def _encode_host(hostname: str) -> str:
    if hostname.isascii():
        return hostname.lower()
    try:
        return hostname.encode("idna").decode("ascii")
    except UnicodeError as e:
        raise URLParseError(f"Invalid host: {hostname!r}") from e


def _remove_dot_segments(path: str) -> str:
    segments = path.split("/")[1:]
    output: list[str] = []
    for index, segment in enumerate(segments):
        is_last = index == len(segments) - 1
        lowered = segment.lower()
        if lowered in _SINGLE_DOT:
            if is_last:
                output.append("")
        elif lowered in _DOUBLE_DOT:
            if output:
                output.pop()
            if is_last:
                output.append("")
        else:
            output.append(segment)
    return "/" + "/".join(output)


class QueryParams:
    """
    Live view of a URL's query as ordered (name, value) pairs.

    Names are not unique and order is meaningful. Every mutation rewrites
    the owning URL's query; an empty list removes the query altogether.
    """

    def __init__(self, url: "URL") -> None:
        self._url = url

    def _pairs(self) -> list[tuple[str, str]]:
        return parse_query(self._url.query or "")

    def _update(self, pairs: list[tuple[str, str]]) -> None:
        self._url.query = serialize_query(pairs) or None

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._pairs())

    def __len__(self) -> int:
        return len(self._pairs())

    def __repr__(self) -> str:
        return f"QueryParams({self._pairs()!r})"

    def keys(self) -> list[str]:
        """Return every parameter name, duplicates included, in order."""
        return [name for name, _ in self._pairs()]

    def get(self, name: str) -> str | None:
        """Return the first value for ``name``, or None."""
        for key, value in self._pairs():
            if key == name:
                return value
        return None

    def get_all(self, name: str) -> list[str]:
        """Return all values for ``name`` in order."""
        return [value for key, value in self._pairs() if key == name]

    def append(self, name: str, value: str) -> None:
        """Add a pair at the end."""
        self._update([*self._pairs(), (name, value)])

    def delete(self, name: str) -> None:
        """Remove every pair named ``name``."""
        self._update([pair for pair in self._pairs() if pair[0] != name])

    def sort(self) -> None:
        """Stable-sort pairs by name, comparing UTF-16 code units."""
        self._update(sorted(self._pairs(), key=lambda pair: pair[0].encode("utf-16-be")))


class URL:
    """
    Mutable, structured URL.

    Parameters
    ----------
    url : str | URL
        URL string to parse, or another URL to copy.

    Raises
    ------
    URLParseError
        If the string cannot be parsed.
    """

    supports_search_params = True
    supports_sort = True

    def __init__(self, url: "str | URL") -> None:
        if isinstance(url, URL):
            url = url.href
        self._parse(url)

    def _parse(self, url: str) -> None:
        url = url.strip("".join(chr(c) for c in range(0x21)))
        url = url.replace("\t", "").replace("\n", "").replace("\r", "")

        head, hash_mark, fragment = url.partition("#")
        head, question_mark, query = head.partition("?")

        scheme, colon, rest = head.partition(":")
        scheme = scheme.lower()
        if not colon or not _SCHEME_RE.fullmatch(scheme):
            raise URLParseError(f"Invalid URL: {url!r}")

        special = scheme in SPECIAL_SCHEMES
        if special:
            rest = rest.replace("\\", "/")
            if scheme == "file":
                if not rest.startswith("//"):
                    rest = "//" + ("" if rest.startswith("/") else "/") + rest
            else:
                rest = "//" + rest.lstrip("/")

        try:
            parts = urlsplit(f"{scheme}:{rest}")
            port = parts.port
        except ValueError as e:
            raise URLParseError(f"Invalid URL: {url!r}") from e

        self._scheme = scheme
        self._username = ""
        self._password = ""
        self._hostname: str | None = None
        self._port: int | None = None

        if rest.startswith("//"):
            hostname = parts.hostname or ""
            if special and scheme != "file" and not hostname:
                raise URLParseError(f"Invalid URL, empty host: {url!r}")
            self.username = parts.username or ""
            self.password = parts.password or ""
            self.hostname = hostname
            self.port = port
            self.path = parts.path
        else:
            # Opaque path, e.g. "mailto:user@host"
            self._path = quote(rest, safe=_OPAQUE_PATH_SAFE)

        self._query = quote(query, safe=self._query_safe) if question_mark else None
        self._fragment = quote(fragment, safe=_FRAGMENT_SAFE) if hash_mark else None

    @property
    def is_special(self) -> bool:
        return self._scheme in SPECIAL_SCHEMES

    @property
    def _query_safe(self) -> str:
        return _SPECIAL_QUERY_SAFE if self.is_special else _QUERY_SAFE

    @property
    def scheme(self) -> str:
        return self._scheme

    @property
    def username(self) -> str:
        return self._username

    @username.setter
    def username(self, value: str) -> None:
        self._username = quote(value, safe=_USERINFO_SAFE)

    @property
    def password(self) -> str:
        return self._password

    @password.setter
    def password(self, value: str) -> None:
        self._password = quote(value, safe=_USERINFO_SAFE)

    @property
    def hostname(self) -> str | None:
        return self._hostname

    @hostname.setter
    def hostname(self, value: str | None) -> None:
        if value is None:
            self._hostname = None
        elif self.is_special:
            self._hostname = _encode_host(value)
        else:
            self._hostname = value

    @property
    def port(self) -> int | None:
        return self._port

    @port.setter
    def port(self, value: int | None) -> None:
        if value is not None and not 0 <= value <= 65535:
            raise URLParseError(f"Port out of range: {value}")
        if value is not None and SPECIAL_SCHEMES.get(self._scheme) == value:
            value = None
        self._port = value

    @property
    def host(self) -> str:
        """Hostname plus ``:port`` when a port is set."""
        hostname = self._hostname or ""
        if ":" in hostname:
            hostname = f"[{hostname}]"
        if self._port is not None:
            return f"{hostname}:{self._port}"
        return hostname

    @property
    def path(self) -> str:
        return self._path

    @path.setter
    def path(self, value: str) -> None:
        if self._hostname is None:
            self._path = quote(value, safe=_OPAQUE_PATH_SAFE)
            return
        if self.is_special and not value.startswith("/"):
            value = "/" + value
        path = quote(value, safe=_PATH_SAFE)
        if self.is_special:
            path = _remove_dot_segments(path)
        self._path = path

    @property
    def query(self) -> str | None:
        """Query without the leading ``?``; "" when only a bare ``?`` is present."""
        return self._query

    @query.setter
    def query(self, value: str | None) -> None:
        self._query = quote(value, safe=self._query_safe) if value else None

    @property
    def fragment(self) -> str | None:
        """Fragment without the leading ``#``; "" when only a bare ``#`` is present."""
        return self._fragment

    @fragment.setter
    def fragment(self, value: str | None) -> None:
        self._fragment = quote(value, safe=_FRAGMENT_SAFE) if value else None

    @property
    def search_params(self) -> QueryParams:
        return QueryParams(self)

    @property
    def href(self) -> str:
        """Full serialization, always derived from the structured fields."""
        parts = [self._scheme, ":"]
        if self._hostname is not None:
            parts.append("//")
            if self._username or self._password:
                parts.append(self._username)
                if self._password:
                    parts.append(f":{self._password}")
                parts.append("@")
            parts.append(self.host)
        parts.append(self._path)
        if self._query is not None:
            parts.append(f"?{self._query}")
        if self._fragment is not None:
            parts.append(f"#{self._fragment}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.href

    def __repr__(self) -> str:
        return f"URL({self.href!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, URL):
            return NotImplemented
        return self.href == other.href

    __hash__ = None  # type: ignore[assignment]
