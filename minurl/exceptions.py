"""
Exceptions raised by minurl.
"""


class MinURLError(Exception):
    """Base class for minurl errors."""


class InvalidURLError(MinURLError, TypeError):
    """Raised when normalize() receives something that is not a URL object."""


class URLParseError(MinURLError, ValueError):
    """Raised when a string cannot be parsed into a URL."""
