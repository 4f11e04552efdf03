"""
Option resolution.

An option's effective value is the caller's value, evaluated against the
URL when it is callable, or else the common profile's value evaluated the
same way.
"""

from typing import Any

from minurl.models.options import Options
from minurl.profiles import COMMON_PROFILE


def evaluate_value(value: Any, *args: Any) -> Any:
    """Call ``value`` with ``args`` if it is callable, otherwise return it as-is."""
    if callable(value):
        return value(*args)
    return value


def first_defined(*values: Any) -> Any:
    """Return the first value that is not None, or None."""
    return next((value for value in values if value is not None), None)


def resolve_option(options: Options | None, name: str, url: Any) -> Any:
    """
    Resolve the effective value of one option for a URL.

    Parameters
    ----------
    options : Options | None
        Caller's options; None means "use the common profile".
    name : str
        Option field name, e.g. "remove_www".
    url : Any
        URL handed to predicate-valued options. Never mutated here.

    Returns
    -------
    Any
        The caller's value when it evaluates to something other than None,
        otherwise the common profile's value.

    Raises
    ------
    KeyError
        If ``name`` is not a known option.
    """
    if name not in Options.model_fields:
        raise KeyError(f"Unknown option: {name}")

    custom = evaluate_value(getattr(options, name), url) if options is not None else None
    return first_defined(custom, evaluate_value(getattr(COMMON_PROFILE, name), url))
