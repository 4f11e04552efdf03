"""
Hostname helpers.
"""

WWW_PREFIX = "www."


def strip_www(hostname: str) -> str:
    """
    Remove a single leading "www." label.

    The label is kept when nothing dotted would remain ("www.domain"),
    and "www.www.example.com" only loses the first one.
    """
    if hostname.startswith(WWW_PREFIX) and "." in hostname[len(WWW_PREFIX) :]:
        return hostname[len(WWW_PREFIX) :]
    return hostname
