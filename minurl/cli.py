"""CLI for normalizing URLs."""

import argparse
import re
import sys
from collections.abc import Iterable
from typing import Any

from pydantic.alias_generators import to_snake

from minurl.config import PROFILE_CHOICES, get_settings
from minurl.exceptions import URLParseError
from minurl.logging import configure_logging, get_logger
from minurl.models.options import Options
from minurl.normalize import normalize
from minurl.profiles import PROFILES
from minurl.url import URL

logger = get_logger(__name__)

# Options that can be switched with --enable / --disable
FLAG_OPTIONS = tuple(
    name
    for name in Options.model_fields
    if name not in ("default_ports", "index_filenames", "query_names", "stringify")
)


def _flag_name(value: str) -> str:
    """Accept snake_case, camelCase or kebab-case option names."""
    if value in ("removeWWW", "remove-www"):
        return "remove_www"
    name = to_snake(value.replace("-", "_"))
    if name not in FLAG_OPTIONS:
        raise argparse.ArgumentTypeError(
            f"unknown option '{value}' (choose from {', '.join(FLAG_OPTIONS)})"
        )
    return name


def _matcher(value: str) -> str | re.Pattern[str]:
    """Treat /.../ as a regex, anything else as an exact name."""
    if len(value) > 1 and value.startswith("/") and value.endswith("/"):
        try:
            return re.compile(value[1:-1])
        except re.error as e:
            raise argparse.ArgumentTypeError(f"invalid regex {value}: {e}") from e
    return value


def build_options(args: argparse.Namespace) -> Options | None:
    """
    Build the option bundle for the parsed command line.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed arguments.

    Returns
    -------
    Options | None
        The selected profile with overrides applied, or None for the
        default profile without overrides.
    """
    overrides: dict[str, Any] = {}
    for name in args.enable:
        overrides[name] = True
    for name in args.disable:
        overrides[name] = False
    if args.index_filename:
        overrides["index_filenames"] = tuple(args.index_filename)
    if args.query_name:
        overrides["query_names"] = tuple(args.query_name)
        overrides.setdefault("remove_query_names", True)

    base = PROFILES.get(args.profile)
    if base is None:
        return Options(**overrides) if overrides else None
    return base.model_copy(update=overrides)


def _read_urls(args: argparse.Namespace) -> Iterable[str]:
    if args.urls:
        return args.urls
    return (line.strip() for line in sys.stdin if line.strip())


def run(args: argparse.Namespace) -> int:
    """
    Normalize every requested URL, printing one result per line.

    Returns
    -------
    int
        0 on success, 1 if any URL could not be parsed.
    """
    options = build_options(args)
    exit_code = 0

    for raw in _read_urls(args):
        try:
            url = URL(raw)
        except URLParseError as e:
            logger.warning("Skipping unparsable URL", url=raw, error=str(e))
            print(f"minurl: {e}", file=sys.stderr)
            exit_code = 1
            continue
        print(normalize(url, options))

    return exit_code


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="minurl",
        description="Normalize URLs into canonical strings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Normalize with the common profile
  minurl "http://www.example.com:80/index.html?b=2&a=1"

  # Careful profile, but also drop credentials
  minurl --profile careful --enable remove_auth "ftp://user:pw@host/dir/"

  # Strip tracking parameters from URLs read on stdin
  cat urls.txt | minurl --query-name '/^utm_/' --query-name fbclid
        """,
    )
    parser.add_argument("urls", nargs="*", help="URLs to normalize (default: read stdin)")
    parser.add_argument(
        "--profile",
        choices=PROFILE_CHOICES,
        default=settings.profile,
        help=f"Option profile (default: {settings.profile})",
    )
    parser.add_argument(
        "--enable",
        action="append",
        default=[],
        type=_flag_name,
        metavar="OPTION",
        help="Turn an option on (repeatable)",
    )
    parser.add_argument(
        "--disable",
        action="append",
        default=[],
        type=_flag_name,
        metavar="OPTION",
        help="Turn an option off (repeatable)",
    )
    parser.add_argument(
        "--index-filename",
        action="append",
        type=_matcher,
        metavar="NAME",
        help="Index filename to strip, /regex/ allowed (repeatable)",
    )
    parser.add_argument(
        "--query-name",
        action="append",
        type=_matcher,
        metavar="NAME",
        help="Query parameter to remove, /regex/ allowed (repeatable, implies remove_query_names)",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=settings.json_logs,
        help="Emit JSON logs on stderr",
    )

    args = parser.parse_args(argv)
    configure_logging(json_logs=args.json_logs, log_level=args.log_level, component="cli")
    logger.debug("Normalizing URLs", profile=args.profile)

    return run(args)


if __name__ == "__main__":
    sys.exit(main())
