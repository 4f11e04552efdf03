"""
Option bundle model.

Each field is either a literal value or a one-argument callable that
receives the URL being normalized and returns that value. A field left at
None is "not defined" and falls back to the common profile.
"""

import re
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from minurl.models.base import FrozenCamelModel

# Literal flag or predicate over the URL
Flag = bool | Callable[[Any], bool]

# Exact string or compiled regex, as used for index filenames and query names
Matcher = str | re.Pattern[str]


def normalize_port_keys(ports: Mapping[str, int]) -> Mapping[str, int]:
    """Return a read-only copy of ``ports`` keyed by bare lowercase scheme ("http:" -> "http")."""
    return MappingProxyType({scheme.lower().rstrip(":"): port for scheme, port in ports.items()})


class Options(FrozenCamelModel):
    """
    Normalization options.

    Accepts snake_case field names or their camelCase aliases
    (``removeWWW``, ``sortQueries``...). The older option vocabulary
    (``removeDirectoryIndex``, ``directoryIndexes``,
    ``removeEmptyDirectoryNames``) is accepted as well.
    """

    clone: Flag | None = None
    remove_auth: Flag | None = None
    remove_default_port: Flag | None = None
    remove_index_filename: Flag | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "remove_index_filename", "removeIndexFilename", "removeDirectoryIndex"
        ),
    )
    remove_empty_segment_names: Flag | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "remove_empty_segment_names", "removeEmptySegmentNames", "removeEmptyDirectoryNames"
        ),
    )
    remove_hash: Flag | None = None
    remove_empty_hash: Flag | None = None
    remove_empty_queries: Flag | None = None
    remove_empty_query_names: Flag | None = None
    remove_empty_query_values: Flag | None = None
    remove_query_names: Flag | None = None
    remove_query_oddities: Flag | None = None
    plus_queries: Flag | None = None
    sort_queries: Flag | None = None
    remove_www: Flag | None = Field(
        default=None,
        validation_alias=AliasChoices("remove_www", "removeWWW", "removeWww"),
    )
    remove_root_trailing_slash: Flag | None = None
    remove_trailing_slash: Flag | None = None
    default_ports: Mapping[str, int] | Callable[[Any], Mapping[str, int]] | None = None
    index_filenames: tuple[Matcher, ...] | Callable[[Any], Sequence[Matcher]] | None = Field(
        default=None,
        validation_alias=AliasChoices("index_filenames", "indexFilenames", "directoryIndexes"),
    )
    query_names: tuple[Matcher, ...] | Callable[[Any], Sequence[Matcher]] | None = None
    stringify: Flag | None = None

    @field_validator("default_ports", mode="after")
    @classmethod
    def freeze_default_ports(cls, v: Any) -> Any:
        """Store port maps read-only with normalized scheme keys."""
        if isinstance(v, Mapping):
            return normalize_port_keys(v)
        return v

    @classmethod
    def coerce(cls, value: "Options | Mapping[str, Any] | None") -> "Options | None":
        """
        Turn a caller-supplied option bundle into an Options instance.

        Parameters
        ----------
        value : Options | Mapping[str, Any] | None
            Options instance, mapping of option names to values, or None.

        Returns
        -------
        Options | None
            None when no options were supplied.

        Raises
        ------
        TypeError
            If ``value`` is neither an Options, a mapping nor None.
        pydantic.ValidationError
            If the mapping holds unknown names or invalid values.
        """
        if value is None or isinstance(value, Options):
            return value
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        raise TypeError(f"Options must be a mapping or Options, got {type(value).__name__}")
