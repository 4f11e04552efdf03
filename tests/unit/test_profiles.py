"""
Tests for the careful and common option profiles.
"""

import pytest
from pydantic import ValidationError

import minurl
import minurl.profiles
from minurl.profiles import (
    CAREFUL_PROFILE,
    COMMON_PROFILE,
    DEFAULT_PORTS,
    PROFILES,
    has_form_query,
    is_mailto_url,
    is_web_url,
)
from minurl.resolver import evaluate_value
from minurl.url import URL

HTTP = URL("http://domain.com/")
HTTPS = URL("https://domain.com/")
WS = URL("ws://domain.com/")
MAILTO = URL("mailto:user@domain.com")
OTHER = URL("other://domain.com/")

# Expected value per option: (careful, common) for http, https, ws, mailto, other
PROFILE_TABLE = {
    "clone": ((True,) * 5, (True,) * 5),
    "remove_auth": ((False,) * 5, (False,) * 5),
    "remove_default_port": ((True,) * 5, (True,) * 5),
    "remove_index_filename": ((False,) * 5, (True, True, False, False, False)),
    "remove_empty_segment_names": ((False,) * 5, (False,) * 5),
    "remove_hash": ((False,) * 5, (False,) * 5),
    "remove_empty_hash": ((True,) * 5, (True,) * 5),
    "remove_empty_queries": (
        (False, False, False, True, False),
        (True, True, True, True, False),
    ),
    "remove_empty_query_names": (
        (False, False, False, True, False),
        (False, False, False, True, False),
    ),
    "remove_empty_query_values": (
        (False, False, False, True, False),
        (False, False, False, True, False),
    ),
    "remove_query_names": ((False,) * 5, (False,) * 5),
    "remove_query_oddities": ((True,) * 5, (True,) * 5),
    "plus_queries": ((True,) * 5, (True,) * 5),
    "sort_queries": (
        (False, False, False, True, False),
        (True, True, True, True, False),
    ),
    "remove_www": ((False,) * 5, (True, True, False, False, False)),
    "remove_root_trailing_slash": ((True,) * 5, (True,) * 5),
    "remove_trailing_slash": ((False,) * 5, (False,) * 5),
    "stringify": ((True,) * 5, (True,) * 5),
}


@pytest.mark.parametrize("name", sorted(PROFILE_TABLE))
def test_profile_flags(name: str) -> None:
    """Each profile flag should evaluate as documented for every scheme."""
    careful, common = PROFILE_TABLE[name]
    urls = (HTTP, HTTPS, WS, MAILTO, OTHER)

    assert tuple(evaluate_value(getattr(CAREFUL_PROFILE, name), url) for url in urls) == careful
    assert tuple(evaluate_value(getattr(COMMON_PROFILE, name), url) for url in urls) == common


def test_profiles_share_lists() -> None:
    """Both profiles should carry the same port map and matcher lists."""
    for profile in (CAREFUL_PROFILE, COMMON_PROFILE):
        assert dict(profile.default_ports) == {
            "ftps": 990,
            "git": 9418,
            "scp": 22,
            "sftp": 22,
            "ssh": 22,
        }
        assert profile.index_filenames == ("index.html",)
        assert profile.query_names == ()


def test_profiles_are_fully_populated() -> None:
    """No option should be left undefined in a profile."""
    for profile in (CAREFUL_PROFILE, COMMON_PROFILE):
        assert all(getattr(profile, name) is not None for name in type(profile).model_fields)


def test_scheme_predicates() -> None:
    """The predicates backing the tables should match their schemes."""
    assert is_web_url(HTTP) and is_web_url(HTTPS) and not is_web_url(WS)
    assert is_mailto_url(MAILTO) and not is_mailto_url(HTTP)
    assert has_form_query(WS) and has_form_query(MAILTO) and not has_form_query(OTHER)


def test_profiles_by_name() -> None:
    """PROFILES should map names to the exported profiles."""
    assert PROFILES["careful"] is CAREFUL_PROFILE
    assert PROFILES["common"] is COMMON_PROFILE


# =============================================================================
# Immutability
# =============================================================================


@pytest.mark.parametrize("profile", [CAREFUL_PROFILE, COMMON_PROFILE], ids=["careful", "common"])
class TestProfileImmutability:
    """Profiles and their nested values must reject mutation."""

    def test_field_assignment_fails(self, profile: minurl.Options) -> None:
        """Replacing a field should fail and leave the profile unchanged."""
        original = profile.model_copy()
        with pytest.raises(ValidationError):
            profile.default_ports = "changed"  # type: ignore[assignment]
        assert profile == original

    def test_new_attribute_fails(self, profile: minurl.Options) -> None:
        """Adding an attribute should fail."""
        with pytest.raises((ValidationError, AttributeError)):
            profile.non_existent = "new"  # type: ignore[attr-defined]
        assert not hasattr(profile, "non_existent")

    def test_nested_port_map_is_read_only(self, profile: minurl.Options) -> None:
        """The default port map should reject item assignment."""
        with pytest.raises(TypeError):
            profile.default_ports["http"] = 80  # type: ignore[index]
        assert "http" not in profile.default_ports

    def test_nested_lists_are_tuples(self, profile: minurl.Options) -> None:
        """Matcher lists should have no mutating methods."""
        with pytest.raises(AttributeError):
            profile.index_filenames.append("default.htm")  # type: ignore[union-attr]
        assert profile.index_filenames == ("index.html",)


def test_shared_port_map_is_read_only() -> None:
    """The module-level port map should reject item assignment."""
    with pytest.raises(TypeError):
        DEFAULT_PORTS["ssh"] = 2222  # type: ignore[index]


def test_package_exports_cannot_be_rebound() -> None:
    """Re-binding a profile on the package should fail."""
    original = minurl.CAREFUL_PROFILE
    with pytest.raises(AttributeError):
        minurl.CAREFUL_PROFILE = "changed"  # type: ignore[assignment]
    with pytest.raises(AttributeError):
        del minurl.COMMON_PROFILE
    assert minurl.CAREFUL_PROFILE is original
    assert minurl.COMMON_PROFILE is COMMON_PROFILE


def test_module_exports_cannot_be_rebound() -> None:
    """Re-binding a profile on minurl.profiles should fail."""
    with pytest.raises(AttributeError):
        minurl.profiles.COMMON_PROFILE = "changed"  # type: ignore[assignment]
    with pytest.raises(AttributeError):
        minurl.profiles.PROFILES = {}  # type: ignore[assignment]
    assert minurl.profiles.COMMON_PROFILE is COMMON_PROFILE


def test_profile_map_is_read_only() -> None:
    """PROFILES should reject new entries."""
    with pytest.raises(TypeError):
        minurl.PROFILES["mine"] = CAREFUL_PROFILE  # type: ignore[index]


def test_other_attributes_remain_settable() -> None:
    """Only the profile exports are guarded."""
    minurl.profiles.some_flag = True  # type: ignore[attr-defined]
    assert minurl.profiles.some_flag is True  # type: ignore[attr-defined]
    del minurl.profiles.some_flag  # type: ignore[attr-defined]
