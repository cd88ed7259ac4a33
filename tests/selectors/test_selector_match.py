"""Tests for match_selector over the provider's property tables."""

import pytest

from propsel.providers import MappingPropertyProvider
from propsel.selectors import ByBuiltin, ByName, ByPrefix, ByRegex, match_selector


def _match(selector, provider: MappingPropertyProvider):
    return match_selector(selector, provider.get_effective_properties(), provider)


def test_by_name_present(provider) -> None:
    assert _match(ByName("app.name"), provider) == ["app.name"]


def test_by_name_absent(provider) -> None:
    assert _match(ByName("missing"), provider) == []


def test_by_name_ignores_system_table(provider) -> None:
    """Exact names are only looked up in the effective table."""
    assert _match(ByName("os.name"), provider) == []


def test_by_prefix_is_case_sensitive(provider) -> None:
    assert _match(ByPrefix("app."), provider) == ["app.name", "app.version"]


def test_by_regex_uses_full_match(provider) -> None:
    # "lib.app.name" contains a match but does not fully match
    assert _match(ByRegex(r"app\..*"), provider) == ["app.name", "app.version"]


def test_by_regex_partial_pattern_matches_nothing(provider) -> None:
    assert _match(ByRegex("name"), provider) == []


def test_by_regex_case_insensitive_flag(provider) -> None:
    assert _match(ByRegex(r"(?i)app\.\w+"), provider) == [
        "app.name",
        "app.version",
        "App.other",
    ]


def test_builtin_all(provider) -> None:
    assert _match(ByBuiltin("all"), provider) == list(provider.effective)


def test_builtin_system_reads_system_table(provider) -> None:
    assert _match(ByBuiltin("system"), provider) == ["os.name", "java.home"]


def test_builtin_commandline_reads_user_table(provider) -> None:
    assert _match(ByBuiltin("commandline"), provider) == ["mode", "cli.flag"]


def test_builtin_groups_on_empty_provider() -> None:
    empty = MappingPropertyProvider()
    for group in ("all", "system", "commandline"):
        assert _match(ByBuiltin(group), empty) == []


def test_unsupported_selector_type(provider) -> None:
    with pytest.raises(TypeError, match="Unsupported selector type"):
        _match("app.", provider)
