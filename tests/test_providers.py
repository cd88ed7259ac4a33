"""Tests for property providers and YAML helpers."""

import textwrap

import pytest

from propsel.providers import MappingPropertyProvider, SystemPropertyProvider
from propsel.utils.yaml_utils import normalize_yaml_dict_keys, stringify_property_values

# ──────────────────────────────────────────────────────────────────────────────
# MappingPropertyProvider
# ──────────────────────────────────────────────────────────────────────────────


def test_mapping_provider_returns_live_tables() -> None:
    provider = MappingPropertyProvider(effective={"a": "1"})
    provider.effective["b"] = "2"
    assert provider.get_effective_properties() == {"a": "1", "b": "2"}
    assert provider.get_system_properties() == {}
    assert provider.get_user_supplied_properties() == {}


def test_from_yaml_layers_effective_table() -> None:
    yaml_str = textwrap.dedent(
        """
        system:
          java.version: 17
          on: yes
        user:
          build.mode: release
        effective:
          app.name: demo
          build.mode: debug
          empty:
        """
    )
    provider = MappingPropertyProvider.from_yaml(yaml_str)

    # YAML 1.1 boolean key and value are normalized to strings
    assert provider.system == {"java.version": "17", "True": "true"}
    assert provider.user == {"build.mode": "release"}
    assert provider.effective == {
        "java.version": "17",
        "True": "true",
        "build.mode": "debug",
        "app.name": "demo",
        "empty": "",
    }


def test_from_yaml_without_merge() -> None:
    yaml_str = "system: {a: 1}\neffective: {b: 2}\n"
    provider = MappingPropertyProvider.from_yaml(yaml_str, merge=False)
    assert provider.effective == {"b": "2"}
    assert provider.system == {"a": "1"}


def test_from_yaml_empty_document() -> None:
    provider = MappingPropertyProvider.from_yaml("")
    assert provider.effective == {}
    assert provider.system == {}
    assert provider.user == {}


@pytest.mark.parametrize(
    "yaml_str,message",
    [
        ("- a\n- b\n", "must map to a dictionary"),
        ("extra: {a: 1}\n", "Unrecognized top-level key"),
        ("system: [a, b]\n", "'system' must be a mapping"),
        ("effective: {a: {b: 1}}\n", "must be a scalar"),
    ],
)
def test_from_yaml_rejects_bad_shapes(yaml_str, message) -> None:
    with pytest.raises(ValueError, match=message):
        MappingPropertyProvider.from_yaml(yaml_str)


# ──────────────────────────────────────────────────────────────────────────────
# SystemPropertyProvider
# ──────────────────────────────────────────────────────────────────────────────


def test_system_provider_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("PROPSEL_TEST_VAR", "1")
    provider = SystemPropertyProvider()
    assert provider.get_system_properties()["PROPSEL_TEST_VAR"] == "1"
    assert provider.get_effective_properties()["PROPSEL_TEST_VAR"] == "1"
    assert provider.get_user_supplied_properties() == {}


def test_system_provider_layers_user_properties(monkeypatch) -> None:
    monkeypatch.setenv("PROPSEL_TEST_VAR", "1")
    provider = SystemPropertyProvider(user={"PROPSEL_TEST_VAR": "2", "cli": "x"})
    assert provider.get_effective_properties()["PROPSEL_TEST_VAR"] == "2"
    assert provider.get_effective_properties()["cli"] == "x"
    assert provider.get_system_properties()["PROPSEL_TEST_VAR"] == "1"
    assert "cli" not in provider.get_system_properties()


def test_system_provider_sees_later_changes(monkeypatch) -> None:
    provider = SystemPropertyProvider()
    monkeypatch.setenv("PROPSEL_LATE_VAR", "late")
    assert provider.get_effective_properties()["PROPSEL_LATE_VAR"] == "late"


# ──────────────────────────────────────────────────────────────────────────────
# YAML helpers
# ──────────────────────────────────────────────────────────────────────────────


def test_normalize_yaml_dict_keys() -> None:
    result = normalize_yaml_dict_keys({True: "v1", False: "v2", 8080: "v3", "k": "v4"})
    assert result == {"True": "v1", "False": "v2", "8080": "v3", "k": "v4"}


def test_stringify_property_values() -> None:
    result = stringify_property_values({"a": 1, "b": True, "c": None, "d": 1.5})
    assert result == {"a": "1", "b": "true", "c": "", "d": "1.5"}
