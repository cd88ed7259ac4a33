"""Shared pytest fixtures for propsel tests."""

from __future__ import annotations

import pytest

from propsel.config import PropertySetConfig
from propsel.providers import MappingPropertyProvider
from propsel.references import ReferenceRegistry


@pytest.fixture
def provider() -> MappingPropertyProvider:
    """Provider with distinct effective, system and user tables."""
    return MappingPropertyProvider(
        effective={
            "app.name": "demo",
            "app.version": "1.0",
            "App.other": "x",
            "lib.app.name": "y",
            "mode": "ci",
        },
        system={"os.name": "linux", "java.home": "/opt/java"},
        user={"mode": "ci", "cli.flag": "on"},
    )


@pytest.fixture
def registry() -> ReferenceRegistry:
    return ReferenceRegistry()


@pytest.fixture
def config() -> PropertySetConfig:
    """Fresh config so tests never mutate the global instance."""
    return PropertySetConfig()
