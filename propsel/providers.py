"""Property sources consumed by the selection engine.

The engine never reads global state directly: every table comes from a
`PropertyProvider`. Two implementations ship here:

- `MappingPropertyProvider`: explicit in-memory tables, optionally loaded from
  a YAML document.
- `SystemPropertyProvider`: the host process environment, used when a
  property set has no execution context.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol

import yaml

from propsel.utils.yaml_utils import normalize_yaml_dict_keys, stringify_property_values

__all__ = [
    "PropertyProvider",
    "MappingPropertyProvider",
    "SystemPropertyProvider",
]


class PropertyProvider(Protocol):
    """Capability supplying the property tables a selection reads from."""

    def get_effective_properties(self) -> Mapping[str, str]:
        """Properties currently held by the execution context."""
        ...

    def get_system_properties(self) -> Mapping[str, str]:
        """The full host system property table."""
        ...

    def get_user_supplied_properties(self) -> Mapping[str, str]:
        """Properties that came from the command line or other user overrides."""
        ...


@dataclass
class MappingPropertyProvider:
    """Provider backed by three plain dictionaries.

    The dictionaries are returned as-is, so later changes to them are visible
    to subsequent queries.

    Attributes:
        effective: Properties of the execution context.
        system: Host system properties.
        user: User-supplied (command-line) properties.
    """

    effective: Dict[str, str] = field(default_factory=dict)
    system: Dict[str, str] = field(default_factory=dict)
    user: Dict[str, str] = field(default_factory=dict)

    def get_effective_properties(self) -> Mapping[str, str]:
        return self.effective

    def get_system_properties(self) -> Mapping[str, str]:
        return self.system

    def get_user_supplied_properties(self) -> Mapping[str, str]:
        return self.user

    @classmethod
    def from_yaml(cls, yaml_str: str, merge: bool = True) -> "MappingPropertyProvider":
        """Build a provider from a YAML document.

        The document may define the mappings ``effective``, ``system`` and
        ``user``; missing sections are empty. Scalar values are stored as
        strings.

        Args:
            yaml_str: YAML text.
            merge: When True, the effective table is layered as
                system < user < effective, the way a host context
                exposes every origin through its effective properties.

        Returns:
            A new MappingPropertyProvider.

        Raises:
            ValueError: If the document or a section is not a mapping, or has
                unrecognized top-level keys.
        """
        data = yaml.safe_load(yaml_str)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("The provided YAML must map to a dictionary at top-level.")

        recognized_keys = {"effective", "system", "user"}
        extra = set(map(str, data.keys())) - recognized_keys
        if extra:
            raise ValueError(
                f"Unrecognized top-level key(s) in properties: {', '.join(sorted(extra))}. "
                f"Allowed keys are {sorted(recognized_keys)}"
            )

        tables: Dict[str, Dict[str, str]] = {}
        for section in sorted(recognized_keys):
            raw: Any = data.get(section) or {}
            if not isinstance(raw, dict):
                raise ValueError(f"'{section}' must be a mapping")
            tables[section] = stringify_property_values(normalize_yaml_dict_keys(raw))

        effective = tables["effective"]
        if merge:
            effective = {**tables["system"], **tables["user"], **effective}
        return cls(effective=effective, system=tables["system"], user=tables["user"])


class SystemPropertyProvider:
    """Provider over the host process environment.

    The effective and system tables are both the process environment, read
    at call time. User-supplied properties are layered on top of the
    effective table.
    """

    def __init__(self, user: Optional[Mapping[str, str]] = None) -> None:
        self._user: Dict[str, str] = dict(user or {})

    def get_effective_properties(self) -> Mapping[str, str]:
        return {**os.environ, **self._user}

    def get_system_properties(self) -> Mapping[str, str]:
        return dict(os.environ)

    def get_user_supplied_properties(self) -> Mapping[str, str]:
        return self._user
