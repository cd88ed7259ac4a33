"""Schema definitions for property selectors.

A selector is one atomic rule. Each variant carries exactly one payload, set
at construction, so a selector with two criteria cannot exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Pattern, Union

from propsel.errors import EmptyAttributeValue, InvalidAttributeValue
from propsel.types import BuiltinGroup


def _require_text(attr: str, value: object) -> None:
    if value is None or (isinstance(value, str) and not value):
        raise EmptyAttributeValue(attr)
    if not isinstance(value, str):
        raise InvalidAttributeValue(
            attr, f"Attribute '{attr}' must be a string, got {type(value).__name__}"
        )


@dataclass(frozen=True)
class ByName:
    """Select a single property by its exact name.

    Attributes:
        name: Property name to select when present in the source.
    """

    name: str

    def __post_init__(self) -> None:
        _require_text("name", self.name)


@dataclass(frozen=True)
class ByRegex:
    """Select every property whose whole name matches a regular expression.

    Attributes:
        pattern: Regex applied with full-match semantics.
    """

    pattern: str
    compiled: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _require_text("regex", self.pattern)
        try:
            compiled = re.compile(self.pattern)
        except re.error as exc:
            raise InvalidAttributeValue(
                "regex", f"Invalid regex '{self.pattern}': {exc}"
            ) from exc
        object.__setattr__(self, "compiled", compiled)


@dataclass(frozen=True)
class ByPrefix:
    """Select every property whose name starts with a prefix (case-sensitive).

    Attributes:
        prefix: Leading text the property names must start with.
    """

    prefix: str

    def __post_init__(self) -> None:
        _require_text("prefix", self.prefix)


@dataclass(frozen=True)
class ByBuiltin:
    """Select one of the fixed builtin groups.

    Strings are accepted and parsed with `BuiltinGroup.from_string`, so an
    unknown group is rejected here rather than during evaluation.

    Attributes:
        group: The builtin group to select.
    """

    group: BuiltinGroup

    def __post_init__(self) -> None:
        if self.group is None or self.group == "":
            raise EmptyAttributeValue("builtin")
        if not isinstance(self.group, BuiltinGroup):
            object.__setattr__(self, "group", BuiltinGroup.from_string(self.group))


Selector = Union[ByName, ByRegex, ByPrefix, ByBuiltin]

SELECTOR_TYPES = (ByName, ByRegex, ByPrefix, ByBuiltin)
