"""Selector evaluation against property tables."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List, Mapping

from propsel.types import BuiltinGroup

from .schema import ByBuiltin, ByName, ByPrefix, ByRegex, Selector

if TYPE_CHECKING:
    from propsel.providers import PropertyProvider

__all__ = [
    "match_selector",
]

_BUILTIN_SOURCES: Dict[
    BuiltinGroup, Callable[[Mapping[str, str], "PropertyProvider"], Mapping[str, str]]
] = {
    BuiltinGroup.ALL: lambda properties, provider: properties,
    BuiltinGroup.SYSTEM: lambda properties, provider: provider.get_system_properties(),
    BuiltinGroup.COMMANDLINE: lambda properties, provider: (
        provider.get_user_supplied_properties()
    ),
}


def match_selector(
    selector: Selector,
    properties: Mapping[str, str],
    provider: "PropertyProvider",
) -> List[str]:
    """Return the property names a selector picks.

    Name, prefix and regex selectors look at `properties` (the effective
    table). Builtin SYSTEM and COMMANDLINE groups read their own tables from
    `provider`.

    Args:
        selector: Selector to evaluate.
        properties: Effective property table.
        provider: Source of the system and user-supplied tables.

    Returns:
        Matching names in source iteration order.

    Raises:
        TypeError: If `selector` is not a Selector variant.
    """
    if isinstance(selector, ByName):
        return [selector.name] if selector.name in properties else []

    if isinstance(selector, ByPrefix):
        return [name for name in properties if name.startswith(selector.prefix)]

    if isinstance(selector, ByRegex):
        pattern = selector.compiled
        return [name for name in properties if pattern.fullmatch(name)]

    if isinstance(selector, ByBuiltin):
        return list(_BUILTIN_SOURCES[selector.group](properties, provider))

    raise TypeError(f"Unsupported selector type: {type(selector).__name__}")
