"""Selector building and normalization.

Loaders that receive selection attributes one at a time use `PropertyRef`;
everything else goes through `normalize_selector`, the single entry point
for turning raw values into Selector objects.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Union

from propsel.errors import EmptyAttributeValue, MutuallyExclusiveAttribute
from propsel.types import BuiltinGroup

from .schema import SELECTOR_TYPES, ByBuiltin, ByName, ByPrefix, ByRegex, Selector

__all__ = [
    "PropertyRef",
    "normalize_selector",
]

_FACTORIES: Dict[str, Callable[[Any], Selector]] = {
    "name": ByName,
    "regex": ByRegex,
    "prefix": ByPrefix,
    "builtin": ByBuiltin,
}


class PropertyRef:
    """Incremental builder for a single Selector.

    The first setter fixes the discriminant. Any later setter raises
    `MutuallyExclusiveAttribute`, whatever the order. Values are validated
    before the builder state changes, so a failed call leaves it untouched.
    """

    def __init__(self) -> None:
        self._attr: Optional[str] = None
        self._selector: Optional[Selector] = None

    def set_name(self, name: str) -> None:
        self._set("name", name)

    def set_regex(self, regex: str) -> None:
        self._set("regex", regex)

    def set_prefix(self, prefix: str) -> None:
        self._set("prefix", prefix)

    def set_builtin(self, builtin: Union[BuiltinGroup, str]) -> None:
        self._set("builtin", builtin)

    def _set(self, attr: str, value: Any) -> None:
        selector = _FACTORIES[attr](value)
        if self._attr is not None:
            raise MutuallyExclusiveAttribute(
                f"Attributes name, regex, prefix and builtin are mutually "
                f"exclusive: '{attr}' given after '{self._attr}'"
            )
        self._attr = attr
        self._selector = selector

    @property
    def attribute(self) -> Optional[str]:
        """Name of the attribute that was set, if any."""
        return self._attr

    def build(self) -> Selector:
        """Return the Selector described by this builder.

        Raises:
            EmptyAttributeValue: If no attribute was set.
        """
        if self._selector is None:
            raise EmptyAttributeValue("name|regex|prefix|builtin")
        return self._selector

    def __repr__(self) -> str:
        return f"PropertyRef({self._selector!r})"


def normalize_selector(
    raw: Union[Selector, PropertyRef, Mapping[str, Any]],
) -> Selector:
    """Normalize a raw selector value to a Selector.

    Args:
        raw: An existing Selector, a PropertyRef builder, or a mapping with
            exactly one of the keys ``name``, ``regex``, ``prefix``, ``builtin``.

    Returns:
        Selector instance.

    Raises:
        MutuallyExclusiveAttribute: If the mapping sets more than one criterion.
        EmptyAttributeValue: If the mapping sets none, or an empty value.
        ValueError: If the mapping has unknown keys or raw has an unsupported type.
    """
    if isinstance(raw, SELECTOR_TYPES):
        return raw

    if isinstance(raw, PropertyRef):
        return raw.build()

    if isinstance(raw, Mapping):
        unknown = set(raw) - set(_FACTORIES)
        if unknown:
            raise ValueError(
                f"Unrecognized selector key(s): {', '.join(sorted(map(str, unknown)))}. "
                f"Allowed keys are {sorted(_FACTORIES)}"
            )
        ref = PropertyRef()
        for attr, value in raw.items():
            ref._set(attr, value)
        return ref.build()

    raise ValueError(
        f"Selector must be a Selector, PropertyRef or mapping, got {type(raw).__name__}"
    )
