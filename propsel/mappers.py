"""Name mappers used to rename selected property keys.

A mapper receives one property name and returns the new name, or None to
keep the original. Any object with a matching `map_name` method can be
attached to a PropertySet; `create_mapper` builds the stock ones by type name:

- ``identity``: name unchanged.
- ``glob``: ``from_``/``to`` each hold at most one ``*``; the text matched by
  ``*`` is carried over.
- ``regex``: ``from_`` is searched in the name and ``\\0``-``\\9`` in ``to``
  are replaced by the corresponding groups.
- ``merge``: every name maps to ``to``.
- ``package``: glob mapping that turns ``/`` into ``.`` in the carried part.
- ``unpackage``: glob mapping that turns ``.`` into ``/`` in the carried part.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Pattern, Protocol, Tuple

from propsel.errors import EmptyAttributeValue, InvalidAttributeValue

__all__ = [
    "NameMapper",
    "IdentityMapper",
    "GlobMapper",
    "RegexMapper",
    "MergeMapper",
    "PackageMapper",
    "UnpackageMapper",
    "create_mapper",
    "MAPPER_TYPES",
]


class NameMapper(Protocol):
    """Capability to rename a single property name."""

    def map_name(self, name: str) -> Optional[str]:
        """Return the renamed key, or None to keep `name`."""
        ...


@dataclass(frozen=True)
class IdentityMapper:
    """Return every name unchanged."""

    def map_name(self, name: str) -> Optional[str]:
        return name


def _split_glob(attr: str, pattern: str) -> Tuple[str, Optional[str]]:
    if pattern.count("*") > 1:
        raise InvalidAttributeValue(
            attr, f"Glob '{pattern}' may contain at most one '*'"
        )
    head, star, tail = pattern.partition("*")
    return head, (tail if star else None)


@dataclass(frozen=True)
class GlobMapper:
    """Map names with a single-wildcard glob.

    Without a ``*`` in `from_`, only the exact name matches. Without a ``*``
    in `to`, every match maps to `to` verbatim.

    Attributes:
        from_: Source glob.
        to: Target glob.
    """

    from_: str
    to: str
    _from_parts: Tuple[str, Optional[str]] = field(
        init=False, repr=False, compare=False
    )
    _to_parts: Tuple[str, Optional[str]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not self.from_:
            raise EmptyAttributeValue("from")
        if not self.to:
            raise EmptyAttributeValue("to")
        object.__setattr__(self, "_from_parts", _split_glob("from", self.from_))
        object.__setattr__(self, "_to_parts", _split_glob("to", self.to))

    def _carried(self, name: str) -> Optional[str]:
        head, tail = self._from_parts
        if tail is None:
            return "" if name == head else None
        if len(name) < len(head) + len(tail):
            return None
        if not (name.startswith(head) and name.endswith(tail)):
            return None
        return name[len(head) : len(name) - len(tail)]

    def transform(self, carried: str) -> str:
        return carried

    def map_name(self, name: str) -> Optional[str]:
        carried = self._carried(name)
        if carried is None:
            return None
        head, tail = self._to_parts
        if tail is None:
            return head
        return head + self.transform(carried) + tail


@dataclass(frozen=True)
class PackageMapper(GlobMapper):
    """Glob mapper that converts ``/`` to ``.`` in the wildcard part."""

    def transform(self, carried: str) -> str:
        return carried.replace("/", ".")


@dataclass(frozen=True)
class UnpackageMapper(GlobMapper):
    """Glob mapper that converts ``.`` to ``/`` in the wildcard part."""

    def transform(self, carried: str) -> str:
        return carried.replace(".", "/")


_BACKREF = re.compile(r"\\(\d)")


@dataclass(frozen=True)
class RegexMapper:
    """Map names matching a regex, substituting ``\\N`` group references.

    Attributes:
        from_: Regex searched in each name.
        to: Replacement template; ``\\0`` is the whole match.
    """

    from_: str
    to: str
    _compiled: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.from_:
            raise EmptyAttributeValue("from")
        if not self.to:
            raise EmptyAttributeValue("to")
        try:
            compiled = re.compile(self.from_)
        except re.error as exc:
            raise InvalidAttributeValue(
                "from", f"Invalid regex '{self.from_}': {exc}"
            ) from exc
        object.__setattr__(self, "_compiled", compiled)

    def map_name(self, name: str) -> Optional[str]:
        match = self._compiled.search(name)
        if match is None:
            return None

        def _group(ref: "re.Match[str]") -> str:
            index = int(ref.group(1))
            if index > (self._compiled.groups or 0):
                return ""
            return match.group(index) or ""

        return _BACKREF.sub(_group, self.to)


@dataclass(frozen=True)
class MergeMapper:
    """Map every name to the same target.

    Attributes:
        to: The single output name.
    """

    to: str

    def __post_init__(self) -> None:
        if not self.to:
            raise EmptyAttributeValue("to")

    def map_name(self, name: str) -> Optional[str]:
        return self.to


MAPPER_TYPES: Dict[str, Callable[[Optional[str], Optional[str]], NameMapper]] = {
    "identity": lambda f, t: IdentityMapper(),
    "glob": lambda f, t: GlobMapper(f or "", t or ""),
    "regex": lambda f, t: RegexMapper(f or "", t or ""),
    "merge": lambda f, t: MergeMapper(t or ""),
    "package": lambda f, t: PackageMapper(f or "", t or ""),
    "unpackage": lambda f, t: UnpackageMapper(f or "", t or ""),
}


def create_mapper(
    type: str, from_: Optional[str] = None, to: Optional[str] = None
) -> NameMapper:
    """Create one of the stock mappers by type name.

    Args:
        type: Case-insensitive mapper type (see module docstring).
        from_: Source pattern, where the type uses one.
        to: Target pattern, where the type uses one.

    Returns:
        A NameMapper instance.

    Raises:
        ValueError: If the type is unknown.
        EmptyAttributeValue: If a required pattern is missing.
    """
    factory = MAPPER_TYPES.get(str(type).lower())
    if factory is None:
        raise ValueError(
            f"Unknown mapper type '{type}'. Valid values are: {', '.join(MAPPER_TYPES)}"
        )
    return factory(from_, to)
