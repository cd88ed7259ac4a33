"""Exception types raised while configuring or evaluating property sets.

All errors derive from `PropertySetError`, itself a `ValueError`, so code that
treats configuration problems as `ValueError` keeps working.
"""

from __future__ import annotations

from typing import Sequence


class PropertySetError(ValueError):
    """Base class for property selection errors."""


class MutuallyExclusiveAttribute(PropertySetError):
    """Two attributes that exclude each other were both set."""


class InvalidAttributeValue(PropertySetError):
    """An attribute value cannot be used (e.g. an uncompilable regex)."""

    def __init__(self, attr: str, message: str) -> None:
        self.attr = attr
        super().__init__(message)


class EmptyAttributeValue(InvalidAttributeValue):
    """A selection attribute was given an empty or missing value."""

    def __init__(self, attr: str) -> None:
        super().__init__(attr, f"Invalid attribute '{attr}': value must be non-empty")


class UnknownBuiltinGroup(InvalidAttributeValue):
    """A builtin group name outside the closed set was supplied."""

    def __init__(self, value: object, valid: Sequence[str]) -> None:
        self.value = value
        super().__init__(
            "builtin",
            f"Invalid builtin group '{value}'. Valid values are: {', '.join(valid)}",
        )


class TooManyMappers(PropertySetError):
    """A second mapper was attached to the same property set."""


class InvalidReferenceTarget(PropertySetError):
    """A reference id does not denote a registered property set."""

    def __init__(self, refid: str, message: str) -> None:
        self.refid = refid
        super().__init__(message)


class CircularReference(PropertySetError):
    """A reference or nesting chain revisits a set already on the path."""

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = list(chain)
        super().__init__(
            "Circular reference detected: " + " -> ".join(self.chain)
        )
