"""Shared enums for property selection."""

from __future__ import annotations

from enum import Enum

from propsel.errors import UnknownBuiltinGroup


class BuiltinGroup(Enum):
    """Fixed, environment-defined groups of property names."""

    #: Every property of the effective (execution context) table.
    ALL = "all"
    #: Every property of the host system table.
    SYSTEM = "system"
    #: Every property supplied as a user/command-line override.
    COMMANDLINE = "commandline"

    @classmethod
    def from_string(cls, value: str) -> "BuiltinGroup":
        """Parse a string into a BuiltinGroup member.

        Args:
            value: Case-insensitive group name (e.g., "all", "SYSTEM").

        Returns:
            The corresponding BuiltinGroup member.

        Raises:
            UnknownBuiltinGroup: If the string doesn't match any member.
        """
        try:
            return cls[value.upper()]
        except (KeyError, AttributeError):
            raise UnknownBuiltinGroup(value, [e.value for e in cls]) from None
