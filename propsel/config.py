"""Configuration classes for propsel components."""

from dataclasses import dataclass


@dataclass
class PropertySetConfig:
    """Defaults and evaluation switches for PropertySet instances."""

    # Recompute the selected names on every query unless a set says otherwise
    default_dynamic: bool = True

    # Invert the selection against the effective properties
    default_negate: bool = False

    # Guard the lazy name-cache fill with a per-set lock
    synchronize_cache: bool = True

    # Opt in to reading values missing from the effective table from the
    # user-supplied, then system tables (names selected by SYSTEM/COMMANDLINE)
    value_fallback: bool = False


# Global configuration instance
PROPERTYSET_CONFIG = PropertySetConfig()
