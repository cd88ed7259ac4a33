"""Property selectors.

This package provides the atomic selection rules a PropertySet is built from.

Usage:
    from propsel.selectors import ByPrefix, match_selector, normalize_selector

    # From loader attributes (mapping with exactly one criterion)
    selector = normalize_selector({"prefix": "app."})

    # Evaluate against a provider's effective table
    names = match_selector(selector, provider.get_effective_properties(), provider)
"""

from .match import match_selector
from .normalize import PropertyRef, normalize_selector
from .schema import SELECTOR_TYPES, ByBuiltin, ByName, ByPrefix, ByRegex, Selector

__all__ = [
    # Schema
    "ByName",
    "ByRegex",
    "ByPrefix",
    "ByBuiltin",
    "Selector",
    "SELECTOR_TYPES",
    # Building
    "PropertyRef",
    "normalize_selector",
    # Evaluation
    "match_selector",
]
