"""propsel: declarative property selection.

propsel computes derived subsets of key/value configuration tables from
composable selection rules: exact name, regular expression, prefix or a
builtin group. A selection can be negated, renamed through a mapper,
unioned with nested selections, or defined as a reference to another one.

Primary API:
    PropertySet - Configure selectors and query the projected properties
    MappingPropertyProvider - In-memory (or YAML-loaded) property tables
    SystemPropertyProvider - Host environment property tables
    ReferenceRegistry - Reference ids for aliasing property sets

Example:
    from propsel import MappingPropertyProvider, PropertySet

    provider = MappingPropertyProvider(effective={"a": "1", "b": "2", "c": "3"})
    ps = PropertySet(provider=provider)
    ps.append_name("a")
    ps.negate = True
    ps.query()  # {"b": "2", "c": "3"}
"""

from __future__ import annotations

from propsel import logging
from propsel.config import PROPERTYSET_CONFIG, PropertySetConfig
from propsel.engine import compute_names
from propsel.errors import (
    CircularReference,
    EmptyAttributeValue,
    InvalidAttributeValue,
    InvalidReferenceTarget,
    MutuallyExclusiveAttribute,
    PropertySetError,
    TooManyMappers,
    UnknownBuiltinGroup,
)
from propsel.mappers import NameMapper, create_mapper
from propsel.property_set import PropertySet
from propsel.providers import (
    MappingPropertyProvider,
    PropertyProvider,
    SystemPropertyProvider,
)
from propsel.references import ReferenceRegistry, resolve, validate_references
from propsel.selectors import (
    ByBuiltin,
    ByName,
    ByPrefix,
    ByRegex,
    PropertyRef,
    Selector,
    normalize_selector,
)
from propsel.types import BuiltinGroup

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Aggregate
    "PropertySet",
    "compute_names",
    # Selectors
    "Selector",
    "ByName",
    "ByRegex",
    "ByPrefix",
    "ByBuiltin",
    "BuiltinGroup",
    "PropertyRef",
    "normalize_selector",
    # Mappers
    "NameMapper",
    "create_mapper",
    # Providers
    "PropertyProvider",
    "MappingPropertyProvider",
    "SystemPropertyProvider",
    # References
    "ReferenceRegistry",
    "resolve",
    "validate_references",
    # Configuration
    "PropertySetConfig",
    "PROPERTYSET_CONFIG",
    # Errors
    "PropertySetError",
    "MutuallyExclusiveAttribute",
    "InvalidAttributeValue",
    "EmptyAttributeValue",
    "UnknownBuiltinGroup",
    "TooManyMappers",
    "InvalidReferenceTarget",
    "CircularReference",
    # Utilities
    "logging",
]
