"""PropertySet: a declarative, queryable selection of properties.

A PropertySet is configured once and then queried any number of times.
It is either in direct mode (selectors, nested sets, flags, mapper) or in
reference mode (an id resolved through a ReferenceRegistry); the first
configuring call picks the mode for good.

Example:
    from propsel import MappingPropertyProvider, PropertySet

    provider = MappingPropertyProvider(effective={"app.name": "demo", "x": "1"})
    ps = PropertySet(provider=provider)
    ps.append_prefix("app.")
    ps.set_mapper("glob", "app.*", "*")
    ps.query()  # {"name": "demo"}
"""

from __future__ import annotations

import contextlib
import threading
from typing import (
    TYPE_CHECKING,
    Any,
    ContextManager,
    Dict,
    List,
    Mapping,
    Optional,
    Set,
    Tuple,
    Union,
)

from propsel.config import PROPERTYSET_CONFIG, PropertySetConfig
from propsel.engine import evaluate
from propsel.errors import (
    EmptyAttributeValue,
    MutuallyExclusiveAttribute,
    TooManyMappers,
)
from propsel.logging import get_logger
from propsel.mappers import create_mapper
from propsel.providers import SystemPropertyProvider
from propsel.references import check_closure, describe, resolve, resolve_chain
from propsel.selectors import PropertyRef, Selector, normalize_selector
from propsel.types import BuiltinGroup

if TYPE_CHECKING:
    from propsel.mappers import NameMapper
    from propsel.providers import PropertyProvider
    from propsel.references import ReferenceRegistry

LOGGER = get_logger(__name__)


class PropertySet:
    """A set of properties selected from a property provider.

    Attributes:
        name: Optional label used in diagnostics.
        provider: Execution context the set reads from when `query()` gets
            no provider; the host environment is used when both are missing.
        registry: Registry used to resolve a reference id.
        config: Evaluation settings (defaults to the global config).
    """

    def __init__(
        self,
        provider: Optional["PropertyProvider"] = None,
        registry: Optional["ReferenceRegistry"] = None,
        name: Optional[str] = None,
        config: Optional[PropertySetConfig] = None,
    ) -> None:
        self.name = name
        self.provider = provider
        self.registry = registry
        self.config = config or PROPERTYSET_CONFIG

        self._selectors: List[Selector] = []
        self._nested: List[PropertySet] = []
        self._dynamic = self.config.default_dynamic
        self._negate = self.config.default_negate
        self._mapper: Optional["NameMapper"] = None
        self._refid: Optional[str] = None

        self._attributes_set = False
        self._cached_names: Optional[Tuple[str, ...]] = None
        self._cache_lock = threading.RLock()

    # ------------------------------------------------------------------
    # Mode handling
    # ------------------------------------------------------------------

    def _assert_not_reference(self) -> None:
        """Lock the set into direct mode, or fail if it is a reference."""
        if self._refid is not None:
            raise MutuallyExclusiveAttribute(
                f"{describe(self)}: you must not specify more than one attribute "
                f"when using refid ('{self._refid}')"
            )
        self._attributes_set = True
        self._cached_names = None

    def set_refid(self, refid: str) -> None:
        """Make this set an alias of the set registered under `refid`.

        Raises:
            MutuallyExclusiveAttribute: If any other attribute, or a reference,
                was already set.
            EmptyAttributeValue: If `refid` is empty.
        """
        if not refid:
            raise EmptyAttributeValue("refid")
        if self._attributes_set or self._refid is not None:
            raise MutuallyExclusiveAttribute(
                f"{describe(self)}: refid is mutually exclusive with other attributes"
            )
        self._refid = refid

    @property
    def refid(self) -> Optional[str]:
        return self._refid

    @property
    def is_reference(self) -> bool:
        return self._refid is not None

    def resolve(self) -> "PropertySet":
        """Return the direct-mode set this set denotes (itself if direct)."""
        return resolve(self)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def add_selector(
        self, selector: Union[Selector, PropertyRef, Mapping[str, Any]]
    ) -> None:
        """Append a selector (or anything `normalize_selector` accepts)."""
        normalized = normalize_selector(selector)
        self._assert_not_reference()
        self._selectors.append(normalized)

    def append_name(self, name: str) -> None:
        self.add_selector({"name": name})

    def append_regex(self, regex: str) -> None:
        self.add_selector({"regex": regex})

    def append_prefix(self, prefix: str) -> None:
        self.add_selector({"prefix": prefix})

    def append_builtin(self, builtin: Union[BuiltinGroup, str]) -> None:
        self.add_selector({"builtin": builtin})

    def add_property_set(self, other: "PropertySet") -> None:
        """Union the selection of `other` into this set (shared, not copied)."""
        if not isinstance(other, PropertySet):
            raise TypeError(
                f"Nested set must be a PropertySet, got {type(other).__name__}"
            )
        self._assert_not_reference()
        self._nested.append(other)

    def add_mapper(self, mapper: "NameMapper") -> None:
        """Attach the renaming mapper.

        Raises:
            TooManyMappers: If a mapper is already attached.
        """
        self._assert_not_reference()
        if self._mapper is not None:
            raise TooManyMappers(f"{describe(self)}: too many mappers")
        self._mapper = mapper

    def set_mapper(
        self, type: str, from_: Optional[str] = None, to: Optional[str] = None
    ) -> None:
        """Create a stock mapper by type name and attach it."""
        self.add_mapper(create_mapper(type, from_, to))

    @property
    def dynamic(self) -> bool:
        """Whether the selected names are recomputed on every query."""
        return self.resolve()._dynamic if self.is_reference else self._dynamic

    @dynamic.setter
    def dynamic(self, value: bool) -> None:
        self._assert_not_reference()
        self._dynamic = bool(value)

    @property
    def negate(self) -> bool:
        """Whether the selection is inverted against the effective table."""
        return self.resolve()._negate if self.is_reference else self._negate

    @negate.setter
    def negate(self, value: bool) -> None:
        self._assert_not_reference()
        self._negate = bool(value)

    @property
    def mapper(self) -> Optional["NameMapper"]:
        return self.resolve()._mapper if self.is_reference else self._mapper

    @property
    def selectors(self) -> Tuple[Selector, ...]:
        target = self.resolve() if self.is_reference else self
        return tuple(target._selectors)

    @property
    def nested(self) -> Tuple["PropertySet", ...]:
        target = self.resolve() if self.is_reference else self
        return tuple(target._nested)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def _provider_for(
        self, provider: Optional["PropertyProvider"]
    ) -> "PropertyProvider":
        if provider is not None:
            return provider
        if self.provider is not None:
            return self.provider
        LOGGER.debug("%s has no provider; using host environment", describe(self))
        return SystemPropertyProvider()

    def _cache_guard(self) -> ContextManager[Any]:
        if self.config.synchronize_cache:
            return self._cache_lock
        return contextlib.nullcontext()

    def collect_names(
        self,
        provider: "PropertyProvider",
        path: Tuple["PropertySet", ...] = (),
    ) -> List[str]:
        """Return the selected names, honoring the static-name cache.

        Args:
            provider: Source of the property tables.
            path: Sets already being evaluated (used for cycle detection).

        Returns:
            Selected names, ordered and duplicate-free.
        """
        if not path:
            # Nested static sets lock in evaluation order; a loop must fail
            # here, before any lock is held.
            check_closure(self)
        chain = resolve_chain(self, path)
        target = chain[-1]
        if target._dynamic:
            return evaluate(target, provider, chain)

        with target._cache_guard():
            if target._cached_names is None:
                target._cached_names = tuple(evaluate(target, provider, chain))
                LOGGER.debug(
                    "Cached %d name(s) for static %s",
                    len(target._cached_names),
                    describe(target),
                )
            return list(target._cached_names)

    def selected_names(self, provider: Optional["PropertyProvider"] = None) -> Set[str]:
        """Return the selected names before renaming."""
        return set(self.collect_names(self._provider_for(provider)))

    def query(self, provider: Optional["PropertyProvider"] = None) -> Dict[str, str]:
        """Project the selected properties into a new dictionary.

        Values are read from the provider on every call, even when the
        names are cached. When a mapper is attached, its rename (if any)
        becomes the output key; later names overwrite earlier ones on
        collision.

        Args:
            provider: Property source; defaults to the set's own provider,
                then to the host environment.

        Returns:
            Mapping of (possibly renamed) property names to values.
        """
        provider = self._provider_for(provider)
        names = self.collect_names(provider)
        mapper = self.mapper

        sources = [provider.get_effective_properties()]
        if self.config.value_fallback:
            sources.append(provider.get_user_supplied_properties())
            sources.append(provider.get_system_properties())

        result: Dict[str, str] = {}
        for name in names:
            value = _first_value(name, sources)
            if value is None:
                LOGGER.debug("Skipping '%s': no value in any property source", name)
                continue
            key = name
            if mapper is not None:
                renamed = mapper.map_name(name)
                if renamed is not None:
                    key = renamed
            result[key] = value
        return result

    def __repr__(self) -> str:
        if self.is_reference:
            return f"PropertySet(refid={self._refid!r})"
        return (
            f"PropertySet(name={self.name!r}, selectors={self._selectors!r}, "
            f"nested={len(self._nested)}, dynamic={self._dynamic}, "
            f"negate={self._negate}, mapper={self._mapper!r})"
        )


def _first_value(name: str, sources: List[Mapping[str, str]]) -> Optional[str]:
    for source in sources:
        value = source.get(name)
        if value is not None:
            return value
    return None
