"""Reference registry and resolution for property sets.

A property set in reference mode delegates every read to the set registered
under its reference id. Resolution follows the chain of ids with an explicit
per-call path, so a chain that comes back to a set already on the path raises
`CircularReference` instead of looping.

`validate_references` checks a whole registry up front, including cycles that
go through nested sets.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Set, Tuple

import networkx as nx

from propsel.errors import CircularReference, InvalidReferenceTarget
from propsel.logging import get_logger

if TYPE_CHECKING:
    from propsel.property_set import PropertySet

LOGGER = get_logger(__name__)

__all__ = [
    "ReferenceRegistry",
    "check_closure",
    "describe",
    "resolve",
    "resolve_chain",
    "reference_graph",
    "validate_references",
]


class ReferenceRegistry:
    """Mapping from reference ids to the objects they denote."""

    def __init__(self) -> None:
        self._references: Dict[str, object] = {}

    def add_reference(self, refid: str, obj: object) -> None:
        """Register `obj` under `refid`, replacing any previous definition.

        Raises:
            ValueError: If `refid` is empty.
        """
        if not refid:
            raise ValueError("Reference id must be non-empty")
        if refid in self._references and self._references[refid] is not obj:
            LOGGER.debug("Overriding previous definition of reference to '%s'", refid)
        self._references[refid] = obj

    def lookup(self, refid: str) -> Optional[object]:
        return self._references.get(refid)

    def refid_of(self, obj: object) -> Optional[str]:
        """Return the first id under which `obj` is registered, if any."""
        for refid, value in self._references.items():
            if value is obj:
                return refid
        return None

    def items(self) -> Iterator[Tuple[str, object]]:
        return iter(self._references.items())

    def __contains__(self, refid: object) -> bool:
        return refid in self._references

    def __len__(self) -> int:
        return len(self._references)


def describe(property_set: "PropertySet") -> str:
    """Human-readable label of a property set for diagnostics."""
    if property_set.name:
        return property_set.name
    registry = property_set.registry
    if isinstance(registry, ReferenceRegistry):
        refid = registry.refid_of(property_set)
        if refid is not None:
            return refid
    return f"<PropertySet at {id(property_set):#x}>"


def _target_of(property_set: "PropertySet") -> "PropertySet":
    # Import here to avoid circular import
    from propsel.property_set import PropertySet

    refid = property_set.refid
    assert refid is not None
    registry = property_set.registry
    if registry is None:
        raise InvalidReferenceTarget(
            refid, f"Reference '{refid}' cannot be resolved without a registry"
        )
    target = registry.lookup(refid)
    if target is None:
        raise InvalidReferenceTarget(refid, f"Reference '{refid}' not found")
    if not isinstance(target, PropertySet):
        raise InvalidReferenceTarget(
            refid,
            f"{refid} doesn't denote a propertyset (got {type(target).__name__})",
        )
    return target


def resolve_chain(
    property_set: "PropertySet",
    path: Tuple["PropertySet", ...] = (),
) -> Tuple["PropertySet", ...]:
    """Follow references from `property_set` until a direct-mode set.

    Args:
        property_set: Set to resolve.
        path: Sets already being evaluated by the caller (nesting chain).

    Returns:
        `path` extended with `property_set` and every set reached through
        references; the last element is the resolved target.

    Raises:
        CircularReference: If a set on the path is reached again.
        InvalidReferenceTarget: If a reference id is unknown or denotes
            something other than a PropertySet.
    """
    chain: Tuple["PropertySet", ...] = path
    current = property_set
    while True:
        if any(seen is current for seen in chain):
            labels = [describe(seen) for seen in chain]
            raise CircularReference(labels + [describe(current)])
        chain = chain + (current,)
        if not current.is_reference:
            return chain
        target = _target_of(current)
        LOGGER.debug(
            "Resolved reference '%s' from %s", current.refid, describe(current)
        )
        current = target


def resolve(property_set: "PropertySet") -> "PropertySet":
    """Return the direct-mode set that `property_set` ultimately denotes."""
    return resolve_chain(property_set)[-1]


def check_closure(
    property_set: "PropertySet",
    path: Tuple["PropertySet", ...] = (),
) -> None:
    """Walk references and nested sets reachable from `property_set`.

    Raises the same errors as evaluation would, without reading any
    properties or taking any cache lock.

    Raises:
        CircularReference: If references or nesting loop back.
        InvalidReferenceTarget: If a reference cannot be resolved.
    """
    finished: Set[int] = set()

    def visit(current: "PropertySet", chain: Tuple["PropertySet", ...]) -> None:
        if id(current) in finished:
            return
        resolved = resolve_chain(current, chain)
        for nested in resolved[-1].nested:
            visit(nested, resolved)
        finished.update(id(ps) for ps in resolved[len(chain) :])

    visit(property_set, path)


def reference_graph(registry: ReferenceRegistry) -> nx.DiGraph:
    """Build a directed graph of registered sets and their dependencies.

    Nodes are PropertySet objects labelled with `describe()`. An edge points
    from a set to the set it references or nests. Reference ids with no
    PropertySet behind them become string nodes flagged ``missing=True``.

    Args:
        registry: Registry whose PropertySet entries are walked.

    Returns:
        A NetworkX DiGraph.
    """
    # Import here to avoid circular import
    from propsel.property_set import PropertySet

    graph = nx.DiGraph()
    stack: List[PropertySet] = [
        obj for _, obj in registry.items() if isinstance(obj, PropertySet)
    ]
    while stack:
        current = stack.pop()
        if current in graph and graph.nodes[current].get("visited"):
            continue
        graph.add_node(current, label=describe(current), visited=True)

        if current.is_reference:
            refid = current.refid
            registry_of = current.registry
            lookup = registry_of.lookup(refid) if registry_of is not None else None
            if isinstance(lookup, PropertySet):
                graph.add_edge(current, lookup, kind="reference")
                stack.append(lookup)
            else:
                graph.add_node(refid, label=refid, missing=True)
                graph.add_edge(current, refid, kind="reference")
            continue

        for nested in current.nested:
            graph.add_edge(current, nested, kind="nested")
            stack.append(nested)
    return graph


def validate_references(registry: ReferenceRegistry) -> None:
    """Check every registered set for dangling references and cycles.

    Raises:
        InvalidReferenceTarget: If a reference id does not denote a PropertySet.
        CircularReference: If references or nesting form a cycle; the chain
            lists the labels along the cycle, repeating the first one.
    """
    graph = reference_graph(registry)

    for node, data in graph.nodes(data=True):
        if data.get("missing"):
            raise InvalidReferenceTarget(
                node, f"Reference '{node}' does not denote a registered propertyset"
            )

    try:
        cycle = nx.find_cycle(graph)
    except nx.NetworkXNoCycle:
        return
    labels = [graph.nodes[u]["label"] for u, _v in cycle]
    raise CircularReference(labels + [labels[0]])
