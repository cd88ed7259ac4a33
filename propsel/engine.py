"""Selection engine: computes the names a property set selects.

Evaluation order for a set:
1. Resolve references to the target set.
2. Union the matches of each selector, in declaration order.
3. Union the names selected by each nested set (each applies its own
   references, negation and caching).
4. Negate against the effective table when the set asks for it.

Results are ordered lists without duplicates, so that renaming collisions
resolve in selection order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Tuple

from propsel.references import resolve_chain
from propsel.selectors import match_selector

if TYPE_CHECKING:
    from propsel.property_set import PropertySet
    from propsel.providers import PropertyProvider

__all__ = [
    "compute_names",
    "evaluate",
]


def compute_names(
    property_set: "PropertySet",
    provider: "PropertyProvider",
    path: Tuple["PropertySet", ...] = (),
) -> List[str]:
    """Resolve `property_set` and compute its selected names without caching.

    Args:
        property_set: Set to evaluate; may be in reference mode.
        provider: Source of the property tables.
        path: Sets already being evaluated (used for cycle detection).

    Returns:
        Selected names, ordered and duplicate-free.

    Raises:
        CircularReference: If references or nesting loop back.
        InvalidReferenceTarget: If a reference cannot be resolved.
    """
    chain = resolve_chain(property_set, path)
    return evaluate(chain[-1], provider, chain)


def evaluate(
    target: "PropertySet",
    provider: "PropertyProvider",
    path: Tuple["PropertySet", ...],
) -> List[str]:
    """Evaluate a direct-mode set whose resolution chain is `path`."""
    properties = provider.get_effective_properties()
    names: Dict[str, None] = {}

    for selector in target.selectors:
        names.update(dict.fromkeys(match_selector(selector, properties, provider)))

    for nested in target.nested:
        names.update(dict.fromkeys(nested.collect_names(provider, path)))

    if target.negate:
        return [name for name in properties if name not in names]
    return list(names)
