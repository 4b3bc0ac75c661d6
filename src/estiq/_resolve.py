"""Resolution of ``extend`` references against the visible library."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._errors import CycleError, UnknownReferenceError
from ._merge import merge_nodes

if TYPE_CHECKING:
    from ._models import Library, Node

logger = logging.getLogger(__name__)

type Ancestry = tuple[tuple[str, Node], ...]
"""Library entries (name and definition) being expanded by a node and its ancestors."""


def _check_ancestry(reference: str, base: Node, ancestry: Ancestry, trail: tuple[str, ...]) -> None:
    # Entries are compared by identity: a local entry overriding a name is a different definition
    for index, (_, entry) in enumerate(ancestry):
        if entry is base:
            chain = tuple(name for name, _ in ancestry[index:])
            raise CycleError((*chain, reference), trail=trail)


def resolve_extend_entries(
    node: Node,
    library: Library,
    *,
    trail: tuple[str, ...] = (),
    ancestry: Ancestry = (),
) -> tuple[Node, Ancestry]:
    """Resolve a node's extend chain and report the library entries it went through.

    Args:
        node: The node to resolve.
        library: The library visible at the node.
        trail: Names from the document root to the node, for error messages.
        ancestry: Entries already being expanded by the node's ancestors. A
            node extending one of them would be expanded again inside its
            own expansion, without end.

    Returns:
        Tuple of (resolved node, entries of the extend chain in order).

    Raises:
        UnknownReferenceError: If a referenced entry is not in the library.
        CycleError: If the extend chain refers back to an entry it already
            passed through, or to an entry an ancestor is expanding.

    """
    reference = node.extend
    if reference is None:
        return node, ()

    base = library.get(reference)
    if base is None:
        raise UnknownReferenceError(reference, library.keys(), node=node, trail=trail)
    _check_ancestry(reference, base, ancestry, trail)

    logger.debug("Resolving %s: extend '%s'", node.label, reference)
    resolved_base, entries = resolve_extend_entries(
        base,
        library,
        trail=trail,
        ancestry=(*ancestry, (reference, base)),
    )
    return merge_nodes(resolved_base, node), ((reference, base), *entries)


def resolve_extend(node: Node, library: Library, *, trail: tuple[str, ...] = ()) -> Node:
    """Expand a node's ``extend`` reference into a fully merged node.

    The referenced library entry is itself resolved against the same library
    first, so whole extend chains are followed. The node's own fields then
    override the inherited ones (see `merge_nodes`).

    Args:
        node: The node to resolve.
        library: The library visible at the node.
        trail: Names from the document root to the node, for error messages.

    Returns:
        The node itself when it extends nothing, else the merged node.

    Raises:
        UnknownReferenceError: If a referenced entry is not in the library.
        CycleError: If the extend chain refers back to an entry it already
            passed through.

    """
    resolved, _ = resolve_extend_entries(node, library, trail=trail)
    return resolved
