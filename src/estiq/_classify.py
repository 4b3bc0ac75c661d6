"""Classification of resolved nodes into conjunctions, disjunctions and leaves."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._errors import SchemaError
from ._models import Conjunction, Disjunction, Leaf, NodeKind

if TYPE_CHECKING:
    from ._models import Node, ResolvedNode


def node_kind(node: Node, *, trail: tuple[str, ...] = ()) -> NodeKind:
    """Determine how a resolved node combines its estimate.

    The checks are made in order: ``all`` makes a conjunction, then
    ``one_of`` a disjunction, then a ``min``/``max`` pair a leaf.

    Raises:
        SchemaError: If the node matches none of them.

    """
    if node.all is not None:
        return NodeKind.ALL
    if node.one_of is not None:
        return NodeKind.ONE_OF
    if node.min is not None and node.max is not None:
        return NodeKind.LEAF
    msg = f"Invalid schema: node '{node.label}' needs 'all', 'one_of' or both 'min' and 'max'"
    raise SchemaError(msg, node=node, trail=trail)


def classify(node: Node, *, trail: tuple[str, ...] = ()) -> ResolvedNode:
    """Turn a resolved node into its tagged variant.

    Args:
        node: A node whose extend reference has already been resolved.
        trail: Names from the document root to the node, for error messages.

    Returns:
        A `Conjunction`, `Disjunction` or `Leaf`.

    Raises:
        SchemaError: If the node has no kind, has no name, or is a
            disjunction without alternatives.

    """
    kind = node_kind(node, trail=trail)

    if node.name is None:
        msg = f"Invalid schema: {kind} node '{node.label}' has no name"
        raise SchemaError(msg, node=node, trail=trail)

    match kind:
        case NodeKind.ALL:
            return Conjunction(name=node.name, children=node.all or ())
        case NodeKind.ONE_OF:
            if not node.one_of:
                msg = f"Invalid schema: node '{node.name}' has an empty 'one_of'"
                raise SchemaError(msg, node=node, trail=trail)
            return Disjunction(name=node.name, children=node.one_of)
        case NodeKind.LEAF:
            return Leaf(name=node.name, min=node.min, max=node.max)  # type: ignore[arg-type]
