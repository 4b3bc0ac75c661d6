"""Per-node resolution shared by the evaluators."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from estiq._classify import classify
from estiq._library import effective_library
from estiq._resolve import resolve_extend_entries

if TYPE_CHECKING:
    from estiq._models import Library, Node, ResolvedNode
    from estiq._resolve import Ancestry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedStep:
    """A node ready for evaluation.

    Attributes:
        node: The classified node, after extend resolution.
        library: The library visible to the node's children.
        trail: Names from the document root down to this node.
        ancestry: Library entries expanded by this node and its ancestors.

    """

    node: ResolvedNode
    library: Library
    trail: tuple[str, ...]
    ancestry: Ancestry = ()


def resolve_step(
    node: Node,
    parent_library: Library | None,
    trail: tuple[str, ...],
    ancestry: Ancestry = (),
) -> ResolvedStep:
    """Resolve the library scope and extend reference of a node, then classify it.

    Args:
        node: The node as authored.
        parent_library: The library visible to the node's parent.
        trail: Names from the document root down to the node's parent.
        ancestry: Library entries expanded by the node's ancestors.

    Returns:
        The resolved step for the node.

    Raises:
        SchemaError: If the resolved node is invalid.
        CycleError: If the node's extend chain is cyclic, or extends an entry
            one of its ancestors is expanding.

    """
    library = effective_library(node, parent_library)
    full_node, entries = resolve_extend_entries(node, library, trail=(*trail, node.label), ancestry=ancestry)
    resolved = classify(full_node, trail=(*trail, full_node.label))
    logger.debug("Classified %s as %s", resolved.name, resolved.kind)
    return ResolvedStep(
        node=resolved,
        library=library,
        trail=(*trail, resolved.name),
        ancestry=(*ancestry, *entries),
    )
