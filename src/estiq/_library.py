"""Lexically scoped libraries of reusable node definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._models import Library, Node


def effective_library(node: Node, parent_library: Library | None = None) -> Library:
    """Compute the library visible to ``node`` and its subtree.

    The node's own ``library`` entries are laid over the enclosing library,
    replacing entries of the same name. A new mapping is returned, so the
    enclosing scope stays untouched for the node's siblings.

    Args:
        node: The node as authored (before extend resolution).
        parent_library: The library visible to the node's parent.

    Returns:
        The library for the node's subtree.

    """
    return {**(parent_library or {}), **(node.library or {})}
