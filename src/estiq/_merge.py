"""Structural merging of node definitions.

Merging is how a node inherits from the library entry it extends: the
inherited definition is the base and the node itself the override. Scalar
fields are right-biased, while child collections are merged by name so that
an override can refine individual children without restating the whole list.
"""

from __future__ import annotations

from functools import reduce
from typing import TYPE_CHECKING

from ._models import EMPTY_NODE, Node

if TYPE_CHECKING:
    from collections.abc import Iterable

_SCALAR_FIELDS = ("name", "extend", "library", "min", "max")


def merge_node_lists(nodes: Iterable[Node]) -> tuple[Node, ...]:
    """Collapse same-named nodes of a list into one node each.

    Nodes are grouped by name in order of first appearance, and each group is
    folded left to right through `merge_nodes`. Unnamed nodes share a single
    group.

    Args:
        nodes: The nodes to merge, earlier layers first.

    Returns:
        One merged node per distinct name, in order of first appearance.

    """
    groups: dict[str | None, list[Node]] = {}
    for node in nodes:
        groups.setdefault(node.name, []).append(node)
    return tuple(reduce(merge_nodes, group, EMPTY_NODE) for group in groups.values())


def _merge_children(base: tuple[Node, ...] | None, override: tuple[Node, ...] | None) -> tuple[Node, ...] | None:
    if base is None and override is None:
        return None
    return merge_node_lists((*(base or ()), *(override or ())))


def merge_nodes(base: Node, override: Node) -> Node:
    """Merge two node definitions, with ``override`` taking precedence.

    Scalar fields (``name``, ``extend``, ``library``, ``min``, ``max``) take the
    override's value when it is set and the base's value otherwise. The
    ``all`` and ``one_of`` collections are absent only when both sides lack
    them; otherwise the base's entries followed by the override's entries
    are merged by name with `merge_node_lists`.

    Args:
        base: The definition being inherited from.
        override: The definition whose fields win.

    Returns:
        A new merged node. Neither input is modified.

    Example:
        >>> base = Node(name="api", all=(Node(name="db", min=1, max=2),))
        >>> override = Node(all=(Node(name="db", max=5), Node(name="ui", min=1, max=1)))
        >>> merged = merge_nodes(base, override)
        >>> [(c.name, c.min, c.max) for c in merged.all]
        [('db', 1.0, 5.0), ('ui', 1.0, 1.0)]

    """
    fields = {
        field: value if (value := getattr(override, field)) is not None else getattr(base, field)
        for field in _SCALAR_FIELDS
    }
    return Node(
        **fields,
        all=_merge_children(base.all, override.all),
        one_of=_merge_children(base.one_of, override.one_of),
    )
