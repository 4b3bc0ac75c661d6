"""Compressive evaluation: one aggregated best/worst-case tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from estiq._models import Conjunction, Disjunction, Leaf, Result

from ._resolution import resolve_step

if TYPE_CHECKING:
    from estiq._models import Library, Node
    from estiq._resolve import Ancestry

    from ._resolution import ResolvedStep


def sum_parent(name: str, results: tuple[Result, ...]) -> Result:
    """Build a parent whose range is the sum of its children's ranges."""
    return Result(
        name=name,
        min=sum(result.min for result in results),
        max=sum(result.max for result in results),
        children=results,
    )


def bounding_parent(name: str, results: tuple[Result, ...]) -> Result:
    """Build a parent whose range bounds all of its children's ranges."""
    return Result(
        name=name,
        min=min(result.min for result in results),
        max=max(result.max for result in results),
        children=results,
    )


def leaf_result(leaf: Leaf) -> Result:
    """Build the result of a leaf."""
    return Result(name=leaf.name, min=leaf.min, max=leaf.max)


def _compress_children(children: tuple[Node, ...], step: ResolvedStep) -> tuple[Result, ...]:
    return tuple(_compress(child, step.library, step.trail, step.ancestry) for child in children)


def _compress(
    node: Node,
    parent_library: Library | None,
    trail: tuple[str, ...],
    ancestry: Ancestry = (),
) -> Result:
    step = resolve_step(node, parent_library, trail, ancestry)

    match step.node:
        case Conjunction(name=name, children=children):
            return sum_parent(name, _compress_children(children, step))
        case Disjunction(name=name, children=children):
            return bounding_parent(name, _compress_children(children, step))
        case Leaf() as leaf:
            return leaf_result(leaf)


def evaluate_compressive(node: Node, parent_library: Library | None = None) -> Result:
    """Evaluate a document into a single summary tree.

    A conjunction sums its children's ranges. A disjunction spans from the
    lowest minimum to the highest maximum of its alternatives, which bounds
    every alternative rather than picking one. A leaf keeps its own range.

    Args:
        node: The root node of the document.
        parent_library: Library visible to the root. Defaults to an empty one.

    Returns:
        A result tree with the same shape as the document.

    Raises:
        SchemaError: If any node of the document is invalid.
        CycleError: If an extend chain is cyclic.

    """
    return _compress(node, parent_library, ())
