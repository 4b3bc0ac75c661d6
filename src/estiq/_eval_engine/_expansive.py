"""Expansive evaluation: one result tree per concrete scenario.

A scenario picks one alternative at every disjunction. Conjunctions combine
the scenarios of their children through a Cartesian product, so the number of
scenarios multiplies under conjunctions and adds up under disjunctions.
"""

from __future__ import annotations

import logging
import math
from itertools import chain, product
from typing import TYPE_CHECKING

from estiq._errors import ScenarioLimitError
from estiq._models import Conjunction, Disjunction, Leaf

from ._compressive import leaf_result, sum_parent
from ._resolution import resolve_step

if TYPE_CHECKING:
    from estiq._models import Library, Node, Result
    from estiq._resolve import Ancestry

    from ._resolution import ResolvedStep

logger = logging.getLogger(__name__)


def _check_limit(count: int, max_scenarios: int | None, trail: tuple[str, ...]) -> None:
    if max_scenarios is not None and count > max_scenarios:
        raise ScenarioLimitError(count, max_scenarios, trail=trail)


def _expand_children(
    children: tuple[Node, ...],
    step: ResolvedStep,
    max_scenarios: int | None,
) -> list[list[Result]]:
    return [_expand(child, step.library, step.trail, max_scenarios, step.ancestry) for child in children]


def _expand(
    node: Node,
    parent_library: Library | None,
    trail: tuple[str, ...],
    max_scenarios: int | None,
    ancestry: Ancestry = (),
) -> list[Result]:
    step = resolve_step(node, parent_library, trail, ancestry)

    match step.node:
        case Conjunction(name=name, children=children):
            alternatives = _expand_children(children, step, max_scenarios)
            count = math.prod(len(options) for options in alternatives)
            _check_limit(count, max_scenarios, step.trail)
            logger.debug("Expanding %s into %d combinations", name, count)
            return [sum_parent(name, combination) for combination in product(*alternatives)]
        case Disjunction(name=name, children=children):
            alternatives = _expand_children(children, step, max_scenarios)
            count = sum(len(options) for options in alternatives)
            _check_limit(count, max_scenarios, step.trail)
            logger.debug("Expanding %s into %d alternatives", name, count)
            return [sum_parent(name, (result,)) for result in chain.from_iterable(alternatives)]
        case Leaf() as leaf:
            return [leaf_result(leaf)]


def evaluate_expansive(
    node: Node,
    parent_library: Library | None = None,
    *,
    max_scenarios: int | None = None,
) -> list[Result]:
    """Enumerate every concrete scenario of a document.

    For a conjunction, each combination of one scenario per child becomes a
    result summing that combination. For a disjunction, every scenario of
    every alternative, in order, becomes a result wrapping that single
    alternative. A leaf has exactly one scenario, itself.

    Args:
        node: The root node of the document.
        parent_library: Library visible to the root. Defaults to an empty one.
        max_scenarios: Upper bound on the number of scenarios any node may
            expand into. None means unbounded.

    Returns:
        One result tree per scenario.

    Raises:
        SchemaError: If any node of the document is invalid.
        CycleError: If an extend chain is cyclic.
        ScenarioLimitError: If a node expands into more than ``max_scenarios``
            scenarios.

    """
    return _expand(node, parent_library, (), max_scenarios)


def count_scenarios(node: Node, parent_library: Library | None = None) -> int:
    """Count the scenarios `evaluate_expansive` would produce, without building them.

    Raises:
        SchemaError: If any node of the document is invalid.
        CycleError: If an extend chain is cyclic.

    """

    def count(current: Node, library: Library | None, trail: tuple[str, ...], ancestry: Ancestry) -> int:
        step = resolve_step(current, library, trail, ancestry)
        match step.node:
            case Conjunction(children=children):
                return math.prod(count(child, step.library, step.trail, step.ancestry) for child in children)
            case Disjunction(children=children):
                return sum(count(child, step.library, step.trail, step.ancestry) for child in children)
            case Leaf():
                return 1

    return count(node, parent_library, (), ())
