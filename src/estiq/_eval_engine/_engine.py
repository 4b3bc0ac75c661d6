"""Compilation of a document with both evaluation strategies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from estiq._errors import EstimationError

from ._compressive import evaluate_compressive
from ._expansive import evaluate_expansive

if TYPE_CHECKING:
    from estiq._models import Library, Node, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompilationResult:
    """Result of compiling an estimation document.

    A compilation either succeeds completely or carries the error that
    stopped it. Partial results are never kept: when ``errors`` is
    non-empty, ``summary`` is None and ``scenarios`` is empty.

    Attributes:
        summary: The compressive summary tree.
        scenarios: The expansive scenario trees, in enumeration order.
        errors: Errors that aborted the compilation.

    """

    summary: Result | None = None
    scenarios: tuple[Result, ...] = ()
    errors: tuple[EstimationError, ...] = ()

    @property
    def success(self) -> bool:
        """Check if compilation completed without errors."""
        return len(self.errors) == 0

    def raise_for_errors(self) -> None:
        """Re-raise the error that aborted the compilation, if any.

        Raises:
            EstimationError: The first recorded error.

        """
        if self.errors:
            raise self.errors[0]


def compile_document(
    node: Node,
    *,
    library: Library | None = None,
    expand: bool = True,
    max_scenarios: int | None = None,
) -> CompilationResult:
    """Compile a document into its summary and, optionally, its scenarios.

    This is a pure function: errors raised by the evaluators are returned in
    the result instead of propagating, so callers can decide to abort (with
    `CompilationResult.raise_for_errors`) or to report them.

    Args:
        node: The root node of the document.
        library: Library visible to the root. Defaults to an empty one.
        expand: Whether to enumerate scenarios as well.
        max_scenarios: Upper bound on the number of scenarios. None means
            unbounded.

    Returns:
        CompilationResult with the summary and scenarios, or with the error.

    Example:
        >>> doc = Node(name="X", one_of=(Node(name="A", min=1, max=2), Node(name="B", min=3, max=4)))
        >>> result = compile_document(doc)
        >>> (result.summary.min, result.summary.max, len(result.scenarios))
        (1.0, 4.0, 2)

    """
    try:
        summary = evaluate_compressive(node, library)
        scenarios = evaluate_expansive(node, library, max_scenarios=max_scenarios) if expand else []
    except EstimationError as e:
        logger.debug("Compilation of %s failed: %s", node.label, e)
        return CompilationResult(errors=(e,))

    logger.debug("Compiled %s into %d scenarios", summary.name, len(scenarios))
    return CompilationResult(summary=summary, scenarios=tuple(scenarios))
