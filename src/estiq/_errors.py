"""Exceptions raised while resolving and evaluating estimation documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._models import Node


def format_trail(trail: Iterable[str]) -> str:
    """Format a trail of node names as a readable location (e.g. ``root > api > db``)."""
    parts = list(trail)
    if not parts:
        return "<root>"
    return " > ".join(parts)


class EstimationError(Exception):
    """Base class for errors raised while compiling an estimation document.

    Attributes:
        trail: Names of the nodes from the document root down to the node
            where the error was detected.

    """

    def __init__(self, message: str, *, trail: tuple[str, ...] = ()) -> None:
        self.message = message
        self.trail = trail
        super().__init__(message)

    def __str__(self) -> str:
        if not self.trail:
            return self.message
        return f"{self.message} (at {format_trail(self.trail)})"


class SchemaError(EstimationError):
    """A resolved node is neither a conjunction, a disjunction nor a leaf."""

    def __init__(self, message: str, *, node: Node | None = None, trail: tuple[str, ...] = ()) -> None:
        self.node = node
        super().__init__(message, trail=trail)


class UnknownReferenceError(SchemaError):
    """An ``extend`` reference names an entry that is not in the visible library."""

    def __init__(
        self,
        reference: str,
        available: Iterable[str],
        *,
        node: Node | None = None,
        trail: tuple[str, ...] = (),
    ) -> None:
        self.reference = reference
        self.available = tuple(sorted(available))
        visible = ", ".join(self.available) if self.available else "none"
        msg = f"Unknown library entry '{reference}' in extend (visible entries: {visible})"
        super().__init__(msg, node=node, trail=trail)


class CycleError(EstimationError):
    """An extend chain refers back to an entry it already passed through."""

    def __init__(self, chain: tuple[str, ...], *, trail: tuple[str, ...] = ()) -> None:
        self.chain = chain
        msg = f"Cycle detected in extend chain: {' -> '.join(chain)}"
        super().__init__(msg, trail=trail)


class ScenarioLimitError(EstimationError):
    """Expansive evaluation would produce more scenarios than allowed."""

    def __init__(self, count: int, limit: int, *, trail: tuple[str, ...] = ()) -> None:
        self.count = count
        self.limit = limit
        msg = f"Expansion produces {count} scenarios, exceeding the limit of {limit}"
        super().__init__(msg, trail=trail)


class DocumentError(Exception):
    """An estimation document could not be read or does not have the expected shape."""
