"""Data model for estimation documents and evaluation results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from collections.abc import Generator


class Node(BaseModel):
    """A node of an estimation document, as authored.

    A node is a conjunction when ``all`` is set, a disjunction when ``one_of``
    is set, and a leaf when both ``min`` and ``max`` are set. Which one applies
    is only decided after the node's ``extend`` reference has been resolved,
    so every field is optional here.

    Attributes:
        name: Identifier of the node, unique among its siblings. Used as the
            merge key and as the display label.
        extend: Name of a library entry this node inherits from.
        library: Reusable definitions visible to this node's subtree.
        all: Children that must all be done.
        one_of: Alternatives of which exactly one is done.
        min: Best-case estimate of a leaf.
        max: Worst-case estimate of a leaf.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str | None = None
    extend: str | None = None
    library: dict[str, Node] | None = None
    all: tuple[Node, ...] | None = None
    one_of: tuple[Node, ...] | None = None
    min: float | None = None
    max: float | None = None

    @field_validator("min", "max", mode="before")
    @classmethod
    def _check_number(cls, value: Any) -> Any:
        # int or float only, no bools or numeric strings
        if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
            msg = f"expected a number, got {type(value).__name__}"
            raise ValueError(msg)  # noqa: TRY004
        return value

    @property
    def label(self) -> str:
        """A name to show for this node in messages, even when it has none."""
        if self.name is not None:
            return self.name
        if self.extend is not None:
            return f"<extend {self.extend}>"
        return "<unnamed>"


type Library = Mapping[str, Node]
"""Named node definitions visible at some point of the tree."""


EMPTY_NODE = Node()


class NodeKind(StrEnum):
    """How a resolved node combines its estimate."""

    ALL = auto()  # Sum over every child
    ONE_OF = auto()  # Bounds over mutually exclusive alternatives
    LEAF = auto()  # Direct min/max estimate


@dataclass(frozen=True, slots=True)
class Conjunction:
    """A resolved node whose children must all be done."""

    name: str
    children: tuple[Node, ...]

    @property
    def kind(self) -> NodeKind:
        return NodeKind.ALL


@dataclass(frozen=True, slots=True)
class Disjunction:
    """A resolved node of which exactly one child is done."""

    name: str
    children: tuple[Node, ...]

    @property
    def kind(self) -> NodeKind:
        return NodeKind.ONE_OF


@dataclass(frozen=True, slots=True)
class Leaf:
    """A resolved node with a direct estimate."""

    name: str
    min: float
    max: float

    @property
    def kind(self) -> NodeKind:
        return NodeKind.LEAF


type ResolvedNode = Conjunction | Disjunction | Leaf


@dataclass(frozen=True, slots=True)
class Result:
    """An evaluated node: an aggregated range and the results it was built from.

    Attributes:
        name: Name of the source node.
        min: Best-case aggregate.
        max: Worst-case aggregate.
        children: Results of the children (empty for leaves).

    """

    name: str
    min: float
    max: float
    children: tuple[Result, ...] = ()

    @property
    def is_leaf(self) -> bool:
        """Check if this result has no children."""
        return len(self.children) == 0

    def walk(self, depth: int = 0) -> Generator[tuple[int, Result]]:
        """Iterate over this result tree depth-first, parents before children.

        Yields:
            Tuples of (depth, result), where the result this method is called
            on has the given depth.

        """
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)

    def to_dict(self) -> dict[str, Any]:
        """Convert the result tree to plain dicts and lists."""
        return {
            "name": self.name,
            "min": self.min,
            "max": self.max,
            "children": [child.to_dict() for child in self.children],
        }
