"""Plain-text rendering of result trees."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._eval_engine import CompilationResult
    from ._models import Result

COLUMN_WIDTH = 8
INDENT = "  "
HEADER = f"{'min':>{COLUMN_WIDTH}} {'max':>{COLUMN_WIDTH}} | text"


def format_result(result: Result, precision: int = 2) -> list[str]:
    """Format a result tree as one line per node, parents before children.

    Each line holds the minimum and the maximum right-aligned in fixed-width
    columns, a separator, and the node name indented two spaces per level.

    Example:
        >>> format_result(Result("api", 1, 2.5, (Result("db", 1, 2.5),)))
        ['    1.00     2.50 | api', '    1.00     2.50 |   db']

    """
    return [
        f"{node.min:>{COLUMN_WIDTH}.{precision}f} {node.max:>{COLUMN_WIDTH}.{precision}f} | {INDENT * depth}{node.name}"
        for depth, node in result.walk()
    ]


def render_block(title: str, result: Result, precision: int = 2) -> list[str]:
    """Format a result tree under a title, a rule and the column header."""
    return [title, "-" * max(len(title), len(HEADER) - 4), HEADER, *format_result(result, precision)]


def simulation_title(index: int) -> str:
    return f"Simulation {index}"


def render_report(compilation: CompilationResult, precision: int = 2) -> list[str]:
    """Format the summary and every scenario of a successful compilation.

    The summary comes first under "Compressed summary", followed by each
    scenario under "Simulation N" (N counting from 0), separated by blank
    lines.

    Raises:
        ValueError: If the compilation failed.

    """
    if compilation.summary is None:
        msg = "Cannot render a failed compilation"
        raise ValueError(msg)

    lines = render_block("Compressed summary", compilation.summary, precision)
    for index, scenario in enumerate(compilation.scenarios):
        lines.append("")
        lines.extend(render_block(simulation_title(index), scenario, precision))
    return lines
