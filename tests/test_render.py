"""Tests for plain-text rendering of results."""

import pytest

from estiq import Node, Result, compile_document, format_result, render_report
from estiq._render import HEADER


class TestFormatResult:
    """Tests for format_result."""

    def test_leaf(self) -> None:
        assert format_result(Result("task", 1, 2.5)) == ["    1.00     2.50 | task"]

    def test_indentation_follows_depth(self) -> None:
        tree = Result("root", 3, 7, (Result("a", 1, 2, (Result("a1", 1, 2),)), Result("b", 2, 5)))

        lines = format_result(tree)

        assert lines == [
            "    3.00     7.00 | root",
            "    1.00     2.00 |   a",
            "    1.00     2.00 |     a1",
            "    2.00     5.00 |   b",
        ]

    def test_precision(self) -> None:
        assert format_result(Result("task", 1.25, 10), precision=1) == ["     1.2     10.0 | task"]

    def test_wide_numbers_are_not_truncated(self) -> None:
        assert format_result(Result("big", 123456.5, 1234567.25)) == ["123456.50 1234567.25 | big"]


class TestRenderReport:
    """Tests for render_report."""

    def test_summary_then_simulations(self) -> None:
        doc = Node(name="X", one_of=(Node(name="A", min=1, max=2), Node(name="B", min=3, max=4)))

        lines = render_report(compile_document(doc))

        assert lines[0] == "Compressed summary"
        assert lines[2] == HEADER
        assert lines[3] == "    1.00     4.00 | X"
        assert "Simulation 0" in lines
        assert "Simulation 1" in lines
        assert "Simulation 2" not in lines
        index = lines.index("Simulation 1")
        assert lines[index - 1] == ""
        assert lines[index + 3 :] == ["    3.00     4.00 | X", "    3.00     4.00 |   B"]

    def test_header_columns(self) -> None:
        assert HEADER == "     min      max | text"

    def test_failed_compilation(self) -> None:
        with pytest.raises(ValueError, match="failed compilation"):
            render_report(compile_document(Node(name="bad")))
