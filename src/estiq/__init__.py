"""Hierarchical effort estimation tool."""

__all__ = [
    "CompilationResult",
    "Conjunction",
    "CycleError",
    "Disjunction",
    "DocumentError",
    "EstimationError",
    "Leaf",
    "Library",
    "Node",
    "NodeKind",
    "Result",
    "ResolvedNode",
    "ScenarioLimitError",
    "SchemaError",
    "UnknownReferenceError",
    "classify",
    "compile_document",
    "count_scenarios",
    "effective_library",
    "evaluate_compressive",
    "evaluate_expansive",
    "export_results",
    "format_result",
    "load_document",
    "merge_node_lists",
    "merge_nodes",
    "node_kind",
    "parse_document",
    "render_report",
    "resolve_extend",
]

from ._classify import classify, node_kind
from ._errors import (
    CycleError,
    DocumentError,
    EstimationError,
    ScenarioLimitError,
    SchemaError,
    UnknownReferenceError,
)
from ._eval_engine import (
    CompilationResult,
    compile_document,
    count_scenarios,
    evaluate_compressive,
    evaluate_expansive,
)
from ._io import export_results, load_document, parse_document
from ._library import effective_library
from ._merge import merge_node_lists, merge_nodes
from ._models import Conjunction, Disjunction, Leaf, Library, Node, NodeKind, ResolvedNode, Result
from ._render import format_result, render_report
from ._resolve import resolve_extend
