"""Evaluation engine module for estiq.

This module provides pure functions for evaluating estimation documents.
Each node is first resolved (library scope, extend reference, classification)
and then evaluated with one of two strategies:

- evaluate_compressive: One summary tree with best/worst-case totals
- evaluate_expansive: One result tree per concrete scenario
- compile_document: Both strategies, with errors returned as data
"""

from ._compressive import evaluate_compressive
from ._engine import CompilationResult, compile_document
from ._expansive import count_scenarios, evaluate_expansive

__all__ = [
    "CompilationResult",
    "compile_document",
    "count_scenarios",
    "evaluate_compressive",
    "evaluate_expansive",
]
