from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
import yaml
from pydantic import ValidationError

from ._errors import DocumentError
from ._models import Node

if TYPE_CHECKING:
    from ._eval_engine import CompilationResult

logger = logging.getLogger(__name__)

YAML_SUFFIXES = frozenset({".yaml", ".yml"})
JSON_SUFFIXES = frozenset({".json"})
TOML_SUFFIXES = frozenset({".toml"})


# =============================================================================
# Loading documents
# =============================================================================


def _parse_text(text: str, suffix: str) -> Any:
    """Parse document text according to the file suffix (YAML for unknown suffixes)."""
    if suffix in JSON_SUFFIXES:
        return json.loads(text)
    if suffix in TOML_SUFFIXES:
        return tomllib.loads(text)
    return yaml.safe_load(text)


def parse_document(data: Any) -> Node:
    """Validate generic document data (as produced by a YAML/JSON/TOML parser) into a Node.

    Only the shape of the document is checked here: field names and types.
    Whether each node is a valid conjunction, disjunction or leaf is decided
    during evaluation, after extend references have been resolved.

    Raises:
        DocumentError: If the data does not have the shape of a node tree.

    """
    if not isinstance(data, dict):
        msg = f"Expected a mapping at the top of the document, got {type(data).__name__}"
        raise DocumentError(msg)
    try:
        return Node.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid document structure: {e}"
        raise DocumentError(msg) from e


def load_document(path: Path) -> Node:
    """Load an estimation document from a YAML, JSON or TOML file.

    Args:
        path: Path to the document. The format is chosen by suffix.

    Returns:
        The root node of the document.

    Raises:
        DocumentError: If the file cannot be read, parsed or validated.

    """
    suffix = path.suffix.lower()
    logger.debug("Loading document from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read document {path}: {e}"
        raise DocumentError(msg) from e

    try:
        data = _parse_text(text, suffix)
    except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        msg = f"Cannot parse document {path}: {e}"
        raise DocumentError(msg) from e

    return parse_document(data)


# =============================================================================
# Exporting results
# =============================================================================


def results_to_dict(compilation: CompilationResult) -> dict[str, Any]:
    """Convert a successful compilation to plain data.

    Raises:
        ValueError: If the compilation failed.

    """
    if not compilation.success or compilation.summary is None:
        msg = "Cannot export a failed compilation"
        raise ValueError(msg)
    return {
        "summary": compilation.summary.to_dict(),
        "scenarios": [scenario.to_dict() for scenario in compilation.scenarios],
    }


def export_results(compilation: CompilationResult, path: Path) -> None:
    """Write the summary and scenarios of a compilation to a file.

    The output is TOML for a ``.toml`` suffix and JSON otherwise.

    Args:
        compilation: A successful compilation.
        path: Destination file. Parent directories are created.

    Raises:
        ValueError: If the compilation failed.

    """
    data = results_to_dict(compilation)
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix.lower() in TOML_SUFFIXES:
        with path.open("wb") as f:
            tomli_w.dump(data, f)
    else:
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")

    logger.debug("Exported %d scenarios to %s", len(compilation.scenarios), path)
