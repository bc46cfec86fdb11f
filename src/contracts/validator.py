"""Validation and loading of JSON problem documents."""

from __future__ import annotations

import copy
import json
import time
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple

import jsonschema

from problems.graph import GraphState
from problems.state import Problem
from problems.sudoku import SIZE, SudokuState, is_valid_unit

from .errors import (
    SEVERITY_WARN,
    ProblemValidationError,
    ValidationIssue,
    ValidationReport,
    make_error,
    make_warning,
)

_SCHEMA_ROOT = Path(__file__).resolve().parent / "schemas"
_SCHEMA_FILES = {
    "graph": "graph.schema.json",
    "sudoku": "sudoku.schema.json",
}

# Fewest givens known to admit a unique 9x9 solution.
MIN_UNIQUE_GIVENS = 17


def supported_kinds() -> Tuple[str, ...]:
    return tuple(sorted(_SCHEMA_FILES))


@lru_cache(maxsize=None)
def _load_schema_cached(kind: str) -> Dict[str, Any]:
    path = _SCHEMA_ROOT / _SCHEMA_FILES[kind]
    return json.loads(path.read_text("utf-8"))


def load_schema(kind: str) -> Dict[str, Any]:
    """Return a copy of the JSON schema for problem documents of ``kind``."""

    if kind not in _SCHEMA_FILES:
        raise KeyError(f"Unknown problem kind: {kind}")
    return copy.deepcopy(_load_schema_cached(kind))


@lru_cache(maxsize=None)
def _compiled(kind: str) -> jsonschema.Draft202012Validator:
    schema = _load_schema_cached(kind)
    jsonschema.Draft202012Validator.check_schema(schema)
    return jsonschema.Draft202012Validator(schema)


def _jsonschema_path(error: jsonschema.ValidationError) -> str:
    components: List[str] = ["$"]
    for part in error.absolute_path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def _schema_stage(document: Any) -> Tuple[str | None, List[ValidationIssue]]:
    if not isinstance(document, dict):
        return None, [make_error("document.not_object", "Problem document must be a JSON object", "$")]

    kind = document.get("kind")
    if kind not in _SCHEMA_FILES:
        expected = ", ".join(supported_kinds())
        return None, [make_error("kind.unknown", f"kind must be one of {expected}, got {kind!r}", "$.kind")]

    validator = _compiled(kind)
    issues = [
        make_error("schema.violation", error.message, _jsonschema_path(error))
        for error in sorted(validator.iter_errors(document), key=lambda err: list(map(str, err.absolute_path)))
    ]
    return kind, issues


def _graph_invariants(document: Dict[str, Any]) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    matrix = document.get("adjacency")
    if matrix is not None:
        node_count = len(matrix)
        for index, row in enumerate(matrix):
            if len(row) != node_count:
                issues.append(
                    make_error(
                        "graph.not_square",
                        f"row has {len(row)} entries, expected {node_count}",
                        f"$.adjacency[{index}]",
                    )
                )
        if not issues:
            asymmetric = [
                (r, c)
                for r in range(node_count)
                for c in range(r + 1, node_count)
                if bool(matrix[r][c]) != bool(matrix[c][r])
            ]
            if asymmetric:
                r, c = asymmetric[0]
                issues.append(
                    make_warning(
                        "graph.asymmetric",
                        f"{len(asymmetric)} edge(s) are one-directional; treating the matrix as directed",
                        f"$.adjacency[{r}][{c}]",
                    )
                )
    else:
        node_count = document["nodes"]
        for index, edge in enumerate(document["edges"]):
            for end, node in enumerate(edge):
                if node >= node_count:
                    issues.append(
                        make_error(
                            "graph.node_out_of_range",
                            f"node {node} is outside 0..{node_count - 1}",
                            f"$.edges[{index}][{end}]",
                        )
                    )

    for field in ("start", "goal"):
        node = document[field]
        if node >= node_count:
            issues.append(
                make_error("graph.node_out_of_range", f"node {node} is outside 0..{node_count - 1}", f"$.{field}")
            )
    return issues


def _sudoku_from_document(document: Dict[str, Any]) -> SudokuState:
    grid = document["grid"]
    if isinstance(grid, str):
        return SudokuState.from_string(grid)
    return SudokuState.from_rows(grid)


def _sudoku_invariants(document: Dict[str, Any]) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    state = _sudoku_from_document(document)

    labelled = (
        [(unit, f"$.grid[{index}]", "row") for index, unit in enumerate(state.rows())]
        + [(unit, f"$.grid[*][{index}]", "column") for index, unit in enumerate(state.columns())]
        + [(unit, f"$.grid.block[{index}]", "block") for index, unit in enumerate(state.blocks())]
    )
    for unit, path, label in labelled:
        if not is_valid_unit(unit):
            issues.append(make_error("sudoku.duplicate_digit", f"{label} repeats a given digit", path))

    if state.filled_count < MIN_UNIQUE_GIVENS:
        issues.append(
            make_warning(
                "sudoku.few_givens",
                f"only {state.filled_count} of {SIZE * SIZE} cells are given; search may be slow",
                "$.grid",
            )
        )
    return issues


def _split(issues: List[ValidationIssue]) -> Tuple[List[ValidationIssue], List[ValidationIssue]]:
    errors = [issue for issue in issues if issue.severity != SEVERITY_WARN]
    warnings = [issue for issue in issues if issue.severity == SEVERITY_WARN]
    return errors, warnings


def validate_problem(document: Any) -> ValidationReport:
    """Validate ``document`` against its schema and the problem invariants."""

    timings = {"schema": 0, "invariants": 0}

    schema_start = time.perf_counter()
    kind, schema_issues = _schema_stage(document)
    timings["schema"] = int((time.perf_counter() - schema_start) * 1000)
    errors, warnings = _split(schema_issues)

    if kind is not None and not errors:
        invariants_start = time.perf_counter()
        if kind == "graph":
            invariant_issues = _graph_invariants(document)
        else:
            invariant_issues = _sudoku_invariants(document)
        inv_errors, inv_warnings = _split(invariant_issues)
        errors.extend(inv_errors)
        warnings.extend(inv_warnings)
        timings["invariants"] = int((time.perf_counter() - invariants_start) * 1000)

    return ValidationReport(ok=not errors, errors=errors, warnings=warnings, timings_ms=timings)


def load_problem(document: Any) -> Problem:
    """Validate ``document`` and build the initial state it describes."""

    report = validate_problem(document)
    if not report.ok:
        raise ProblemValidationError(report)

    if document["kind"] == "sudoku":
        return _sudoku_from_document(document)

    if "adjacency" in document:
        return GraphState.from_matrix(document["adjacency"], document["start"], document["goal"])
    return GraphState.from_edges(
        document["nodes"],
        document["edges"],
        document["start"],
        document["goal"],
        directed=bool(document.get("directed", False)),
    )


def load_problem_file(path: str | Path) -> Problem:
    """Read a JSON problem document from ``path`` and build its state."""

    raw = Path(path).read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        issue = make_error("document.invalid_encoding", f"not UTF-8: {exc.reason}", f"$@byte{exc.start}")
        report = ValidationReport(ok=False, errors=[issue], warnings=[], timings_ms={})
        raise ProblemValidationError(report) from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        issue = make_error("document.invalid_json", exc.msg, f"$@{exc.lineno}:{exc.colno}")
        report = ValidationReport(ok=False, errors=[issue], warnings=[], timings_ms={})
        raise ProblemValidationError(report) from exc
    return load_problem(document)


__all__ = [
    "MIN_UNIQUE_GIVENS",
    "load_problem",
    "load_problem_file",
    "load_schema",
    "supported_kinds",
    "validate_problem",
]
