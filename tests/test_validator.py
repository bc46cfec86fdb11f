from __future__ import annotations

import json

import pytest

from contracts.errors import ProblemValidationError
from contracts.validator import (
    load_problem,
    load_problem_file,
    load_schema,
    supported_kinds,
    validate_problem,
)
from problems.graph import GraphState
from problems.samples import CLASSIC_PUZZLE, SAMPLE_ADJACENCY
from problems.sudoku import SudokuState


def _graph_doc(**overrides) -> dict:
    doc = {"kind": "graph", "adjacency": [list(row) for row in SAMPLE_ADJACENCY], "start": 0, "goal": 3}
    doc.update(overrides)
    return doc


def _sudoku_rows() -> list[list[int]]:
    return [[int(ch) for ch in CLASSIC_PUZZLE[r * 9:(r + 1) * 9]] for r in range(9)]


def _codes(report) -> list[str]:
    return [issue.code for issue in report.errors]


def test_supported_kinds_have_schemas() -> None:
    assert supported_kinds() == ("graph", "sudoku")
    for kind in supported_kinds():
        assert load_schema(kind)["properties"]["kind"]["const"] == kind


def test_valid_graph_document_loads() -> None:
    report = validate_problem(_graph_doc())
    assert report.ok
    assert report.warnings == []
    state = load_problem(_graph_doc())
    assert isinstance(state, GraphState)
    assert state.visited == (0,)


def test_edge_list_document_loads() -> None:
    doc = {"kind": "graph", "nodes": 3, "edges": [[0, 1], [1, 2]], "start": 2, "goal": 0, "directed": True}
    state = load_problem(doc)
    assert state.adjacency == ((1,), (2,), ())


def test_graph_document_needs_exactly_one_relation() -> None:
    doc = _graph_doc(nodes=5, edges=[[0, 1]])
    assert _codes(validate_problem(doc)) == ["schema.violation"]
    doc = {"kind": "graph", "start": 0, "goal": 1}
    assert not validate_problem(doc).ok


def test_non_square_matrix_is_reported_per_row() -> None:
    doc = _graph_doc(adjacency=[[0, 1, 0], [1, 0], [0, 1, 0]], goal=2)
    report = validate_problem(doc)
    assert _codes(report) == ["graph.not_square"]
    assert report.errors[0].path == "$.adjacency[1]"


def test_out_of_range_nodes_are_errors() -> None:
    report = validate_problem(_graph_doc(goal=9))
    assert _codes(report) == ["graph.node_out_of_range"]
    assert report.errors[0].path == "$.goal"

    doc = {"kind": "graph", "nodes": 2, "edges": [[0, 4]], "start": 0, "goal": 1}
    assert validate_problem(doc).errors[0].path == "$.edges[0][1]"


def test_asymmetric_matrix_is_a_warning() -> None:
    report = validate_problem(_graph_doc(adjacency=[[0, 1], [0, 0]], goal=1))
    assert report.ok
    assert [issue.code for issue in report.warnings] == ["graph.asymmetric"]


def test_sudoku_document_accepts_rows_and_strings() -> None:
    from_rows = load_problem({"kind": "sudoku", "grid": _sudoku_rows()})
    from_text = load_problem({"kind": "sudoku", "grid": CLASSIC_PUZZLE})
    assert isinstance(from_rows, SudokuState)
    assert from_rows == from_text


def test_duplicate_givens_are_reported() -> None:
    rows = _sudoku_rows()
    rows[0][2] = 5
    report = validate_problem({"kind": "sudoku", "grid": rows})
    assert not report.ok
    assert set(_codes(report)) == {"sudoku.duplicate_digit"}
    assert "$.grid[0]" in [issue.path for issue in report.errors]
    with pytest.raises(ProblemValidationError) as excinfo:
        load_problem({"kind": "sudoku", "grid": rows})
    assert excinfo.value.report.errors


def test_sparse_sudoku_gets_a_warning() -> None:
    report = validate_problem({"kind": "sudoku", "grid": "0" * 81})
    assert report.ok
    assert [issue.code for issue in report.warnings] == ["sudoku.few_givens"]


@pytest.mark.parametrize(
    "doc, code",
    [
        ([], "document.not_object"),
        ({"kind": "chess"}, "kind.unknown"),
        ({"kind": "sudoku", "grid": "123"}, "schema.violation"),
        ({"kind": "sudoku", "grid": [[0] * 9] * 8}, "schema.violation"),
        ({"kind": "sudoku", "grid": CLASSIC_PUZZLE, "extra": 1}, "schema.violation"),
    ],
)
def test_malformed_documents(doc, code) -> None:
    report = validate_problem(doc)
    assert not report.ok
    assert report.errors[0].code == code


def test_load_problem_file_reads_json(tmp_path) -> None:
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(_graph_doc()), encoding="utf-8")
    assert isinstance(load_problem_file(path), GraphState)


def test_load_problem_file_reports_bad_json(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ProblemValidationError) as excinfo:
        load_problem_file(path)
    assert excinfo.value.report.errors[0].code == "document.invalid_json"


def test_load_problem_file_reports_bad_encoding(tmp_path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"kind": "graph", "\xff": 1}')
    with pytest.raises(ProblemValidationError) as excinfo:
        load_problem_file(path)
    issue = excinfo.value.report.errors[0]
    assert issue.code == "document.invalid_encoding"
    assert issue.path == "$@byte19"
