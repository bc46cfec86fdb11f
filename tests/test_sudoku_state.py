from __future__ import annotations

import pytest

from contracts.errors import InvalidProblemError
from problems.samples import CLASSIC_PUZZLE, CLASSIC_SOLUTION, classic_sudoku
from problems.sudoku import SudokuState, is_valid_unit


def _solved() -> SudokuState:
    return SudokuState.from_string(CLASSIC_SOLUTION)


def test_is_valid_unit_ignores_zeros() -> None:
    assert is_valid_unit([0, 0, 1, 2, 0, 3, 0, 0, 0])
    assert not is_valid_unit([1, 0, 0, 0, 0, 0, 0, 0, 1])
    assert is_valid_unit([0] * 9)


def test_string_round_trip_keeps_cells() -> None:
    state = classic_sudoku()
    assert state.to_string() == CLASSIC_PUZZLE
    assert state.filled_count == 30
    assert state.first_empty() == (0, 2)


def test_dots_are_empty_cells() -> None:
    state = SudokuState.from_string(CLASSIC_PUZZLE.replace("0", "."))
    assert state == classic_sudoku()


@pytest.mark.parametrize("text", ["123", "x" * 81, CLASSIC_PUZZLE + "1"])
def test_from_string_rejects_bad_input(text: str) -> None:
    with pytest.raises(InvalidProblemError):
        SudokuState.from_string(text)


def test_from_rows_rejects_bad_shape_and_values() -> None:
    with pytest.raises(InvalidProblemError):
        SudokuState.from_rows([[0] * 9] * 8)
    with pytest.raises(InvalidProblemError):
        SudokuState.from_rows([[0] * 9] * 8 + [[0] * 8 + [10]])


def test_solved_grid_is_terminal_and_has_no_successors() -> None:
    state = _solved()
    assert state.is_terminal()
    assert state.successors() == []


def test_complete_but_invalid_grid_is_not_terminal() -> None:
    text = CLASSIC_SOLUTION
    swapped = text[1] + text[0] + text[2:]
    state = SudokuState.from_string(swapped)
    assert state.is_complete()
    assert not state.is_valid()
    assert not state.is_terminal()


def test_successors_fill_first_empty_cell_with_valid_digits() -> None:
    state = classic_sudoku()
    children = state.successors()
    # Cell (0, 2) sees 5, 3, 7 in its row, 8 in its column and 6, 9, 8 in its block.
    assert [child.grid[0][2] for child in children] == [1, 2, 4]
    for child in children:
        assert child.is_valid()
        assert child.filled_count == state.filled_count + 1


def test_successors_do_not_touch_the_parent() -> None:
    state = classic_sudoku()
    before = state.to_string()
    first = state.successors()
    second = state.successors()
    assert state.to_string() == before
    assert first == second


def test_columns_and_blocks_cover_the_grid() -> None:
    state = _solved()
    assert state.columns()[0] == (5, 6, 1, 8, 4, 7, 9, 2, 3)
    assert state.blocks()[0] == (5, 3, 4, 6, 7, 2, 1, 9, 8)
    assert state.blocks()[8] == (2, 8, 4, 6, 3, 5, 1, 7, 9)
    for unit in state.rows() + state.columns() + state.blocks():
        assert sorted(unit) == list(range(1, 10))


def test_cell_without_candidates_is_a_dead_end() -> None:
    rows = [[0] * 9 for _ in range(9)]
    rows[0] = [1, 2, 3, 4, 5, 6, 7, 8, 0]
    rows[1][8] = 9
    state = SudokuState.from_rows(rows)
    assert state.is_valid()
    assert state.successors() == []


def test_with_cell_returns_new_board() -> None:
    state = classic_sudoku()
    child = state.with_cell(0, 2, 4)
    assert child.grid[0][2] == 4
    assert state.grid[0][2] == 0
