"""Plain-text rendering of terminal states."""

from __future__ import annotations

from typing import List, Optional

from problems.graph import GraphState
from problems.state import Problem
from problems.sudoku import BOX, SIZE, SudokuState

_NO_RESULT = {
    "graph": "No path found.",
    "sudoku": "No solution found.",
}


def format_grid(state: SudokuState) -> str:
    """Draw the board with block separators; empty cells print as ``.``."""

    border = "+" + "+".join(["-" * (2 * BOX + 1)] * (SIZE // BOX)) + "+"
    lines: List[str] = []
    for r, row in enumerate(state.grid):
        if r % BOX == 0:
            lines.append(border)
        groups = [
            " ".join(str(v) if v else "." for v in row[left:left + BOX])
            for left in range(0, SIZE, BOX)
        ]
        lines.append("| " + " | ".join(groups) + " |")
    lines.append(border)
    return "\n".join(lines)


def format_route(state: GraphState) -> str:
    return f"Route: {list(state.path)}"


def render_result(state: Optional[Problem], kind: str | None = None) -> str:
    """Render a solved state, or the "no result" notice for ``kind``."""

    if state is None:
        return _NO_RESULT.get(kind or "", "No solution found.")
    if isinstance(state, SudokuState):
        return format_grid(state)
    if isinstance(state, GraphState):
        return format_route(state)
    return state.describe()


__all__ = ["format_grid", "format_route", "render_result"]
