"""Built-in problem instances used by the CLI when no input is supplied."""

from __future__ import annotations

from .graph import GraphState
from .sudoku import SudokuState

CLASSIC_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

CLASSIC_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

SAMPLE_ADJACENCY = (
    (0, 1, 0, 0, 1),
    (1, 0, 1, 0, 0),
    (0, 1, 0, 1, 1),
    (0, 0, 1, 0, 1),
    (1, 0, 1, 1, 0),
)


def classic_sudoku() -> SudokuState:
    return SudokuState.from_string(CLASSIC_PUZZLE)


def sample_graph(start: int = 0, goal: int = 3) -> GraphState:
    return GraphState.from_matrix(SAMPLE_ADJACENCY, start, goal)


__all__ = [
    "CLASSIC_PUZZLE",
    "CLASSIC_SOLUTION",
    "SAMPLE_ADJACENCY",
    "classic_sudoku",
    "sample_graph",
]
