"""Searchable problem states: graph path prefixes and Sudoku boards."""

from .graph import GraphState
from .state import Problem
from .sudoku import SudokuState, is_valid_unit

__all__ = ["GraphState", "Problem", "SudokuState", "is_valid_unit"]
