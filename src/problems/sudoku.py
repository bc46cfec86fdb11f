"""Classic 9x9 Sudoku boards filled one cell per search step."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from contracts.errors import InvalidProblemError

from .state import Problem

SIZE = 9
BOX = 3
DIGITS = range(1, SIZE + 1)

Grid = Tuple[Tuple[int, ...], ...]


def is_valid_unit(unit: Iterable[int]) -> bool:
    """Return ``True`` if no non-zero digit appears twice in ``unit``.

    Zeros are empty cells and never count as duplicates.
    """

    digits = [value for value in unit if value]
    return len(digits) == len(set(digits))


# Flat row-major indices of each 3x3 block, left to right, top to bottom.
_BLOCK_INDICES = tuple(
    tuple((top + r) * SIZE + left + c for r in range(BOX) for c in range(BOX))
    for top in range(0, SIZE, BOX)
    for left in range(0, SIZE, BOX)
)


def _normalise_rows(rows: Sequence[Sequence[int]]) -> Grid:
    if len(rows) != SIZE:
        raise InvalidProblemError(f"grid must have {SIZE} rows, got {len(rows)}")
    grid: List[Tuple[int, ...]] = []
    for r, row in enumerate(rows):
        if len(row) != SIZE:
            raise InvalidProblemError(f"row {r} must have {SIZE} cells, got {len(row)}")
        for c, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= SIZE:
                raise InvalidProblemError(f"cell ({r}, {c}) must be an integer in 0..{SIZE}, got {value!r}")
        grid.append(tuple(row))
    return tuple(grid)


@dataclass(frozen=True)
class SudokuState(Problem):
    """Partially filled board; ``0`` marks an empty cell."""

    grid: Grid

    kind = "sudoku"

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "SudokuState":
        return cls(grid=_normalise_rows(rows))

    @classmethod
    def from_string(cls, text: str) -> "SudokuState":
        """Parse 81 cells in row-major order; ``0`` or ``.`` is empty."""

        compact = "".join(text.split())
        if len(compact) != SIZE * SIZE:
            raise InvalidProblemError(f"expected {SIZE * SIZE} cells, got {len(compact)}")
        values: List[int] = []
        for idx, ch in enumerate(compact):
            if ch == ".":
                values.append(0)
            elif ch in "0123456789":
                values.append(int(ch))
            else:
                raise InvalidProblemError(f"unexpected character {ch!r} at position {idx}")
        return cls.from_rows([values[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)])

    def to_string(self) -> str:
        return "".join(str(value) for row in self.grid for value in row)

    @property
    def filled_count(self) -> int:
        return sum(1 for row in self.grid for value in row if value)

    def rows(self) -> List[Tuple[int, ...]]:
        return list(self.grid)

    def columns(self) -> List[Tuple[int, ...]]:
        return [tuple(column) for column in zip(*self.grid)]

    def blocks(self) -> List[Tuple[int, ...]]:
        flat = [value for row in self.grid for value in row]
        return [tuple(flat[idx] for idx in indices) for indices in _BLOCK_INDICES]

    def is_valid(self) -> bool:
        """Check every row, column and block for duplicate digits."""

        if not all(is_valid_unit(row) for row in self.grid):
            return False
        if not all(is_valid_unit(column) for column in zip(*self.grid)):
            return False
        return all(is_valid_unit(block) for block in self.blocks())

    def is_complete(self) -> bool:
        return all(value != 0 for row in self.grid for value in row)

    def first_empty(self) -> Optional[Tuple[int, int]]:
        for r, row in enumerate(self.grid):
            for c, value in enumerate(row):
                if value == 0:
                    return r, c
        return None

    def with_cell(self, row: int, col: int, digit: int) -> "SudokuState":
        """Return a copy of the board with one cell replaced."""

        updated = self.grid[row][:col] + (digit,) + self.grid[row][col + 1:]
        return SudokuState(grid=self.grid[:row] + (updated,) + self.grid[row + 1:])

    def is_terminal(self) -> bool:
        return self.is_complete() and self.is_valid()

    def successors(self) -> List["SudokuState"]:
        cell = self.first_empty()
        if cell is None:
            return []
        row, col = cell
        candidates = (self.with_cell(row, col, digit) for digit in DIGITS)
        return [candidate for candidate in candidates if candidate.is_valid()]

    def describe(self) -> str:
        return "\n".join(" ".join(str(value) for value in row) for row in self.grid)


__all__ = ["BOX", "DIGITS", "Grid", "SIZE", "SudokuState", "is_valid_unit"]
