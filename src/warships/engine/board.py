"""Grid model shared by every part of the targeting engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import InvalidCoordinate

BOARD_SIZE = 10


class CellState(Enum):
    """State of a single cell as the engine knows it."""

    EMPTY = "empty"
    SHIP = "ship"
    HIT = "hit"
    MISS = "miss"


@dataclass(frozen=True, order=True)
class Point:
    """Immutable (row, col) pair, 0-indexed on both axes."""

    row: int
    col: int

    def shift(self, offset: Point) -> Point:
        """Translate this point by another point used as an offset."""
        return Point(self.row + offset.row, self.col + offset.col)

    def in_bounds(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE


_ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))
_MOORE = tuple(
    (delta_row, delta_col)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if (delta_row, delta_col) != (0, 0)
)


def orthogonal_neighbours(point: Point) -> list[Point]:
    """Return the in-range Von Neumann neighbours (up, down, left, right)."""
    neighbours = (Point(point.row + dr, point.col + dc) for dr, dc in _ORTHOGONAL)
    return [neighbour for neighbour in neighbours if neighbour.in_bounds()]


def moore_neighbours(point: Point) -> list[Point]:
    """Return the in-range 8-neighbourhood in row-major order."""
    neighbours = (Point(point.row + dr, point.col + dc) for dr, dc in _MOORE)
    return [neighbour for neighbour in neighbours if neighbour.in_bounds()]


def _empty_grid() -> list[list[CellState]]:
    return [[CellState.EMPTY for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]


_SYMBOLS = {
    CellState.EMPTY: ".",
    CellState.SHIP: "S",
    CellState.HIT: "X",
    CellState.MISS: "o",
}
ROW_LABELS = "ABCDEFGHIJ"


@dataclass
class Board:
    """A 10x10 grid of cell states.

    Boards are value objects as far as the engine is concerned: every pass that
    changes cells works on a ``copy()`` and hands the new board back.
    """

    grid: list[list[CellState]] = field(default_factory=_empty_grid)

    def __post_init__(self) -> None:
        if len(self.grid) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in self.grid):
            raise InvalidCoordinate(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}.")

    def __getitem__(self, point: Point) -> CellState:
        self._check(point)
        return self.grid[point.row][point.col]

    def __setitem__(self, point: Point, state: CellState) -> None:
        self._check(point)
        self.grid[point.row][point.col] = state

    def copy(self) -> Board:
        """Return an independent copy of the grid."""
        return Board([row[:] for row in self.grid])

    def cells(self, state: CellState) -> list[Point]:
        """Return every point in ``state`` in row-major order."""
        return [
            Point(row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.grid[row][col] is state
        ]

    def count(self, state: CellState) -> int:
        return sum(row.count(state) for row in self.grid)

    def has_empty(self) -> bool:
        return any(CellState.EMPTY in row for row in self.grid)

    def render(self) -> str:
        """Plain-text rendering with letter rows and 1-based columns."""
        header = "    " + " ".join(f"{col + 1:>2}" for col in range(BOARD_SIZE))
        rows = [header]
        for row in range(BOARD_SIZE):
            symbols = " ".join(f"{_SYMBOLS[state]:>2}" for state in self.grid[row])
            rows.append(f"{ROW_LABELS[row]} |{symbols}")
        return "\n".join(rows)

    @staticmethod
    def _check(point: Point) -> None:
        if not point.in_bounds():
            raise InvalidCoordinate(f"Point ({point.row}, {point.col}) is outside the board.")
