"""Adjacency passes: candidate cells while placing, exclusion margins once placed."""

from __future__ import annotations

from typing import Iterable

from .board import Board, CellState, Point, moore_neighbours, orthogonal_neighbours


def mark_candidates(board: Board, ship_cells: Iterable[Point]) -> Board:
    """Mark the legal next cells of a ship that is being placed cell by cell.

    Candidates are stored as ``HIT`` on a placement board. Every existing
    candidate is cleared first so that cells proposed for an earlier
    orientation of the ship never linger.
    """
    marked = board.copy()
    for point in marked.cells(CellState.HIT):
        marked[point] = CellState.EMPTY
    for cell in ship_cells:
        for neighbour in orthogonal_neighbours(cell):
            if marked[neighbour] is CellState.EMPTY:
                marked[neighbour] = CellState.HIT
    return marked


def mark_exclusions(board: Board, ship_cells: Iterable[Point]) -> Board:
    """Mark every empty cell touching a finished ship, diagonals included, as ``MISS``."""
    marked = board.copy()
    for cell in ship_cells:
        for neighbour in moore_neighbours(cell):
            if marked[neighbour] is CellState.EMPTY:
                marked[neighbour] = CellState.MISS
    return marked
