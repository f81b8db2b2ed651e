"""Recover the full extent of a sunk ship from one of its hit cells."""

from __future__ import annotations

import logging
from collections import deque

from .board import Board, CellState, Point, orthogonal_neighbours

logger = logging.getLogger(__name__)


def connected_region(board: Board, point: Point, state: CellState) -> frozenset[Point]:
    """Breadth-first 4-connected component of cells in ``state`` around ``point``."""
    found = {point}
    queue = deque([point])
    while queue:
        current = queue.popleft()
        for neighbour in orthogonal_neighbours(current):
            if neighbour not in found and board[neighbour] is state:
                found.add(neighbour)
                queue.append(neighbour)
    return frozenset(found)


def locate(board: Board, point: Point) -> frozenset[Point]:
    """Return the 4-connected region of ``HIT`` cells containing ``point``.

    Diagonal hits are not part of the region; ships never touch, so a
    diagonal hit always belongs to another ship.
    """
    if board[point] is not CellState.HIT:
        logger.error(
            "locate_rejected",
            extra={"row": point.row, "col": point.col, "state": board[point].value},
        )
        raise ValueError(f"Cell ({point.row}, {point.col}) is not a hit.")
    return connected_region(board, point, CellState.HIT)
