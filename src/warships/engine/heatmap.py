"""Per-cell placement counts used as a relative likelihood of ship presence."""

from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt

from warships.telemetry import get_tracer

from .board import BOARD_SIZE, Board, CellState, Point
from .errors import ExhaustedBoard
from .fleet import Fleet
from .placement import fits
from .shapes import shapes_for

logger = logging.getLogger(__name__)
tracer = get_tracer("warships.engine.heatmap")

Heatmap = npt.NDArray[np.int64]


def heatmap(board: Board, fleet: Fleet) -> Heatmap:
    """Count, for every cell, how many single-ship placements would cover it.

    Each remaining length contributes once regardless of how many ships of
    that length are left, and lengths are summed independently. The result is
    not a joint distribution; it only ranks cells.
    """
    with tracer.start_as_current_span("heatmap.compute") as span:
        counts: Heatmap = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int64)
        anchors = board.cells(CellState.EMPTY)
        for length in fleet.lengths():
            for anchor in anchors:
                for shape in shapes_for(length):
                    if fits(shape, board, anchor):
                        for offset in shape:
                            cell = anchor.shift(offset)
                            counts[cell.row, cell.col] += 1
        span.set_attribute("heatmap.max", int(counts.max()))
        return counts


def best_cell(board: Board, fleet: Fleet) -> Point:
    """Return the empty cell with the highest heatmap count, first in row-major order on ties."""
    empty = np.array(
        [[state is CellState.EMPTY for state in row] for row in board.grid],
        dtype=bool,
    )
    if not empty.any():
        logger.error("best_cell_exhausted", extra={"fleet": dict(fleet.counts)})
        raise ExhaustedBoard("No empty cell left to target.")
    scores = np.where(empty, heatmap(board, fleet), -1)
    row, col = np.unravel_index(int(np.argmax(scores)), scores.shape)
    return Point(int(row), int(col))
