"""Hunt/target firing policy."""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum

from warships.telemetry import get_meter, get_tracer

from .board import Board, CellState, Point, orthogonal_neighbours
from .errors import ExhaustedBoard
from .fleet import Fleet
from .heatmap import best_cell

logger = logging.getLogger(__name__)
tracer = get_tracer("warships.engine.targeting")
meter = get_meter("warships.engine.targeting")

RECOMMENDATION_COUNTER = meter.create_counter(
    "warships_engine_recommendations",
    unit="1",
    description="Targets recommended by the hunt/target policy",
)


class TargeterState(Enum):
    """Whether the policy is sweeping the board or finishing a damaged ship."""

    HUNTING = "hunting"
    TARGETING = "targeting"


class HuntTargeter:
    """Picks the next cell to fire at during one match.

    While hunting it fires at the heatmap maximum. A hit queues the unknown
    orthogonal neighbours of the hit cell, which are tried first-in first-out
    until the queue runs dry or the ship is reported sunk.

    Not thread-safe: one caller owns the targeter for the match.
    """

    def __init__(self) -> None:
        self.state = TargeterState.HUNTING
        self._queue: deque[Point] = deque()

    @property
    def pending(self) -> tuple[Point, ...]:
        """Follow-up cells still queued, in firing order."""
        return tuple(self._queue)

    def recommend(self, board: Board, fleet: Fleet) -> Point:
        """Return the next cell to fire at."""
        with tracer.start_as_current_span("targeter.recommend") as span:
            if not board.has_empty():
                logger.error("recommend_exhausted", extra={"state": self.state.value})
                raise ExhaustedBoard("No empty cell left to target.")

            if self.state is TargeterState.TARGETING:
                while self._queue:
                    candidate = self._queue.popleft()
                    if board[candidate] is CellState.EMPTY:
                        return self._emit(span, candidate)
                logger.debug("target_queue_drained")
                self.state = TargeterState.HUNTING

            return self._emit(span, best_cell(board, fleet))

    def on_hit(self, board: Board, point: Point) -> None:
        """Queue the unknown neighbours of a hit and switch to targeting."""
        for neighbour in orthogonal_neighbours(point):
            if board[neighbour] is CellState.EMPTY and neighbour not in self._queue:
                self._queue.append(neighbour)
        self.state = TargeterState.TARGETING
        logger.debug(
            "targeter_hit",
            extra={"row": point.row, "col": point.col, "queued": len(self._queue)},
        )

    def on_sunk(self, point: Point) -> None:
        """Drop every queued follow-up and go back to hunting."""
        self._queue.clear()
        self.state = TargeterState.HUNTING
        logger.debug("targeter_sunk", extra={"row": point.row, "col": point.col})

    def _emit(self, span, point: Point) -> Point:
        span.set_attribute("targeter.state", self.state.value)
        span.set_attribute("target.row", point.row)
        span.set_attribute("target.col", point.col)
        RECOMMENDATION_COUNTER.add(1, attributes={"state": self.state.value})
        return point
