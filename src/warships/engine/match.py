"""Per-match bookkeeping: both boards, the opponent fleet and the targeter."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from warships.telemetry import get_meter, get_tracer

from .adjacency import mark_exclusions
from .board import Board, CellState, Point
from .errors import IllegalPlacement, InvalidCoordinate
from .fleet import Fleet
from .heatmap import Heatmap, heatmap
from .locator import locate
from .targeting import HuntTargeter

logger = logging.getLogger(__name__)
tracer = get_tracer("warships.engine.match")
meter = get_meter("warships.engine.match")

SHOT_COUNTER = meter.create_counter(
    "warships_engine_shots",
    unit="1",
    description="Shots fired at the opponent board",
)


class ShotResult(Enum):
    """Outcome of a shot as reported by the game server."""

    HIT = "hit"
    MISS = "miss"
    SUNK = "sunk"

    @classmethod
    def parse(cls, raw: str) -> ShotResult:
        try:
            return cls(raw.strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown shot result: {raw!r}") from exc


@dataclass
class Match:
    """State a turn loop needs for one match.

    ``opponent_board`` starts all empty and collects hits, misses and the
    exclusion margins of sunk ships; ``own_board`` holds the player's fleet as
    ``SHIP`` cells and records the opponent's shots.
    """

    own_board: Board = field(default_factory=Board)
    opponent_board: Board = field(default_factory=Board)
    opponent_fleet: Fleet = field(default_factory=Fleet.full)
    targeter: HuntTargeter = field(default_factory=HuntTargeter)
    shots: int = 0
    hits: int = 0

    @classmethod
    def new(cls, own_board: Board | None = None) -> Match:
        return cls(own_board=own_board.copy() if own_board is not None else Board())

    def recommend(self) -> Point:
        """Next cell the hunt/target policy would fire at."""
        return self.targeter.recommend(self.opponent_board, self.opponent_fleet)

    def heatmap(self) -> Heatmap:
        """Heatmap of the opponent board for the assist overlay."""
        return heatmap(self.opponent_board, self.opponent_fleet)

    def record_shot(self, point: Point, result: ShotResult) -> frozenset[Point] | None:
        """Apply the outcome of our shot at ``point``.

        Returns the cells of the ship that went down when ``result`` is
        ``SUNK``, otherwise ``None``.
        """
        with tracer.start_as_current_span("match.record_shot") as span:
            span.set_attribute("shot.row", point.row)
            span.set_attribute("shot.col", point.col)
            span.set_attribute("shot.result", result.value)
            if not point.in_bounds():
                logger.error("shot_out_of_bounds", extra={"row": point.row, "col": point.col})
                raise InvalidCoordinate(f"Shot ({point.row}, {point.col}) is outside the board.")
            if self.opponent_board[point] is not CellState.EMPTY:
                logger.error(
                    "shot_duplicate",
                    extra={"row": point.row, "col": point.col, "state": self.opponent_board[point].value},
                )
                raise ValueError("Cell has already been targeted.")

            ship: frozenset[Point] | None = None
            if result is ShotResult.SUNK:
                resolved = self.opponent_board.copy()
                resolved[point] = CellState.HIT
                ship = locate(resolved, point)
                if self.opponent_fleet.remaining(len(ship)) <= 0:
                    logger.error(
                        "shot_sunk_unknown_length",
                        extra={"row": point.row, "col": point.col, "length": len(ship)},
                    )
                    raise IllegalPlacement(f"No ship of length {len(ship)} left to sink.")

            self.shots += 1
            SHOT_COUNTER.add(1, attributes={"result": result.value})
            if result is ShotResult.MISS:
                self.opponent_board[point] = CellState.MISS
                logger.info("shot_miss", extra={"row": point.row, "col": point.col})
                return None

            self.hits += 1
            self.opponent_board[point] = CellState.HIT
            if result is ShotResult.HIT:
                self.targeter.on_hit(self.opponent_board, point)
                logger.info("shot_hit", extra={"row": point.row, "col": point.col})
                return None

            assert ship is not None
            self.opponent_fleet.decrement(len(ship))
            self.opponent_board = mark_exclusions(self.opponent_board, ship)
            self.targeter.on_sunk(point)
            span.set_attribute("ship.length", len(ship))
            logger.info(
                "shot_sunk",
                extra={
                    "row": point.row,
                    "col": point.col,
                    "length": len(ship),
                    "ships_left": sum(self.opponent_fleet.counts.values()),
                },
            )
            return ship

    def record_opponent_shots(self, points: Iterable[Point]) -> None:
        """Mark the opponent's shots on our own board."""
        for point in points:
            state = self.own_board[point]
            if state is CellState.SHIP:
                self.own_board[point] = CellState.HIT
            elif state is CellState.EMPTY:
                self.own_board[point] = CellState.MISS

    def accuracy(self) -> float:
        """Percentage of our shots that landed."""
        if self.shots == 0:
            return 0.0
        return 100 * self.hits / self.shots

    def finished(self) -> bool:
        return self.opponent_fleet.is_empty()
