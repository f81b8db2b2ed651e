"""Cell-by-cell manual placement of the player's fleet."""

from __future__ import annotations

import logging

from .adjacency import mark_candidates, mark_exclusions
from .board import Board, CellState, Point
from .errors import IllegalPlacement
from .fleet import Fleet
from .shapes import is_known_shape

logger = logging.getLogger(__name__)


class FleetEditor:
    """Builds a layout one clicked cell at a time.

    ``board`` is a display board: placed ships are ``SHIP``, the legal next
    cells of the ship in progress are ``HIT`` and the margins of finished
    ships are ``MISS``. A ship is finished automatically once it reaches the
    longest length still to place, or explicitly via ``finish_ship``.
    """

    def __init__(self, fleet: Fleet | None = None) -> None:
        self.board = Board()
        self.fleet = fleet.copy() if fleet is not None else Fleet.full()
        self.current: list[Point] = []

    def add_cell(self, point: Point) -> None:
        longest = self.fleet.longest()
        if longest is None:
            raise IllegalPlacement("Every ship has already been placed.")

        expected = CellState.HIT if self.current else CellState.EMPTY
        if self.board[point] is not expected:
            logger.warning(
                "editor_cell_rejected",
                extra={"row": point.row, "col": point.col, "state": self.board[point].value},
            )
            raise IllegalPlacement(f"Cell ({point.row}, {point.col}) cannot extend the current ship.")

        cells = [*self.current, point]
        if len(cells) == longest and not is_known_shape(cells):
            raise IllegalPlacement(f"Cells do not form a valid ship of length {longest}.")

        self.board[point] = CellState.SHIP
        self.current = cells
        self.board = mark_candidates(self.board, self.current)
        if len(self.current) == longest:
            self.finish_ship()

    def finish_ship(self) -> frozenset[Point]:
        """Close the ship in progress and surround it with its margin."""
        length = len(self.current)
        if not length:
            raise IllegalPlacement("No ship is being placed.")
        if self.fleet.remaining(length) <= 0 or not is_known_shape(self.current):
            raise IllegalPlacement(f"Cells do not form a ship the fleet still needs (length {length}).")

        ship = frozenset(self.current)
        self.board = mark_exclusions(mark_candidates(self.board, ()), ship)
        self.fleet.decrement(length)
        self.current = []
        logger.info("editor_ship_placed", extra={"length": length, "ships_left": sum(self.fleet.counts.values())})
        return ship

    def cancel_ship(self) -> None:
        """Discard the cells of the ship in progress."""
        for point in self.current:
            self.board[point] = CellState.EMPTY
        self.current = []
        self.board = mark_candidates(self.board, ())

    def complete(self) -> bool:
        return self.fleet.is_empty() and not self.current

    def layout(self) -> Board:
        """The placed ships only, without candidate or margin markings."""
        layout = Board()
        for point in self.board.cells(CellState.SHIP):
            layout[point] = CellState.SHIP
        return layout
