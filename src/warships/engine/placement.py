"""Fitting shapes onto boards and backtracking over whole-fleet completions."""

from __future__ import annotations

import logging
import random
from itertools import islice
from typing import Iterator

from warships.telemetry import get_meter, get_tracer

from .adjacency import mark_exclusions
from .board import BOARD_SIZE, Board, CellState, Point, moore_neighbours
from .errors import IllegalPlacement
from .fleet import FLEET_COMPOSITION, Fleet
from .locator import connected_region
from .shapes import Shape, is_known_shape, shapes_for

logger = logging.getLogger(__name__)
tracer = get_tracer("warships.engine.placement")
meter = get_meter("warships.engine.placement")

COMPLETION_COUNTER = meter.create_counter(
    "warships_engine_completions",
    unit="1",
    description="Full-fleet completions produced by the enumerator",
)


def fits(shape: Shape, board: Board, anchor: Point) -> bool:
    """Return True when every cell of ``shape`` at ``anchor`` is on the grid and empty."""
    for offset in shape:
        cell = anchor.shift(offset)
        if not cell.in_bounds() or board[cell] is not CellState.EMPTY:
            return False
    return True


def place_shape(board: Board, shape: Shape, anchor: Point) -> Board:
    """Return a copy of ``board`` with the shape set to ``SHIP`` and its margin excluded."""
    if not fits(shape, board, anchor):
        logger.error(
            "placement_rejected",
            extra={"row": anchor.row, "col": anchor.col, "length": len(shape)},
        )
        raise IllegalPlacement(f"Shape of length {len(shape)} does not fit at ({anchor.row}, {anchor.col}).")
    placed = board.copy()
    cells = [anchor.shift(offset) for offset in shape]
    for cell in cells:
        placed[cell] = CellState.SHIP
    return mark_exclusions(placed, cells)


def _index(point: Point) -> int:
    return point.row * BOARD_SIZE + point.col


def _search(board: Board, fleet: Fleet, floor: int) -> Iterator[Board]:
    length = fleet.longest()
    if length is None:
        yield board
        return

    for anchor in board.cells(CellState.EMPTY):
        if _index(anchor) < floor:
            continue
        for shape in shapes_for(length):
            if not fits(shape, board, anchor):
                continue
            remaining = fleet.copy()
            remaining.decrement(length)
            # Ships of one length are placed in anchor order so no completion repeats.
            next_floor = _index(anchor) + 1 if remaining.remaining(length) else 0
            yield from _search(place_shape(board, shape, anchor), remaining, next_floor)


def iter_completions(board: Board, fleet: Fleet) -> Iterator[Board]:
    """Lazily yield every full-fleet completion of a partial board.

    The longest remaining length is placed first, anchors are scanned in
    row-major order, and every branch works on its own board and fleet. The
    search is exponential; bound it with ``enumerate_completions(limit=...)``
    or run it off the interactive path.
    """
    return _search(board.copy(), fleet.copy(), 0)


def enumerate_completions(board: Board, fleet: Fleet, limit: int | None = None) -> list[Board]:
    """Collect completions of ``board``, stopping after ``limit`` when given."""
    with tracer.start_as_current_span("placement.enumerate_completions") as span:
        span.set_attribute("fleet.cells", fleet.total_cells())
        span.set_attribute("limit", limit if limit is not None else -1)
        completions = list(islice(iter_completions(board, fleet), limit))
        span.set_attribute("completions", len(completions))
        COMPLETION_COUNTER.add(len(completions))
        logger.debug("completions_enumerated", extra={"count": len(completions), "limit": limit})
        return completions


def _random_search(board: Board, fleet: Fleet, rng: random.Random) -> Iterator[Board]:
    length = fleet.longest()
    if length is None:
        yield board
        return

    anchors = board.cells(CellState.EMPTY)
    rng.shuffle(anchors)
    for anchor in anchors:
        shapes = list(shapes_for(length))
        rng.shuffle(shapes)
        for shape in shapes:
            if not fits(shape, board, anchor):
                continue
            remaining = fleet.copy()
            remaining.decrement(length)
            yield from _random_search(place_shape(board, shape, anchor), remaining, rng)


def random_fleet(rng: random.Random, board: Board | None = None, fleet: Fleet | None = None) -> Board:
    """Return a random completion with only ``SHIP`` and ``EMPTY`` cells."""
    with tracer.start_as_current_span("placement.random_fleet"):
        start = board.copy() if board is not None else Board()
        remaining = fleet.copy() if fleet is not None else Fleet.full()
        completion = next(_random_search(start, remaining, rng), None)
        if completion is None:
            logger.error("random_fleet_impossible", extra={"fleet": dict(remaining.counts)})
            raise IllegalPlacement("The fleet cannot be completed on this board.")
        for point in completion.cells(CellState.MISS):
            if start[point] is not CellState.MISS:
                completion[point] = CellState.EMPTY
        return completion


def ships_on(board: Board) -> list[frozenset[Point]]:
    """Split the ``SHIP`` cells of a board into 4-connected ships, row-major by first cell."""
    ships: list[frozenset[Point]] = []
    seen: set[Point] = set()
    for point in board.cells(CellState.SHIP):
        if point in seen:
            continue
        ship = connected_region(board, point, CellState.SHIP)
        seen.update(ship)
        ships.append(ship)
    return ships


def validate_layout(board: Board, fleet: Fleet | None = None) -> list[str]:
    """Check a finished own board against the fleet and the no-touch rule."""
    expected = fleet.counts if fleet is not None else dict(FLEET_COMPOSITION)
    errors: list[str] = []
    ships = ships_on(board)

    owner: dict[Point, int] = {}
    for number, ship in enumerate(ships):
        for cell in ship:
            owner[cell] = number

    found: dict[int, int] = {}
    for number, ship in enumerate(ships):
        first = min(ship)
        found[len(ship)] = found.get(len(ship), 0) + 1
        if not is_known_shape(ship):
            errors.append(f"ship at ({first.row}, {first.col}) has an unsupported shape")
        touching = {
            owner[neighbour]
            for cell in ship
            for neighbour in moore_neighbours(cell)
            if owner.get(neighbour, number) != number
        }
        for other in sorted(touching):
            if other > number:
                other_first = min(ships[other])
                errors.append(
                    f"ships at ({first.row}, {first.col}) and "
                    f"({other_first.row}, {other_first.col}) touch"
                )

    for length in sorted(set(expected) | set(found), reverse=True):
        want, have = expected.get(length, 0), found.get(length, 0)
        if want != have:
            errors.append(f"expected {want} ship(s) of length {length}, found {have}")

    if errors:
        logger.info("layout_invalid", extra={"errors": errors})
    return errors
