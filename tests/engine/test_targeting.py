"""Tests for the hunt/target policy."""

import pytest
from warships.engine.adjacency import mark_exclusions
from warships.engine.board import Board, CellState, Point
from warships.engine.errors import ExhaustedBoard
from warships.engine.fleet import Fleet
from warships.engine.heatmap import best_cell
from warships.engine.locator import locate
from warships.engine.targeting import HuntTargeter, TargeterState


def test_starts_hunting_at_heatmap_maximum() -> None:
    board = Board()
    fleet = Fleet.full()
    targeter = HuntTargeter()
    assert targeter.state is TargeterState.HUNTING
    assert targeter.recommend(board, fleet) == best_cell(board, fleet)
    assert targeter.state is TargeterState.HUNTING


def test_hit_then_sunk_scenario() -> None:
    board = Board()
    fleet = Fleet.full()
    targeter = HuntTargeter()

    board[Point(0, 0)] = CellState.HIT
    targeter.on_hit(board, Point(0, 0))
    assert set(targeter.pending) == {Point(0, 1), Point(1, 0)}
    assert targeter.state is TargeterState.TARGETING

    first = targeter.recommend(board, fleet)
    assert first in {Point(0, 1), Point(1, 0)}
    assert targeter.state is TargeterState.TARGETING

    if first != Point(0, 1):
        board[first] = CellState.MISS
        assert targeter.recommend(board, fleet) == Point(0, 1)

    board[Point(0, 1)] = CellState.HIT
    targeter.on_sunk(Point(0, 1))
    assert targeter.pending == ()
    assert targeter.state is TargeterState.HUNTING

    ship = locate(board, Point(0, 1))
    assert ship == {Point(0, 0), Point(0, 1)}
    board = mark_exclusions(board, ship)
    fleet.decrement(len(ship))
    assert fleet.remaining(2) == 2
    for cell in (Point(0, 2), Point(1, 0), Point(1, 1), Point(1, 2)):
        assert board[cell] is CellState.MISS

    assert targeter.recommend(board, fleet) == best_cell(board, fleet)
    assert targeter.state is TargeterState.HUNTING


def test_queue_is_fifo_and_skips_resolved_cells() -> None:
    board = Board()
    fleet = Fleet.full()
    targeter = HuntTargeter()
    board[Point(5, 5)] = CellState.HIT
    targeter.on_hit(board, Point(5, 5))
    assert targeter.pending == (Point(4, 5), Point(6, 5), Point(5, 4), Point(5, 6))

    board[Point(4, 5)] = CellState.MISS
    assert targeter.recommend(board, fleet) == Point(6, 5)
    assert targeter.pending == (Point(5, 4), Point(5, 6))


def test_second_hit_extends_queue_without_duplicates() -> None:
    board = Board()
    targeter = HuntTargeter()
    board[Point(5, 5)] = CellState.HIT
    targeter.on_hit(board, Point(5, 5))
    board[Point(5, 6)] = CellState.HIT
    targeter.on_hit(board, Point(5, 6))
    pending = targeter.pending
    assert len(pending) == len(set(pending))
    assert Point(5, 7) in pending
    assert Point(5, 6) in pending  # queued before it was hit; skipped when popped
    assert pending.index(Point(4, 6)) > pending.index(Point(5, 4))


def test_drained_queue_falls_back_to_hunting() -> None:
    board = Board()
    fleet = Fleet.full()
    targeter = HuntTargeter()
    board[Point(0, 0)] = CellState.HIT
    targeter.on_hit(board, Point(0, 0))
    board[Point(0, 1)] = CellState.MISS
    board[Point(1, 0)] = CellState.MISS

    assert targeter.recommend(board, fleet) == best_cell(board, fleet)
    assert targeter.state is TargeterState.HUNTING
    assert targeter.pending == ()


def test_hit_on_surrounded_cell_queues_nothing() -> None:
    board = Board()
    board[Point(0, 0)] = CellState.HIT
    board[Point(0, 1)] = CellState.MISS
    board[Point(1, 0)] = CellState.MISS
    targeter = HuntTargeter()
    targeter.on_hit(board, Point(0, 0))
    assert targeter.pending == ()
    assert targeter.state is TargeterState.TARGETING


def test_recommend_on_exhausted_board_raises() -> None:
    board = Board([[CellState.MISS] * 10 for _ in range(10)])
    targeter = HuntTargeter()
    with pytest.raises(ExhaustedBoard):
        targeter.recommend(board, Fleet.full())
