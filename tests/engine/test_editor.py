"""Tests for manual cell-by-cell fleet placement."""

import pytest
from warships.engine.board import CellState, Point
from warships.engine.editor import FleetEditor
from warships.engine.errors import IllegalPlacement
from warships.engine.fleet import Fleet
from warships.engine.placement import validate_layout

LAYOUT = [
    [Point(0, 0), Point(0, 1), Point(0, 2), Point(0, 3)],
    [Point(0, 5), Point(0, 6), Point(0, 7)],
    [Point(2, 0), Point(2, 1), Point(2, 2)],
    [Point(2, 4), Point(2, 5)],
    [Point(2, 7), Point(2, 8)],
    [Point(4, 0), Point(4, 1)],
    [Point(4, 3)],
    [Point(4, 5)],
    [Point(4, 7)],
    [Point(4, 9)],
]


def test_first_cell_shows_candidates() -> None:
    editor = FleetEditor()
    editor.add_cell(Point(5, 5))
    assert editor.current == [Point(5, 5)]
    assert editor.board.cells(CellState.HIT) == [Point(4, 5), Point(5, 4), Point(5, 6), Point(6, 5)]


def test_only_candidates_extend_a_ship() -> None:
    editor = FleetEditor()
    editor.add_cell(Point(5, 5))
    with pytest.raises(IllegalPlacement):
        editor.add_cell(Point(6, 6))
    editor.add_cell(Point(5, 6))
    assert Point(4, 5) in editor.board.cells(CellState.HIT)
    assert editor.board[Point(5, 6)] is CellState.SHIP


def test_ship_finishes_at_longest_length() -> None:
    editor = FleetEditor()
    for cell in LAYOUT[0]:
        editor.add_cell(cell)
    assert editor.current == []
    assert editor.fleet.remaining(4) == 0
    assert editor.board.count(CellState.HIT) == 0
    assert editor.board[Point(1, 4)] is CellState.MISS
    with pytest.raises(IllegalPlacement):
        editor.add_cell(Point(1, 0))


def test_skew_shape_is_rejected() -> None:
    editor = FleetEditor()
    for cell in (Point(5, 5), Point(5, 6), Point(6, 5)):
        editor.add_cell(cell)
    with pytest.raises(IllegalPlacement):
        editor.add_cell(Point(6, 4))
    assert editor.current == [Point(5, 5), Point(5, 6), Point(6, 5)]


def test_finish_shorter_ship_explicitly() -> None:
    editor = FleetEditor()
    editor.add_cell(Point(3, 3))
    editor.add_cell(Point(3, 4))
    ship = editor.finish_ship()
    assert ship == {Point(3, 3), Point(3, 4)}
    assert editor.fleet.remaining(2) == 2
    assert editor.board[Point(2, 2)] is CellState.MISS


def test_finish_without_cells_or_with_exhausted_length() -> None:
    editor = FleetEditor(Fleet({4: 1, 1: 0}))
    with pytest.raises(IllegalPlacement):
        editor.finish_ship()
    editor.add_cell(Point(0, 0))
    with pytest.raises(IllegalPlacement):
        editor.finish_ship()


def test_cancel_ship_restores_board() -> None:
    editor = FleetEditor()
    editor.add_cell(Point(7, 7))
    editor.add_cell(Point(8, 7))
    editor.cancel_ship()
    assert editor.current == []
    assert editor.board.count(CellState.EMPTY) == 100


def test_full_fleet_by_clicks() -> None:
    editor = FleetEditor()
    for ship in LAYOUT:
        for cell in ship:
            editor.add_cell(cell)
    assert editor.complete()
    layout = editor.layout()
    assert layout.count(CellState.SHIP) == 20
    assert layout.count(CellState.MISS) == 0
    assert validate_layout(layout) == []
    with pytest.raises(IllegalPlacement):
        editor.add_cell(Point(9, 9))
