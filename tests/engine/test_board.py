"""Tests for the board grid model."""

import pytest
from warships.engine.board import (
    Board,
    CellState,
    Point,
    moore_neighbours,
    orthogonal_neighbours,
)
from warships.engine.errors import InvalidCoordinate


def test_new_board_is_empty() -> None:
    board = Board()
    assert board.count(CellState.EMPTY) == 100
    assert board.has_empty()
    assert board[Point(4, 4)] is CellState.EMPTY


def test_out_of_range_access_raises() -> None:
    board = Board()
    with pytest.raises(InvalidCoordinate):
        board[Point(10, 0)]
    with pytest.raises(InvalidCoordinate):
        board[Point(0, -1)] = CellState.MISS


def test_invalid_coordinate_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Board()[Point(-1, 3)]


def test_copy_is_independent() -> None:
    board = Board()
    clone = board.copy()
    clone[Point(0, 0)] = CellState.SHIP
    assert board[Point(0, 0)] is CellState.EMPTY
    assert clone != board
    assert clone.copy() == clone


def test_cells_are_listed_row_major() -> None:
    board = Board()
    board[Point(3, 1)] = CellState.HIT
    board[Point(0, 7)] = CellState.HIT
    board[Point(3, 0)] = CellState.HIT
    assert board.cells(CellState.HIT) == [Point(0, 7), Point(3, 0), Point(3, 1)]
    assert board.count(CellState.HIT) == 3


def test_neighbours_are_clipped_to_the_grid() -> None:
    assert orthogonal_neighbours(Point(0, 0)) == [Point(1, 0), Point(0, 1)]
    assert moore_neighbours(Point(0, 0)) == [Point(0, 1), Point(1, 0), Point(1, 1)]
    assert len(orthogonal_neighbours(Point(5, 5))) == 4
    assert len(moore_neighbours(Point(5, 5))) == 8
    assert len(moore_neighbours(Point(9, 4))) == 5


def test_board_without_empty_cells() -> None:
    board = Board([[CellState.MISS] * 10 for _ in range(10)])
    assert not board.has_empty()


def test_board_rejects_wrong_dimensions() -> None:
    with pytest.raises(InvalidCoordinate):
        Board([[CellState.EMPTY] * 10 for _ in range(9)])


def test_render_uses_letters_and_numbers() -> None:
    board = Board()
    board[Point(0, 0)] = CellState.SHIP
    board[Point(9, 9)] = CellState.MISS
    lines = board.render().splitlines()
    assert lines[0].split() == [str(number) for number in range(1, 11)]
    assert lines[1].startswith("A |")
    assert lines[1].split("|")[1].split()[0] == "S"
    assert lines[10].startswith("J |")
    assert lines[10].split()[-1] == "o"
