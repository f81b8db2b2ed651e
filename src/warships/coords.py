"""Translation between engine points and the server's ``A1``..``J10`` notation."""

from __future__ import annotations

from typing import Iterable

from warships.engine.board import BOARD_SIZE, ROW_LABELS, Board, CellState, Point
from warships.engine.errors import InvalidCoordinate


def parse_coord(text: str) -> Point:
    """Parse ``"A1"`` style notation: the letter is the row, the number the 1-based column."""
    cleaned = text.strip().upper()
    if len(cleaned) < 2 or cleaned[0] not in ROW_LABELS:
        raise InvalidCoordinate(f"Row of {text!r} must be a letter between A and J.")
    try:
        col = int(cleaned[1:]) - 1
    except ValueError as exc:
        raise InvalidCoordinate(f"Column of {text!r} must be a number between 1 and 10.") from exc
    if col not in range(BOARD_SIZE):
        raise InvalidCoordinate(f"Column of {text!r} must be a number between 1 and 10.")
    return Point(ROW_LABELS.index(cleaned[0]), col)


def format_coord(point: Point) -> str:
    if not point.in_bounds():
        raise InvalidCoordinate(f"Point ({point.row}, {point.col}) is outside the board.")
    return f"{ROW_LABELS[point.row]}{point.col + 1}"


def board_from_coords(coords: Iterable[str]) -> Board:
    """Build an own board from the server's list of occupied cells."""
    board = Board()
    for coord in coords:
        board[parse_coord(coord)] = CellState.SHIP
    return board


def coords_from_board(board: Board) -> list[str]:
    return [format_coord(point) for point in board.cells(CellState.SHIP)]
