"""Tests for the static shape catalogue."""

import pytest
from warships.engine.board import Point
from warships.engine.shapes import SHAPES, is_known_shape, normalise, shapes_for


def _connected(shape) -> bool:
    cells = set(shape)
    seen = {shape[0]}
    stack = [shape[0]]
    while stack:
        current = stack.pop()
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            neighbour = Point(current.row + dr, current.col + dc)
            if neighbour in cells and neighbour not in seen:
                seen.add(neighbour)
                stack.append(neighbour)
    return seen == cells


def test_catalogue_sizes() -> None:
    assert {length: len(shapes) for length, shapes in SHAPES.items()} == {1: 1, 2: 2, 3: 6, 4: 15}


def test_shapes_are_anchored_connected_and_unique() -> None:
    for length, shapes in SHAPES.items():
        assert len(set(shapes)) == len(shapes)
        for shape in shapes:
            assert shape[0] == Point(0, 0)
            assert len(shape) == length
            assert len(set(shape)) == length
            assert _connected(shape)
            # Anchor is the first cell in row-major order.
            assert all(offset > Point(0, 0) for offset in shape[1:])


def test_catalogue_contains_lines_and_square() -> None:
    line = (Point(0, 0), Point(0, 1), Point(0, 2), Point(0, 3))
    column = (Point(0, 0), Point(1, 0), Point(2, 0), Point(3, 0))
    square = (Point(0, 0), Point(0, 1), Point(1, 0), Point(1, 1))
    assert line in shapes_for(4)
    assert column in shapes_for(4)
    assert square in shapes_for(4)


def test_skew_tetromino_is_not_a_ship() -> None:
    skew = [Point(0, 1), Point(0, 2), Point(1, 0), Point(1, 1)]
    assert not is_known_shape(skew)
    assert is_known_shape([Point(5, 5), Point(6, 5), Point(6, 4)])
    assert not is_known_shape([Point(0, 0), Point(1, 1)])


def test_normalise_uses_first_row_major_cell() -> None:
    shape = normalise([(3, 4), (2, 5), (3, 5)])
    assert shape == (Point(0, 0), Point(1, -1), Point(1, 0))


def test_catalogue_is_immutable() -> None:
    with pytest.raises(TypeError):
        SHAPES[5] = ()  # type: ignore[index]
    assert isinstance(shapes_for(3), tuple)
    with pytest.raises(KeyError):
        shapes_for(5)
