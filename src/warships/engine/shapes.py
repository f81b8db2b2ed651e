"""Static catalogue of ship shapes.

Ships are polyominoes rather than straight lines. Each length maps to every
rotation and reflection of the shapes the game allows, translated so that the
first occupied cell in row-major order sits at offset ``(0, 0)``. The table is
built once at import time and exposed read-only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from .board import Point

Shape = Tuple[Point, ...]

_BASE_SHAPES: dict[int, tuple[tuple[tuple[int, int], ...], ...]] = {
    4: (
        ((0, 0), (0, 1), (0, 2), (0, 3)),  # line
        ((0, 0), (1, 0), (2, 0), (2, 1)),  # L
        ((0, 0), (0, 1), (0, 2), (1, 1)),  # T
        ((0, 0), (0, 1), (1, 0), (1, 1)),  # square
    ),
    3: (
        ((0, 0), (0, 1), (0, 2)),  # line
        ((0, 0), (0, 1), (1, 0)),  # corner
    ),
    2: (((0, 0), (0, 1)),),
    1: (((0, 0),),),
}


def normalise(cells: Iterable[tuple[int, int]]) -> Shape:
    """Anchor a set of cells at its first row-major cell."""
    ordered = sorted(set(cells))
    anchor_row, anchor_col = ordered[0]
    return tuple(Point(row - anchor_row, col - anchor_col) for row, col in ordered)


def _orientations(cells: tuple[tuple[int, int], ...]) -> list[Shape]:
    variants: list[Shape] = []
    current = list(cells)
    for _ in range(4):
        current = [(col, -row) for row, col in current]
        variants.append(normalise(current))
        variants.append(normalise((row, -col) for row, col in current))
    return variants


def _build_catalog() -> Mapping[int, tuple[Shape, ...]]:
    catalog: dict[int, tuple[Shape, ...]] = {}
    for length, bases in _BASE_SHAPES.items():
        seen: dict[Shape, None] = {}
        for base in bases:
            for variant in _orientations(base):
                seen.setdefault(variant, None)
        catalog[length] = tuple(seen)
    return MappingProxyType(catalog)


SHAPES: Mapping[int, tuple[Shape, ...]] = _build_catalog()


def shapes_for(length: int) -> tuple[Shape, ...]:
    """Return every orientation of a ship of ``length``."""
    return SHAPES[length]


def is_known_shape(cells: Iterable[Point]) -> bool:
    """Check whether a set of absolute cells forms a catalogue shape."""
    shape = normalise((cell.row, cell.col) for cell in cells)
    return shape in SHAPES.get(len(shape), ())
