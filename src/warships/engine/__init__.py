"""Board inference and targeting engine."""

from .adjacency import mark_candidates, mark_exclusions
from .board import BOARD_SIZE, Board, CellState, Point
from .editor import FleetEditor
from .errors import EngineError, ExhaustedBoard, IllegalPlacement, InvalidCoordinate
from .fleet import FLEET_COMPOSITION, Fleet
from .heatmap import best_cell, heatmap
from .locator import locate
from .match import Match, ShotResult
from .placement import enumerate_completions, fits, iter_completions, place_shape, random_fleet, validate_layout
from .shapes import SHAPES, Shape, shapes_for
from .targeting import HuntTargeter, TargeterState

__all__ = [
    "BOARD_SIZE",
    "Board",
    "CellState",
    "EngineError",
    "ExhaustedBoard",
    "FLEET_COMPOSITION",
    "Fleet",
    "FleetEditor",
    "HuntTargeter",
    "IllegalPlacement",
    "InvalidCoordinate",
    "Match",
    "Point",
    "SHAPES",
    "Shape",
    "ShotResult",
    "TargeterState",
    "best_cell",
    "enumerate_completions",
    "fits",
    "heatmap",
    "iter_completions",
    "locate",
    "mark_candidates",
    "mark_exclusions",
    "place_shape",
    "random_fleet",
    "shapes_for",
    "validate_layout",
]
