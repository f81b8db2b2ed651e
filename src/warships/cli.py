"""Command-line driver for the targeting engine."""

from __future__ import annotations

import argparse
import random
from typing import Sequence

from warships.coords import coords_from_board, format_coord, parse_coord
from warships.engine.board import BOARD_SIZE, ROW_LABELS, Board, CellState, Point
from warships.engine.errors import ExhaustedBoard, InvalidCoordinate
from warships.engine.fleet import Fleet
from warships.engine.heatmap import Heatmap, best_cell, heatmap
from warships.engine.instrumented_match import InstrumentedMatch
from warships.engine.match import ShotResult
from warships.engine.placement import random_fleet, ships_on
from warships.telemetry import init_telemetry


class HiddenFleet:
    """Answers shots the way the game server would."""

    def __init__(self, layout: Board) -> None:
        self.layout = layout
        self._ship_of: dict[Point, frozenset[Point]] = {
            cell: ship for ship in ships_on(layout) for cell in ship
        }
        self._hits: set[Point] = set()

    def fire(self, point: Point) -> ShotResult:
        ship = self._ship_of.get(point)
        if ship is None:
            return ShotResult.MISS
        self._hits.add(point)
        return ShotResult.SUNK if ship <= self._hits else ShotResult.HIT


def _format_heatmap(counts: Heatmap) -> str:
    header = "    " + " ".join(f"{col + 1:>3}" for col in range(BOARD_SIZE))
    rows = [header]
    for row in range(BOARD_SIZE):
        rows.append(f"{ROW_LABELS[row]} |" + " ".join(f"{int(value):>3}" for value in counts[row]))
    return "\n".join(rows)


def simulate(seed: int | None = None, quiet: bool = False) -> InstrumentedMatch:
    """Let the hunt/target policy sink a randomly placed fleet."""
    rng = random.Random(seed)
    hidden = HiddenFleet(random_fleet(rng))
    match = InstrumentedMatch.new()
    match.start()

    while not match.finished():
        point = match.recommend()
        result = hidden.fire(point)
        match.record_shot(point, result)
        if not quiet:
            print(f"Fired at {format_coord(point)}: {result.value} ({match.targeter.state.value})")
            if result is ShotResult.SUNK:
                print("  " + ", ".join(match.opponent_fleet.summary()))

    print("\nOpponent board:")
    print(match.opponent_board.render())
    print(f"\nSank the fleet in {match.shots} shots, accuracy {match.accuracy():.2f}%")
    return match


def show_heatmap(hits: Sequence[str], misses: Sequence[str]) -> Point | None:
    board = Board()
    try:
        for coord in hits:
            board[parse_coord(coord)] = CellState.HIT
        for coord in misses:
            board[parse_coord(coord)] = CellState.MISS
    except InvalidCoordinate as exc:
        print(f"Invalid input: {exc}")
        return None
    fleet = Fleet.full()
    print(_format_heatmap(heatmap(board, fleet)))
    try:
        target = best_cell(board, fleet)
    except ExhaustedBoard:
        print("\nNo empty cell left to target.")
        return None
    print(f"\nRecommended target: {format_coord(target)}")
    return target


def show_layout(seed: int | None = None) -> Board:
    layout = random_fleet(random.Random(seed))
    print(layout.render())
    print("\n" + " ".join(coords_from_board(layout)))
    return layout


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Warships targeting engine tools.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sim = subparsers.add_parser("simulate", help="Play the targeting policy against a random fleet.")
    sim.add_argument("--seed", type=int, default=None, help="Optional RNG seed for reproducibility.")
    sim.add_argument("--quiet", action="store_true", help="Only print the final board.")

    heat = subparsers.add_parser("heatmap", help="Print the heatmap of an opponent board.")
    heat.add_argument("hits", nargs="*", default=[], help="Cells already hit, e.g. A1 B2.")
    heat.add_argument("--misses", nargs="*", default=[], help="Cells already missed.")

    layout = subparsers.add_parser("layout", help="Print a random valid fleet layout.")
    layout.add_argument("--seed", type=int, default=None, help="Optional RNG seed for reproducibility.")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    init_telemetry()
    if args.command == "simulate":
        simulate(seed=args.seed, quiet=args.quiet)
    elif args.command == "heatmap":
        show_heatmap(args.hits, args.misses)
    else:
        show_layout(seed=args.seed)


if __name__ == "__main__":
    main()
