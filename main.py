"""CLI entrypoint for checking and solving lit/unlit panel puzzles."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from taiji.core.exceptions import TaijiError
from taiji.engine.grid import Grid
from taiji.engine.solver import SolverConfig
from taiji.io.puzzle_file import load_grid, save_grid
from taiji.utils.logger import configure_logging
from taiji.utils.pretty import pretty_print_grid, print_diagnostics


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check, rotate and solve lit/unlit panel puzzles",
    )
    parser.add_argument("width", type=int, nargs="?", default=5, help="Blank grid width in cells")
    parser.add_argument("height", type=int, nargs="?", default=5, help="Blank grid height in cells")
    parser.add_argument("--in-file", type=Path, help="Puzzle file to load instead of a blank grid")
    parser.add_argument("--out-file", type=Path, help="Write the resulting puzzle here")
    parser.add_argument(
        "--export",
        action="store_true",
        help="Write the resulting puzzle to a timestamped file when --out-file is not given",
    )
    parser.add_argument("--reset", action="store_true", help="Turn every unfixed cell off")
    parser.add_argument("--rotate", type=int, default=0, metavar="N", help="Rotate the grid N times")
    parser.add_argument("--solve", action="store_true", help="Search for a solution")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Give up solving after this many seconds (default: no limit)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="List unsatisfied panels; exit status 1 when any remain",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.rotate < 0:
        parser.error("--rotate must not be negative")

    try:
        grid = load_grid(args.in_file) if args.in_file else Grid(args.width, args.height)
    except (OSError, TaijiError, ValueError) as exc:
        parser.error(f"cannot load puzzle: {exc}")

    if args.reset:
        grid.reset()
    for _ in range(args.rotate):
        grid.rotate()

    status = 0
    if args.solve:
        solution = grid.solve(SolverConfig(timeout=args.timeout))
        if solution is None:
            print("No solution found", file=sys.stderr)
            status = 2
        else:
            grid = solution

    if args.check:
        if print_diagnostics(grid):
            status = status or 1
    else:
        pretty_print_grid(grid)

    if args.out_file or args.export:
        save_grid(grid, args.out_file)
    return status


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
