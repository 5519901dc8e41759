"""Pretty-print helpers for puzzle grids."""

from __future__ import annotations

import string
import sys
from typing import TYPE_CHECKING, Iterable

from ..engine.validator import GridValidator

if TYPE_CHECKING:
    from ..core.models import Panel
    from ..engine.constraints import PanelError
    from ..engine.grid import Grid


CELL_WIDTH = 6


def cell_symbol(panel: "Panel") -> str:
    text = "#" if panel.filled else "."
    if panel.fixed:
        text += "!"
    return text + panel.symbol.code()


def format_grid(grid: "Grid") -> str:
    header_cells = [f"{x + 1:<{CELL_WIDTH}}" for x in range(grid.width)]
    lines = ["    " + "".join(header_cells).rstrip()]
    lines.append("    " + "-" * (CELL_WIDTH * grid.width))
    for y in range(grid.height):
        row = "".join(f"{cell_symbol(grid.panel_at(x, y)):<{CELL_WIDTH}}" for x in range(grid.width))
        lines.append(f"{string.ascii_uppercase[y]} | {row.rstrip()}")
    return "\n".join(lines)


def format_errors(errors: Iterable["PanelError"]) -> str:
    return "\n".join(f"{error.loc}: {error.message}" for error in errors)


def pretty_print_grid(grid: "Grid", *, label: str | None = None, stream=None) -> None:
    """Print the grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_diagnostics(grid: "Grid", *, stream=None) -> int:
    """Print the grid followed by every unsatisfied panel; returns the count."""

    stream = stream or sys.stdout
    print(format_grid(grid), file=stream)
    result = GridValidator().validate(grid)
    print(file=stream)
    if result.ok:
        print("--- Solved ---", file=stream)
        return 0
    print(f"--- {len(result.errors)} unsatisfied ---", file=stream)
    print(format_errors(result.errors), file=stream)
    return len(result.errors)
