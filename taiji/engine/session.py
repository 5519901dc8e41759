"""State behind an interactive editing surface.

The session owns the live grid plus everything an editor keeps around it:
the cursor, the colour used for new symbols, a stack of snapshots for undo,
and the set of tagged cells whose line counterparts get highlighted. It only
manipulates values; drawing and key handling belong to the front end.
"""

from __future__ import annotations

from typing import List, Optional, Set, Tuple

from ..core.constants import ROTATIONS, Color
from ..core.models import PLAIN, Line, Lozange, PanelLoc, Petals, Pips
from ..utils.logger import get_logger
from .grid import Grid
from .solver import SolverConfig


LOGGER = get_logger(__name__)


class EditSession:
    def __init__(self, grid: Grid, color: Color = Color.YELLOW) -> None:
        self.grid = grid
        self.color = color
        self.cursor_x = 0
        self.cursor_y = 0
        self.history: List[Grid] = []
        self.tagged: Set[Tuple[int, int]] = set()

    @classmethod
    def blank(cls, width: int, height: int) -> "EditSession":
        return cls(Grid(width, height))

    @property
    def cursor(self) -> Tuple[int, int]:
        return self.cursor_x, self.cursor_y

    # ------------------------------------------------------------------
    # Navigation and history
    # ------------------------------------------------------------------
    def move_cursor(self, dx: int, dy: int) -> None:
        self.cursor_x = min(max(self.cursor_x + dx, 0), max(self.grid.width - 1, 0))
        self.cursor_y = min(max(self.cursor_y + dy, 0), max(self.grid.height - 1, 0))

    def push_snapshot(self) -> None:
        self.history.append(self.grid.copy())
        LOGGER.debug("Snapshot pushed (%s held)", len(self.history))

    def pop_snapshot(self) -> bool:
        if not self.history:
            return False
        self.grid = self.history.pop()
        LOGGER.debug("Snapshot restored (%s held)", len(self.history))
        return True

    def next_color(self) -> Color:
        self.color = self.color.next()
        return self.color

    def prev_color(self) -> Color:
        self.color = self.color.prev()
        return self.color

    # ------------------------------------------------------------------
    # Cell edits at the cursor
    # ------------------------------------------------------------------
    def toggle_lit(self) -> None:
        x, y = self.cursor
        if not self.grid.fixed_at(x, y):
            self.grid.toggle_lit_at(x, y)
            self.grid.set_colit_at(x, y, False)

    def toggle_colit(self) -> None:
        x, y = self.cursor
        if not self.grid.fixed_at(x, y):
            self.grid.toggle_colit_at(x, y)
            self.grid.set_lit_at(x, y, False)

    def toggle_fixed(self) -> None:
        self.grid.toggle_fixed_at(*self.cursor)

    def clear_symbol(self) -> None:
        self.grid.set_symbol_at(*self.cursor, PLAIN)

    def place_line(self, diagonal: bool = False) -> None:
        self.grid.set_symbol_at(*self.cursor, Line(diagonal=diagonal, color=self.color))

    def place_pips(self) -> None:
        self.grid.set_symbol_at(*self.cursor, Pips(count=1, color=self.color))

    def place_petals(self) -> None:
        self.grid.set_symbol_at(*self.cursor, Petals(count=0))

    def place_lozange(self) -> None:
        self.grid.set_symbol_at(*self.cursor, Lozange(color=self.color))

    def set_count(self, count: int) -> None:
        symbol = self.grid.symbol_at(*self.cursor)
        self.grid.set_symbol_at(*self.cursor, symbol.with_count(count))

    def increment_count(self) -> None:
        symbol = self.grid.symbol_at(*self.cursor)
        self.grid.set_symbol_at(*self.cursor, symbol.incremented())

    def decrement_count(self) -> None:
        symbol = self.grid.symbol_at(*self.cursor)
        self.grid.set_symbol_at(*self.cursor, symbol.decremented())

    def toggle_tag(self) -> None:
        if self.cursor in self.tagged:
            self.tagged.discard(self.cursor)
        else:
            self.tagged.add(self.cursor)

    # ------------------------------------------------------------------
    # Whole-grid commands
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.grid.reset()

    def rotate(self) -> None:
        self.grid.rotate()

    def solve(self, config: Optional[SolverConfig] = None) -> bool:
        """Replace the grid with a solution; on failure the grid is kept as is."""

        solution = self.grid.solve(config)
        if solution is None:
            LOGGER.info("No solution; keeping the current grid")
            return False
        self.grid = solution
        return True

    def error_locations(self) -> Set[PanelLoc]:
        return {error.loc for error in self.grid.errors()}

    def cotagged(self) -> List[Tuple[int, int]]:
        """Cells matching each tagged cell in the regions of same-coloured lines.

        For every line inside a tagged cell's region, the tag's offset from
        that line is replayed from every other line of the same colour. When
        either line is diagonal the offset is turned by the rotation that
        best overlays the two regions.
        """

        grid = self.grid
        found: Set[Tuple[int, int]] = set()
        lines = [(x, y, symbol) for x, y, symbol in grid.symbols() if isinstance(symbol, Line)]
        for tx, ty in self.tagged:
            for lx, ly, panel in grid.neighbourhood(tx, ty).grid_iter():
                if not isinstance(panel.symbol, Line):
                    continue
                line = panel.symbol
                line_region = grid.neighbourhood(lx, ly)
                rx, ry = tx - lx, ty - ly
                for ox, oy, other in lines:
                    if (ox, oy) == (lx, ly) or other.color != line.color:
                        continue
                    dx, dy = rx, ry
                    if line.diagonal or other.diagonal:
                        other_region = grid.neighbourhood(ox, oy)
                        best = ROTATIONS[0]
                        best_score = -1
                        for rot in ROTATIONS:
                            score = line_region.rotated_overlap(other_region, rot)
                            # Later rotations win ties.
                            if score >= best_score:
                                best, best_score = rot, score
                        dx, dy = best.rotate(rx, ry)
                    if grid.bounds.contains(ox + dx, oy + dy):
                        found.add((ox + dx, oy + dy))
        return sorted(found, key=lambda cell: (cell[1], cell[0]))
