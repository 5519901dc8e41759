"""Backtracking solver assigning lit/unlit values to free cells."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from ..utils.logger import get_logger
from .constraints import satisfiable

if TYPE_CHECKING:
    from .grid import Grid

LOGGER = get_logger(__name__)

# Frame phases.
_ENTER = 0
_TRIED_UNLIT = 1
_TRIED_LIT = 2
_PASSED_FIXED = 3


@dataclass
class SolverConfig:
    """Knobs for a search run.

    ``timeout`` is a wall-clock budget in seconds; None searches until a
    solution is found or every branch is exhausted.
    """

    timeout: Optional[float] = None


@dataclass
class _Frame:
    index: int
    prior: bool = False
    phase: int = _ENTER


class PuzzleSolver:
    """Row-major depth-first search over a private work copy of a grid.

    Cells are tried unlit before lit. After each cell is assigned, every
    panel's :func:`satisfiable` test must hold with that cell as the scan
    horizon, otherwise the branch is abandoned. The search keeps an explicit
    stack of frames; each frame remembers the bit it overwrote and puts it
    back when the branch is exhausted.
    """

    def __init__(self, grid: "Grid", config: Optional[SolverConfig] = None) -> None:
        self.config = config or SolverConfig()
        self.work = grid.copy()
        self.nodes = 0
        self._deadline: Optional[float] = None

    def solve(self) -> Optional["Grid"]:
        self.work.reset()
        free = sum(1 for _, _, panel in self.work if not panel.fixed)
        LOGGER.info(
            "Solving %sx%s grid: %s free cells, %s symbols",
            self.work.width,
            self.work.height,
            free,
            len(self.work.symbols()),
        )
        started = time.time()
        if self.config.timeout:
            self._deadline = started + self.config.timeout

        if self.work.is_solved():
            LOGGER.info("Grid already solved after reset")
            return self.work.copy()

        result = self._search()
        elapsed = time.time() - started
        if result is None:
            LOGGER.info("No solution (%s nodes, %.2fs)", self.nodes, elapsed)
        else:
            LOGGER.info("Solution found (%s nodes, %.2fs)", self.nodes, elapsed)
        return result

    def solveable(self, upto_x: int, upto_y: int) -> bool:
        """Every panel can still be satisfied with cells up to the horizon settled."""

        return all(
            satisfiable(panel, x, y, upto_x, upto_y, self.work) for x, y, panel in self.work
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def _search(self) -> Optional["Grid"]:
        grid = self.work
        width = grid.width
        cell_count = width * grid.height
        stack: List[_Frame] = [_Frame(index=0)]

        while stack:
            frame = stack[-1]
            x, y = (frame.index % width, frame.index // width) if width else (0, 0)

            if frame.phase == _ENTER:
                self.nodes += 1
                if self._out_of_time():
                    LOGGER.warning(
                        "Solver time budget of %.1fs exceeded after %s nodes",
                        self.config.timeout,
                        self.nodes,
                    )
                    return None
                if frame.index > 0:
                    previous = frame.index - 1
                    if not self.solveable(previous % width, previous // width):
                        stack.pop()
                        continue
                if frame.index >= cell_count:
                    stack.pop()
                    continue
                if grid.fixed_at(x, y):
                    if grid.is_solved():
                        return grid.copy()
                    frame.phase = _PASSED_FIXED
                    stack.append(_Frame(index=frame.index + 1))
                    continue
                frame.prior = grid.lit_at(x, y)
                grid.set_lit_at(x, y, False)
                frame.phase = _TRIED_UNLIT
                if grid.is_solved():
                    return grid.copy()
                stack.append(_Frame(index=frame.index + 1))
            elif frame.phase == _TRIED_UNLIT:
                grid.set_lit_at(x, y, True)
                frame.phase = _TRIED_LIT
                if grid.is_solved():
                    return grid.copy()
                stack.append(_Frame(index=frame.index + 1))
            else:
                if frame.phase == _TRIED_LIT:
                    grid.set_lit_at(x, y, frame.prior)
                stack.pop()
        return None

    def _out_of_time(self) -> bool:
        return self._deadline is not None and time.time() > self._deadline


def solve_grid(grid: "Grid", config: Optional[SolverConfig] = None) -> Optional["Grid"]:
    """Solve a copy of ``grid``; returns the solved copy or None."""

    return PuzzleSolver(grid, config).solve()
