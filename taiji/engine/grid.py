"""Grid representation and helper utilities."""

from __future__ import annotations

import re
from typing import Dict, Iterator, List, Optional, Set, Tuple, Type

from ..core.constants import MAX_COLS, MAX_ROWS, ORTHOGONAL_STEPS, Bounds, Rotation
from ..core.exceptions import (
    EmptyInputError,
    GridParseError,
    InvalidHeightError,
    InvalidPanelError,
    InvalidWidthError,
    MissingHeightError,
    MissingWidthError,
    PanelParseError,
    PrematureEndOfInputError,
)
from ..core.models import PLAIN, Panel, Plain, Symbol
from ..utils.logger import get_logger
from .constraints import PanelError, satisfied
from .neighbourhood import Entry, Neighbourhood
from .solver import SolverConfig, solve_grid


LOGGER = get_logger(__name__)

_DIMENSION = re.compile(r"\+?[0-9]+")


class Grid:
    """Lit, fixed and co-lit bits packed one integer per row, plus sparse symbols.

    Width and height never change after construction. Accessing a cell
    outside the grid raises :class:`IndexError`.
    """

    def __init__(self, width: int, height: int) -> None:
        if not 0 <= width <= MAX_COLS:
            raise ValueError(f"Grid width must be between 0 and {MAX_COLS}, got {width}")
        if not 0 <= height <= MAX_ROWS:
            raise ValueError(f"Grid height must be between 0 and {MAX_ROWS}, got {height}")
        self.bounds = Bounds(width=width, height=height)
        self._lit: List[int] = [0] * height
        self._colit: List[int] = [0] * height
        self._fixed: List[int] = [0] * height
        self._symbols: Dict[Tuple[int, int], Symbol] = {}

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    def copy(self) -> "Grid":
        rv = Grid(self.width, self.height)
        rv._lit = list(self._lit)
        rv._colit = list(self._colit)
        rv._fixed = list(self._fixed)
        rv._symbols = dict(self._symbols)
        return rv

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        # Co-lit marks are editor annotations and do not take part.
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.bounds == other.bounds
            and self._lit == other._lit
            and self._fixed == other._fixed
            and self._symbols == other._symbols
        )

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def _check(self, x: int, y: int) -> None:
        if not self.bounds.contains(x, y):
            raise IndexError(f"Cell {(x, y)} outside {self.width}x{self.height} grid")

    def lit_at(self, x: int, y: int) -> bool:
        self._check(x, y)
        return bool(self._lit[y] >> x & 1)

    def set_lit_at(self, x: int, y: int, lit: bool) -> None:
        self._check(x, y)
        if lit:
            self._lit[y] |= 1 << x
        else:
            self._lit[y] &= ~(1 << x)

    def toggle_lit_at(self, x: int, y: int) -> None:
        self._check(x, y)
        self._lit[y] ^= 1 << x

    def colit_at(self, x: int, y: int) -> bool:
        self._check(x, y)
        return bool(self._colit[y] >> x & 1)

    def set_colit_at(self, x: int, y: int, colit: bool) -> None:
        """Mark a cell as believed unlit; marking clears its lit bit."""

        self._check(x, y)
        if colit:
            self._colit[y] |= 1 << x
            self._lit[y] &= ~(1 << x)
        else:
            self._colit[y] &= ~(1 << x)

    def toggle_colit_at(self, x: int, y: int) -> None:
        self._check(x, y)
        self._colit[y] ^= 1 << x

    def fixed_at(self, x: int, y: int) -> bool:
        self._check(x, y)
        return bool(self._fixed[y] >> x & 1)

    def set_fixed_at(self, x: int, y: int, fixed: bool) -> None:
        self._check(x, y)
        if fixed:
            self._fixed[y] |= 1 << x
        else:
            self._fixed[y] &= ~(1 << x)

    def toggle_fixed_at(self, x: int, y: int) -> None:
        self._check(x, y)
        self._fixed[y] ^= 1 << x

    def symbol_at(self, x: int, y: int) -> Symbol:
        self._check(x, y)
        return self._symbols.get((x, y), PLAIN)

    def set_symbol_at(self, x: int, y: int, symbol: Symbol) -> None:
        """Store ``symbol`` at the cell; Plain removes whatever was there."""

        self._check(x, y)
        if isinstance(symbol, Plain):
            self._symbols.pop((x, y), None)
        else:
            self._symbols[(x, y)] = symbol

    def symbols(self) -> List[Tuple[int, int, Symbol]]:
        return [
            (x, y, symbol)
            for (x, y), symbol in sorted(self._symbols.items(), key=lambda item: (item[0][1], item[0][0]))
        ]

    def panel_at(self, x: int, y: int) -> Panel:
        self._check(x, y)
        return Panel(
            filled=bool(self._lit[y] >> x & 1),
            fixed=bool(self._fixed[y] >> x & 1),
            symbol=self._symbols.get((x, y), PLAIN),
        )

    def set_panel_at(self, x: int, y: int, panel: Panel) -> None:
        self.set_lit_at(x, y, panel.filled)
        self.set_fixed_at(x, y, panel.fixed)
        self.set_symbol_at(x, y, panel.symbol)

    def __iter__(self) -> Iterator[Tuple[int, int, Panel]]:
        """Row-major ``(x, y, panel)`` over the whole grid."""

        for y in range(self.height):
            for x in range(self.width):
                yield x, y, self.panel_at(x, y)

    def iter(self) -> Iterator[Tuple[int, int, Panel]]:
        return iter(self)

    # ------------------------------------------------------------------
    # Regions
    # ------------------------------------------------------------------
    def neighbourhood(self, x: int, y: int) -> Neighbourhood:
        """Maximal 4-connected region sharing the lit state of ``(x, y)``."""

        return self._flood(x, y, None)

    def neighbourhood_upto(self, x: int, y: int, upto_x: int, upto_y: int) -> Neighbourhood:
        """Flood fill that does not grow through unfixed cells after the scan horizon.

        A seed that is itself after ``(upto_x, upto_y)`` in row-major order
        yields an empty region.
        """

        if (y, x) > (upto_y, upto_x):
            return Neighbourhood(offset_x=x, offset_y=y)
        return self._flood(x, y, (upto_y, upto_x))

    def _flood(self, x: int, y: int, horizon: Optional[Tuple[int, int]]) -> Neighbourhood:
        target = self.lit_at(x, y)
        seen: Set[Tuple[int, int]] = {(x, y)}
        to_visit = [(x, y)]
        contents: List[Entry] = []
        while to_visit:
            vx, vy = to_visit.pop()
            if horizon is not None and (vy, vx) > horizon and not self.fixed_at(vx, vy):
                continue
            contents.append((vx - x, vy - y, self.panel_at(vx, vy)))
            for dx, dy in ORTHOGONAL_STEPS:
                nx, ny = vx + dx, vy + dy
                if (nx, ny) in seen or not self.bounds.contains(nx, ny):
                    continue
                if self.lit_at(nx, ny) == target:
                    seen.add((nx, ny))
                    to_visit.append((nx, ny))
        return Neighbourhood(offset_x=x, offset_y=y, contents=contents)

    # ------------------------------------------------------------------
    # Whole-grid operations
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Turn every unfixed cell off."""

        self._lit = [lit & fixed for lit, fixed in zip(self._lit, self._fixed)]

    def errors(self) -> List[PanelError]:
        """Diagnostics for every unsatisfied cell, row-major."""

        found: List[PanelError] = []
        for x, y, panel in self:
            error = satisfied(panel, x, y, self)
            if error is not None:
                found.append(error)
        return found

    def is_solved(self) -> bool:
        return all(satisfied(panel, x, y, self) is None for x, y, panel in self)

    def rotation(self) -> Rotation:
        """Square grids turn a quarter; rectangles turn half so their size is kept."""

        return Rotation.D90 if self.width == self.height else Rotation.D180

    def rotated(self) -> "Grid":
        rv = Grid(self.width, self.height)
        rot = self.rotation()
        for x, y, panel in self:
            if rot is Rotation.D90:
                nx, ny = self.width - 1 - y, x
            else:
                nx, ny = self.width - 1 - x, self.height - 1 - y
            rv.set_panel_at(nx, ny, panel)
            if self.colit_at(x, y):
                rv._colit[ny] |= 1 << nx
        return rv

    def rotate(self) -> None:
        rv = self.rotated()
        self._lit, self._colit, self._fixed, self._symbols = rv._lit, rv._colit, rv._fixed, rv._symbols

    def solve(self, config: Optional[SolverConfig] = None) -> Optional["Grid"]:
        """Return a solved copy, or None; this grid is never modified."""

        return solve_grid(self, config)

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_text(self) -> str:
        rows = ["".join(f"{self.panel_at(x, y)} " for x in range(self.width)) for y in range(self.height)]
        return f"{self.width} {self.height}\n" + "\n".join(rows) + "\n"

    def __str__(self) -> str:
        return self.to_text()

    @classmethod
    def from_str(cls, text: str) -> "Grid":
        """Parse the ``.tai`` text form.

        The header line holds ``<width> <height>``; the body holds one
        whitespace-separated panel token per cell in row-major order.
        Nothing is returned unless every token parses.
        """

        if "\n" not in text:
            raise EmptyInputError()
        header, body = text.split("\n", 1)
        fields = header.split()
        if not fields:
            raise MissingWidthError()
        width = _parse_dimension(fields[0], MAX_COLS, InvalidWidthError)
        if len(fields) < 2:
            raise MissingHeightError()
        height = _parse_dimension(fields[1], MAX_ROWS, InvalidHeightError)

        grid = cls(width, height)
        tokens = iter(body.split())
        for y in range(height):
            for x in range(width):
                token = next(tokens, None)
                if token is None:
                    raise PrematureEndOfInputError()
                try:
                    panel = Panel.parse(token)
                except PanelParseError as exc:
                    raise InvalidPanelError(x, y, exc) from exc
                grid.set_panel_at(x, y, panel)
        LOGGER.debug("Parsed %sx%s grid with %s symbols", width, height, len(grid._symbols))
        return grid


def _parse_dimension(text: str, limit: int, error: Type[GridParseError]) -> int:
    if not _DIMENSION.fullmatch(text):
        raise error(text)
    value = int(text)
    if value > limit:
        raise error(text)
    return value
