"""Per-cell rules for each symbol kind.

Two predicates are defined for every panel:

* :func:`satisfied` judges a complete assignment and returns a
  :class:`PanelError` describing the violation, or ``None``.
* :func:`satisfiable` is the solver's early pruning test against a row-major
  scan horizon. It may answer ``True`` for a cell that will fail later, but
  never ``False`` for a cell that can still be completed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from ..core.constants import ORTHOGONAL_STEPS, PETAL_SLOTS, Color
from ..core.models import Line, Lozange, Panel, PanelLoc, Petals, Pips, Symbol

if TYPE_CHECKING:
    from .grid import Grid

LOZANGE_TARGET = 2


# ----------------------------------------------------------------------
# Diagnostics
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class PanelError:
    """A constraint violation anchored at ``(x, y)``."""

    x: int
    y: int

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def loc(self) -> PanelLoc:
        return PanelLoc(self.x, self.y)

    @property
    def message(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.message


def _name(color: Color) -> str:
    return color.name.title()


@dataclass(frozen=True)
class OverlappingPips(PanelError):
    ox: int
    oy: int
    color: Color
    other_color: Color

    @property
    def message(self) -> str:
        return (
            f"Pips at {self.loc} conflict in color with pips at {PanelLoc(self.ox, self.oy)} "
            f"({_name(self.color)} vs {_name(self.other_color)})"
        )


@dataclass(frozen=True)
class WrongNeighbourhoodSize(PanelError):
    required: int
    have: int

    @property
    def message(self) -> str:
        return (
            f"Neighbourhood of pips at {self.loc} must be of size {self.required} "
            f"but was of size {self.have}"
        )


@dataclass(frozen=True)
class PetalCount(PanelError):
    required: int
    saw: int

    @property
    def message(self) -> str:
        return (
            f"Flower has wrong number of petals at {self.loc}: "
            f"must have {self.required} but had {self.saw}"
        )


@dataclass(frozen=True)
class LozangeCount(PanelError):
    saw: int
    color: Color

    @property
    def message(self) -> str:
        return (
            f"Saw {self.saw} {_name(self.color)} lozanges in the neighbourhood of {self.loc}, "
            f"instead of {LOZANGE_TARGET}"
        )


@dataclass(frozen=True)
class LineNeighbourhoodWrongShape(PanelError):
    other_x: int
    other_y: int

    @property
    def message(self) -> str:
        return (
            f"Neighbourhood for line at {self.loc} was wrong shape. "
            f"Conflicting line at {PanelLoc(self.other_x, self.other_y)}"
        )


@dataclass(frozen=True)
class DuplicateLineNeighbourhoodShape(PanelError):
    other_x: int
    other_y: int

    @property
    def message(self) -> str:
        return (
            f"Neighbourhood for line at {self.loc} matches line of a different colour "
            f"at {PanelLoc(self.other_x, self.other_y)}"
        )


# ----------------------------------------------------------------------
# Shared helpers
# ----------------------------------------------------------------------
def counts_for_lozange(color: Color, symbol: Symbol) -> bool:
    """Whether ``symbol`` counts towards a lozange of ``color``.

    Flowers count as yellow unless bare and as purple unless full.
    """

    if isinstance(symbol, (Pips, Line, Lozange)):
        return symbol.color == color
    if isinstance(symbol, Petals):
        if color == Color.YELLOW:
            return symbol.count != 0
        if color == Color.PURPLE:
            return symbol.count != PETAL_SLOTS
    return False


def pip_total(grid: "Grid", color: Color) -> int:
    return sum(
        symbol.count
        for _, _, symbol in grid.symbols()
        if isinstance(symbol, Pips) and symbol.color == color
    )


def _ahead(x: int, y: int, upto_x: int, upto_y: int) -> bool:
    return (y, x) > (upto_y, upto_x)


# ----------------------------------------------------------------------
# Complete assignments
# ----------------------------------------------------------------------
def satisfied(panel: Panel, x: int, y: int, grid: "Grid") -> Optional[PanelError]:
    symbol = panel.symbol
    if isinstance(symbol, Pips):
        return _pips_satisfied(symbol, x, y, grid)
    if isinstance(symbol, Line):
        return _line_satisfied(symbol, x, y, grid)
    if isinstance(symbol, Lozange):
        return _lozange_satisfied(symbol, x, y, grid)
    if isinstance(symbol, Petals):
        return _petals_satisfied(symbol, panel, x, y, grid)
    return None


def _pips_satisfied(symbol: Pips, x: int, y: int, grid: "Grid") -> Optional[PanelError]:
    region = grid.neighbourhood(x, y)
    pip_sum = 0
    for ox, oy, other in region.grid_iter():
        if isinstance(other.symbol, Pips):
            if other.symbol.color != symbol.color:
                return OverlappingPips(x, y, ox, oy, symbol.color, other.symbol.color)
            pip_sum += other.symbol.count
    # A region whose pips cancel out places no size requirement.
    if pip_sum != 0 and pip_sum != len(region):
        return WrongNeighbourhoodSize(x, y, required=pip_sum, have=len(region))
    return None


def _line_satisfied(symbol: Line, x: int, y: int, grid: "Grid") -> Optional[PanelError]:
    mine = grid.neighbourhood(x, y)
    for cx, cy, other in grid.symbols():
        if (cx, cy) == (x, y) or not isinstance(other, Line):
            continue
        theirs = grid.neighbourhood(cx, cy)
        if symbol.diagonal or other.diagonal:
            matches = mine.same_shape_rotated(theirs)
        else:
            matches = mine.same_shape(theirs)
        if other.color == symbol.color and not matches:
            return LineNeighbourhoodWrongShape(x, y, other_x=cx, other_y=cy)
        if other.color != symbol.color and matches:
            return DuplicateLineNeighbourhoodShape(x, y, other_x=cx, other_y=cy)
    return None


def _lozange_satisfied(symbol: Lozange, x: int, y: int, grid: "Grid") -> Optional[PanelError]:
    region = grid.neighbourhood(x, y)
    seen = sum(1 for _, _, other in region.contents if counts_for_lozange(symbol.color, other.symbol))
    if seen != LOZANGE_TARGET:
        return LozangeCount(x, y, saw=seen, color=symbol.color)
    return None


def _petals_satisfied(symbol: Petals, panel: Panel, x: int, y: int, grid: "Grid") -> Optional[PanelError]:
    same = 0
    for dx, dy in ORTHOGONAL_STEPS:
        nx, ny = x + dx, y + dy
        if grid.bounds.contains(nx, ny) and grid.lit_at(nx, ny) == panel.filled:
            same += 1
    if same != symbol.count:
        return PetalCount(x, y, required=symbol.count, saw=same)
    return None


# ----------------------------------------------------------------------
# Partial assignments
# ----------------------------------------------------------------------
def satisfiable(panel: Panel, x: int, y: int, upto_x: int, upto_y: int, grid: "Grid") -> bool:
    """Cells up to and including ``(upto_x, upto_y)`` are assigned; later ones may change."""

    if _ahead(x, y, upto_x, upto_y):
        return True
    symbol = panel.symbol
    if isinstance(symbol, Pips):
        return _pips_satisfiable(symbol, panel, x, y, upto_x, upto_y, grid)
    if isinstance(symbol, Lozange):
        region = grid.neighbourhood_upto(x, y, upto_x, upto_y)
        seen = sum(1 for _, _, other in region.contents if counts_for_lozange(symbol.color, other.symbol))
        return seen <= LOZANGE_TARGET
    if isinstance(symbol, Petals):
        return _petals_satisfiable(symbol, panel, x, y, upto_x, upto_y, grid)
    # Lines are never pruned early; is_solved still judges every leaf.
    return True


def _pips_satisfiable(
    symbol: Pips, panel: Panel, x: int, y: int, upto_x: int, upto_y: int, grid: "Grid"
) -> bool:
    region = grid.neighbourhood_upto(x, y, upto_x, upto_y)
    for _, _, other in region.contents:
        # Cells in the bounded region are settled, so a colour clash is final.
        if isinstance(other.symbol, Pips) and other.symbol.color != symbol.color:
            return False
    total = pip_total(grid, symbol.color)
    if total != 0 and panel.filled and total < len(region):
        return False
    return True


def _petals_satisfiable(
    symbol: Petals, panel: Panel, x: int, y: int, upto_x: int, upto_y: int, grid: "Grid"
) -> bool:
    same = 0
    different = 0
    for dx, dy in ORTHOGONAL_STEPS:
        nx, ny = x + dx, y + dy
        if not grid.bounds.contains(nx, ny):
            continue
        if _ahead(nx, ny, upto_x, upto_y) and not grid.fixed_at(nx, ny):
            continue
        if grid.lit_at(nx, ny) == panel.filled:
            same += 1
        else:
            different += 1
    return same <= symbol.count and different <= PETAL_SLOTS - symbol.count
