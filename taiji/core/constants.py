"""Shared constants and enumerations for the puzzle engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Color(str, Enum):
    """Symbol colours, valued by their single-letter file code."""

    BLACK = "B"
    YELLOW = "Y"
    PURPLE = "P"
    WHITE = "W"
    BLUE = "U"
    GREEN = "G"

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, ch: str) -> Optional["Color"]:
        try:
            return cls(ch.upper())
        except ValueError:
            return None

    def next(self) -> "Color":
        index = COLORS.index(self)
        return COLORS[(index + 1) % len(COLORS)]

    def prev(self) -> "Color":
        index = COLORS.index(self)
        return COLORS[(index - 1) % len(COLORS)]

    def complement(self) -> "Color":
        return _COMPLEMENTS[self]


COLORS: Tuple[Color, ...] = (
    Color.BLACK,
    Color.YELLOW,
    Color.PURPLE,
    Color.WHITE,
    Color.BLUE,
    Color.GREEN,
)

_COMPLEMENTS = {
    Color.BLACK: Color.WHITE,
    Color.YELLOW: Color.PURPLE,
    Color.PURPLE: Color.YELLOW,
    Color.WHITE: Color.BLACK,
    Color.BLUE: Color.PURPLE,
    Color.GREEN: Color.WHITE,
}


class Rotation(str, Enum):
    """Quarter turns applied to integer offsets."""

    D0 = "D0"
    D90 = "D90"
    D180 = "D180"
    D270 = "D270"

    def rotate(self, dx: int, dy: int) -> Tuple[int, int]:
        if self is Rotation.D90:
            return -dy, dx
        if self is Rotation.D180:
            return -dx, -dy
        if self is Rotation.D270:
            return dy, -dx
        return dx, dy


ROTATIONS: Tuple[Rotation, ...] = (Rotation.D0, Rotation.D90, Rotation.D180, Rotation.D270)

# Up, left, right, down as (dx, dy).
ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, -1), (-1, 0), (1, 0), (0, 1))

# Rows are packed into integers one bit per column.
MAX_ROWS = 12
MAX_COLS = 16

PETAL_SLOTS = 4


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height
