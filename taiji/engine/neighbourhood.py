"""Regions of panels described relative to a seed cell.

A :class:`Neighbourhood` stores its seed (the *offset point*) and a list of
``(dx, dy, panel)`` entries relative to that seed, always sorted by
``(dx, dy)``. Grid positions are the offsets plus the seed, so translating a
neighbourhood only moves the seed.

Regions usually come from :meth:`Grid.neighbourhood` (flood fill by lit
state); :meth:`Neighbourhood.new_around` builds the fixed plus-shaped
adjacency used by flowers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, FrozenSet, Iterator, List, Tuple

from ..core.constants import ORTHOGONAL_STEPS, ROTATIONS, Rotation
from ..core.exceptions import NeighbourhoodParseError, PanelLocParseError
from ..core.models import Panel, PanelLoc

if TYPE_CHECKING:
    from .grid import Grid


Entry = Tuple[int, int, Panel]


@dataclass
class Neighbourhood:
    offset_x: int
    offset_y: int
    contents: List[Entry] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.contents.sort(key=lambda entry: (entry[0], entry[1]))

    @classmethod
    def new_around(cls, x: int, y: int, grid: "Grid") -> "Neighbourhood":
        """The seed plus its in-bounds up/down/left/right neighbours, lit or not."""

        contents: List[Entry] = [(0, 0, grid.panel_at(x, y))]
        for dx, dy in ORTHOGONAL_STEPS:
            if grid.bounds.contains(x + dx, y + dy):
                contents.append((dx, dy, grid.panel_at(x + dx, y + dy)))
        return cls(offset_x=x, offset_y=y, contents=contents)

    def __len__(self) -> int:
        return len(self.contents)

    def offsets(self) -> FrozenSet[Tuple[int, int]]:
        return frozenset((dx, dy) for dx, dy, _ in self.contents)

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def translate_to(self, x: int, y: int) -> None:
        """Move the seed; offsets are kept, so cells may land out of bounds."""

        self.offset_x = x
        self.offset_y = y

    def translated_to(self, x: int, y: int) -> "Neighbourhood":
        return Neighbourhood(offset_x=x, offset_y=y, contents=list(self.contents))

    def grid_iter(self) -> Iterator[Tuple[int, int, Panel]]:
        """Yield entries in grid coordinates rather than offsets."""

        for dx, dy, panel in self.contents:
            yield self.offset_x + dx, self.offset_y + dy, panel

    def contains(self, x: int, y: int) -> bool:
        return (x - self.offset_x, y - self.offset_y) in self.offsets()

    def inbounds(self, width: int, height: int) -> bool:
        return all(
            0 <= self.offset_x + dx < width and 0 <= self.offset_y + dy < height
            for dx, dy, _ in self.contents
        )

    def inbounds_rotated(self, width: int, height: int) -> bool:
        """True if at least one of the four rotations fits on the grid."""

        for rot in ROTATIONS:
            fits = True
            for dx, dy, _ in self.contents:
                rx, ry = rot.rotate(dx, dy)
                if not (0 <= self.offset_x + rx < width and 0 <= self.offset_y + ry < height):
                    fits = False
                    break
            if fits:
                return True
        return False

    def constrain_to_before(self, upto_x: int, upto_y: int) -> None:
        """Drop cells after ``(upto_x, upto_y)`` in row-major order; fixed cells stay."""

        self.contents = [
            (dx, dy, panel)
            for dx, dy, panel in self.contents
            if panel.fixed or (self.offset_y + dy, self.offset_x + dx) <= (upto_y, upto_x)
        ]

    def bounds(self) -> Tuple[int, int, int, int]:
        """Offset extents as ``(x_min, y_min, x_max, y_max)``; always spans the seed."""

        xs = [dx for dx, _, _ in self.contents] + [0]
        ys = [dy for _, dy, _ in self.contents] + [0]
        return min(xs), min(ys), max(xs), max(ys)

    # ------------------------------------------------------------------
    # Shape comparison
    # ------------------------------------------------------------------
    def same_shape(self, other: "Neighbourhood") -> bool:
        """Same offsets around the seed; panel contents are ignored.

        The seeds must sit at the same spot in both shapes, so ``OXX`` and
        ``XXO`` are different shapes.
        """

        return self.offsets() == other.offsets()

    def same_shape_rotated(self, other: "Neighbourhood") -> bool:
        """Like :meth:`same_shape`, but ``other`` may be turned by any quarter turn."""

        mine = self.offsets()
        for rot in ROTATIONS:
            theirs = frozenset(rot.rotate(dx, dy) for dx, dy, _ in other.contents)
            if mine == theirs:
                return True
        return False

    def rotated_overlap(self, other: "Neighbourhood", rot: Rotation) -> int:
        """Count of our offsets that land on one of ``other``'s after rotating by ``rot``."""

        theirs = other.offsets()
        return sum(1 for dx, dy, _ in self.contents if rot.rotate(dx, dy) in theirs)

    def overlap(self, other: "Neighbourhood") -> int:
        return self.rotated_overlap(other, Rotation.D0)

    # ------------------------------------------------------------------
    # Text form
    # ------------------------------------------------------------------
    def to_text(self) -> str:
        lines = [str(PanelLoc(self.offset_x, self.offset_y))]
        panels = {(dx, dy): panel for dx, dy, panel in self.contents}
        x_min, y_min, x_max, y_max = self.bounds()
        for dy in range(y_min, y_max + 1):
            row = []
            for dx in range(x_min, x_max + 1):
                if (dx, dy) == (0, 0):
                    row.append("O")
                elif (dx, dy) in panels:
                    row.append("#" if panels[(dx, dy)].filled else ".")
                else:
                    row.append(" ")
            lines.append("".join(row))
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.to_text()

    @classmethod
    def from_text(cls, text: str) -> "Neighbourhood":
        if "\n" not in text:
            raise NeighbourhoodParseError("Premature end to input")
        loc_text, rest = text.split("\n", 1)
        try:
            loc = PanelLoc.parse(loc_text)
        except PanelLocParseError as exc:
            raise NeighbourhoodParseError(f"Error parsing offset: {exc}") from exc

        cells: List[Tuple[int, int]] = []
        origin = (0, 0)
        for row, line in enumerate(rest.splitlines()):
            for column, ch in enumerate(line):
                if ch == "O":
                    origin = (column, row)
                if ch in "O#.":
                    cells.append((column, row))
        contents = [
            (column - origin[0], row - origin[1], Panel(filled=True))
            for column, row in cells
        ]
        return cls(offset_x=loc.x, offset_y=loc.y, contents=contents)
