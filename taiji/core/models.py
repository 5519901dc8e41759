"""Data models supporting the puzzle engine.

A cell is described by a :class:`Panel`: whether it is lit, whether that value
is fixed (given by the puzzle) and the symbol drawn on it. Panels round-trip
through a compact token form used by the ``.tai`` text files::

    .        unlit, no symbol
    X!       lit and fixed
    .CY3     unlit, three yellow pips
    x!/U     lit, fixed, diagonal blue line
    .OP      unlit, purple lozange
    XF2      lit, flower with two petals
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, replace
from typing import Optional

from .constants import PETAL_SLOTS, Color
from .exceptions import (
    EmptyPanelError,
    InvalidCharacterError,
    InvalidColorError,
    InvalidCountError,
    PanelLocParseError,
    TooManyPetalsError,
    TrailingBytesError,
)

PIPS_MIN = -128
PIPS_MAX = 127

_SIGNED_COUNT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_COUNT = re.compile(r"\+?[0-9]+")


# ----------------------------------------------------------------------
# Symbols
# ----------------------------------------------------------------------
class Symbol:
    """Base for the constraint glyph carried by a cell."""

    def with_count(self, count: int) -> "Symbol":
        return self

    def incremented(self) -> "Symbol":
        return self

    def decremented(self) -> "Symbol":
        return self

    def code(self) -> str:
        return ""


@dataclass(frozen=True)
class Plain(Symbol):
    """No symbol at all."""


@dataclass(frozen=True)
class Pips(Symbol):
    """Dice pips: the region must contain exactly as many cells as pips."""

    count: int
    color: Color

    def __post_init__(self) -> None:
        if not PIPS_MIN <= self.count <= PIPS_MAX:
            raise ValueError(f"Pip count out of range: {self.count}")

    def with_count(self, count: int) -> "Pips":
        return replace(self, count=count)

    def incremented(self) -> "Pips":
        return replace(self, count=1 if self.count == -1 else min(self.count + 1, PIPS_MAX))

    def decremented(self) -> "Pips":
        return replace(self, count=-1 if self.count == 1 else max(self.count - 1, PIPS_MIN))

    def code(self) -> str:
        return f"C{self.color.code}{self.count}"


@dataclass(frozen=True)
class Line(Symbol):
    """Same-coloured lines share a region shape; diagonal lines may be rotated."""

    diagonal: bool
    color: Color

    def code(self) -> str:
        return ("/" if self.diagonal else "-") + self.color.code


@dataclass(frozen=True)
class Lozange(Symbol):
    """Its region holds exactly two symbols of its colour."""

    color: Color

    def code(self) -> str:
        return "O" + self.color.code


@dataclass(frozen=True)
class Petals(Symbol):
    """Flower: exactly ``count`` orthogonal neighbours share its lit state."""

    count: int

    def __post_init__(self) -> None:
        if not 0 <= self.count <= PETAL_SLOTS:
            raise ValueError(f"Petal count out of range: {self.count}")

    def with_count(self, count: int) -> "Petals":
        return replace(self, count=min(max(count, 0), PETAL_SLOTS))

    def incremented(self) -> "Petals":
        return replace(self, count=min(self.count + 1, PETAL_SLOTS))

    def decremented(self) -> "Petals":
        return replace(self, count=max(self.count - 1, 0))

    def code(self) -> str:
        return f"F{self.count}"


PLAIN = Plain()


def symbol_color(symbol: Symbol) -> Optional[Color]:
    """Colour of a symbol, or None for Plain and Petals."""

    return getattr(symbol, "color", None)


# ----------------------------------------------------------------------
# Panels
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class Panel:
    """Full state of one cell."""

    filled: bool = False
    fixed: bool = False
    symbol: Symbol = PLAIN

    def __str__(self) -> str:
        return ("X" if self.filled else ".") + ("!" if self.fixed else "") + self.symbol.code()

    @classmethod
    def parse(cls, token: str) -> "Panel":
        if not token:
            raise EmptyPanelError()
        head = token[0]
        if head not in ".xX":
            raise InvalidCharacterError(head)
        filled = head != "."
        rest = token[1:]
        fixed = rest.startswith("!")
        if fixed:
            rest = rest[1:]
        symbol, rest = _parse_symbol(rest)
        if rest:
            raise TrailingBytesError(rest)
        return cls(filled=filled, fixed=fixed, symbol=symbol)


def _parse_color(ch: str) -> Color:
    color = Color.from_code(ch)
    if color is None:
        raise InvalidColorError(ch)
    return color


def _parse_symbol(text: str):
    """Parse a symbol suffix, returning ``(symbol, unconsumed_text)``."""

    if not text:
        return PLAIN, ""
    marker = text[0]
    if marker in "-/" and len(text) >= 2:
        return Line(diagonal=marker == "/", color=_parse_color(text[1])), text[2:]
    if marker in "oO" and len(text) >= 2:
        return Lozange(color=_parse_color(text[1])), text[2:]
    if marker in "cC" and len(text) >= 2:
        color = _parse_color(text[1])
        count_text = text[2:]
        if not _SIGNED_COUNT.fullmatch(count_text):
            raise InvalidCountError(count_text)
        count = int(count_text)
        if not PIPS_MIN <= count <= PIPS_MAX:
            raise InvalidCountError(count_text)
        return Pips(count=count, color=color), ""
    if marker in "fF":
        count_text = text[1:]
        if not _UNSIGNED_COUNT.fullmatch(count_text):
            raise InvalidCountError(count_text)
        count = int(count_text)
        if count > PETAL_SLOTS:
            raise TooManyPetalsError(count)
        return Petals(count=count), ""
    raise InvalidCharacterError(marker)


# ----------------------------------------------------------------------
# Locations
# ----------------------------------------------------------------------
@dataclass(frozen=True, order=True)
class PanelLoc:
    """Display form of a cell position: 1-based column then row letter."""

    x: int
    y: int

    def __str__(self) -> str:
        return f"{self.x + 1}{string.ascii_uppercase[self.y]}"

    @classmethod
    def parse(cls, text: str) -> "PanelLoc":
        numeric = text.rstrip(string.ascii_letters)
        letters = text.lstrip(string.digits)
        if not numeric or not numeric.isdigit():
            raise PanelLocParseError(f"PanelLoc was ill-formed: {text!r}")
        if len(letters) != 1 or letters not in string.ascii_uppercase:
            raise PanelLocParseError(f"PanelLoc was ill-formed: {text!r}")
        column = int(numeric)
        if column < 1:
            raise PanelLocParseError(f"Column must be at least 1: {text!r}")
        return cls(x=column - 1, y=string.ascii_uppercase.index(letters))
