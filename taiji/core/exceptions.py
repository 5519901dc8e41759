"""Custom exception hierarchy for puzzle parsing."""

from __future__ import annotations


class TaijiError(Exception):
    """Base exception for puzzle engine failures."""


# ----------------------------------------------------------------------
# Panel tokens
# ----------------------------------------------------------------------
class PanelParseError(TaijiError):
    """Raised when a single cell token cannot be parsed."""


class EmptyPanelError(PanelParseError):
    def __init__(self) -> None:
        super().__init__("Empty panel")


class InvalidCharacterError(PanelParseError):
    def __init__(self, char: str) -> None:
        super().__init__(f"Invalid character {char!r}")
        self.char = char


class InvalidColorError(PanelParseError):
    def __init__(self, char: str) -> None:
        super().__init__(f"Invalid color code {char!r}")
        self.char = char


class InvalidCountError(PanelParseError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Error parsing count: {text!r}")
        self.text = text


class TooManyPetalsError(PanelParseError):
    def __init__(self, count: int) -> None:
        super().__init__(f"Too many petals: {count}")
        self.count = count


class TrailingBytesError(PanelParseError):
    def __init__(self, rest: str) -> None:
        super().__init__(f"Trailing bytes: {rest!r}")
        self.rest = rest


# ----------------------------------------------------------------------
# Whole grids
# ----------------------------------------------------------------------
class GridParseError(TaijiError):
    """Raised when the grid text form is malformed."""


class EmptyInputError(GridParseError):
    def __init__(self) -> None:
        super().__init__("Empty input")


class MissingWidthError(GridParseError):
    def __init__(self) -> None:
        super().__init__("Missing width")


class MissingHeightError(GridParseError):
    def __init__(self) -> None:
        super().__init__("Missing height")


class InvalidWidthError(GridParseError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid width: {text!r}")
        self.text = text


class InvalidHeightError(GridParseError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid height: {text!r}")
        self.text = text


class InvalidPanelError(GridParseError):
    def __init__(self, x: int, y: int, cause: PanelParseError) -> None:
        super().__init__(f"Invalid panel at {x}x{y}: {cause}")
        self.x = x
        self.y = y
        self.cause = cause


class PrematureEndOfInputError(GridParseError):
    def __init__(self) -> None:
        super().__init__("Premature end of input")


# ----------------------------------------------------------------------
# Locations and shapes
# ----------------------------------------------------------------------
class PanelLocParseError(TaijiError):
    """Raised when a ``1A``-style location is ill-formed."""


class NeighbourhoodParseError(TaijiError):
    """Raised when a drawn neighbourhood cannot be read back."""
