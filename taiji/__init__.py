"""Editor engine and solver for lit/unlit panel puzzles.

This package exposes the public API surface via:

- ``taiji.engine.grid.Grid``: cell storage, regions, rotation and the text form.
- ``taiji.engine.solver.PuzzleSolver``: backtracking search for a solution.
- ``taiji.engine.session.EditSession``: state kept by an editing front end.
- ``taiji.core.models``: panels, symbols and cell locations.
"""

from .core.constants import Color, Rotation
from .core.models import PLAIN, Line, Lozange, Panel, PanelLoc, Petals, Pips, Plain
from .engine.grid import Grid
from .engine.neighbourhood import Neighbourhood
from .engine.session import EditSession
from .engine.solver import PuzzleSolver, SolverConfig

__all__ = [
    "Color",
    "Rotation",
    "PLAIN",
    "Line",
    "Lozange",
    "Panel",
    "PanelLoc",
    "Petals",
    "Pips",
    "Plain",
    "Grid",
    "Neighbourhood",
    "EditSession",
    "PuzzleSolver",
    "SolverConfig",
]

__version__ = "0.1.0"
