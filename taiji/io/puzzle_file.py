"""Reading and writing ``.tai`` puzzle files.

A puzzle file holds exactly the text form of :class:`Grid`: a
``<width> <height>`` header followed by one row of panel tokens per line.
Exports without an explicit path are named after the current UTC time so
successive saves never overwrite each other.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..engine.grid import Grid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

SUFFIX = ".tai"
TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S"


def load_grid(path: Path | str) -> Grid:
    path = Path(path)
    grid = Grid.from_str(path.read_text(encoding="utf-8"))
    LOGGER.info("Loaded %sx%s puzzle from %s", grid.width, grid.height, path)
    return grid


def default_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT) + SUFFIX


def save_grid(grid: Grid, path: Path | str | None = None, directory: Path | str = ".") -> Path:
    """Write the grid and return where it went."""

    if path is None:
        target = Path(directory) / default_filename()
    else:
        target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(grid.to_text(), encoding="utf-8")
    LOGGER.info("Puzzle saved: %s", target)
    return target
