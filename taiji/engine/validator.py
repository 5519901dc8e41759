"""Deterministic rule validation for puzzle grids."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Set

from ..core.models import PanelLoc
from ..utils.logger import get_logger
from .constraints import PanelError
from .grid import Grid


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    errors: List[PanelError] = field(default_factory=list)

    @property
    def messages(self) -> List[str]:
        return [error.message for error in self.errors]

    def locations(self) -> Set[PanelLoc]:
        return {error.loc for error in self.errors}

    def by_location(self) -> Dict[PanelLoc, PanelError]:
        return {error.loc: error for error in self.errors}


class GridValidator:
    """Runs every panel's rule over a complete assignment."""

    def validate(self, grid: Grid) -> ValidationResult:
        errors = grid.errors()
        if errors:
            LOGGER.debug("Validation found %s unsatisfied panels", len(errors))
            return ValidationResult(ok=False, errors=errors)
        return ValidationResult(ok=True)
