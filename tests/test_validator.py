import io
import unittest

from taiji.core.constants import Color
from taiji.core.models import Lozange, PanelLoc, Petals, Pips
from taiji.engine.constraints import LozangeCount
from taiji.engine.grid import Grid
from taiji.engine.validator import GridValidator
from taiji.utils.pretty import cell_symbol, format_grid, print_diagnostics


class ValidatorTests(unittest.TestCase):
    def test_clean_grid(self) -> None:
        result = GridValidator().validate(Grid(3, 3))
        self.assertTrue(result.ok)
        self.assertEqual(result.errors, [])

    def test_collects_every_error(self) -> None:
        grid = Grid(3, 3)
        grid.set_symbol_at(0, 0, Lozange(color=Color.GREEN))
        grid.set_symbol_at(2, 2, Petals(count=0))
        result = GridValidator().validate(grid)
        self.assertFalse(result.ok)
        self.assertEqual(result.locations(), {PanelLoc(0, 0), PanelLoc(2, 2)})
        self.assertEqual(result.by_location()[PanelLoc(0, 0)], LozangeCount(0, 0, saw=1, color=Color.GREEN))
        self.assertEqual(len(result.messages), 2)
        self.assertIn("Green lozanges", result.messages[0])


class PrettyTests(unittest.TestCase):
    def test_cell_symbol(self) -> None:
        grid = Grid(2, 1)
        grid.set_lit_at(0, 0, True)
        grid.set_fixed_at(0, 0, True)
        grid.set_symbol_at(1, 0, Pips(count=4, color=Color.BLUE))
        self.assertEqual(cell_symbol(grid.panel_at(0, 0)), "#!")
        self.assertEqual(cell_symbol(grid.panel_at(1, 0)), ".CU4")

    def test_format_grid_labels_rows_and_columns(self) -> None:
        text = format_grid(Grid(2, 2))
        lines = text.splitlines()
        self.assertEqual(lines[0].split(), ["1", "2"])
        self.assertTrue(lines[2].startswith("A | "))
        self.assertTrue(lines[3].startswith("B | "))

    def test_print_diagnostics(self) -> None:
        grid = Grid(2, 2)
        stream = io.StringIO()
        self.assertEqual(print_diagnostics(grid, stream=stream), 0)
        self.assertIn("Solved", stream.getvalue())
        grid.set_symbol_at(1, 1, Petals(count=4))
        stream = io.StringIO()
        self.assertEqual(print_diagnostics(grid, stream=stream), 1)
        self.assertIn("2B:", stream.getvalue())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
