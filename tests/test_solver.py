import itertools
import unittest
from unittest.mock import patch

from taiji.core.constants import Color
from taiji.core.models import Lozange, Petals
from taiji.engine.grid import Grid
from taiji.engine.solver import PuzzleSolver, SolverConfig, solve_grid


def flower_pair() -> Grid:
    # A bare flower next to one free cell: the two must differ.
    grid = Grid(2, 1)
    grid.set_symbol_at(0, 0, Petals(count=0))
    return grid


def split_lozanges() -> Grid:
    grid = Grid(6, 6)
    free = {(2, 2), (3, 2), (2, 3), (3, 3)}
    for x, y, _ in grid:
        if (x, y) not in free:
            grid.set_fixed_at(x, y, True)
    grid.set_lit_at(0, 0, True)
    grid.set_symbol_at(0, 0, Lozange(color=Color.PURPLE))
    grid.set_symbol_at(5, 5, Lozange(color=Color.PURPLE))
    return grid


class SolverTests(unittest.TestCase):
    def test_single_plain_cell_is_turned_off(self) -> None:
        grid = Grid(1, 1)
        grid.set_lit_at(0, 0, True)
        solution = grid.solve()
        self.assertIsNotNone(solution)
        assert solution is not None
        self.assertFalse(solution.lit_at(0, 0))
        self.assertTrue(grid.lit_at(0, 0))

    def test_full_flower_lights_up(self) -> None:
        grid = Grid(3, 3)
        grid.set_symbol_at(1, 1, Petals(count=4))
        for x, y in ((1, 0), (0, 1), (2, 1), (1, 2)):
            grid.set_lit_at(x, y, True)
            grid.set_fixed_at(x, y, True)
        solution = solve_grid(grid)
        self.assertIsNotNone(solution)
        assert solution is not None
        self.assertTrue(solution.lit_at(1, 1))
        self.assertTrue(solution.is_solved())
        self.assertFalse(grid.lit_at(1, 1))

    def test_unlit_is_tried_first(self) -> None:
        solution = flower_pair().solve()
        assert solution is not None
        self.assertFalse(solution.lit_at(0, 0))
        self.assertTrue(solution.lit_at(1, 0))

    def test_lozanges_that_cannot_meet(self) -> None:
        grid = split_lozanges()
        solver = PuzzleSolver(grid)
        self.assertIsNone(solver.solve())
        self.assertGreater(solver.nodes, 0)
        self.assertEqual(grid, split_lozanges())

    def test_unsatisfiable_flower(self) -> None:
        grid = Grid(1, 1)
        grid.set_symbol_at(0, 0, Petals(count=1))
        self.assertIsNone(grid.solve())

    def test_solved_grid_is_returned_after_reset(self) -> None:
        grid = Grid(2, 2)
        grid.set_lit_at(1, 1, True)
        solution = grid.solve()
        self.assertEqual(solution, Grid(2, 2))
        self.assertIsNot(solution, grid)

    def test_fixed_cells_are_never_changed(self) -> None:
        grid = flower_pair()
        grid.set_lit_at(1, 0, False)
        grid.set_fixed_at(1, 0, True)
        solution = grid.solve()
        assert solution is not None
        self.assertTrue(solution.lit_at(0, 0))
        self.assertFalse(solution.lit_at(1, 0))

    def test_solveable_reflects_partial_assignment(self) -> None:
        solver = PuzzleSolver(flower_pair())
        solver.work.reset()
        self.assertTrue(solver.solveable(0, 0))
        self.assertFalse(solver.solveable(1, 0))

    def test_timeout_abandons_search(self) -> None:
        grid = flower_pair()
        with patch("taiji.engine.solver.time") as mock_time:
            mock_time.time.side_effect = itertools.chain([0.0], itertools.repeat(1000.0))
            with self.assertLogs("taiji.engine.solver", level="WARNING"):
                result = PuzzleSolver(grid, SolverConfig(timeout=1.0)).solve()
        self.assertIsNone(result)
        self.assertIsNotNone(grid.solve(SolverConfig(timeout=60.0)))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
