import random
import unittest

from mazepuzzle.carving import carve, generate
from mazepuzzle.errors import InvalidArgumentError
from mazepuzzle.grid import Direction, Grid
from mazepuzzle.solver import Found, solve
from mazepuzzle.validation import is_connected, reachable_from


def _without_passage(grid, skipped):
    rebuilt = Grid(grid.width, grid.height)
    for a, b in grid.passages():
        if (a, b) != skipped:
            rebuilt.open_passage(a[0], a[1], b[0], b[1])
    return rebuilt


class SpanningTreeTests(unittest.TestCase):
    def test_generated_mazes_are_spanning_trees(self) -> None:
        for width, height, seed in ((1, 1, 0), (1, 7, 3), (7, 1, 3), (5, 5, 11), (12, 8, 99)):
            with self.subTest(width=width, height=height, seed=seed):
                grid = generate(width, height, seed)
                self.assertEqual(grid.passage_count(), width * height - 1)
                self.assertEqual(len(reachable_from(grid, (width - 1, height - 1))), width * height)

    def test_removing_any_passage_disconnects_the_maze(self) -> None:
        grid = generate(4, 4, 7)
        for passage in list(grid.passages()):
            with self.subTest(passage=passage):
                self.assertFalse(is_connected(_without_passage(grid, passage)))

    def test_border_walls_stay_closed(self) -> None:
        grid = generate(6, 4, 5)
        for x in range(grid.width):
            self.assertFalse(grid.is_open(x, 0, Direction.NORTH))
            self.assertFalse(grid.is_open(x, grid.height - 1, Direction.SOUTH))
        for y in range(grid.height):
            self.assertFalse(grid.is_open(0, y, Direction.WEST))
            self.assertFalse(grid.is_open(grid.width - 1, y, Direction.EAST))


class DeterminismTests(unittest.TestCase):
    def test_same_seed_gives_identical_grids(self) -> None:
        first = generate(10, 10, 12345)
        second = generate(10, 10, 12345)
        self.assertEqual(first, second)
        self.assertEqual(first.wall_masks().tobytes(), second.wall_masks().tobytes())

    def test_different_seeds_give_different_grids(self) -> None:
        self.assertNotEqual(generate(10, 10, 1), generate(10, 10, 2))

    def test_injected_rng_matches_seed(self) -> None:
        self.assertEqual(generate(6, 6, rng=random.Random(9)), generate(6, 6, 9))

    def test_seed_and_rng_together_are_rejected(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            generate(3, 3, 1, rng=random.Random(1))


class CarveTests(unittest.TestCase):
    def test_carve_from_custom_start(self) -> None:
        grid = carve(Grid(5, 3), random.Random(4), start=(3, 2))
        self.assertEqual(grid.passage_count(), 14)
        self.assertTrue(is_connected(grid))

    def test_carve_rejects_out_of_bounds_start(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            carve(Grid(3, 3), random.Random(0), start=(3, 0))

    def test_invalid_dimensions_surface_from_grid(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            generate(0, 5, 1)


class ConcreteScenarioTests(unittest.TestCase):
    def test_five_by_five_seed_42(self) -> None:
        grid = generate(5, 5, 42)
        self.assertEqual(len(reachable_from(grid, (0, 0))), 25)
        self.assertEqual(grid.passage_count(), 24)

        result = solve(grid, (0, 0), (4, 4))
        self.assertIsInstance(result, Found)
        self.assertGreaterEqual(result.steps, 8)
        self.assertEqual(result.path[0], (0, 0))
        self.assertEqual(result.path[-1], (4, 4))
        for a, b in zip(result.path, result.path[1:]):
            self.assertTrue(grid.is_open(a[0], a[1], Direction.between(a, b)))


if __name__ == "__main__":
    unittest.main()
