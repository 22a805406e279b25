import unittest

from mazepuzzle.errors import InvalidArgumentError
from mazepuzzle.grid import ALL_WALLS, DIRECTIONS, Direction, Grid


class GridConstructionTests(unittest.TestCase):
    def test_zero_width_is_invalid(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            Grid(0, 5)

    def test_negative_and_non_integer_dimensions_are_invalid(self) -> None:
        for width, height in ((5, -1), (2.5, 3), (True, 3), ("4", 4)):
            with self.subTest(width=width, height=height):
                with self.assertRaises(InvalidArgumentError):
                    Grid(width, height)

    def test_invalid_argument_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            Grid(3, 0)

    def test_new_grid_has_every_wall_closed(self) -> None:
        grid = Grid(4, 3)
        self.assertEqual(grid.size, 12)
        self.assertEqual(grid.passage_count(), 0)
        self.assertTrue(all(cell.is_fully_closed() for cell in grid.cells()))
        self.assertTrue((grid.wall_masks() == 15).all())
        self.assertEqual(grid.wall_masks().shape, (3, 4))

    def test_cells_are_distinct_objects(self) -> None:
        grid = Grid(3, 3)
        ids = {id(cell) for cell in grid.cells()}
        self.assertEqual(len(ids), 9)
        self.assertEqual((grid.cell(2, 1).x, grid.cell(2, 1).y), (2, 1))

    def test_cell_walls_are_read_only(self) -> None:
        grid = Grid(2, 1)
        with self.assertRaises(TypeError):
            grid.cell(0, 0).walls[Direction.EAST] = False
        self.assertFalse(grid.is_open(0, 0, Direction.EAST))
        self.assertFalse(grid.is_open(1, 0, Direction.WEST))

    def test_opening_a_passage_shows_through_the_wall_view(self) -> None:
        grid = Grid(2, 1)
        walls = grid.cell(0, 0).walls
        grid.open_passage(0, 0, 1, 0)
        self.assertFalse(walls[Direction.EAST])
        self.assertEqual(grid.cell(0, 0).wall_mask(), ALL_WALLS & ~Direction.EAST.bit)
        self.assertFalse(grid.cell(1, 0).is_fully_closed())


class GridNeighborTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = Grid(3, 3)

    def test_neighbor_counts(self) -> None:
        self.assertEqual(len(list(self.grid.neighbors(0, 0))), 2)
        self.assertEqual(len(list(self.grid.neighbors(1, 0))), 3)
        self.assertEqual(len(list(self.grid.neighbors(0, 2))), 2)
        self.assertEqual(len(list(self.grid.neighbors(1, 1))), 4)

    def test_neighbors_follow_canonical_order(self) -> None:
        neighbors = list(self.grid.neighbors(1, 1))
        self.assertEqual(
            neighbors,
            [
                (Direction.NORTH, (1, 0)),
                (Direction.EAST, (2, 1)),
                (Direction.SOUTH, (1, 2)),
                (Direction.WEST, (0, 1)),
            ],
        )

    def test_single_cell_grid_has_no_neighbors(self) -> None:
        self.assertEqual(list(Grid(1, 1).neighbors(0, 0)), [])

    def test_out_of_bounds_queries_raise(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            list(self.grid.neighbors(3, 0))
        with self.assertRaises(InvalidArgumentError):
            self.grid.is_open(-1, 0, Direction.EAST)

    def test_direction_helpers(self) -> None:
        self.assertEqual(Direction.NORTH.opposite, Direction.SOUTH)
        self.assertEqual(Direction.WEST.opposite, Direction.EAST)
        self.assertEqual((Direction.EAST.dx, Direction.EAST.dy), (1, 0))
        self.assertEqual(sum(direction.bit for direction in DIRECTIONS), 15)
        self.assertEqual(Direction.between((2, 2), (2, 1)), Direction.NORTH)
        self.assertEqual(Direction.from_letter("w"), Direction.WEST)
        with self.assertRaises(InvalidArgumentError):
            Direction.from_letter("Q")


class OpenPassageTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = Grid(3, 3)

    def test_open_passage_clears_both_sides(self) -> None:
        self.grid.open_passage(1, 1, 2, 1)
        self.assertTrue(self.grid.is_open(1, 1, Direction.EAST))
        self.assertTrue(self.grid.is_open(2, 1, Direction.WEST))
        self.assertFalse(self.grid.is_open(1, 1, Direction.NORTH))
        self.assertEqual(list(self.grid.open_neighbors(2, 1)), [(1, 1)])
        self.assertEqual(self.grid.passage_count(), 1)

    def test_open_passage_rejects_non_adjacent_cells(self) -> None:
        for target in ((2, 0), (1, 1), (0, 0)):
            with self.subTest(target=target):
                with self.assertRaises(InvalidArgumentError):
                    self.grid.open_passage(0, 0, *target)
        self.assertEqual(self.grid.passage_count(), 0)

    def test_open_passage_rejects_out_of_bounds(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            self.grid.open_passage(2, 2, 3, 2)

    def test_walls_stay_symmetric(self) -> None:
        self.grid.open_passage(0, 0, 0, 1)
        self.grid.open_passage(1, 2, 1, 1)
        self.grid.open_passage(2, 0, 1, 0)
        for cell in self.grid.cells():
            for direction, (nx, ny) in self.grid.neighbors(cell.x, cell.y):
                self.assertEqual(
                    self.grid.is_open(cell.x, cell.y, direction),
                    self.grid.is_open(nx, ny, direction.opposite),
                )

    def test_copy_and_equality(self) -> None:
        self.grid.open_passage(0, 0, 1, 0)
        clone = self.grid.copy()
        self.assertEqual(clone, self.grid)
        clone.open_passage(1, 0, 1, 1)
        self.assertNotEqual(clone, self.grid)
        self.assertNotEqual(Grid(3, 3), Grid(3, 2))


if __name__ == "__main__":
    unittest.main()
