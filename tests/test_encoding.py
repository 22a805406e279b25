import tempfile
import unittest
from pathlib import Path

from mazepuzzle.carving import generate
from mazepuzzle.encoding import (
    directions_to_path,
    grid_from_hex,
    grid_to_hex,
    path_to_directions,
    read_maze_file,
    write_maze_file,
)
from mazepuzzle.errors import InvalidArgumentError
from mazepuzzle.grid import Grid
from mazepuzzle.solver import solve


class HexEncodingTests(unittest.TestCase):
    def test_closed_grid_is_all_f(self) -> None:
        self.assertEqual(grid_to_hex(Grid(3, 2)), ["FFF", "FFF"])

    def test_single_passage_encoding(self) -> None:
        grid = Grid(2, 1)
        grid.open_passage(0, 0, 1, 0)
        # west cell keeps N, S, W (1 + 4 + 8); east cell keeps N, E, S (1 + 2 + 4)
        self.assertEqual(grid_to_hex(grid), ["D7"])
        self.assertEqual(grid_from_hex(["D7"]), grid)

    def test_generated_maze_decodes_to_same_grid(self) -> None:
        grid = generate(9, 6, 31)
        self.assertEqual(grid_from_hex(grid_to_hex(grid)), grid)

    def test_rejects_malformed_rows(self) -> None:
        cases = {
            "ragged": ["FF", "F"],
            "not hex": ["FG"],
            "incoherent": ["DF"],
            "open border": ["7"],
            "empty": [],
        }
        for name, lines in cases.items():
            with self.subTest(name):
                with self.assertRaises(InvalidArgumentError):
                    grid_from_hex(lines)


class DirectionStringTests(unittest.TestCase):
    def test_path_to_directions(self) -> None:
        self.assertEqual(path_to_directions([(0, 0), (1, 0), (1, 1), (0, 1)]), "ESW")
        self.assertEqual(path_to_directions([(3, 3)]), "")

    def test_directions_to_path(self) -> None:
        self.assertEqual(directions_to_path((0, 0), "ESW"), [(0, 0), (1, 0), (1, 1), (0, 1)])
        self.assertEqual(directions_to_path((2, 2), "n"), [(2, 2), (2, 1)])

    def test_invalid_moves_are_rejected(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            path_to_directions([(0, 0), (2, 0)])
        with self.assertRaises(InvalidArgumentError):
            directions_to_path((0, 0), "EX")


class MazeFileTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "out" / "maze.txt"

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_write_then_read(self) -> None:
        grid = generate(5, 4, 42)
        path = solve(grid, (0, 0), (4, 3)).path
        directions = path_to_directions(path)
        write_maze_file(self.path, grid, (0, 0), (4, 3), directions)

        lines = self.path.read_text(encoding="utf-8").splitlines()
        self.assertEqual(lines[:4], grid_to_hex(grid))
        self.assertEqual(lines[4:], ["", "0,0", "4,3", directions])

        loaded = read_maze_file(self.path)
        self.assertEqual(loaded.grid, grid)
        self.assertEqual(loaded.entry, (0, 0))
        self.assertEqual(loaded.exit, (4, 3))
        self.assertEqual(loaded.directions, directions)
        self.assertEqual(tuple(loaded.path), path)

    def test_read_rejects_missing_trailer(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("FFF\nFFF\n", encoding="utf-8")
        with self.assertRaises(InvalidArgumentError):
            read_maze_file(self.path)

    def test_read_rejects_out_of_bounds_entry(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("D7\n\n0,0\n2,0\n\n", encoding="utf-8")
        with self.assertRaises(InvalidArgumentError):
            read_maze_file(self.path)


if __name__ == "__main__":
    unittest.main()
