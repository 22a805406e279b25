"""Grid model for rectangular mazes.

A maze is stored as ``height`` rows of ``width`` cells. Every cell keeps its
own copy of its four walls, so each interior wall is recorded twice. The two
copies are only ever changed together, through :meth:`Grid.open_passage`.

Coordinates are ``(x, y)`` pairs: ``x`` is the column and ``y`` the row, with
row 0 along the north edge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Tuple

import numpy as np

from .errors import InvalidArgumentError

Coord = Tuple[int, int]


class Direction(Enum):
    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @property
    def dx(self) -> int:
        return _DELTAS[self][0]

    @property
    def dy(self) -> int:
        return _DELTAS[self][1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]

    @property
    def bit(self) -> int:
        """Wall bit used by the hex encoding (N=1, E=2, S=4, W=8)."""

        return _BITS[self]

    @classmethod
    def from_letter(cls, letter: str) -> "Direction":
        try:
            return cls(letter.upper())
        except ValueError as exc:
            raise InvalidArgumentError(f"Unknown direction {letter!r}") from exc

    @classmethod
    def between(cls, a: Coord, b: Coord) -> "Direction":
        """Return the direction leading from ``a`` to the adjacent cell ``b``."""

        delta = (b[0] - a[0], b[1] - a[1])
        for direction in DIRECTIONS:
            if _DELTAS[direction] == delta:
                return direction
        raise InvalidArgumentError(f"Cells {a} and {b} are not adjacent")


_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}
_OPPOSITE: Dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}
_BITS: Dict[Direction, int] = {
    Direction.NORTH: 1,
    Direction.EAST: 2,
    Direction.SOUTH: 4,
    Direction.WEST: 8,
}

# Canonical enumeration order for neighbors. Seeded generation depends on it.
DIRECTIONS: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
    Direction.WEST,
)

ALL_WALLS = 0b1111


def _closed_walls() -> Dict[Direction, bool]:
    return {direction: True for direction in DIRECTIONS}


@dataclass
class Cell:
    """A single maze cell. ``walls[d]`` is True while the wall toward ``d`` is closed.

    ``walls`` is a read-only view; walls change only through :meth:`Grid.open_passage`.
    """

    x: int
    y: int
    _walls: Dict[Direction, bool] = field(default_factory=_closed_walls, repr=False)

    @property
    def walls(self) -> Mapping[Direction, bool]:
        return MappingProxyType(self._walls)

    def is_open(self, direction: Direction) -> bool:
        return not self._walls[direction]

    def wall_mask(self) -> int:
        return sum(direction.bit for direction in DIRECTIONS if self._walls[direction])

    def is_fully_closed(self) -> bool:
        return self.wall_mask() == ALL_WALLS


class Grid:
    """Dense ``width`` x ``height`` grid of cells, all walls closed at construction."""

    def __init__(self, width: int, height: int) -> None:
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
        if width <= 0 or height <= 0:
            raise InvalidArgumentError(
                f"Grid dimensions must be positive, got {width}x{height}"
            )
        self._width = int(width)
        self._height = int(height)
        self._cells: List[List[Cell]] = [
            [Cell(x, y) for x in range(self._width)] for y in range(self._height)
        ]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        return self._width * self._height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise InvalidArgumentError(
                f"Coordinate ({x}, {y}) outside {self._width}x{self._height} grid"
            )

    def cell(self, x: int, y: int) -> Cell:
        self._check(x, y)
        return self._cells[y][x]

    def cells(self) -> Iterator[Cell]:
        """Iterate cells row by row."""

        for row in self._cells:
            yield from row

    def rows(self) -> List[List[Cell]]:
        return [list(row) for row in self._cells]

    def neighbors(self, x: int, y: int) -> Iterator[Tuple[Direction, Coord]]:
        """Yield ``(direction, (nx, ny))`` for every in-bounds cardinal neighbor."""

        self._check(x, y)
        for direction in DIRECTIONS:
            nx, ny = x + direction.dx, y + direction.dy
            if self.in_bounds(nx, ny):
                yield direction, (nx, ny)

    def open_neighbors(self, x: int, y: int) -> Iterator[Coord]:
        """Yield neighbors reachable from ``(x, y)`` through an open passage."""

        cell = self.cell(x, y)
        for direction, coord in self.neighbors(x, y):
            if cell.is_open(direction):
                yield coord

    def is_open(self, x: int, y: int, direction: Direction) -> bool:
        return self.cell(x, y).is_open(direction)

    def open_passage(self, x1: int, y1: int, x2: int, y2: int) -> None:
        """Remove the wall between two adjacent cells, on both sides."""

        self._check(x1, y1)
        self._check(x2, y2)
        direction = Direction.between((x1, y1), (x2, y2))
        self._cells[y1][x1]._walls[direction] = False
        self._cells[y2][x2]._walls[direction.opposite] = False

    def passages(self) -> Iterator[Tuple[Coord, Coord]]:
        """Yield each open passage once, as an (west/north cell, east/south cell) pair."""

        for cell in self.cells():
            if cell.x + 1 < self._width and cell.is_open(Direction.EAST):
                yield (cell.x, cell.y), (cell.x + 1, cell.y)
            if cell.y + 1 < self._height and cell.is_open(Direction.SOUTH):
                yield (cell.x, cell.y), (cell.x, cell.y + 1)

    def passage_count(self) -> int:
        return sum(1 for _ in self.passages())

    def wall_masks(self) -> np.ndarray:
        """Closed-wall bits of every cell as a ``(height, width)`` uint8 array."""

        masks = np.zeros((self._height, self._width), dtype=np.uint8)
        for cell in self.cells():
            masks[cell.y, cell.x] = cell.wall_mask()
        return masks

    def copy(self) -> "Grid":
        clone = Grid(self._width, self._height)
        for a, b in self.passages():
            clone.open_passage(a[0], a[1], b[0], b[1])
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and np.array_equal(self.wall_masks(), other.wall_masks())
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height}, passages={self.passage_count()})"


__all__ = ["ALL_WALLS", "Cell", "Coord", "DIRECTIONS", "Direction", "Grid"]
