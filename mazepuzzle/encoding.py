"""Hexadecimal wall encoding and the plain-text maze file format.

Each cell's closed walls are packed into a 4-bit value (N=1, E=2, S=4, W=8)
and written as one uppercase hex digit, one line per row. A maze file holds
those rows, a blank line, the entry and exit as ``x,y``, and the solution as a
string of ``N``/``E``/``S``/``W`` moves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from .errors import InvalidArgumentError
from .grid import DIRECTIONS, Cell, Coord, Direction, Grid

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def cell_to_hex(cell: Cell) -> str:
    return format(cell.wall_mask(), "X")


def grid_to_hex(grid: Grid) -> List[str]:
    return ["".join(cell_to_hex(cell) for cell in row) for row in grid.rows()]


def grid_from_hex(lines: Iterable[str]) -> Grid:
    """Rebuild a grid from hex rows, rejecting anything a Grid cannot hold."""

    rows = [line.strip() for line in lines]
    if not rows or not rows[0]:
        raise InvalidArgumentError("Hex maze has no rows")
    width = len(rows[0])
    masks: List[List[int]] = []
    for y, row in enumerate(rows):
        if len(row) != width:
            raise InvalidArgumentError(
                f"Row {y} has {len(row)} cells, expected {width}"
            )
        try:
            masks.append([int(char, 16) for char in row])
        except ValueError as exc:
            raise InvalidArgumentError(f"Row {y} holds a non-hex character: {row!r}") from exc

    grid = Grid(width, len(rows))
    for y, row_masks in enumerate(masks):
        for x, mask in enumerate(row_masks):
            for direction in DIRECTIONS:
                closed = bool(mask & direction.bit)
                nx, ny = x + direction.dx, y + direction.dy
                if not grid.in_bounds(nx, ny):
                    if not closed:
                        raise InvalidArgumentError(
                            f"Cell ({x}, {y}) is open to the outside on its {direction.name.lower()} side"
                        )
                    continue
                neighbor_closed = bool(masks[ny][nx] & direction.opposite.bit)
                if closed != neighbor_closed:
                    raise InvalidArgumentError(
                        f"Incoherent wall between ({x}, {y}) and ({nx}, {ny})"
                    )
                if not closed and direction in (Direction.EAST, Direction.SOUTH):
                    grid.open_passage(x, y, nx, ny)
    return grid


def path_to_directions(path: Sequence[Coord]) -> str:
    """Convert a coordinate path into a string of N/E/S/W moves."""

    return "".join(
        Direction.between(tuple(a), tuple(b)).value for a, b in zip(path, path[1:])
    )


def directions_to_path(start: Coord, directions: str) -> List[Coord]:
    """Replay a move string from ``start``. Bounds are not checked here."""

    x, y = start
    path: List[Coord] = [(x, y)]
    for letter in directions.strip():
        direction = Direction.from_letter(letter)
        x, y = x + direction.dx, y + direction.dy
        path.append((x, y))
    return path


@dataclass
class MazeFile:
    grid: Grid
    entry: Coord
    exit: Coord
    directions: str

    @property
    def path(self) -> List[Coord]:
        return directions_to_path(self.entry, self.directions)


def _format_coord(coord: Coord) -> str:
    return f"{coord[0]},{coord[1]}"


def _parse_coord(text: str) -> Coord:
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2:
        raise InvalidArgumentError(f"Expected 'x,y', got {text!r}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as exc:
        raise InvalidArgumentError(f"Expected integer coordinates, got {text!r}") from exc


def write_maze_file(
    path: PathLike,
    grid: Grid,
    entry: Coord,
    exit_: Coord,
    directions: str,
) -> Path:
    target = Path(path)
    lines = grid_to_hex(grid)
    lines.append("")
    lines.append(_format_coord(entry))
    lines.append(_format_coord(exit_))
    lines.append(directions)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("Wrote %dx%d maze to %s", grid.width, grid.height, target)
    return target


def read_maze_file(path: PathLike) -> MazeFile:
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    try:
        blank = next(i for i, line in enumerate(lines) if not line.strip())
    except StopIteration as exc:
        raise InvalidArgumentError(f"{path}: missing blank line after the maze rows") from exc
    trailer = lines[blank + 1:]
    if len(trailer) < 2:
        raise InvalidArgumentError(f"{path}: expected entry and exit after the maze rows")
    grid = grid_from_hex(lines[:blank])
    entry = _parse_coord(trailer[0])
    exit_ = _parse_coord(trailer[1])
    for name, coord in (("entry", entry), ("exit", exit_)):
        if not grid.in_bounds(*coord):
            raise InvalidArgumentError(f"{path}: {name} {coord} outside the maze")
    directions = trailer[2].strip() if len(trailer) > 2 else ""
    return MazeFile(grid=grid, entry=entry, exit=exit_, directions=directions)


__all__ = [
    "MazeFile",
    "cell_to_hex",
    "directions_to_path",
    "grid_from_hex",
    "grid_to_hex",
    "path_to_directions",
    "read_maze_file",
    "write_maze_file",
]
