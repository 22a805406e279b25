"""Structural checks for maze grids, generated or hand-authored."""

from __future__ import annotations

from typing import Set

from .errors import MazeValidationError
from .grid import Coord, Direction, Grid
from .solver import distances_from


def reachable_from(grid: Grid, start: Coord) -> Set[Coord]:
    return set(distances_from(grid, start))


def is_connected(grid: Grid) -> bool:
    return len(reachable_from(grid, (0, 0))) == grid.size


def is_perfect(grid: Grid) -> bool:
    """True when the passages form a spanning tree of the grid."""

    return grid.passage_count() == grid.size - 1 and is_connected(grid)


def validate_maze(grid: Grid, *, perfect: bool = True) -> None:
    """Raise :class:`MazeValidationError` on the first broken invariant.

    Checks, in order: neighboring cells agree on their shared wall, the
    outer border is closed, every cell is reachable, and (``perfect``) the
    passage count leaves no room for a loop.
    """

    for cell in grid.cells():
        for direction, (nx, ny) in grid.neighbors(cell.x, cell.y):
            if direction not in (Direction.EAST, Direction.SOUTH):
                continue
            if cell.is_open(direction) != grid.is_open(nx, ny, direction.opposite):
                raise MazeValidationError(
                    f"Invalid maze: incoherent wall between ({cell.x}, {cell.y}) and ({nx}, {ny})"
                )

    for x in range(grid.width):
        if grid.is_open(x, 0, Direction.NORTH):
            raise MazeValidationError("Invalid maze: north border has an opening")
        if grid.is_open(x, grid.height - 1, Direction.SOUTH):
            raise MazeValidationError("Invalid maze: south border has an opening")
    for y in range(grid.height):
        if grid.is_open(0, y, Direction.WEST):
            raise MazeValidationError("Invalid maze: west border has an opening")
        if grid.is_open(grid.width - 1, y, Direction.EAST):
            raise MazeValidationError("Invalid maze: east border has an opening")

    reached = len(reachable_from(grid, (0, 0)))
    if reached != grid.size:
        raise MazeValidationError(
            f"Invalid maze: {grid.size - reached} of {grid.size} cells are disconnected"
        )

    if perfect:
        passages = grid.passage_count()
        if passages != grid.size - 1:
            raise MazeValidationError(
                f"Invalid maze: {passages} passages for {grid.size} cells, maze contains loops"
            )


__all__ = ["is_connected", "is_perfect", "reachable_from", "validate_maze"]
