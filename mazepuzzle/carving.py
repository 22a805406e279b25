"""Randomized depth-first maze carving (the "recursive backtracker")."""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

import numpy as np

from .errors import InvalidArgumentError
from .grid import Coord, Direction, Grid

logger = logging.getLogger(__name__)


def carve(grid: Grid, rng: random.Random, *, start: Coord = (0, 0)) -> Grid:
    """Carve a perfect maze into ``grid`` in place and return it.

    The grid is expected to have all walls closed. Carving keeps an explicit
    stack of the current path; each step opens a wall toward a randomly
    chosen unvisited neighbor of the top cell, or pops the top cell once it
    has none left. Unvisited neighbors are listed in canonical direction order
    and picked with a single ``rng.randrange`` call, so a given RNG state always
    yields the same maze.
    """

    sx, sy = start
    if not grid.in_bounds(sx, sy):
        raise InvalidArgumentError(
            f"Start cell {start} outside {grid.width}x{grid.height} grid"
        )

    visited = np.zeros((grid.height, grid.width), dtype=bool)
    visited[sy, sx] = True
    stack: List[Coord] = [(sx, sy)]
    carved = 0
    max_depth = 1

    while stack:
        x, y = stack[-1]
        candidates: List[Tuple[Direction, Coord]] = [
            (direction, (nx, ny))
            for direction, (nx, ny) in grid.neighbors(x, y)
            if not visited[ny, nx]
        ]
        if not candidates:
            stack.pop()
            continue
        _, (nx, ny) = candidates[rng.randrange(len(candidates))]
        grid.open_passage(x, y, nx, ny)
        visited[ny, nx] = True
        stack.append((nx, ny))
        carved += 1
        max_depth = max(max_depth, len(stack))

    logger.debug(
        "Carved %dx%d maze from %s: %d passages, max stack depth %d",
        grid.width,
        grid.height,
        start,
        carved,
        max_depth,
    )
    return grid


def generate(
    width: int,
    height: int,
    seed: Optional[int] = None,
    *,
    rng: Optional[random.Random] = None,
    start: Optional[Coord] = None,
) -> Grid:
    """Build a ``width`` x ``height`` perfect maze.

    Pass either ``seed`` or an already seeded ``rng``; passing both is an error.
    With neither, the maze is drawn from an unseeded ``random.Random``.
    """

    if seed is not None and rng is not None:
        raise InvalidArgumentError("Pass either seed or rng, not both")
    grid = Grid(width, height)
    source = rng if rng is not None else random.Random(seed)
    return carve(grid, source, start=start if start is not None else (0, 0))


__all__ = ["carve", "generate"]
