"""Shortest-path search over the passages of a maze grid."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import InvalidArgumentError
from .grid import Coord, Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    """A route from start to end, both included."""

    path: Tuple[Coord, ...]

    @property
    def steps(self) -> int:
        """Number of passages traversed."""

        return len(self.path) - 1

    @property
    def start(self) -> Coord:
        return self.path[0]

    @property
    def end(self) -> Coord:
        return self.path[-1]

    def to_dict(self) -> dict:
        return {"found": True, "path": [list(coord) for coord in self.path]}


@dataclass(frozen=True)
class Unreachable:
    """No passage-connected route exists between ``start`` and ``end``."""

    start: Coord
    end: Coord

    def to_dict(self) -> dict:
        return {"found": False, "start": list(self.start), "end": list(self.end)}


PathResult = Union[Found, Unreachable]


def as_coord(grid: Grid, value: Sequence[int], *, name: str = "coordinate") -> Coord:
    """Normalize ``value`` to an in-bounds ``(x, y)`` tuple of ints."""

    try:
        x, y = value
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"{name} must be an (x, y) pair, got {value!r}") from exc
    for part in (x, y):
        if isinstance(part, bool) or not isinstance(part, (int, np.integer)):
            raise InvalidArgumentError(f"{name} must hold integers, got {value!r}")
    coord = (int(x), int(y))
    if not grid.in_bounds(*coord):
        raise InvalidArgumentError(
            f"{name} {coord} outside {grid.width}x{grid.height} grid"
        )
    return coord


def solve(grid: Grid, start: Sequence[int], end: Sequence[int]) -> PathResult:
    """Breadth-first search from ``start`` to ``end``.

    Returns :class:`Found` with a shortest path, or :class:`Unreachable` when
    ``end`` cannot be reached. Out-of-bounds endpoints raise
    :class:`~mazepuzzle.errors.InvalidArgumentError`.
    """

    source = as_coord(grid, start, name="start")
    target = as_coord(grid, end, name="end")
    if source == target:
        return Found((source,))

    queue: Deque[Coord] = deque([source])
    came_from: Dict[Coord, Optional[Coord]] = {source: None}

    while queue:
        current = queue.popleft()
        if current == target:
            break
        for nxt in grid.open_neighbors(*current):
            if nxt in came_from:
                continue
            came_from[nxt] = current
            queue.append(nxt)

    if target not in came_from:
        logger.debug("No route from %s to %s after visiting %d cells", source, target, len(came_from))
        return Unreachable(source, target)

    path: List[Coord] = []
    node: Optional[Coord] = target
    while node is not None:
        path.append(node)
        node = came_from[node]
    path.reverse()
    logger.debug("Solved %s -> %s in %d steps", source, target, len(path) - 1)
    return Found(tuple(path))


def distances_from(grid: Grid, start: Sequence[int]) -> Dict[Coord, int]:
    """Passage distance from ``start`` to every cell reachable from it."""

    source = as_coord(grid, start, name="start")
    distances: Dict[Coord, int] = {source: 0}
    queue: Deque[Coord] = deque([source])
    while queue:
        current = queue.popleft()
        for nxt in grid.open_neighbors(*current):
            if nxt not in distances:
                distances[nxt] = distances[current] + 1
                queue.append(nxt)
    return distances


__all__ = ["Found", "PathResult", "Unreachable", "as_coord", "distances_from", "solve"]
