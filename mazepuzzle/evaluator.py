"""Maze puzzle evaluator for path-following tasks.

Candidates come in two forms: an explicit route (coordinates or a move
string), checked move by move against the stored walls, or an image with a
red line drawn over the puzzle, read back cell by cell.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple, Union

import numpy as np
from PIL import Image

try:
    RESAMPLE_LANCZOS = Image.Resampling.LANCZOS
except AttributeError:  # pragma: no cover
    RESAMPLE_LANCZOS = Image.LANCZOS

from .base import AbstractPuzzleEvaluator, PathLike
from .encoding import directions_to_path, grid_from_hex
from .errors import InvalidArgumentError
from .grid import Coord, Direction, Grid
from .render import CanvasLayout
from .solver import Found, solve

logger = logging.getLogger(__name__)

RED_THRESHOLD = 150
RED_DOMINANCE = 80


@dataclass
class MazePathEvaluation:
    puzzle_id: str
    valid: bool
    starts_at_start: bool
    reaches_goal: bool
    steps: int
    optimal_steps: int
    first_invalid_step: Optional[int]
    message: str

    @property
    def is_optimal(self) -> bool:
        return self.valid and self.reaches_goal and self.steps == self.optimal_steps

    @property
    def success(self) -> bool:
        return self.valid and self.starts_at_start and self.reaches_goal

    def to_dict(self) -> dict:
        return {
            "puzzle_id": self.puzzle_id,
            "valid": self.valid,
            "starts_at_start": self.starts_at_start,
            "reaches_goal": self.reaches_goal,
            "steps": self.steps,
            "optimal_steps": self.optimal_steps,
            "is_optimal": self.is_optimal,
            "first_invalid_step": self.first_invalid_step,
            "message": self.message,
        }


@dataclass
class MazeEvaluationResult:
    puzzle_id: str
    connected: bool
    touches_goal: bool
    crosses_walls: bool
    red_cells: List[Coord]
    matches_solution: bool
    message: str

    @property
    def success(self) -> bool:
        return self.connected and self.touches_goal and not self.crosses_walls

    def to_dict(self) -> dict:
        return {
            "puzzle_id": self.puzzle_id,
            "connected": self.connected,
            "touches_goal": self.touches_goal,
            "crosses_walls": self.crosses_walls,
            "red_cells": [list(cell) for cell in self.red_cells],
            "matches_solution": self.matches_solution,
            "success": self.success,
            "message": self.message,
        }


def _record_grid(record: Dict[str, Any]) -> Grid:
    return grid_from_hex(record["walls"])


def _record_layout(record: Dict[str, Any], grid: Grid) -> CanvasLayout:
    bboxes = record["cell_bboxes"]
    cell_size = int(record["cell_size"])
    padding = tuple(int(value) for value in record["padding"])
    left, top = int(bboxes[0][0][0]), int(bboxes[0][0][1])
    wall_width = left - padding[0]
    if top - padding[1] != wall_width or wall_width < 1:
        raise ValueError("Record cell boxes do not match its padding")
    return CanvasLayout(
        grid_size=(grid.width, grid.height),
        cell_size=cell_size,
        wall_width=wall_width,
        padding=padding,  # type: ignore[arg-type]
        canvas_dimensions=tuple(int(value) for value in record["canvas_dimensions"]),  # type: ignore[arg-type]
    )


class MazeEvaluator(AbstractPuzzleEvaluator):
    """Evaluate maze solutions given as routes or as images with a red path."""

    def evaluate_path(
        self,
        puzzle_id: str,
        candidate: Union[str, Sequence[Sequence[int]]],
    ) -> MazePathEvaluation:
        record = self.get_record(puzzle_id)
        grid = _record_grid(record)
        start = tuple(map(int, record["start"]))
        goal = tuple(map(int, record["goal"]))
        optimal = solve(grid, start, goal)
        optimal_steps = optimal.steps if isinstance(optimal, Found) else -1

        if isinstance(candidate, str):
            try:
                path = directions_to_path(start, candidate)
            except InvalidArgumentError as exc:
                return MazePathEvaluation(puzzle_id, False, True, False, 0, optimal_steps, 0, str(exc))
        else:
            try:
                path = [(int(x), int(y)) for x, y in candidate]
            except (TypeError, ValueError) as exc:
                message = f"Path entries must be (x, y) integer pairs: {exc}"
                return MazePathEvaluation(puzzle_id, False, False, False, 0, optimal_steps, 0, message)

        if not path:
            return MazePathEvaluation(puzzle_id, False, False, False, 0, optimal_steps, 0, "Empty path.")

        starts_at_start = path[0] == start
        invalid_at = self._first_invalid_step(grid, path)
        valid = invalid_at is None
        reaches_goal = valid and path[-1] == goal
        steps = len(path) - 1

        if not starts_at_start:
            message = "Path does not begin at the start cell."
        elif not valid:
            message = f"Move {invalid_at} leaves the maze or passes through a wall."
        elif not reaches_goal:
            message = "Path does not reach the goal."
        elif steps == optimal_steps:
            message = "Path reaches the goal along a shortest route."
        else:
            message = f"Path reaches the goal in {steps} steps; the shortest route takes {optimal_steps}."

        return MazePathEvaluation(
            puzzle_id=puzzle_id,
            valid=valid,
            starts_at_start=starts_at_start,
            reaches_goal=reaches_goal,
            steps=steps,
            optimal_steps=optimal_steps,
            first_invalid_step=invalid_at,
            message=message,
        )

    def evaluate(
        self,
        puzzle_id: str,
        candidate_image: PathLike,
        *,
        trim_tolerance: int = 12,
    ) -> MazeEvaluationResult:
        record = self.get_record(puzzle_id)
        candidate_path = Path(candidate_image)
        if not candidate_path.exists():
            raise FileNotFoundError(f"Candidate image not found: {candidate_path}")

        grid = _record_grid(record)
        layout = _record_layout(record, grid)
        start = tuple(map(int, record["start"]))
        goal = tuple(map(int, record["goal"]))

        with Image.open(candidate_path) as opened:
            candidate = opened.convert("RGB")
        candidate = self._align(candidate, layout.canvas_dimensions, trim_tolerance)
        candidate_arr = np.asarray(candidate)

        margin = layout.interior_margin()
        red_cells: List[Coord] = []
        crosses_walls = False
        for cell in grid.cells():
            left, top, right, bottom = layout.cell_bbox(cell.x, cell.y)
            if self._is_red(candidate_arr[top + margin:bottom - margin, left + margin:right - margin]):
                red_cells.append((cell.x, cell.y))
            for direction in (Direction.EAST, Direction.SOUTH):
                nx, ny = cell.x + direction.dx, cell.y + direction.dy
                if not grid.in_bounds(nx, ny) or cell.is_open(direction):
                    continue
                x0, y0, x1, y1 = layout.wall_strip(cell.x, cell.y, direction)
                if self._is_red(candidate_arr[y0:y1, x0:x1]):
                    crosses_walls = True

        connected, touches_goal = self._check_connectivity(grid, red_cells, start, goal)
        solution = {tuple(map(int, coord)) for coord in record.get("solution", [])}
        matches_solution = bool(solution) and set(red_cells) == solution

        if not red_cells:
            message = "No red path detected."
        elif crosses_walls:
            message = "Red path crosses a wall."
        elif not touches_goal:
            message = "Red path does not reach the goal."
        elif not connected:
            message = "Red path is not continuous from start to goal."
        else:
            message = "Red path successfully connects start to goal."

        return MazeEvaluationResult(
            puzzle_id=puzzle_id,
            connected=connected,
            touches_goal=touches_goal,
            crosses_walls=crosses_walls,
            red_cells=red_cells,
            matches_solution=matches_solution,
            message=message,
        )

    # ------------------------------------------------------------------

    @staticmethod
    def _first_invalid_step(grid: Grid, path: Sequence[Coord]) -> Optional[int]:
        if not grid.in_bounds(*path[0]):
            return 0
        for index, (a, b) in enumerate(zip(path, path[1:]), start=1):
            if not grid.in_bounds(*b):
                return index
            try:
                direction = Direction.between(a, b)
            except InvalidArgumentError:
                return index
            if not grid.is_open(a[0], a[1], direction):
                return index
        return None

    def _align(
        self,
        image: Image.Image,
        reference_size: Tuple[int, int],
        trim_tolerance: int,
    ) -> Image.Image:
        if image.size == reference_size:
            return image
        trimmed = self._trim_borders(image, tolerance=trim_tolerance)
        if trimmed.size != reference_size:
            logger.debug("Resizing candidate from %s to %s", trimmed.size, reference_size)
            trimmed = trimmed.resize(reference_size, RESAMPLE_LANCZOS)
        return trimmed

    @staticmethod
    def _trim_borders(image: Image.Image, *, tolerance: int = 12) -> Image.Image:
        arr = np.asarray(image).astype(np.int16)
        if arr.size == 0:
            return image
        if arr.ndim == 3:
            diff = np.max(np.abs(arr - arr[0, 0]), axis=2)
        else:
            diff = np.abs(arr - arr[0, 0])
        mask = diff > tolerance
        if not np.any(mask):
            return image
        ys, xs = np.where(mask)
        top, bottom = int(ys.min()), int(ys.max())
        left, right = int(xs.min()), int(xs.max())
        return image.crop((left, top, right + 1, bottom + 1))

    @staticmethod
    def _is_red(pixels: np.ndarray) -> bool:
        flat = pixels.reshape(-1, 3).astype(np.float32)
        if flat.size == 0:
            return False
        r = flat[:, 0]
        g = flat[:, 1]
        b = flat[:, 2]
        dominance = r - np.maximum(g, b)
        return bool(np.any((r >= RED_THRESHOLD) & (dominance >= RED_DOMINANCE)))

    @staticmethod
    def _check_connectivity(
        grid: Grid,
        red_cells: Sequence[Coord],
        start: Coord,
        goal: Coord,
    ) -> Tuple[bool, bool]:
        red_set = set(red_cells)
        if start not in red_set or goal not in red_set:
            return False, goal in red_set
        queue = [start]
        visited: Set[Coord] = {start}
        while queue:
            current = queue.pop()
            for nxt in grid.open_neighbors(*current):
                if nxt in red_set and nxt not in visited:
                    visited.add(nxt)
                    queue.append(nxt)
        return goal in visited, True


__all__ = ["MazeEvaluator", "MazeEvaluationResult", "MazePathEvaluation"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate maze puzzle solutions")
    parser.add_argument("metadata", type=Path, help="Path to maze puzzles metadata JSON")
    parser.add_argument("puzzle_id", type=str, help="Identifier of the puzzle to evaluate")
    parser.add_argument("candidate", type=str, help="Candidate image path, or a move string with --directions")
    parser.add_argument(
        "--directions",
        action="store_true",
        help="Treat the candidate as a string of N/E/S/W moves from the start cell",
    )
    parser.add_argument("--trim-tolerance", type=int, default=12)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    evaluator = MazeEvaluator(args.metadata)
    if args.directions:
        result = evaluator.evaluate_path(args.puzzle_id, args.candidate)
    else:
        result = evaluator.evaluate(args.puzzle_id, args.candidate, trim_tolerance=args.trim_tolerance)
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
