"""Maze puzzle dataset generator: puzzle/solution image pairs plus JSON records."""

from __future__ import annotations

import argparse
import logging
import random
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from .base import AbstractPuzzleGenerator, PathLike
from .carving import generate
from .encoding import grid_to_hex, path_to_directions
from .errors import MazeValidationError
from .grid import Coord
from .render import BBox, compute_layout, render_image
from .solver import Found, as_coord, solve
from .validation import validate_maze

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = (
    "Draw a red line from the blue start cell to the green goal cell without crossing "
    "any black wall. Static camera, no zoom, no pan, no dolly."
)

SEED_SPACE = 2**32


@dataclass
class MazePuzzleRecord:
    id: str
    prompt: str
    grid_size: Tuple[int, int]
    seed: int
    cell_size: int
    walls: List[str]
    start: Coord
    goal: Coord
    solution: List[Coord]
    solution_directions: str
    cell_bboxes: List[List[BBox]]
    padding: Tuple[int, int, int, int]
    canvas_dimensions: Tuple[int, int]
    puzzle_image_path: str
    solution_image_path: str

    @property
    def solution_steps(self) -> int:
        return len(self.solution) - 1

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "prompt": self.prompt,
            "grid_size": list(self.grid_size),
            "seed": self.seed,
            "cell_size": self.cell_size,
            "walls": list(self.walls),
            "start": list(self.start),
            "goal": list(self.goal),
            "solution": [list(coord) for coord in self.solution],
            "solution_directions": self.solution_directions,
            "solution_steps": self.solution_steps,
            "cell_bboxes": [
                [list(map(int, bbox)) for bbox in row] for row in self.cell_bboxes
            ],
            "padding": list(self.padding),
            "canvas_dimensions": list(self.canvas_dimensions),
            "puzzle_image_path": self.puzzle_image_path,
            "solution_image_path": self.solution_image_path,
        }


class MazeGenerator(AbstractPuzzleGenerator[MazePuzzleRecord]):
    """Generate perfect-maze puzzles that ask for a path from start to goal.

    Every puzzle gets its own seed, drawn from the generator's RNG unless one
    is passed explicitly, and stored in the record so the maze can be rebuilt
    with :func:`mazepuzzle.carving.generate`.
    """

    def __init__(
        self,
        output_dir: PathLike = "data/maze",
        *,
        width: int = 15,
        height: int = 15,
        cell_size: int = 32,
        wall_width: int = 2,
        prompt: str = DEFAULT_PROMPT,
        aspect_ratio: Optional[float] = None,
        start: Optional[Coord] = None,
        goal: Optional[Coord] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(output_dir)
        if width < 2 and height < 2:
            raise ValueError("A maze puzzle needs at least two cells")
        self.width = width
        self.height = height
        self.prompt = prompt
        self.layout = compute_layout(
            width,
            height,
            cell_size=cell_size,
            wall_width=wall_width,
            aspect_ratio=aspect_ratio,
        )
        self.start = start if start is not None else (0, 0)
        self.goal = goal if goal is not None else (width - 1, height - 1)
        self._rng = random.Random(seed)

        self.puzzle_dir = self.output_dir / "puzzles"
        self.solution_dir = self.output_dir / "solutions"
        for directory in (self.puzzle_dir, self.solution_dir):
            directory.mkdir(parents=True, exist_ok=True)

    @property
    def cell_size(self) -> int:
        return self.layout.cell_size

    def create_puzzle(
        self,
        *,
        puzzle_id: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> MazePuzzleRecord:
        puzzle_uuid = puzzle_id or str(uuid.uuid4())
        maze_seed = seed if seed is not None else self._rng.randrange(SEED_SPACE)
        grid = generate(self.width, self.height, maze_seed)
        validate_maze(grid)
        start = as_coord(grid, self.start, name="start")
        goal = as_coord(grid, self.goal, name="goal")
        result = solve(grid, start, goal)
        if not isinstance(result, Found):
            raise MazeValidationError(f"Generated maze {puzzle_uuid} has no route from {start} to {goal}")
        path = list(result.path)

        puzzle_image = render_image(grid, self.layout, start=start, goal=goal)
        solution_image = render_image(grid, self.layout, start=start, goal=goal, path=path)

        puzzle_path = self.puzzle_dir / f"{puzzle_uuid}_puzzle.png"
        solution_path = self.solution_dir / f"{puzzle_uuid}_solution.png"
        puzzle_image.save(puzzle_path)
        solution_image.save(solution_path)
        logger.info(
            "Generated maze %s (%dx%d, seed=%d, %d steps)",
            puzzle_uuid,
            self.width,
            self.height,
            maze_seed,
            result.steps,
        )

        return MazePuzzleRecord(
            id=puzzle_uuid,
            prompt=self.prompt,
            grid_size=(self.width, self.height),
            seed=maze_seed,
            cell_size=self.cell_size,
            walls=grid_to_hex(grid),
            start=start,
            goal=goal,
            solution=path,
            solution_directions=path_to_directions(path),
            cell_bboxes=self.layout.cell_bboxes(),
            padding=self.layout.padding,
            canvas_dimensions=self.layout.canvas_dimensions,
            puzzle_image_path=self.relativize_path(puzzle_path),
            solution_image_path=self.relativize_path(solution_path),
        )

    def create_random_puzzle(self) -> MazePuzzleRecord:
        return self.create_puzzle()


__all__ = ["MazeGenerator", "MazePuzzleRecord"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate maze puzzles with rendered solutions")
    parser.add_argument("count", type=int, help="Number of puzzles to generate")
    parser.add_argument("--output-dir", type=Path, default=Path("data/maze"), help="Where to save assets")
    parser.add_argument("--width", type=int, default=15, help="Maze width in cells")
    parser.add_argument("--height", type=int, default=15, help="Maze height in cells")
    parser.add_argument("--cell-size", type=int, default=32)
    parser.add_argument("--wall-width", type=int, default=2)
    parser.add_argument(
        "--aspect-ratio",
        type=float,
        default=None,
        help="Optional width/height ratio for the final image (adds black padding on outer edges only)",
    )
    parser.add_argument("--prompt", type=str, default=DEFAULT_PROMPT)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true", help="Log each generated puzzle")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    generator = MazeGenerator(
        output_dir=args.output_dir,
        width=args.width,
        height=args.height,
        cell_size=args.cell_size,
        wall_width=args.wall_width,
        prompt=args.prompt,
        aspect_ratio=args.aspect_ratio,
        seed=args.seed,
    )
    metadata_path = generator.output_dir / "puzzles.json"
    records = generator.generate_dataset(args.count, metadata_path=metadata_path)
    print(f"Wrote {len(records)} puzzles to {metadata_path}")


if __name__ == "__main__":
    main()
