"""Command line entry point: build a maze from a config file and export it."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .carving import generate
from .config import MazeConfig, read_config
from .encoding import path_to_directions, write_maze_file
from .errors import ConfigError
from .render import compute_layout, render_image, render_text
from .solver import Found, solve
from .validation import validate_maze

logger = logging.getLogger(__name__)


def run(config: MazeConfig, *, show: bool = False) -> int:
    """Generate, solve and export one maze. Returns a process exit code."""

    grid = generate(config.width, config.height, config.seed)
    validate_maze(grid)
    result = solve(grid, config.entry, config.exit)
    if not isinstance(result, Found):
        print(f"ERROR: no route from {config.entry} to {config.exit}", file=sys.stderr)
        return 1

    directions = path_to_directions(result.path)
    write_maze_file(config.output_file, grid, config.entry, config.exit, directions)
    if config.image_file is not None:
        layout = compute_layout(grid.width, grid.height)
        image = render_image(grid, layout, start=config.entry, goal=config.exit, path=result.path)
        config.image_file.parent.mkdir(parents=True, exist_ok=True)
        image.save(config.image_file)
        logger.info("Wrote maze image to %s", config.image_file)

    if show:
        marks = {config.entry: "S", config.exit: "E"}
        print("\n".join(render_text(grid, path=result.path, marks=marks)))
    print(
        f"{config.width}x{config.height} maze (seed {config.seed}) written to {config.output_file}; "
        f"shortest path {result.steps} steps"
    )
    return 0


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate and solve a maze described by a config file")
    parser.add_argument("config", type=Path, help="KEY=VALUE configuration file")
    parser.add_argument("--show", action="store_true", help="Print the maze and its solution as text")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        config = read_config(args.config)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return run(config, show=args.show)


if __name__ == "__main__":
    sys.exit(main())
