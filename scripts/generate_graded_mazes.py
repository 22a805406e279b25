#!/usr/bin/env python3
"""Generate maze puzzles over a range of sizes and sort metadata by difficulty."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mazepuzzle import MazeGenerator, MazePuzzleRecord


def _difficulty(record: MazePuzzleRecord) -> float:
    """Fraction of the maze the solution has to walk through."""

    width, height = record.grid_size
    return len(record.solution) / (width * height)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=[5, 9, 15, 21],
        help="Square maze sizes (cells per side) to generate",
    )
    parser.add_argument(
        "--per-size",
        type=int,
        default=10,
        help="Number of puzzles generated for every size",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("data/maze_graded"),
        help="Directory to write puzzle assets",
    )
    parser.add_argument(
        "--metadata",
        type=Path,
        default=None,
        help="Optional path for the difficulty-sorted metadata JSON",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=32,
        help="Pixel size for an individual maze cell",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional RNG seed; per-size generators derive their seeds from it",
    )
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    if not args.sizes or any(size < 2 for size in args.sizes):
        raise ValueError("Every maze size must be at least 2")

    output_dir: Path = args.output_dir
    metadata_path = args.metadata or (output_dir / "puzzles.json")
    metadata_path.parent.mkdir(parents=True, exist_ok=True)

    records: List[dict] = []
    total = len(args.sizes) * args.per_size
    index = 0
    for size_index, size in enumerate(args.sizes):
        generator = MazeGenerator(
            output_dir=output_dir,
            width=size,
            height=size,
            cell_size=args.cell_size,
            seed=None if args.seed is None else args.seed + size_index,
        )
        for _ in range(args.per_size):
            index += 1
            record = generator.create_random_puzzle()
            difficulty = _difficulty(record)
            record_dict = record.to_dict()
            record_dict["difficulty"] = difficulty
            records.append(record_dict)
            print(f"[{index}/{total}] generated {record.id} ({size}x{size}, difficulty={difficulty:.2f})")

    records.sort(key=lambda item: (item["difficulty"], item["id"]))

    metadata_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    print(f"Wrote {len(records)} puzzles to {metadata_path}")


if __name__ == "__main__":
    main()
