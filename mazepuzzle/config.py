"""``KEY=VALUE`` configuration files for the maze command line."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

from .errors import ConfigError
from .grid import Coord

REQUIRED_KEYS = ("WIDTH", "HEIGHT", "ENTRY", "EXIT", "OUTPUT_FILE")
OPTIONAL_KEYS = ("SEED", "IMAGE_FILE")

# "#" starts a comment only at the start of a line or after whitespace.
_COMMENT = re.compile(r"(?:^|(?<=\s))#")


@dataclass(frozen=True)
class MazeConfig:
    width: int
    height: int
    entry: Coord
    exit: Coord
    output_file: Path
    seed: int = 0
    image_file: Optional[Path] = None


def parse_int(value: str, *, key: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConfigError(f"Invalid integer for {key}: {value!r}") from exc


def parse_coord(value: str, *, key: str) -> Coord:
    """Parse ``x,y`` where ``x`` is the column and ``y`` the row."""

    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2:
        raise ConfigError(f"Invalid coordinate for {key}: {value!r} (expected 'x,y')")
    return parse_int(parts[0], key=key), parse_int(parts[1], key=key)


def _read_pairs(path: Path) -> Dict[str, Tuple[int, str]]:
    raw: Dict[str, Tuple[int, str]] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for line_no, line in enumerate(handle, start=1):
                stripped = _COMMENT.split(line, 1)[0].strip()
                if not stripped:
                    continue
                if "=" not in stripped:
                    raise ConfigError(f"Line {line_no}: invalid syntax (expected KEY=VALUE): {line.rstrip()!r}")
                key, value = stripped.split("=", 1)
                key = key.strip().upper()
                if key not in REQUIRED_KEYS and key not in OPTIONAL_KEYS:
                    raise ConfigError(f"Line {line_no}: unknown configuration key '{key}'")
                if key in raw:
                    raise ConfigError(f"Line {line_no}: duplicate key '{key}'")
                raw[key] = (line_no, value.strip())
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc
    return raw


def read_config(path: Path) -> MazeConfig:
    """Read and validate a maze configuration file."""

    raw = _read_pairs(Path(path))
    missing = [key for key in REQUIRED_KEYS if key not in raw]
    if missing:
        raise ConfigError(f"Missing required config keys: {', '.join(missing)}")

    def value(key: str) -> str:
        return raw[key][1]

    width = parse_int(value("WIDTH"), key="WIDTH")
    height = parse_int(value("HEIGHT"), key="HEIGHT")
    if width <= 0 or height <= 0:
        raise ConfigError("WIDTH and HEIGHT must be > 0")

    entry = parse_coord(value("ENTRY"), key="ENTRY")
    exit_ = parse_coord(value("EXIT"), key="EXIT")
    for key, (x, y) in (("ENTRY", entry), ("EXIT", exit_)):
        if not (0 <= x < width and 0 <= y < height):
            raise ConfigError(
                f"Line {raw[key][0]}: {key} {x},{y} out of bounds (0 <= x < WIDTH, 0 <= y < HEIGHT)"
            )

    if not value("OUTPUT_FILE"):
        raise ConfigError("OUTPUT_FILE must not be empty")
    seed = parse_int(value("SEED"), key="SEED") if "SEED" in raw else 0
    image_file = None
    if "IMAGE_FILE" in raw and value("IMAGE_FILE"):
        image_file = Path(value("IMAGE_FILE")).expanduser()

    return MazeConfig(
        width=width,
        height=height,
        entry=entry,
        exit=exit_,
        output_file=Path(value("OUTPUT_FILE")).expanduser(),
        seed=seed,
        image_file=image_file,
    )


__all__ = ["MazeConfig", "parse_coord", "parse_int", "read_config"]
