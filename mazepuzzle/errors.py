"""Exception types shared across the maze toolkit."""

from __future__ import annotations


class MazeError(Exception):
    """Base class for errors raised by :mod:`mazepuzzle`."""


class InvalidArgumentError(MazeError, ValueError):
    """Bad dimensions, coordinates or encoded input."""


class MazeValidationError(MazeError, RuntimeError):
    """A grid violates one of the structural maze invariants."""


class ConfigError(MazeError, ValueError):
    """Configuration file could not be read or failed validation."""


__all__ = [
    "MazeError",
    "InvalidArgumentError",
    "MazeValidationError",
    "ConfigError",
]
