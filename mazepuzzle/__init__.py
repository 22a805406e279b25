"""Perfect maze generation, shortest-path solving and maze puzzle datasets."""

__all__ = [
    "AbstractPuzzleGenerator",
    "AbstractPuzzleEvaluator",
    "Cell",
    "ConfigError",
    "Direction",
    "Found",
    "Grid",
    "InvalidArgumentError",
    "MazeError",
    "MazeEvaluationResult",
    "MazeEvaluator",
    "MazeGenerator",
    "MazePathEvaluation",
    "MazePuzzleRecord",
    "MazeValidationError",
    "PathResult",
    "Unreachable",
    "carve",
    "generate",
    "solve",
    "validate_maze",
]

from .base import AbstractPuzzleGenerator, AbstractPuzzleEvaluator
from .carving import carve, generate
from .errors import ConfigError, InvalidArgumentError, MazeError, MazeValidationError
from .evaluator import MazeEvaluationResult, MazeEvaluator, MazePathEvaluation
from .generator import MazeGenerator, MazePuzzleRecord
from .grid import Cell, Direction, Grid
from .solver import Found, PathResult, Unreachable, solve
from .validation import validate_maze
