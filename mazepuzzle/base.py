"""Shared scaffolding for dataset builders and the evaluators that read them back."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar, Union

PathLike = Union[str, Path]
RecordT = TypeVar("RecordT")

logger = logging.getLogger(__name__)


def read_records(metadata_path: PathLike) -> List[Dict[str, Any]]:
    """Load a metadata file written by :meth:`AbstractPuzzleGenerator.write_metadata`."""

    raw = json.loads(Path(metadata_path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError("Puzzle metadata must be a list of records")
    return raw


class AbstractPuzzleGenerator(ABC, Generic[RecordT]):
    """Base class for dataset builders that emit puzzle records and image assets."""

    def __init__(self, output_dir: PathLike) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def create_puzzle(self, *args, **kwargs) -> RecordT:
        """Create one puzzle from explicit parameters."""

    @abstractmethod
    def create_random_puzzle(self) -> RecordT:
        """Create one puzzle drawn from the generator's own random source."""

    def generate_dataset(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
    ) -> List[RecordT]:
        if count < 0:
            raise ValueError("count must not be negative")
        records = [self.create_random_puzzle() for _ in range(count)]
        if metadata_path is not None:
            self.write_metadata(records, metadata_path, append=append)
        return records

    def write_metadata(
        self,
        records: Iterable[RecordT],
        metadata_path: PathLike,
        *,
        append: bool = True,
    ) -> Path:
        """Serialize records to a JSON list, keeping earlier entries when ``append``."""

        path = Path(metadata_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        existing: List[Dict[str, Any]] = []
        if append and path.exists():
            existing = read_records(path)
        payload = [self.record_to_dict(record) for record in records]
        path.write_text(json.dumps(existing + payload, indent=2), encoding="utf-8")
        logger.info("Wrote %d records (%d new) to %s", len(existing) + len(payload), len(payload), path)
        return path

    def record_to_dict(self, record: RecordT) -> Dict[str, Any]:
        if hasattr(record, "to_dict"):
            return getattr(record, "to_dict")()
        raise TypeError(
            "Puzzle record must implement to_dict() or override record_to_dict() in the generator."
        )

    def relativize_path(self, path: Path) -> str:
        """Express ``path`` relative to the output directory when it lies inside it."""

        try:
            return path.relative_to(self.output_dir).as_posix()
        except ValueError:
            return path.as_posix()


class AbstractPuzzleEvaluator(ABC):
    """Loads puzzle metadata keyed by id."""

    def __init__(self, metadata_path: PathLike) -> None:
        self.metadata_path = Path(metadata_path)
        if not self.metadata_path.exists():
            raise FileNotFoundError(f"Metadata file not found: {self.metadata_path}")
        self._records: Dict[str, Dict[str, Any]] = {}
        for record in read_records(self.metadata_path):
            puzzle_id = record.get("id")
            if not puzzle_id:
                raise ValueError("Each puzzle record must include an 'id'")
            self._records[str(puzzle_id)] = record
        logger.debug("Loaded %d records from %s", len(self._records), self.metadata_path)

    def get_record(self, puzzle_id: str) -> Dict[str, Any]:
        try:
            return self._records[puzzle_id]
        except KeyError as exc:
            raise KeyError(f"Puzzle id '{puzzle_id}' not found in metadata") from exc

    @abstractmethod
    def evaluate(self, puzzle_id: str, *args, **kwargs):
        """Score a candidate solution for the given puzzle."""


__all__ = [
    "AbstractPuzzleEvaluator",
    "AbstractPuzzleGenerator",
    "PathLike",
    "read_records",
]
