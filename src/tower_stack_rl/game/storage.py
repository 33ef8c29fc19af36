from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Protocol, Union

logger = logging.getLogger(__name__)

BEST_SCORE_KEY = "stackGameBestScore"


class ScoreStoreError(RuntimeError):
    """A score could not be written to the backing store."""


class ScoreStore(Protocol):
    def load(self, key: str) -> int: ...

    def save(self, key: str, value: int) -> None: ...


def _coerce_score(raw: object) -> int:
    if isinstance(raw, bool):
        raise ValueError("boolean is not a score")
    value = int(str(raw).strip())
    if value < 0:
        raise ValueError(f"negative score {value}")
    return value


class MemoryScoreStore:
    """Dict-backed store; used by tests and the Gymnasium environment."""

    def __init__(self, initial: Dict[str, object] | None = None) -> None:
        self.records: Dict[str, object] = dict(initial or {})
        self.save_calls: list[tuple[str, int]] = []

    def load(self, key: str) -> int:
        if key not in self.records:
            return 0
        try:
            return _coerce_score(self.records[key])
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unparseable score {self.records[key]!r} for {key}")
            return 0

    def save(self, key: str, value: int) -> None:
        self.save_calls.append((key, int(value)))
        self.records[key] = int(value)


class JsonFileScoreStore:
    """All records live in one JSON object on disk.

    Reads fail soft to 0; writes go through a temp file + os.replace so a
    crash mid-write never leaves a truncated file behind.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read score file '{self.path}': {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Score file '{self.path}' does not hold an object, ignoring it")
            return {}
        return data

    def load(self, key: str) -> int:
        data = self._read_all()
        if key not in data:
            return 0
        try:
            return _coerce_score(data[key])
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unparseable score {data[key]!r} for {key}")
            return 0

    def save(self, key: str, value: int) -> None:
        data = self._read_all()
        data[key] = int(value)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, sort_keys=True)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            raise ScoreStoreError(f"Failed to save score to '{self.path}': {e}") from e
        logger.debug(f"Saved {key}={value} to {self.path}")
