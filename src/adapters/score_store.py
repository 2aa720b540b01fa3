"""Score persistence adapters.

`JsonFileScoreStore` keeps the score in a small JSON object so other keys
can live next to it later; `MemoryScoreStore` is process-local.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path

from core.domain.errors import ScoreStoreError
from core.interfaces.score_store import ScoreStore

logger = logging.getLogger(__name__)

DEFAULT_SCORE_KEY = "doggie_quiz.score"


class JsonFileScoreStore(ScoreStore):
    """Score stored under `key` in a UTF-8 JSON file."""

    def __init__(self, path: Path, *, key: str = DEFAULT_SCORE_KEY) -> None:
        self._path = Path(path)
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> int:
        data = self._load()
        value = data.get(self._key, 0)
        # bool is an int subclass; a stored `true` is not a score.
        if isinstance(value, bool) or not isinstance(value, int):
            logger.warning("Ignoring non-integer score %r in %s", value, self._path)
            return 0
        return max(0, value)

    def write(self, value: int) -> None:
        data = self._load()
        data[self._key] = int(value)
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                dir=self._path.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True) + "\n")
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None:
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp_name)
            raise ScoreStoreError(f"Could not write score to {self._path}: {exc}") from exc

    def _load(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Unreadable score file %s: %s", self._path, exc)
            return {}
        return data if isinstance(data, dict) else {}


class MemoryScoreStore(ScoreStore):
    def __init__(self, initial: int = 0) -> None:
        self.value = initial
        self.writes: list[int] = []

    def read(self) -> int:
        return self.value

    def write(self, value: int) -> None:
        self.value = value
        self.writes.append(value)
