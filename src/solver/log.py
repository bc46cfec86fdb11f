"""JSONL event log for search runs, one directory per UTC day."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional

from .settings import SearchSettings

__all__ = ["DEFAULT_MAX_BYTES", "EventLog"]

DEFAULT_MAX_BYTES = 100 * 1024 * 1024
_FILE_PREFIX = "search_"


def _file_index(path: Path) -> int:
    return int(path.stem[len(_FILE_PREFIX):])


class EventLog:
    """Append search events to ``<base_dir>/<YYYYMMDD>/search_NN.jsonl``.

    A file is rolled over to the next ``NN`` once it reaches ``max_bytes``.
    A fresh instance resumes the newest file of the day, so separate runs
    share one file until it fills up. :meth:`append` is usable directly as
    the ``event_sink`` of :class:`solver.engine.ProblemSolver`.
    """

    def __init__(self, base_dir: str | Path, *, max_bytes: Optional[int] = None) -> None:
        self.base_dir = Path(base_dir)
        self.max_bytes = max_bytes or DEFAULT_MAX_BYTES
        self._lock = threading.Lock()
        self._current: Optional[Path] = None

    @classmethod
    def from_settings(cls, settings: SearchSettings) -> "EventLog":
        return cls(settings.log_dir, max_bytes=settings.log_max_bytes)

    @property
    def current_path(self) -> Optional[Path]:
        """File the last event went to, ``None`` before the first append."""

        return self._current

    def _active_file(self, now: datetime) -> Path:
        day_dir = self.base_dir / now.strftime("%Y%m%d")
        day_dir.mkdir(parents=True, exist_ok=True)

        current = self._current
        if current is None or current.parent != day_dir:
            existing = list(day_dir.glob(f"{_FILE_PREFIX}[0-9]*.jsonl"))
            current = max(existing, key=_file_index) if existing else day_dir / f"{_FILE_PREFIX}00.jsonl"

        if current.exists() and current.stat().st_size >= self.max_bytes:
            current = day_dir / f"{_FILE_PREFIX}{_file_index(current) + 1:02d}.jsonl"
        self._current = current
        return current

    def append(self, event: Mapping[str, Any]) -> Path:
        """Write ``event`` as one sorted-key JSON line and return the file used."""

        now = datetime.now(timezone.utc)
        payload = dict(event)
        payload.setdefault("ts", now.isoformat(timespec="milliseconds"))
        line = json.dumps(payload, sort_keys=True, ensure_ascii=False)

        with self._lock:
            path = self._active_file(now)
            with path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        return path
