"""JSONL sink for solve traces, one file per day with size-based rotation."""

from __future__ import annotations

import json
import threading
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .search import Outcome, SearchStats
from .trace import SolveTrace

__all__ = ["TraceLog"]

_DEFAULT_MAX_BYTES = 100 * 1024 * 1024


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TraceLog:
    """Append solve runs to ``<base_dir>/<YYYYMMDD>/trace_NN.jsonl``.

    Every trace entry becomes one ``trace_entry`` line and each run ends with
    a ``solve_result`` line carrying the outcome and search counters.  A file
    that reached ``max_bytes`` is left alone and the next free index is used.
    """

    def __init__(self, base_dir: str | Path, *, max_bytes: int | None = None) -> None:
        self.base_dir = Path(base_dir)
        self.max_bytes = max_bytes or _DEFAULT_MAX_BYTES
        self._lock = threading.Lock()
        self._current: Optional[Path] = None

    @property
    def current_path(self) -> Optional[Path]:
        return self._current

    def _has_room(self, path: Path) -> bool:
        return not path.exists() or path.stat().st_size < self.max_bytes

    def _target(self) -> Path:
        day_dir = self.base_dir / _utc_now().strftime("%Y%m%d")
        day_dir.mkdir(parents=True, exist_ok=True)
        current = self._current
        if current is not None and current.parent == day_dir and self._has_room(current):
            return current
        index = 0
        while not self._has_room(day_dir / f"trace_{index:02d}.jsonl"):
            index += 1
        self._current = day_dir / f"trace_{index:02d}.jsonl"
        return self._current

    def append(self, event: Mapping[str, Any]) -> Path:
        """Write ``event`` as one JSON line, stamping a UTC ``ts`` if missing."""

        record: Dict[str, Any] = dict(event)
        record.setdefault("ts", _utc_now().isoformat(timespec="milliseconds"))
        line = json.dumps(record, sort_keys=True, ensure_ascii=False)
        with self._lock:
            path = self._target()
            with path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        return path

    def write_run(
        self,
        trace: SolveTrace,
        *,
        run_id: str,
        outcome: Outcome,
        stats: SearchStats,
    ) -> Path:
        """Log every entry of ``trace`` followed by the run's result line."""

        for payload in trace.to_payload():
            self.append({"event": "trace_entry", "run_id": run_id, **payload})
        return self.append(
            {
                "event": "solve_result",
                "run_id": run_id,
                "outcome": outcome.value,
                "entries": len(trace.entries),
                "stats": asdict(stats),
            }
        )
