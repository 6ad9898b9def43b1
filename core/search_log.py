"""JSONL diagnostics log for search outcomes.

Users only ever see one generic failure message, so the detail of what went
wrong lives here: one JSON line per search with the error kind, the original
error text and the latency. Files are size-bounded with numbered backups.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, IO, Optional


def _utc_now() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


@dataclass
class SearchLogEntry:
    """WHAT: structured schema for one search attempt.

    WHY: the presentation layer collapses every failure into one message;
    keeping the error kind and detail here makes failures diagnosable.
    HOW: dataclass with a ``new`` factory that stamps the UTC timestamp.
    """

    timestamp: str
    city: str
    status: str
    generation: int
    error_kind: str | None = None
    error_detail: str | None = None
    latency_ms: int | None = None
    summary: str | None = None

    @classmethod
    def new(
        cls,
        *,
        city: str,
        status: str,
        generation: int,
        error_kind: str | None = None,
        error_detail: str | None = None,
        latency_ms: int | None = None,
        summary: str | None = None,
    ) -> "SearchLogEntry":
        return cls(
            timestamp=_utc_now(),
            city=city,
            status=status,
            generation=generation,
            error_kind=error_kind,
            error_detail=error_detail,
            latency_ms=latency_ms,
            summary=summary,
        )


class SearchLogger:
    """Append ``SearchLogEntry`` rows to a JSONL file with size rotation."""

    def __init__(
        self,
        *,
        log_path: Path,
        enabled: bool = True,
        max_bytes: int = 0,
        backup_count: int = 0,
    ) -> None:
        self._log_path = Path(log_path)
        self._enabled = enabled
        self._max_bytes = max_bytes
        self._backup_count = backup_count

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def log_path(self) -> Path:
        return self._log_path

    def log_search(self, entry: SearchLogEntry) -> None:
        if not self._enabled:
            return
        self._append_json_line(self._log_path, asdict(entry))

    def _append_json_line(self, path: Path, payload: Dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(payload, ensure_ascii=False)
        self._rotate_if_needed(path, len(line.encode("utf-8")) + 1)
        with self._open_file(path) as handle:
            handle.write(line)
            handle.write("\n")

    @staticmethod
    def _open_file(path: Path) -> IO[str]:
        return path.open("a", encoding="utf-8")

    def _rotate_if_needed(self, path: Path, incoming_bytes: int) -> None:
        """Make room for ``incoming_bytes`` more of search history.

        The live log keeps at most ``max_bytes``; older outcomes move to
        ``<log>.1`` (newest) through ``<log>.<backup_count>`` (oldest), and
        with no backups configured the history simply starts over.
        """
        if self._max_bytes <= 0:
            return
        if not path.exists():
            return

        current_size = path.stat().st_size
        if current_size + incoming_bytes <= self._max_bytes:
            return

        if self._backup_count <= 0:
            path.unlink()
            return

        for index in range(self._backup_count - 1, 0, -1):
            src = Path(f"{path}.{index}")
            dst = Path(f"{path}.{index + 1}")
            if src.exists():
                src.replace(dst)

        rotated = Path(f"{path}.1")
        if rotated.exists():
            rotated.unlink()
        path.replace(rotated)


def read_search_log(path: Path, limit: Optional[int] = None) -> list[Dict[str, Any]]:
    """Return the newest ``limit`` entries of ``path`` (all when ``None``)."""

    if not path.exists():
        return []
    rows = []
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if not line:
                continue
            try:
                rows.append(json.loads(line))
            except ValueError:
                continue
    if limit is not None:
        rows = rows[-limit:] if limit > 0 else []
    return rows


__all__ = ["SearchLogEntry", "SearchLogger", "read_search_log"]
