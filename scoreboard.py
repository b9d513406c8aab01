from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Tuple


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreEntry:
    name: str
    score: int
    timestamp: str

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["ScoreEntry"]:
        """Build an entry from a decoded JSON object; None if it is malformed."""
        if not isinstance(raw, dict):
            return None
        name = raw.get("name")
        ts = raw.get("timestamp", raw.get("date"))
        try:
            score = int(raw.get("score"))
        except (TypeError, ValueError):
            return None
        if not isinstance(name, str) or not isinstance(ts, str):
            return None
        return cls(name=name, score=max(0, score), timestamp=ts)


class LeaderboardFile:
    """Top-N leaderboard kept as a JSON list of {name, score, timestamp}."""

    def __init__(self, path: Path, limit: int = 10) -> None:
        self.path = path
        self.limit = limit

    def load(self) -> List[ScoreEntry]:
        """Read the stored table, best first. Unreadable files count as empty."""
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("ignoring unreadable leaderboard %s: %s", self.path, e)
            return []
        if not isinstance(raw, list):
            logger.warning("ignoring leaderboard %s: expected a list", self.path)
            return []

        entries = [e for e in (ScoreEntry.from_raw(item) for item in raw) if e is not None]
        entries.sort(key=lambda e: e.score, reverse=True)
        return entries[: self.limit]

    def is_new_record(self, score: int, entries: Optional[List[ScoreEntry]] = None) -> bool:
        """Whether score would make it into the table as it stands now."""
        if entries is None:
            entries = self.load()
        if len(entries) < self.limit:
            return True
        return score > entries[-1].score

    def submit(self, name: str, score: int) -> Tuple[List[ScoreEntry], bool]:
        """Record a finished run.

        Returns:
            (updated table, whether the score ranks within the top entries).
        """
        entries = self.load()
        new_record = self.is_new_record(score, entries)
        entries.append(ScoreEntry(name=name, score=score, timestamp=now_iso()))
        # Stable sort keeps earlier entries ahead of later ties.
        entries.sort(key=lambda e: e.score, reverse=True)
        entries = entries[: self.limit]
        self._write(entries)
        logger.info("leaderboard: %r scored %d (new record=%s)", name, score, new_record)
        return entries, new_record

    def _write(self, entries: List[ScoreEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [asdict(e) for e in entries]
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")
