"""Visit history: how often and how recently directories were visited."""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from odds.markov import Markov
from odds.matcher import DiscoveryCandidate, match_candidate_multi
from odds.persistence import Persistable, PersistenceError


def _now() -> int:
    return int(time.time())


@dataclass
class HistoryEntry:
    """A visited directory with its visit count and last visit time."""

    path: Path
    visits: int
    last_visited: int


@dataclass
class History(Persistable):
    """All visited directories and the transitions between them."""

    FILE: ClassVar[str] = "history.json"

    entries: list[HistoryEntry] = field(default_factory=list)
    chain: Markov = field(default_factory=Markov)

    def _find(self, path: str | os.PathLike[str]) -> HistoryEntry | None:
        target = Path(path)
        return next((entry for entry in self.entries if entry.path == target), None)

    def record_visit(self, path: str | os.PathLike[str]) -> None:
        """Record a visit to ``path`` in memory."""
        now = _now()
        entry = self._find(path)
        if entry is None:
            self.entries.append(HistoryEntry(path=Path(path), visits=1, last_visited=now))
        else:
            entry.visits += 1
            entry.last_visited = now

    def history_candidates(self, tokens: Sequence[str]) -> list[DiscoveryCandidate]:
        """Return every visited directory that matches ``tokens``."""
        matches = (match_candidate_multi(entry.path, tokens) for entry in self.entries)
        return [candidate for candidate in matches if candidate is not None]

    @classmethod
    def load_or_new(cls) -> History:
        """Load the saved history, or create and save an empty one."""
        try:
            return cls.load()
        except PersistenceError:
            pass

        history = cls()
        try:
            history.save()
        except PersistenceError as exc:
            print(f"Error saving history: {exc}", file=sys.stderr)
        return history

    def visit_count(self, path: str | os.PathLike[str]) -> int:
        """Number of recorded visits to ``path``."""
        entry = self._find(path)
        return 0 if entry is None else entry.visits

    def seconds_since_last_visit_at(
        self, path: str | os.PathLike[str], now: int
    ) -> int | None:
        """Seconds between the last visit to ``path`` and ``now``, never negative."""
        entry = self._find(path)
        if entry is None:
            return None
        return max(0, now - entry.last_visited)

    def seconds_since_last_visit(self, path: str | os.PathLike[str]) -> int | None:
        """Seconds since the last visit to ``path``."""
        return self.seconds_since_last_visit_at(path, _now())

    def transition_count(self) -> int:
        """Number of distinct transitions recorded in the chain."""
        return self.chain.transition_count()

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": [
                {
                    "path": str(entry.path),
                    "visits": entry.visits,
                    "last_visited": entry.last_visited,
                }
                for entry in self.entries
            ],
            "chain": self.chain.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> History:
        entries = [
            HistoryEntry(
                path=Path(item["path"]),
                visits=int(item["visits"]),
                last_visited=int(item["last_visited"]),
            )
            for item in data["entries"]
        ]
        return cls(entries=entries, chain=Markov.from_dict(data["chain"]))