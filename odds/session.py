"""The short stack of directories visited in the current session."""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from odds import paths
from odds.persistence import Persistable, PersistenceError

SESSION_EXPIRY_SECS = 43200  # 12 hours
MAX_SIZE = 10


def _time_now() -> int:
    return max(0, int(time.time()))


@dataclass
class Session(Persistable):
    """Recently visited directories, most recent first."""

    FILE: ClassVar[str] = "session.json"

    entries: list[Path] = field(default_factory=list)
    max_size: int = MAX_SIZE
    saved_at: int = field(default_factory=_time_now)

    def push(self, path: str | os.PathLike[str]) -> None:
        """Put a directory on top of the stack, removing earlier occurrences."""
        normalized = paths.normalize(path)

        if self.current() == normalized:
            return

        self.entries = [entry for entry in self.entries if entry != normalized]
        self.entries.insert(0, normalized)
        del self.entries[self.max_size:]

    def current(self) -> Path | None:
        """The most recent directory."""
        return self.entries[0] if self.entries else None

    def previous(self) -> Path | None:
        """The directory before the current one."""
        return self.entries[1] if len(self.entries) > 1 else None

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return Path(path) in self.entries

    def formatted(self) -> list[str]:
        """Numbered lines for display, the current directory marked."""
        lines = []
        for number, entry in enumerate(self.entries, start=1):
            suffix = " <-- current" if number == 1 else ""
            lines.append(f"{number} {entry}{suffix}")
        return lines

    @classmethod
    def load_or_new(cls) -> Session:
        """Load the saved session unless missing or expired, else start a new one."""
        try:
            session = cls.load()
        except PersistenceError:
            pass
        else:
            if max(0, _time_now() - session.saved_at) < SESSION_EXPIRY_SECS:
                return session

        session = cls()
        try:
            session.save()
        except PersistenceError as exc:
            print(f"Error saving session: {exc}", file=sys.stderr)
        return session

    def before_save(self) -> None:
        """Stamp the session with the time it is saved."""
        self.saved_at = _time_now()

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_size": self.max_size,
            "entries": [{"path": str(entry)} for entry in self.entries],
            "saved_at": self.saved_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Session:
        return cls(
            entries=[Path(item["path"]) for item in data["entries"]],
            max_size=int(data["max_size"]),
            saved_at=int(data["saved_at"]),
        )