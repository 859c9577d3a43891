"""Seeding the visit history from the shell's own command history."""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Iterator, Sequence
from pathlib import Path

from odds.history import History, HistoryEntry
from odds.markov import MARKOV_N
from odds.persistence import PersistenceError


class SeedError(Exception):
    """Raised when the history cannot be seeded."""


def seed() -> None:
    """Read ``cd`` commands from the shell history and merge them into the history."""
    hist_file = detect_hist_file()
    print(f"Seeding from {hist_file}", file=sys.stderr)

    try:
        raw = hist_file.read_bytes()
    except OSError as exc:
        raise SeedError(f"Failed to read {hist_file}: {exc}") from exc

    found = extract_paths(raw.decode("utf-8", errors="replace"))

    if not found:
        print("No cd commands found in history file.", file=sys.stderr)
        return

    now = int(time.time())
    history = History.load_or_new()

    merge_history(history, found, now)
    merge_markov(history, found)

    try:
        history.save()
    except PersistenceError as exc:
        raise SeedError(str(exc)) from exc

    print(
        f"Seeded {len(history.entries)} directories and "
        f"{history.transition_count()} transitions.",
        file=sys.stderr,
    )


def detect_hist_file() -> Path:
    """Locate the shell history file: ``$HISTFILE`` first, then the usual places."""
    histfile = os.environ.get("HISTFILE")
    if histfile is not None:
        candidate = Path(histfile)
        if candidate.exists():
            return candidate

    home = os.environ.get("HOME")
    if home is None:
        raise SeedError("environment variable HOME not found")

    for name in (".zsh_history", ".bash_history"):
        candidate = Path(f"{home}/{name}")
        if candidate.exists():
            return candidate

    raise SeedError("Could not find a shell history file. Set $HISTFILE to point to yours.")


def _command_lines(contents: str) -> Iterator[str]:
    for line in contents.split("\n"):
        # Extended zsh history lines look like ": <time>:<duration>;<command>".
        if line.startswith(": "):
            _, sep, command = line.partition(";")
            if not sep:
                continue
            line = command
        yield line.strip()


def extract_paths(contents: str) -> list[Path]:
    """Return the existing directories that ``cd`` commands in ``contents`` led to."""
    home = os.environ.get("HOME", "")
    current = Path(home)
    found: list[Path] = []
    total_cd = 0
    skipped = 0

    for line in _command_lines(contents):
        if not line.startswith("cd "):
            continue
        target = line[len("cd "):].strip()

        total_cd += 1

        if not target or target == "-":
            continue

        expanded = Path(home) if target == "~" else Path(target.replace("~", home))
        resolved = expanded if expanded.is_absolute() else current / expanded

        try:
            canonical = resolved.resolve(strict=True)
        except (OSError, RuntimeError):
            skipped += 1
            continue

        if canonical.is_dir():
            current = canonical
            found.append(canonical)
        else:
            skipped += 1

    print(
        f"Found {total_cd} cd commands → {len(found)} valid paths ({skipped} no longer exist)",
        file=sys.stderr,
    )

    return found


def merge_history(history: History, paths: Sequence[Path], now: int) -> None:
    """Count each path as a visit, adding unseen paths with ``now`` as their time."""
    index: dict[Path, HistoryEntry] = {}
    for entry in history.entries:
        index.setdefault(entry.path, entry)

    for path in paths:
        entry = index.get(path)
        if entry is None:
            entry = HistoryEntry(path=path, visits=1, last_visited=now)
            history.entries.append(entry)
            index[path] = entry
        else:
            entry.visits += 1


def _windows(items: Sequence[Path], size: int) -> Iterator[Sequence[Path]]:
    return (items[start:start + size] for start in range(len(items) - size + 1))


def merge_markov(history: History, paths: Sequence[Path]) -> None:
    """Register every transition in ``paths`` with every context length available."""
    for n in range(1, MARKOV_N + 1):
        for window in _windows(paths, n + 1):
            *context, from_path, to_path = window
            history.chain.register(context, from_path, to_path)