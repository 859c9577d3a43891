"""Breadth-first discovery of directories not seen before."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from pathlib import Path

from odds import paths
from odds.matcher import SUBSTRING_SCORE, DiscoveryCandidate, match_candidate_multi


class FsCache:
    """Remembers the sub-directories of directories already listed."""

    def __init__(self) -> None:
        self._dirs: dict[Path, list[Path]] = {}

    def list_dirs(self, directory: str | os.PathLike[str]) -> list[Path]:
        """Return the directories inside ``directory``, listing it at most once."""
        normalized = paths.normalize(directory)

        cached = self._dirs.get(normalized)
        if cached is not None:
            return list(cached)

        results: list[Path] = []
        try:
            with os.scandir(normalized) as entries:
                for entry in entries:
                    child = normalized / entry.name
                    if child.is_dir():
                        results.append(child)
        except OSError:
            pass

        self._dirs[normalized] = results
        return list(results)


def bfs_discover(
    roots: Iterable[str | os.PathLike[str]],
    tokens: Sequence[str],
    max_depth: int,
    max_results: int,
    cache: FsCache,
) -> list[DiscoveryCandidate]:
    """Search breadth-first below ``roots`` for directories matching ``tokens``."""
    candidates: list[DiscoveryCandidate] = []
    visited: set[Path] = set()
    queue: list[Path] = []

    for root in map(Path, roots):
        if root not in visited:
            visited.add(root)
            queue.append(root)

    for depth in range(1, max_depth + 1):
        next_queue: list[Path] = []

        for directory in queue:
            for child in cache.list_dirs(directory):
                if child in visited:
                    continue
                visited.add(child)

                candidate = match_candidate_multi(child, tokens)
                if candidate is not None:
                    candidates.append(candidate)

                if depth < max_depth:
                    next_queue.append(child)

        queue = next_queue

        # Stop early once there are enough exact, prefix or substring matches.
        strong = sum(1 for c in candidates if c.score >= SUBSTRING_SCORE)
        if strong >= max_results:
            break

    candidates.sort(key=lambda c: c.score, reverse=True)
    return candidates[:max_results]


def discover(tokens: Sequence[str], max_depth: int, max_results: int) -> list[DiscoveryCandidate]:
    """Discover matching directories below the standard search roots."""
    return bfs_discover(paths.search_roots(), tokens, max_depth, max_results, FsCache())