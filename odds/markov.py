"""Variable-order Markov chain over directory transitions."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

MARKOV_N = 4

PathLike = str | os.PathLike  # type: ignore[type-arg]


def _build_key(context: Sequence[PathLike], from_path: str, n: int) -> tuple[str, ...]:
    items = [os.fspath(p) for p in context]
    tail = items[max(0, len(items) - (n - 1)):]
    return (*tail, from_path)


@dataclass
class Markov:
    """Counts of transitions keyed by the preceding path sequence."""

    chain: dict[tuple[str, ...], dict[str, int]] = field(default_factory=dict)

    def calculate_probability_from(
        self, context: Sequence[PathLike], from_path: PathLike, to_path: PathLike
    ) -> float:
        """Probability of going to ``to_path`` from ``from_path`` given ``context``.

        The longest context with recorded data decides.
        """
        source = os.fspath(from_path)
        target = os.fspath(to_path)
        for n in range(MARKOV_N, 0, -1):
            destinations = self.chain.get(_build_key(context, source, n))
            if destinations is None:
                continue
            total = sum(destinations.values())
            if total > 0:
                return destinations.get(target, 0) / total
        return 0.0

    def register(
        self, context: Sequence[PathLike], from_path: PathLike, to_path: PathLike
    ) -> None:
        """Record a transition for every context length the context supports."""
        source = os.fspath(from_path)
        target = os.fspath(to_path)
        if source == target:
            return

        for n in range(1, MARKOV_N + 1):
            # A context too short for this order would collapse onto a shorter
            # key and inflate its counts.
            if n > 1 and len(context) < n - 1:
                continue
            destinations = self.chain.setdefault(_build_key(context, source, n), {})
            destinations[target] = destinations.get(target, 0) + 1

    def transition_count(self) -> int:
        """Number of distinct (key, destination) pairs recorded."""
        return sum(len(destinations) for destinations in self.chain.values())

    def to_dict(self) -> dict[str, Any]:
        """Serialise as ``{"chain": [[key, destinations], ...]}``."""
        return {
            "chain": [[list(key), dict(destinations)] for key, destinations in self.chain.items()]
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Markov:
        """Build a chain from the form produced by :meth:`to_dict`."""
        chain: dict[tuple[str, ...], dict[str, int]] = {}
        for key, destinations in data["chain"]:
            chain[tuple(str(part) for part in key)] = {
                str(target): int(count) for target, count in destinations.items()
            }
        return cls(chain=chain)