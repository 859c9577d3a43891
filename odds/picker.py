"""Choosing a directory among ranked candidates and emitting the jump."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

from odds.ranking import RankedCandidate


@dataclass
class ConfidenceRules:
    """Thresholds a candidate must meet to be jumped to without asking."""

    min_ranked_score: float = 0.8
    min_score: float = 3.5


@dataclass(frozen=True)
class Manual:
    """Selection by a 1-based number chosen by the user."""

    choice: int


@dataclass(frozen=True)
class Confident:
    """Automatic selection when a candidate is clearly the best."""

    rules: ConfidenceRules = field(default_factory=ConfidenceRules)


SelectionStrategy = Manual | Confident


def select_index(
    candidates: Sequence[RankedCandidate], strategy: SelectionStrategy
) -> int | None:
    """Return the index chosen by ``strategy``, or ``None`` if none qualifies."""
    match strategy:
        case Manual(choice=choice):
            if choice < 1 or choice > len(candidates):
                return None
            return choice - 1

        case Confident(rules=rules):
            if not candidates:
                return None
            first = candidates[0]
            if first.score < rules.min_score:
                return None
            if len(candidates) < 2:
                return 0
            second = candidates[1]

            first_valid = (
                first.ranked_score >= rules.min_ranked_score and first.score >= second.score
            )
            second_valid = (
                second.score >= first.score
                and second.ranked_score >= rules.min_ranked_score
                and second.score > rules.min_score
            )

            if first_valid:
                return 0
            if second_valid:
                return 1
            return None

    raise TypeError(f"unknown selection strategy: {strategy!r}")


def confident_pick(
    candidates: Sequence[RankedCandidate], rules: ConfidenceRules
) -> RankedCandidate | None:
    """Return the candidate to jump to automatically, if any."""
    index = select_index(candidates, Confident(rules))
    return None if index is None else candidates[index]


def pick_directory(candidates: Sequence[RankedCandidate]) -> RankedCandidate | None:
    """Ask the user on stderr/stdin to choose one of ``candidates``."""
    if not candidates:
        return None

    print(f"Select a directory (1-{len(candidates)}):", file=sys.stderr)
    for number, candidate in enumerate(candidates, start=1):
        print(f"{number}) {candidate.path}", file=sys.stderr)
    print("Enter number: ", end="", file=sys.stderr, flush=True)

    line = sys.stdin.readline()
    try:
        choice = int(line.strip())
    except ValueError:
        return None

    index = select_index(candidates, Manual(choice))
    return None if index is None else candidates[index]


def do_jump(directory: str | os.PathLike[str]) -> None:
    """Emit the target directory on stdout for the shell to change into."""
    print(os.fspath(directory))


def pick_and_jump(candidates: Sequence[RankedCandidate]) -> None:
    """Let the user pick a candidate, ordered by match score, and jump to it."""
    # Without enough confidence in the rank, the match itself is the better guide.
    ordered = sorted(candidates, key=lambda c: (c.score, c.ranked_score), reverse=True)

    picked = pick_directory(ordered)
    if picked is None:
        print("No directory selected.", file=sys.stderr)
    else:
        do_jump(picked.path)