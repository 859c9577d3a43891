"""Scoring of directory paths against query tokens."""

from __future__ import annotations

import enum
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path, PurePath

EXACT_SCORE = 10.0
PREFIX_SCORE = 7.0
SUBSTRING_SCORE = 5.0
FUZZY_SCORE_CAP = 3.0


@dataclass
class DiscoveryCandidate:
    """A path together with how well it matched the query."""

    path: Path = field(default_factory=Path)
    score: float = 0.0


class MatchKind(enum.Enum):
    """The kinds of match a token can make against a path segment."""

    EXACT = "exact"
    PREFIX = "prefix"
    SUBSTRING = "substring"
    FUZZY = "fuzzy"


def match_candidate_multi(
    path: str | os.PathLike[str], tokens: Sequence[str]
) -> DiscoveryCandidate | None:
    """Match a path against several tokens with an optimal assignment.

    Every token is scored against every path segment and the assignment that
    maximises the total is chosen, each segment claimed by at most one token.
    The score is the average over all tokens, so tokens that find no segment
    lower it; the candidate is rejected only if nothing matches at all.

    For ``/home/user/projects/api`` and ``["proj", "api"]`` the score is 8.5:
    ``proj`` prefix-matches ``projects`` (7.0 scaled by length is 3.5... no,
    7.0 * 4/8 = 3.5) and ``api`` matches exactly (10.0), averaging 6.75 in
    general; with the full ``projects`` token it averages 10.0.
    """
    if not tokens:
        return None

    segments = [part.lower() for part in PurePath(path).parts]
    if not segments:
        return None

    lowered = [token.lower() for token in tokens]
    # More rows than columns has no complete assignment; surplus tokens are
    # dropped but still count in the average as a penalty.
    rows = lowered[: len(segments)]

    weights = [
        [int((_match_candidate(segment, token) or 0.0) * 10.0) for segment in segments]
        for token in rows
    ]

    total = _max_assignment(weights)
    average = total / (len(lowered) * 10.0)

    if average == 0.0:
        return None

    return DiscoveryCandidate(path=Path(path), score=average)


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _match_candidate(name: str, token: str) -> float | None:
    if not name or not token:
        return None

    strong = _strong_match(name, token)
    if strong is not None:
        return strong

    fuzzy = _fuzzy_match(name, token)
    return None if fuzzy is None else min(fuzzy, FUZZY_SCORE_CAP)


def _strong_match(name: str, token: str) -> float | None:
    if name == token:
        return EXACT_SCORE

    if name.startswith(token):
        base = PREFIX_SCORE
    elif token in name:
        base = SUBSTRING_SCORE
    else:
        return None

    score = base * (_byte_len(token) / _byte_len(name))
    return score if score >= FUZZY_SCORE_CAP else None


def _fuzzy_match(name: str, token: str) -> float | None:
    """Sequential character match with position based scoring."""
    remaining = iter(token)
    current = next(remaining, None)
    if current is None:
        return None

    score = 0.0
    last_match: int | None = None

    for index, char in enumerate(name):
        if char != current:
            continue

        score += 1.0
        if last_match is None:
            score -= index * 0.5
        elif index == last_match + 1:
            score += 1.5
        else:
            score -= index - last_match - 1
        last_match = index

        current = next(remaining, None)
        if current is None:
            # Always leave some positive score for a full match.
            return max(score, 0.1)

    return None


def _max_assignment(weights: list[list[int]]) -> int:
    """Total weight of a maximum-weight assignment of rows to columns.

    Requires no more rows than columns.
    """
    if not weights:
        return 0

    rows = len(weights)
    cols = len(weights[0])
    inf = float("inf")

    row_potential = [0.0] * (rows + 1)
    col_potential = [0.0] * (cols + 1)
    owner = [0] * (cols + 1)
    way = [0] * (cols + 1)

    for row in range(1, rows + 1):
        owner[0] = row
        col0 = 0
        min_slack = [inf] * (cols + 1)
        used = [False] * (cols + 1)

        while True:
            used[col0] = True
            row0 = owner[col0]
            delta = inf
            col1 = 0
            for col in range(1, cols + 1):
                if used[col]:
                    continue
                slack = -weights[row0 - 1][col - 1] - row_potential[row0] - col_potential[col]
                if slack < min_slack[col]:
                    min_slack[col] = slack
                    way[col] = col0
                if min_slack[col] < delta:
                    delta = min_slack[col]
                    col1 = col
            for col in range(cols + 1):
                if used[col]:
                    row_potential[owner[col]] += delta
                    col_potential[col] -= delta
                else:
                    min_slack[col] -= delta
            col0 = col1
            if owner[col0] == 0:
                break

        while col0:
            col1 = way[col0]
            owner[col0] = owner[col1]
            col0 = col1

    return sum(
        weights[assigned - 1][col - 1]
        for col, assigned in enumerate(owner)
        if col and assigned
    )