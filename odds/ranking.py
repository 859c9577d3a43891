"""Ranking of matched candidates by frecency, transitions and session."""

from __future__ import annotations

import math
import os
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from odds.history import History
from odds.markov import MARKOV_N
from odds.matcher import DiscoveryCandidate
from odds.session import Session

FRECENCY_WEIGHT = 10.0
MARKOV_WEIGHT = 15.0
SESSION_WEIGHT = 5.0

HALF_LIFE_DAYS = 3.0
# lambda = ln(2) / half-life
LAMBDA = 0.69314718 / (HALF_LIFE_DAYS * 24.0 * 60.0 * 60.0)


@dataclass
class RankedCandidate:
    """A matched candidate together with its overall rank score."""

    candidate: DiscoveryCandidate = field(default_factory=DiscoveryCandidate)
    ranked_score: float = 0.0

    @property
    def path(self) -> Path:
        """Path of the underlying candidate."""
        return self.candidate.path

    @property
    def score(self) -> float:
        """Match score of the underlying candidate."""
        return self.candidate.score


def rank_candidates(
    candidates: Iterable[DiscoveryCandidate],
    history: History,
    session: Session,
    max_results: int,
) -> list[RankedCandidate]:
    """Score candidates and return the best ``max_results``, best first."""
    current_path = session.current()
    ranked = [
        RankedCandidate(
            candidate=candidate,
            ranked_score=score_candidate(candidate, history, session, current_path),
        )
        for candidate in candidates
    ]
    ranked.sort(key=lambda r: r.ranked_score, reverse=True)
    return ranked[:max_results]


def score_candidate(
    candidate: DiscoveryCandidate,
    history: History,
    session: Session,
    current_path: str | os.PathLike[str] | None,
) -> float:
    """Combine frecency, transition probability and session presence into 0..1."""
    score = frecency_score(candidate.path, history)

    if current_path is not None and candidate.path != Path(current_path):
        context = [str(entry) for entry in session.entries[1:MARKOV_N]]
        probability = history.chain.calculate_probability_from(
            context, str(current_path), str(candidate.path)
        )
        score += probability * MARKOV_WEIGHT

    if candidate.path in session:
        score += SESSION_WEIGHT

    return sigmoid(score * candidate.score)


def frecency_score_at(path: str | os.PathLike[str], history: History, now: int) -> float:
    """Frecency of ``path`` at time ``now``: log of visits decayed by age."""
    # The logarithm keeps a very high visit count from dominating.
    frequency = math.log(history.visit_count(path) + 1.0)

    seconds_ago = history.seconds_since_last_visit_at(path, now)
    if seconds_ago is None:
        return 0.0

    return frequency * math.exp(-LAMBDA * seconds_ago) * FRECENCY_WEIGHT


def frecency_score(path: str | os.PathLike[str], history: History) -> float:
    """Frecency of ``path`` now."""
    return frecency_score_at(path, history, int(time.time()))


def sigmoid(x: float) -> float:
    """Logistic function scaled so scores map smoothly into 0..1."""
    z = x / 100.0
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    exp_z = math.exp(z)
    return exp_z / (1.0 + exp_z)