import time
from pathlib import Path

import pytest

from odds.history import History, HistoryEntry
from odds.markov import Markov
from odds.matcher import EXACT_SCORE
from odds.paths import persistence_path
from odds.persistence import PersistenceError


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


def test_record_visit_adds_new_entry():
    history = History()
    before = int(time.time())
    history.record_visit(Path("/home/user/projects"))
    after = int(time.time())

    assert len(history.entries) == 1
    entry = history.entries[0]
    assert entry.path == Path("/home/user/projects")
    assert entry.visits == 1
    assert before <= entry.last_visited <= after


def test_record_visit_increments_existing_entry():
    history = History(entries=[HistoryEntry(Path("/a"), 3, 0)])
    history.record_visit("/a")

    assert len(history.entries) == 1
    assert history.entries[0].visits == 4
    assert history.entries[0].last_visited > 0


def test_visit_count_known_and_unknown():
    history = History()
    history.record_visit("/a")
    history.record_visit("/a")

    assert history.visit_count("/a") == 2
    assert history.visit_count("/b") == 0


def test_seconds_since_last_visit_at():
    history = History(entries=[HistoryEntry(Path("/a"), 1, 100)])

    assert history.seconds_since_last_visit_at("/a", 160) == 60
    assert history.seconds_since_last_visit_at("/a", 50) == 0
    assert history.seconds_since_last_visit_at("/b", 160) is None


def test_seconds_since_last_visit_uses_current_time():
    history = History()
    history.record_visit("/a")
    elapsed = history.seconds_since_last_visit("/a")

    assert elapsed is not None and 0 <= elapsed <= 2
    assert history.seconds_since_last_visit("/missing") is None


def test_history_candidates_filters_matches():
    history = History(
        entries=[
            HistoryEntry(Path("/home/user/config"), 1, 0),
            HistoryEntry(Path("/home/user/other"), 1, 0),
        ]
    )

    candidates = history.history_candidates(["config"])

    assert [c.path for c in candidates] == [Path("/home/user/config")]
    assert candidates[0].score == EXACT_SCORE


def test_transition_count_follows_chain():
    history = History()
    assert history.transition_count() == 0

    history.chain.register([], "/a", "/b")
    assert history.transition_count() == history.chain.transition_count()
    assert history.transition_count() > 0


def test_dict_round_trip():
    history = History(entries=[HistoryEntry(Path("/a"), 2, 1234)])
    history.chain.register(["/x"], "/a", "/b")

    restored = History.from_dict(history.to_dict())

    assert restored == history


def test_from_dict_missing_chain_raises():
    with pytest.raises(KeyError):
        History.from_dict({"entries": []})


def test_save_and_load_round_trip(home):
    history = History(entries=[HistoryEntry(Path("/a"), 5, 42)], chain=Markov())
    history.chain.register([], "/a", "/b")
    history.save()

    assert persistence_path("history.json").is_file()
    assert History.load() == history


def test_load_without_file_raises(home):
    with pytest.raises(PersistenceError):
        History.load()


def test_load_or_new_creates_file(home):
    history = History.load_or_new()

    assert history.entries == []
    assert persistence_path("history.json").is_file()


def test_load_or_new_replaces_corrupt_file(home):
    target = persistence_path("history.json")
    target.parent.mkdir(parents=True)
    target.write_text("{ not json", encoding="utf-8")

    history = History.load_or_new()

    assert history.entries == []
    assert History.load() == history


def test_load_or_new_returns_saved_history(home):
    saved = History(entries=[HistoryEntry(Path("/a"), 7, 9)])
    saved.save()

    assert History.load_or_new() == saved