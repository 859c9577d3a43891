import json
import time
from pathlib import Path

import pytest

from odds.paths import persistence_path
from odds.session import MAX_SIZE, SESSION_EXPIRY_SECS, Session

ROOT = Path("/nonexistent-odds-root")


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


def test_push_sets_current_and_previous():
    session = Session()
    session.push(ROOT / "a")
    session.push(ROOT / "b")

    assert session.current() == ROOT / "b"
    assert session.previous() == ROOT / "a"


def test_empty_session_has_no_current_or_previous():
    session = Session()
    assert session.current() is None
    assert session.previous() is None


def test_push_current_again_changes_nothing():
    session = Session()
    session.push(ROOT / "a")
    session.push(ROOT / "a")

    assert session.entries == [ROOT / "a"]


def test_push_existing_moves_to_top_without_duplicate():
    session = Session()
    for name in ("a", "b", "c"):
        session.push(ROOT / name)
    session.push(ROOT / "a")

    assert session.entries == [ROOT / "a", ROOT / "c", ROOT / "b"]


def test_push_enforces_max_size():
    session = Session()
    for i in range(MAX_SIZE + 2):
        session.push(ROOT / f"d{i}")

    assert len(session.entries) == MAX_SIZE
    assert session.current() == ROOT / f"d{MAX_SIZE + 1}"
    assert ROOT / "d0" not in session


def test_push_normalizes_existing_paths(tmp_path):
    (tmp_path / "a").mkdir()
    session = Session()
    session.push(tmp_path / "a" / "..")

    assert session.current() == tmp_path.resolve()


def test_contains():
    session = Session()
    session.push(ROOT / "a")

    assert ROOT / "a" in session
    assert str(ROOT / "a") in session
    assert ROOT / "b" not in session


def test_formatted_marks_current():
    session = Session()
    session.push(ROOT / "a")
    session.push(ROOT / "b")

    assert session.formatted() == [
        f"1 {ROOT / 'b'} <-- current",
        f"2 {ROOT / 'a'}",
    ]


def test_before_save_updates_timestamp():
    session = Session(saved_at=0)
    before = int(time.time())
    session.before_save()

    assert session.saved_at >= before


def test_dict_round_trip():
    session = Session()
    session.push(ROOT / "a")
    session.push(ROOT / "b")

    assert Session.from_dict(session.to_dict()) == session


def test_load_or_new_creates_file(home):
    session = Session.load_or_new()

    assert session.entries == []
    assert persistence_path("session.json").is_file()


def test_load_or_new_keeps_recent_session(home):
    session = Session()
    session.push(ROOT / "a")
    session.save()

    loaded = Session.load_or_new()

    assert loaded.entries == [ROOT / "a"]


def test_load_or_new_discards_expired_session(home):
    target = persistence_path("session.json")
    target.parent.mkdir(parents=True)
    stale = {
        "max_size": MAX_SIZE,
        "entries": [{"path": str(ROOT / "a")}],
        "saved_at": int(time.time()) - SESSION_EXPIRY_SECS - 10,
    }
    target.write_text(json.dumps(stale), encoding="utf-8")

    loaded = Session.load_or_new()

    assert loaded.entries == []
    assert Session.load().entries == []


def test_save_stamps_file(home):
    session = Session(saved_at=0)
    session.save()

    data = json.loads(persistence_path("session.json").read_text(encoding="utf-8"))
    assert data["saved_at"] == session.saved_at
    assert session.saved_at > 0