import json
import tempfile
from datetime import date

import pytest

from courtplanner.exceptions import (
    DoubleBookingException,
    FileLoadException,
    FileSaveException,
    InvalidReservationException,
)
from courtplanner.models.season import EMPTY_SEAT, Match, MatchResult, MatchType
from courtplanner.storage import JsonFileStore, MemoryStore

DAY = date(2025, 9, 28)
NEXT_DAY = date(2025, 10, 5)
EARLY = "18u30-19u30"


def test_replace_scope_keeps_other_dates():
    kept = Match.single(NEXT_DAY, EARLY, 1, "Ruben", "Tibo")
    store = MemoryStore(
        [Match.single(DAY, EARLY, 1, "Ruben", "Tibo"), Match.single(DAY, EARLY, 2, "Seppe", "Aaron"), kept]
    )
    new = Match.double(DAY, EARLY, 1, ("Ruben", "Tibo"), ("Seppe", "Aaron"))

    store.replace_scope([new], [DAY])

    assert store.snapshot().matches == [new, kept]


def test_json_store_round_trip(tmp_path):
    path = tmp_path / "club.json"
    store = JsonFileStore(path)
    played = Match.single(DAY, EARLY, 3, "Ruben", "Tibo").with_result(
        MatchResult.single("Ruben", "Tibo")
    )
    store.upsert_match(played)
    store.set_availability("Seppe", DAY, EARLY, False)

    reloaded = JsonFileStore(path).snapshot()

    assert reloaded.matches == [played]
    assert not reloaded.availability.is_available("Seppe", DAY, EARLY)
    assert reloaded.availability.is_available("Seppe", NEXT_DAY, EARLY)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["matches"][0]["timeSlot"] == EARLY
    assert data["matches"][0]["result"] == {"winner": "Ruben", "loser": "Tibo"}
    assert list(tmp_path.iterdir()) == [path]


def test_json_store_starts_empty(tmp_path):
    store = JsonFileStore(tmp_path / "missing.json")

    assert store.snapshot().matches == []
    assert not store.delete_match(DAY, EARLY, 1)


def test_json_store_rejects_broken_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(FileLoadException):
        JsonFileStore(path)

    path.write_text(
        json.dumps({"matches": [{"date": "2025-09-28", "timeSlot": EARLY, "court": 1,
                                 "matchType": "single", "players": ["A", "A"]}]}),
        encoding="utf-8",
    )
    with pytest.raises(FileLoadException):
        JsonFileStore(path)


def test_legacy_records_are_padded():
    match = Match.from_dict(
        {
            "date": "2025-09-28",
            "timeSlot": EARLY,
            "court": 2,
            "matchType": "double",
            "category": "training",
            "players": ["Ruben", None, "Tibo"],
        }
    )

    assert match.players == ("Ruben", EMPTY_SEAT, "Tibo", EMPTY_SEAT)
    assert not match.is_complete
    assert match.opponent_pairs() == []


def test_match_arity_is_validated():
    with pytest.raises(InvalidReservationException):
        Match(DAY, EARLY, 1, MatchType.SINGLE, "training", ("Ruben", "Tibo", "Seppe"))
    with pytest.raises(InvalidReservationException):
        Match(DAY, EARLY, 0, MatchType.SINGLE, "training", ("Ruben", "Tibo"))
    with pytest.raises(InvalidReservationException):
        Match(DAY, EARLY, 1, MatchType.SINGLE, "friendly", ("Ruben", "Tibo"))
    with pytest.raises(InvalidReservationException):
        Match.from_dict({"date": "someday", "timeSlot": EARLY, "court": 1})


def test_json_store_loads_doubles_results(tmp_path):
    path = tmp_path / "club.json"
    record = {
        "date": "2025-09-28",
        "timeSlot": EARLY,
        "court": 1,
        "matchType": "double",
        "category": "wedstrijd",
        "players": ["Ruben", "Seppe", "Tibo", "Aaron"],
        "result": {"winners": ["Ruben", "Seppe"], "losers": ["Tibo", "Aaron"]},
    }
    path.write_text(json.dumps({"matches": [record]}), encoding="utf-8")

    (match,) = JsonFileStore(path).snapshot().matches

    assert match.result == MatchResult.double(("Ruben", "Seppe"), ("Tibo", "Aaron"))
    assert match.to_dict()["result"] == record["result"]


def test_result_must_fit_the_match_type():
    with pytest.raises(InvalidReservationException):
        Match.double(DAY, EARLY, 1, ("Ruben", "Seppe"), ("Tibo", "Aaron")).with_result(
            MatchResult.single("Ruben", "Tibo")
        )
    with pytest.raises(InvalidReservationException):
        Match.from_dict(
            {
                "date": "2025-09-28",
                "timeSlot": EARLY,
                "court": 1,
                "players": ["Ruben", "Tibo"],
                "result": {"winners": ["Ruben"], "losers": []},
            }
        )


def test_failed_save_leaves_state_unchanged(tmp_path, monkeypatch):
    path = tmp_path / "club.json"
    store = JsonFileStore(path)
    kept = Match.single(DAY, EARLY, 1, "Ruben", "Tibo")
    store.upsert_match(kept)

    def broken_mkstemp(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(tempfile, "mkstemp", broken_mkstemp)

    with pytest.raises(FileSaveException):
        store.upsert_match(Match.single(DAY, EARLY, 2, "Seppe", "Aaron"))
    with pytest.raises(FileSaveException):
        store.set_availability("Seppe", DAY, EARLY, False)

    assert store.snapshot().matches == [kept]
    assert store.snapshot().availability.is_available("Seppe", DAY, EARLY)
    assert JsonFileStore(path).snapshot().matches == [kept]


def test_failed_transaction_is_not_committed():
    kept = Match.single(DAY, EARLY, 1, "Ruben", "Tibo")
    store = MemoryStore([kept])

    def book_then_fail(state):
        state.put(Match.single(DAY, EARLY, 2, "Seppe", "Aaron"))
        raise DoubleBookingException("Already playing")

    with pytest.raises(DoubleBookingException):
        store.transaction(book_then_fail)

    assert store.snapshot().matches == [kept]


def test_snapshots_are_copies():
    store = MemoryStore()
    snapshot = store.snapshot()
    snapshot.put(Match.single(DAY, EARLY, 1, "Ruben", "Tibo"))
    snapshot.availability.set_available("Ruben", DAY, EARLY, False)

    assert store.snapshot().matches == []
    assert store.snapshot().availability.is_available("Ruben", DAY, EARLY)
