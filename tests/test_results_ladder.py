from datetime import date

import pytest

from courtplanner.controllers.season import (
    ResultRecorder,
    compute_doubles_ladder,
    compute_ladder,
)
from courtplanner.exceptions import (
    InvalidResultException,
    PermissionDeniedException,
    ReservationNotFoundException,
)
from courtplanner.models.season import Match, MatchResult, Roster

DAY = date(2025, 9, 28)
EARLY = "18u30-19u30"
LATE = "19u30-20u30"
ADMIN = "Mattias"


@pytest.fixture
def recorder(season, store):
    store.upsert_match(Match.single(DAY, EARLY, 3, "Ruben", "Tibo"))
    store.upsert_match(Match.double(DAY, EARLY, 1, ("Seppe", "Aaron"), ("Brent", "Wout")))
    store.upsert_match(Match.single(DAY, EARLY, 2, "Remi", "Gilles", category="training"))
    store.upsert_match(
        Match.double(
            DAY, LATE, 1, ("Ruben", "Tibo"), ("Seppe", "Aaron"), category="wedstrijd"
        )
    )
    return ResultRecorder(season, store)


def test_mark_winner(recorder, store):
    match = recorder.mark_winner("Tibo", DAY, EARLY, 3, "Ruben")

    assert match.result == MatchResult.single("Ruben", "Tibo")
    assert store.snapshot().find(DAY, EARLY, 3).result == match.result


def test_winner_needs_a_competitive_singles(recorder):
    with pytest.raises(InvalidResultException):
        recorder.mark_winner(ADMIN, DAY, EARLY, 1, "Seppe")
    with pytest.raises(InvalidResultException):
        recorder.mark_winner(ADMIN, DAY, EARLY, 2, "Remi")


def test_winner_must_have_played(recorder):
    with pytest.raises(InvalidResultException):
        recorder.mark_winner(ADMIN, DAY, EARLY, 3, "Seppe")


def test_result_permissions(recorder):
    with pytest.raises(PermissionDeniedException):
        recorder.mark_winner("Seppe", DAY, EARLY, 3, "Ruben")
    with pytest.raises(PermissionDeniedException):
        recorder.mark_winner(None, DAY, EARLY, 3, "Ruben")
    with pytest.raises(ReservationNotFoundException):
        recorder.mark_winner(ADMIN, DAY, "19u30-20u30", 3, "Ruben")

    assert recorder.mark_winner(ADMIN, DAY, EARLY, 3, "Tibo").result.winner == "Tibo"
    assert recorder.clear_result("Ruben", DAY, EARLY, 3).result is None


def _played(winner, loser, court=1, category="wedstrijd"):
    match = Match.single(DAY, EARLY, court, winner, loser, category=category)
    return match.with_result(MatchResult.single(winner, loser))


def test_ladder_order_and_percentages():
    roster = Roster({"Ann": 1, "Ben": 1, "Cas": 1, "Dirk": 1})
    matches = [
        _played("Ann", "Ben"),
        _played("Ann", "Cas"),
        _played("Ben", "Ann"),
        _played("Cas", "Dirk"),
        # ignored: training, no result, outside roster
        _played("Dirk", "Ann", category="training"),
        Match.single(DAY, EARLY, 2, "Dirk", "Ben"),
        _played("Ann", "Guest"),
    ]

    ladder = compute_ladder(matches, roster)

    assert [e.player for e in ladder] == ["Ann", "Ben", "Cas", "Dirk"]
    ann, ben, cas, dirk = ladder
    assert (ann.wins, ann.losses, ann.matches, ann.win_percentage) == (2, 1, 3, 67)
    assert (ben.wins, ben.matches) == (1, 2)
    assert (cas.wins, cas.matches) == (1, 2)
    assert (dirk.wins, dirk.matches, dirk.win_percentage) == (0, 1, 0)


def test_ladder_lists_players_without_matches():
    roster = Roster({"Zed": 1, "Amy": 1})

    ladder = compute_ladder([], roster)

    assert [e.player for e in ladder] == ["Amy", "Zed"]
    assert all(e.win_percentage == 0 for e in ladder)


def test_mark_winning_team(recorder, store):
    match = recorder.mark_winning_team("Aaron", DAY, LATE, 1, ["Aaron", "Seppe"])

    assert match.result == MatchResult.double(("Seppe", "Aaron"), ("Ruben", "Tibo"))
    assert match.result.to_dict() == {
        "winners": ["Seppe", "Aaron"],
        "losers": ["Ruben", "Tibo"],
    }
    assert store.snapshot().find(DAY, LATE, 1).result == match.result


def test_winning_team_must_be_one_side(recorder, store):
    with pytest.raises(InvalidResultException):
        recorder.mark_winning_team(ADMIN, DAY, LATE, 1, ["Ruben", "Seppe"])
    with pytest.raises(InvalidResultException):
        recorder.mark_winning_team(ADMIN, DAY, LATE, 1, ["Ruben", "Ruben"])
    with pytest.raises(InvalidResultException):
        recorder.mark_winner(ADMIN, DAY, LATE, 1, "Ruben")
    # training doubles and singles matches take no team result
    with pytest.raises(InvalidResultException):
        recorder.mark_winning_team(ADMIN, DAY, EARLY, 1, ["Seppe", "Aaron"])
    with pytest.raises(InvalidResultException):
        recorder.mark_winning_team(ADMIN, DAY, EARLY, 3, ["Ruben", "Tibo"])

    assert store.snapshot().find(DAY, LATE, 1).result is None


def _doubles(team_a, team_b, court=1, category="wedstrijd", winners=None):
    match = Match.double(DAY, EARLY, court, team_a, team_b, category=category)
    if winners is None:
        return match
    losers = team_b if set(winners) == set(team_a) else team_a
    return match.with_result(MatchResult.double(winners, losers))


def test_doubles_ladder():
    roster = Roster({"Ann": 1, "Ben": 1, "Cas": 1, "Dirk": 1, "Eva": 1})
    matches = [
        _doubles(("Ann", "Ben"), ("Cas", "Dirk"), winners=("Ann", "Ben")),
        _doubles(("Ann", "Cas"), ("Ben", "Dirk"), court=2, winners=("Ben", "Dirk")),
        # undecided matches still count as played
        _doubles(("Ann", "Eva"), ("Cas", "Guest"), court=3),
        # ignored: training, singles
        _doubles(
            ("Eva", "Ben"), ("Cas", "Dirk"), category="training", winners=("Eva", "Ben")
        ),
        _played("Eva", "Ann"),
    ]

    ladder = compute_doubles_ladder(matches, roster)

    assert [e.player for e in ladder] == ["Ben", "Ann", "Dirk", "Cas", "Eva"]
    ben, ann, dirk, cas, eva = ladder
    assert (ben.wins, ben.matches, ben.win_percentage) == (2, 2, 100)
    assert (ann.wins, ann.matches, ann.losses, ann.win_percentage) == (1, 3, 2, 33)
    assert (dirk.wins, dirk.matches) == (1, 2)
    assert (cas.wins, cas.matches) == (0, 3)
    assert (eva.wins, eva.matches, eva.win_percentage) == (0, 1, 0)
