import random
from collections import defaultdict
from datetime import date

import pytest

from courtplanner.club import Club
from courtplanner.controllers.season import SeasonPlanner
from courtplanner.exceptions import DateOutsideSeasonException, PermissionDeniedException
from courtplanner.models.season import Availability, Match, Roster, SeasonConfig
from courtplanner.storage import MemoryStore, StoreSnapshot

EARLY = "18u30-19u30"
LATE = "19u30-20u30"
SEASON_START = date(2025, 9, 28)
ADMIN = "Mattias"
SECOND_WEEK = date(2025, 10, 5)


def _assert_valid_schedule(matches, availability=None):
    by_slot = defaultdict(list)
    for match in matches:
        by_slot[(match.date, match.time_slot)].extend(match.players)
        assert match.is_complete
        assert len(set(match.players)) == match.match_type.seats
    for (day, slot), players in by_slot.items():
        assert len(players) == len(set(players)), f"double booking on {day} {slot}"
        if availability is not None:
            for player in players:
                assert availability.is_available(player, day, slot)


def test_plan_all_covers_every_slot(season, club_roster):
    planner = SeasonPlanner(season, club_roster, rng=random.Random(11))

    matches = planner.plan_all(StoreSnapshot())

    # 14 players fill all three courts in every slot
    assert len(matches) == season.num_weeks * len(season.time_slots) * 3
    assert {m.date for m in matches} == set(season.dates())
    _assert_valid_schedule(matches)


def test_plan_all_layout_alternates_per_slot(season, club_roster):
    planner = SeasonPlanner(season, club_roster, rng=random.Random(5))

    matches = planner.plan_all(StoreSnapshot())

    for match in matches:
        doubles_courts = (1, 2) if match.time_slot == EARLY else (1,)
        expected = "double" if match.court in doubles_courts else "single"
        assert match.match_type.value == expected


def test_plan_all_respects_availability(season, club_roster):
    availability = Availability()
    for player in ["Ruben", "Seppe", "Tibo", "Aaron"]:
        availability.set_available(player, SEASON_START, EARLY, False)
    availability.set_available("Ruben", SECOND_WEEK, LATE, False)
    planner = SeasonPlanner(season, club_roster, rng=random.Random(2))

    matches = planner.plan_all(StoreSnapshot(availability=availability))

    _assert_valid_schedule(matches, availability)
    # 10 available players: two doubles and one singles still fit
    first_slot = [m for m in matches if m.date == SEASON_START and m.time_slot == EARLY]
    assert len(first_slot) == 3


def test_courts_without_players_are_skipped(season):
    roster = Roster({"A": 10, "B": 20, "C": 30, "D": 40, "E": 50})
    planner = SeasonPlanner(season, roster, rng=random.Random(0))

    matches = planner.plan_all(StoreSnapshot())

    # five players: one doubles per slot, the single player left sits out
    assert len(matches) == season.num_weeks * 2
    assert all(m.court == 1 and m.match_type.value == "double" for m in matches)


def test_group_sizes_follow_court_count(club_roster):
    config = SeasonConfig(start_date=SEASON_START, num_weeks=1, courts=2)
    planner = SeasonPlanner(config, club_roster)

    assert planner.group_sizes(0) == (4, 4)
    assert planner.group_sizes(1) == (4, 2)


def test_plan_week_ignores_history_of_its_own_date(no_jitter):
    roster = Roster({"A": 50, "B": 50, "C": 50, "D": 50})
    config = SeasonConfig(
        start_date=SEASON_START, num_weeks=2, time_slots=(EARLY,), courts=1
    )
    planner = SeasonPlanner(config, roster, no_jitter, group_patterns=[(2,)])
    snapshot = StoreSnapshot(matches=[Match.single(SEASON_START, EARLY, 1, "A", "B")])

    replanned = planner.plan_week(snapshot, SEASON_START)
    next_week = planner.plan_week(snapshot, SECOND_WEEK)

    assert [m.players for m in replanned] == [("A", "B")]
    assert set(next_week[0].players) != {"A", "B"}
    assert {m.date for m in replanned} == {SEASON_START}


def test_plan_week_outside_season(season, club_roster):
    planner = SeasonPlanner(season, club_roster)

    with pytest.raises(DateOutsideSeasonException):
        planner.plan_week(StoreSnapshot(), date(2025, 9, 29))


def test_plan_week_leaves_other_dates_alone(season, club_roster):
    store = MemoryStore()
    club = Club(store, season, club_roster, rng=random.Random(8))
    club.plan_all(ADMIN)
    before = {m.key: m for m in store.snapshot().matches if m.date != SECOND_WEEK}

    replanned = club.plan_week(ADMIN, SECOND_WEEK)

    after = store.snapshot().matches
    assert {m.key: m for m in after if m.date != SECOND_WEEK} == before
    assert sorted(m.key for m in after if m.date == SECOND_WEEK) == sorted(
        m.key for m in replanned
    )


def test_plan_all_replaces_every_stored_match(season, club_roster):
    outside = Match.single(date(2026, 6, 1), EARLY, 1, "Ruben", "Seppe")
    stale = Match.single(SEASON_START, EARLY, 3, "Brent", "Wout", category="training")
    store = MemoryStore([outside, stale])
    club = Club(store, season, club_roster, rng=random.Random(4))

    planned = club.plan_all(ADMIN)

    stored = store.snapshot().matches
    assert outside not in stored
    assert stale not in stored
    assert sorted(stored, key=lambda m: m.key) == sorted(planned, key=lambda m: m.key)


def test_only_admin_plans(season, club_roster):
    club = Club(MemoryStore(), season, club_roster)

    with pytest.raises(PermissionDeniedException):
        club.plan_all("Ruben")
    with pytest.raises(PermissionDeniedException):
        club.plan_week("Ruben", SEASON_START)
    assert club.schedule() == []
