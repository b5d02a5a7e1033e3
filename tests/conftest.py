from datetime import date

import pytest

from courtplanner.models.season import Roster, SeasonConfig
from courtplanner.pairing import ScoringWeights
from courtplanner.storage import MemoryStore

SEASON_START = date(2025, 9, 28)


@pytest.fixture
def no_jitter():
    return ScoringWeights(jitter=0)


@pytest.fixture
def small_roster():
    return Roster({"Alice": 50, "Bob": 52, "Carol": 10, "Dave": 90})


@pytest.fixture
def club_roster():
    return Roster.default()


@pytest.fixture
def season():
    return SeasonConfig(name="Test season", start_date=SEASON_START, num_weeks=4)


@pytest.fixture
def store():
    return MemoryStore()
