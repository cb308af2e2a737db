"""Shared fixtures for the odds engine test suite."""

import pytest

from src.faction_data.store import FactionStore
from src.odds_engine.win_probability import FixedRandomSource

# Scenario factions used throughout the suite
ELITE = {
    "id": 1, "name": "Elite", "respect": 10_000_000,
    "rank": "Diamond III", "members": 100, "position": 5,
}
MINNOW = {
    "id": 2, "name": "Minnow", "respect": 1_000_000,
    "rank": "Unranked", "members": 20, "position": 2000,
}
TWIN_A = {
    "id": 3, "name": "Twin A", "respect": 5_000_000,
    "rank": "Gold I", "members": 60, "position": 300,
}
TWIN_B = dict(TWIN_A, id=4, name="Twin B")
EMPTY = {"id": 5, "name": "Empty", "respect": 0, "members": 0}
EMPTY_B = dict(EMPTY, id=6, name="Also Empty")


# ------------------------------------------------------------------
# Lightweight factories - cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture
def no_variance():
    """Random source that injects zero variance."""
    return FixedRandomSource(0.5)


@pytest.fixture
def faction_store():
    """In-memory store holding the scenario factions."""
    return FactionStore.from_records([ELITE, MINNOW, TWIN_A, TWIN_B, EMPTY, EMPTY_B])
