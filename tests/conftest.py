# tests/conftest.py
# Ensure the project root (where the local `procareer/` lives) is first on sys.path
import os, sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pytest

from procareer.config import Modifiers
from procareer.rng import SimRNG
from procareer.roster import ClubRoster
from procareer.types import (
    Club, ContinentalTier, Contract, ContractType, GameConfig, Player, Position, Role,
)


class FixedRNG(SimRNG):
    """uniform() is pinned; rand_int() always returns the low (or high) end."""

    def __init__(self, u: float = 0.5, high: bool = False):
        super().__init__(0)
        self.u = u
        self.high = high

    def uniform(self) -> float:
        return self.u

    def rand_int(self, lo: int, hi: int) -> int:
        return int(hi) if self.high else int(lo)


@pytest.fixture
def fixed_rng():
    return FixedRNG


@pytest.fixture
def rng():
    return SimRNG(1337)


@pytest.fixture
def clubs():
    return {
        "northbridge": Club("Northbridge City", "Premier Division", "England", 1, 80),
        "harbour": Club("Harbour Athletic", "Premier Division", "England", 1, 86,
                        prestige=80, continental_tier=ContinentalTier.CHAMPIONS),
        "eastvale": Club("Eastvale Rovers", "Premier Division", "England", 1, 75),
        "millford": Club("Millford Town", "Championship Division", "England", 2, 68),
        "oakham": Club("Oakham United", "Championship Division", "England", 2, 64),
        "kestrel": Club("Kestrel FC", "League One / Tier 3", "England", 3, 58),
    }


@pytest.fixture
def roster(clubs):
    return ClubRoster(clubs.values())


@pytest.fixture
def make_player(clubs):
    """Factory: a 20-year-old forward at Northbridge (strength 80) on a pro deal."""
    def _make(**overrides) -> Player:
        modifiers = overrides.pop("modifiers", None)
        fields = dict(
            name="Test Player",
            nationality="England",
            age=20,
            position=Position.FWD,
            current_club=clubs["northbridge"],
            contract=Contract(wage=1000, years_left=3, expiry_year=2027,
                              type=ContractType.PROFESSIONAL, promised_role=Role.IMPORTANT),
            current_ability=70,
            potential_ability=85,
            natural_fitness=75,
            injury_prone=8,
        )
        fields.update(overrides)
        if modifiers is not None:
            fields["config"] = GameConfig(modifiers=modifiers)
        return Player(**fields)
    return _make


@pytest.fixture
def quiet():
    """Modifiers with injuries and life events switched off."""
    return Modifiers(injuries_off=True, random_life_events=False)
