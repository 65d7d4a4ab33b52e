# procareer/roster.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

from .config import TIER_BASE_STRENGTH, TIER_BASE_FALLBACK
from .types import Club, ContinentalTier, require

FREE_AGENT_NAME = "Free Agent"
FREE_AGENT_CLUB = Club(name=FREE_AGENT_NAME, league="None", country="None", tier=5, strength=0, prestige=0)

# Bundled real-club table; columns match Club fields
CLUBS_CSV = Path(__file__).parent / "data" / "clubs.csv"
CLUB_COLUMNS = ["name", "league", "country", "tier", "prestige", "strength", "continental_tier"]


def is_free_agent(club: Optional[Club]) -> bool:
    return club is None or club.name == FREE_AGENT_NAME


def tier_base_strength(tier: int) -> int:
    return TIER_BASE_STRENGTH.get(int(tier), TIER_BASE_FALLBACK)


class ClubRoster:
    """
    Queryable set of clubs supplied by the host application.
    Only the stable fields {name, league, country, tier, strength} are read here.
    """

    def __init__(self, clubs: Iterable[Club] = ()):
        self._clubs: List[Club] = [c for c in clubs if not is_free_agent(c)]

    @classmethod
    def from_csv(cls, path: Union[str, Path] = CLUBS_CSV) -> "ClubRoster":
        """Load clubs from a CSV with the CLUB_COLUMNS header."""
        df = pd.read_csv(path)
        missing = [c for c in CLUB_COLUMNS if c not in df.columns]
        require(not missing, f"club table {path} is missing columns: {missing}")
        df = df[CLUB_COLUMNS].dropna(subset=["name", "league"]).copy()
        ints = ["tier", "prestige", "strength", "continental_tier"]
        df[ints] = df[ints].fillna(0).astype(int)
        # plain python scalars so clubs serialize with json
        return cls(
            Club(
                name=str(r.name), league=str(r.league), country=str(r.country),
                tier=int(r.tier), strength=int(r.strength), prestige=int(r.prestige),
                continental_tier=ContinentalTier(int(r.continental_tier)),
            )
            for r in df.itertuples(index=False)
        )

    @classmethod
    def default(cls) -> "ClubRoster":
        return cls.from_csv(CLUBS_CSV)

    @classmethod
    def from_dicts(cls, rows: Iterable[Dict[str, Any]]) -> "ClubRoster":
        return cls(Club.from_dict(r) for r in rows)

    def __len__(self) -> int:
        return len(self._clubs)

    def __iter__(self):
        return iter(self._clubs)

    @property
    def clubs(self) -> List[Club]:
        return list(self._clubs)

    def leagues(self) -> List[str]:
        """League names in first-seen order."""
        seen: Dict[str, None] = {}
        for c in self._clubs:
            seen.setdefault(c.league, None)
        return list(seen)

    def clubs_in_league(self, league: str) -> List[Club]:
        return [c for c in self._clubs if c.league == league]

    def clubs_in_tier(self, tier: int) -> List[Club]:
        return [c for c in self._clubs if c.tier == tier]

    def by_name(self, name: str) -> Optional[Club]:
        for c in self._clubs:
            if c.name == name:
                return c
        return None

    def league_for(self, country: str, tier: int) -> Optional[str]:
        """The roster's league for a country at a tier, if it models one."""
        for c in self._clubs:
            if c.country == country and c.tier == tier:
                return c.league
        return None

    def league_tier(self, league: str, default: int = 2) -> int:
        for c in self._clubs:
            if c.league == league:
                return c.tier
        return default
