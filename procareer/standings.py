# procareer/standings.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from .config import (
    CONTINENTAL_SPOTS, FILLER_STRENGTH_BOUNDS, GAMES_FULL_SEASON, GAMES_HALF_SEASON,
    LEAGUE_SIZE, POINTS_DRAW, POINTS_WIN, PROMOTION_SPOTS, RELEGATION_FROM,
    STRENGTH_BOUNDS, TABLE_BASE_PROB, TABLE_PROB_BOUNDS, TABLE_STRENGTH_COEF, TIER_NAMES,
)
from .rng import SimRNG
from .roster import ClubRoster, is_free_agent, tier_base_strength
from .types import Club, ContinentalTier, LeagueRow, WorldTables, ZoneTag, require


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


@dataclass
class TableEntry:
    """A team going into a table sim."""
    name: str
    strength: int
    is_player_club: bool = False


# ---------- one team's record ----------

def result_probabilities(strength: float, baseline: float) -> tuple[float, float, float]:
    """(win, draw, lose) for a team of this strength in a league with this baseline."""
    lo, hi = TABLE_PROB_BOUNDS
    rel = strength - baseline
    win = clamp(TABLE_BASE_PROB + rel * TABLE_STRENGTH_COEF, lo, hi)
    lose = clamp(TABLE_BASE_PROB - rel * TABLE_STRENGTH_COEF, lo, hi)
    return win, 1.0 - win - lose, lose


def _simulate_row(team: TableEntry, games: int, baseline: float, rng: SimRNG) -> LeagueRow:
    win_p, draw_p, _ = result_probabilities(team.strength, baseline)
    won = drawn = lost = 0
    for _ in range(games):
        roll = rng.uniform()
        if roll < win_p:
            won += 1
        elif roll < win_p + draw_p:
            drawn += 1
        else:
            lost += 1
    points = won * POINTS_WIN + drawn * POINTS_DRAW
    gd = round(won * 1.4 - lost * 1.2 + rng.rand_int(-5, 5))
    return LeagueRow(
        position=0, name=team.name, played=games,
        won=won, drawn=drawn, lost=lost, gd=int(gd), points=points,
        is_player_club=team.is_player_club,
    )


# ---------- table ----------

def simulate_table(teams: Sequence[TableEntry], games: int, baseline: float, *, rng: SimRNG) -> List[LeagueRow]:
    """
    Each team rolls its own W/D/L independently against the league baseline
    (no pairings, so league-wide wins and losses need not balance).
    Rows come back sorted by points then goal difference, positions 1..N.
    """
    require(games >= 0, f"games played must be >= 0, got {games}")
    flagged = sum(1 for t in teams if t.is_player_club)
    require(flagged <= 1, f"a league table may flag at most one player club, got {flagged}")

    rows = [_simulate_row(t, games, baseline, rng) for t in teams]
    rows.sort(key=lambda r: (r.points, r.gd), reverse=True)
    return [replace(r, position=i) for i, r in enumerate(rows, start=1)]


def tag_zones(rows: List[LeagueRow], tier: int) -> List[LeagueRow]:
    out: List[LeagueRow] = []
    for r in rows:
        status: Optional[ZoneTag] = None
        if tier == 1 and r.position <= CONTINENTAL_SPOTS:
            status = ZoneTag.UCL
        elif tier > 1 and r.position <= PROMOTION_SPOTS:
            status = ZoneTag.PRO
        elif tier < 5 and r.position >= RELEGATION_FROM:
            status = ZoneTag.REL
        out.append(replace(r, status=status))
    return out


def _filler_name(prefix: str, index: int) -> str:
    return f"{prefix} {chr(65 + index)}"


def generate_league_table(club: Club, roster: ClubRoster, *, mid_season: bool, rng: SimRNG) -> List[LeagueRow]:
    """The player's league: their club, real opponents from the roster, then fillers up to 20."""
    if is_free_agent(club):
        return []

    games = GAMES_HALF_SEASON if mid_season else GAMES_FULL_SEASON
    baseline = tier_base_strength(club.tier)
    lo, hi = FILLER_STRENGTH_BOUNDS

    teams: List[TableEntry] = [TableEntry(club.name, club.strength, True)]
    for c in roster.clubs_in_league(club.league):
        if c.name != club.name:
            teams.append(TableEntry(c.name, c.strength))
    while len(teams) < LEAGUE_SIZE:
        strength = int(clamp(baseline + rng.rand_int(-8, 8), lo, hi))
        teams.append(TableEntry(_filler_name("Team", len(teams)), strength))

    rows = simulate_table(teams[:LEAGUE_SIZE], games, baseline, rng=rng)
    return tag_zones(rows, club.tier)


def generate_world_tables(roster: ClubRoster, games: int, *, rng: SimRNG) -> WorldTables:
    """One table per known league, no player club flagged."""
    tables: WorldTables = {}
    for league in roster.leagues():
        tier = roster.league_tier(league)
        baseline = tier_base_strength(tier)
        real = roster.clubs_in_league(league)
        teams = [TableEntry(c.name, c.strength) for c in real]
        while len(teams) < LEAGUE_SIZE:
            teams.append(TableEntry(
                _filler_name(f"{league} Team", len(teams) - len(real)),
                baseline + rng.rand_int(-10, 10),
            ))
        tables[league] = tag_zones(simulate_table(teams[:LEAGUE_SIZE], games, baseline, rng=rng), tier)
    return tables


def player_row(rows: Sequence[LeagueRow]) -> Optional[LeagueRow]:
    for r in rows:
        if r.is_player_club:
            return r
    return None


# ---------- promotion / relegation ----------

def tier_name(tier: int) -> str:
    return TIER_NAMES.get(int(tier), "Lower Division")


def _league_at(club: Club, tier: int, roster: Optional[ClubRoster]) -> str:
    found = roster.league_for(club.country, tier) if roster is not None else None
    return found or tier_name(tier)


def club_progression(club: Club, position: int, *, rng: SimRNG, roster: Optional[ClubRoster] = None) -> Club:
    """
    Move a club between tiers off its final position and drift its strength.
    A club changing tier joins the roster's league for its country at that tier
    when there is one, else the generic tier name. A top-tier club finishing in
    the continental places enters the Champions League next season; any club
    outside the top tier loses its continental place.
    """
    if is_free_agent(club):
        return club

    tier, strength, league = club.tier, club.strength, club.league
    if position <= PROMOTION_SPOTS and tier > 1:
        tier -= 1
        strength += rng.rand_int(3, 6)
        league = _league_at(club, tier, roster)
    elif position >= RELEGATION_FROM and tier < 5:
        tier += 1
        strength -= rng.rand_int(3, 6)
        league = _league_at(club, tier, roster)
    else:
        if position <= 6:
            strength += rng.rand_int(0, 2)
        if position >= 15:
            strength -= rng.rand_int(0, 2)

    # continental places follow the finish; only the top tier qualifies
    continental = club.continental_tier
    if tier != club.tier or tier != 1:
        continental = ContinentalTier.NONE
    elif position <= CONTINENTAL_SPOTS:
        continental = ContinentalTier.CHAMPIONS

    lo, hi = STRENGTH_BOUNDS
    return replace(club, tier=tier, strength=int(clamp(strength, lo, hi)), league=league,
                   continental_tier=continental)
