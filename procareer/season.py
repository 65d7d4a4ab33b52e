# procareer/season.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .competitions import (
    CompetitionProgress, CompetitionState, advance, continental_cup,
    continental_name, domestic_cup,
)
from .config import (
    APPEARANCE_SCALE, AVAILABILITY_WINDOW_WEEKS, CONTINENTAL_SPOTS, HIGH_LOAD,
    INJURY_FATIGUE_WEIGHT, INJURY_HIGH_LOAD_MULT, INJURY_PRONE_WEIGHT,
    INJURY_ROLL_SCALE, INJURY_TABLE, LIFE_EVENT_CHANCE, MID_SEASON_MAX_WEEKS_OUT,
    MODERATE_LOAD, RECOVERY_EVENTS, SENIOR_BASE_GAMES, YOUTH_BASE_GAMES,
)
from .generator import generate_stat_set
from .market import classify_role, estimated_appearances
from .rng import SimRNG
from .roster import ClubRoster, is_free_agent
from .standings import generate_league_table, player_row
from .stats import merge_many
from .tournament import TournamentResult, is_selected, simulate_tournament
from .types import (
    ContractType, LeagueRow, Player, Role, SeasonHalf, SeasonLevel, SeasonStats, StatSet,
)

logger = logging.getLogger(__name__)

FREE_AGENT_EVENT = "Spent time as Free Agent searching for clubs"
YOUTH_OPPOSITION_GAP = 20
SURPLUS_SENIOR_RATIO = 0.02
SURPLUS_YOUTH_RATIO = 0.5
DEFAULT_YOUTH_RATIO = 0.8


@dataclass
class SeasonPerformance:
    """Everything one orchestrator call hands back to the career layer."""
    stats: SeasonStats
    trophies: List[str] = field(default_factory=list)
    events: List[str] = field(default_factory=list)
    league_table: List[LeagueRow] = field(default_factory=list)
    cup: Optional[CompetitionProgress] = None
    europe: Optional[CompetitionProgress] = None
    tournament: Optional[TournamentResult] = None
    club_name: str = ""

    @property
    def league_position(self) -> int:
        row = player_row(self.league_table)
        return row.position if row else 10

    # The tournament detail is not kept; its stats already live in `stats`.
    def to_dict(self) -> Dict[str, Any]:
        return {
            "stats": self.stats.to_dict(),
            "trophies": list(self.trophies),
            "events": list(self.events),
            "league_table": [r.to_dict() for r in self.league_table],
            "cup": self.cup.to_dict() if self.cup else None,
            "europe": self.europe.to_dict() if self.europe else None,
            "club_name": self.club_name,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SeasonPerformance":
        cup, europe = d.get("cup"), d.get("europe")
        return cls(
            stats=SeasonStats.from_dict(d["stats"]),
            trophies=list(d.get("trophies", [])),
            events=list(d.get("events", [])),
            league_table=[LeagueRow.from_dict(r) for r in d.get("league_table", [])],
            cup=CompetitionProgress.from_dict(cup) if cup else None,
            europe=CompetitionProgress.from_dict(europe) if europe else None,
            club_name=d.get("club_name", ""),
        )


@dataclass(frozen=True)
class Injury:
    weeks: int
    description: str
    headline: Optional[str] = None


# ---------- classification ----------

def season_level(player: Player) -> Tuple[SeasonLevel, bool]:
    """
    Which football the player plays this season, and whether they are a senior regular.
    Checked in order: U18 youth contract, U21 by ability, strict-youth modifier, reserves.
    """
    club = player.current_club
    ability = player.current_ability
    fresh_role = classify_role(ability, club.strength)

    if player.contract.type is ContractType.YOUTH and player.age < 18 and ability < club.strength - 10:
        return SeasonLevel.U18, False
    if player.age < 21 and fresh_role is Role.YOUTH:
        return SeasonLevel.U21, False
    if player.modifiers.no_starts_under_21 and player.age < 21 and not player.on_loan:
        return SeasonLevel.U21, False
    if fresh_role is Role.YOUTH:
        return SeasonLevel.YOUTH_RESERVES, False
    return SeasonLevel.SENIOR, True


def play_ratios(player: Player, senior_regular: bool, *, rng: SimRNG, events: List[str]) -> Tuple[float, float]:
    """(senior ratio, youth ratio) of the period's league games."""
    club = player.current_club
    if senior_regular:
        senior = estimated_appearances(player.contract.promised_role) / APPEARANCE_SCALE
        youth = 0.0
    else:
        senior = 0.0
        youth = DEFAULT_YOUTH_RATIO
        if player.current_ability > club.strength - 15 and rng.uniform() > 0.6:
            senior = 0.1 + rng.uniform() * 0.15
            events.append("Made appearances for Senior Team")

    if player.is_surplus:
        senior = SURPLUS_SENIOR_RATIO
        youth = SURPLUS_YOUTH_RATIO
        events.append("Frozen out of squad")
    return senior, youth


# ---------- injuries / load ----------

def injury_risk(injury_prone: float, fatigue: float) -> float:
    risk = injury_prone * INJURY_PRONE_WEIGHT + fatigue * INJURY_FATIGUE_WEIGHT
    if fatigue > HIGH_LOAD:
        risk *= INJURY_HIGH_LOAD_MULT
    return risk


def roll_injury(player: Player, half: SeasonHalf, *, rng: SimRNG) -> Optional[Injury]:
    if player.modifiers.injuries_off:
        return None
    if rng.uniform() * INJURY_ROLL_SCALE >= injury_risk(player.injury_prone, player.fatigue):
        return None

    severity = rng.uniform()
    for floor, weeks, description, headline in INJURY_TABLE:
        if severity > floor:
            break
    if half is not SeasonHalf.FULL:
        weeks = min(weeks, MID_SEASON_MAX_WEEKS_OUT)
    return Injury(weeks=weeks, description=description, headline=headline)


def availability(weeks_out: int) -> float:
    return max(0, AVAILABILITY_WINDOW_WEEKS - weeks_out) / AVAILABILITY_WINDOW_WEEKS


def fatigue_performance(fatigue: float) -> float:
    if fatigue > HIGH_LOAD:
        return 0.80
    if fatigue > MODERATE_LOAD:
        return 0.95
    return 1.0


def free_agent_performance() -> SeasonPerformance:
    stats = SeasonStats(level=SeasonLevel.FREE_AGENT, cup_status="N/A", europe_status="N/A")
    return SeasonPerformance(stats=stats, events=[FREE_AGENT_EVENT], club_name="Free Agent")


def _carried(previous: Optional[SeasonPerformance], attr: str, club_name: str) -> Optional[CompetitionProgress]:
    if previous is None or previous.club_name != club_name:
        return None
    return getattr(previous, attr)


# ---------- orchestrator ----------

def simulate_season_performance(
    player: Player,
    year: int,
    half: SeasonHalf,
    *,
    rng: SimRNG,
    roster: ClubRoster,
    previous: Optional[SeasonPerformance] = None,
    summer_tournament: Optional[str] = None,
    nations: Sequence[str] = (),
) -> SeasonPerformance:
    """
    Simulate one half (or a whole) season for the player.

    Order matters: the league table is settled first, then the player's level and
    play ratios, then injuries (which cap availability), and only then the
    appearance counts and stat lines. Cup runs continue from `previous` when the
    player is still at the same club. A summer tournament is only played at the
    end of the season.
    """
    club = player.current_club
    if is_free_agent(club):
        logger.debug("%s %s: free agent, nothing to simulate", year, half.value)
        return free_agent_performance()

    mid = half.is_mid_season
    modifiers = player.modifiers
    trophies: List[str] = []
    events: List[str] = []

    # 1) league
    table = generate_league_table(club, roster, mid_season=mid, rng=rng)
    row = player_row(table)
    position = row.position if row else 10
    if not mid:
        if position == 1:
            trophies.append(f"{club.league} Winner")
        elif position <= CONTINENTAL_SPOTS and club.tier == 1:
            events.append("Qualified for Champions League")

    # 2) level and share of games
    level, senior_regular = season_level(player)
    senior_ratio, youth_ratio = play_ratios(player, senior_regular, rng=rng, events=events)

    # 3) injuries before appearances
    injuries: List[str] = []
    weeks_out = 0
    injury = roll_injury(player, half, rng=rng)
    if injury is not None:
        weeks_out = injury.weeks
        injuries.append(injury.description)
        if injury.headline:
            events.append(injury.headline)
        logger.debug("%s %s: %s injured, %s weeks out", year, half.value, player.name, weeks_out)

    base_games = SENIOR_BASE_GAMES if senior_regular else YOUTH_BASE_GAMES
    games = math.ceil(base_games * half.portion * availability(weeks_out))
    senior_apps = math.floor(games * senior_ratio)
    youth_apps = math.floor(games * youth_ratio)

    ability = player.current_ability * fatigue_performance(player.fatigue)
    pos = player.position

    league = generate_stat_set(senior_apps, ability, pos, club.strength, rng=rng)
    youth = generate_stat_set(youth_apps, ability, pos, club.strength - YOUTH_OPPOSITION_GAP, rng=rng)

    # 4) cups
    cup_before = _carried(previous, "cup", club.name) or domestic_cup()
    cup_progress = advance(cup_before, club.strength, mid_season=mid, rng=rng)
    cup_games = rng.rand_int(1, 4) if senior_regular and cup_before.is_live else 0
    cup = generate_stat_set(cup_games, ability, pos, club.strength, rng=rng, is_cup=True)

    europe_before = _carried(previous, "europe", club.name) or continental_cup(club)
    europe_progress = advance(europe_before, club.strength, mid_season=mid, rng=rng)
    europe_games = rng.rand_int(2, 6) if senior_regular and europe_before.is_live else 0
    europe = generate_stat_set(europe_games, ability, pos, club.strength, rng=rng, is_cup=True)
    europe_name = continental_name(club) if europe_progress.state is not CompetitionState.NOT_ENTERED else None

    # 5) summer tournament
    international = StatSet()
    breakdown: Dict[str, StatSet] = {}
    played: Optional[TournamentResult] = None
    if not mid and summer_tournament and is_selected(player, summer_tournament):
        played = simulate_tournament(player, summer_tournament, nations, rng=rng)
        international = played.stats
        breakdown[summer_tournament] = played.stats
        trophies.extend(played.trophies)
        events.extend(played.events)

    if not mid:
        if cup_progress.state is CompetitionState.WINNER:
            trophies.append("Domestic Cup Winner")
        if europe_progress.state is CompetitionState.WINNER:
            trophies.append(f"{europe_name} Winner")
        if modifiers.random_life_events and rng.uniform() < LIFE_EVENT_CHANCE:
            events.append(rng.pick(RECOVERY_EVENTS))

    # 6) senior-only total
    total = merge_many(league, cup, europe, international)

    stats = SeasonStats(
        total=total,
        youth=youth,
        league=league,
        cup=cup,
        europe=europe,
        international=international,
        international_breakdown=breakdown,
        level=level,
        injuries=injuries,
        weeks_out=weeks_out,
        cup_status=cup_progress.label(),
        europe_status=europe_progress.label(),
        europe_competition=europe_name,
    )
    logger.debug(
        "%s %s: %s at %s level=%s apps=%s rating=%.2f pos=%s",
        year, half.value, player.name, club.name, level.value, total.matches, total.rating, position,
    )
    return SeasonPerformance(
        stats=stats, trophies=trophies, events=events, league_table=table,
        cup=cup_progress, europe=europe_progress, tournament=played, club_name=club.name,
    )
