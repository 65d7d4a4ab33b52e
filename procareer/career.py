# procareer/career.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .awards import calculate_awards
from .config import (
    DEFAULT_SEED, FORCED_RETIREMENT_LOAD, GAMES_FULL_SEASON, GAMES_HALF_SEASON, START_YEAR,
)
from .generator import round_half_up
from .growth import calculate_growth
from .market import is_surplus, market_value, player_market_value
from .narrative import season_narrative
from .rng import SimRNG, child_rng
from .roster import ClubRoster, is_free_agent
from .season import SeasonPerformance, simulate_season_performance
from .standings import club_progression, generate_world_tables
from .stats import merge, merge_breakdowns, merge_many, calculate_form
from .transfers import accept_offer, preseason_offers
from .types import (
    Club, Contract, ContractType, GameConfig, Offer, Player, Position, Role, SeasonHalf,
    SeasonRecord, SeasonStats, WorldTables, require, world_tables_from_dict, world_tables_to_dict,
)

logger = logging.getLogger(__name__)

YOUTH_CONTRACT_YEARS: int = 3
YOUTH_CONTRACT_WAGE: int = 100
HOME_CLUB_CHANCE: float = 0.9


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------

def initial_club(nationality: str, roster: ClubRoster, *, rng: SimRNG) -> Club:
    """A first club, usually (90%) from the player's own country."""
    require(len(roster) > 0, "cannot place a new player: the club roster is empty")
    home = [c for c in roster if c.country == nationality]
    pool = home if home and rng.uniform() < HOME_CLUB_CHANCE else roster.clubs
    return rng.pick(pool)


def new_player(
    name: str,
    age: int,
    nationality: str,
    position: Position,
    *,
    roster: ClubRoster,
    rng: SimRNG,
    config: Optional[GameConfig] = None,
    year: int = START_YEAR,
) -> Player:
    """
    Plain-English:
      - Anything left unset in `config` is rolled: ability 35-55 (a 5% chance of
        a +5..15 head start), potential 15-40 above it (at least +20, at most 99).
      - Everyone starts on a 3-year youth deal at 100 a week as a Youth/Prospect.
    """
    config = config or GameConfig()
    club = config.starting_club or initial_club(nationality, roster, rng=rng)

    if config.starting_ability is None:
        ability = rng.rand_int(35, 55)
        if rng.uniform() > 0.95:
            ability += rng.rand_int(5, 15)
    else:
        ability = config.starting_ability

    if config.potential_ability is None:
        potential = min(99, max(ability + 20, ability + rng.rand_int(15, 40)))
    else:
        potential = config.potential_ability

    fitness = rng.rand_int(50, 99)
    injury_prone = config.injury_proneness if config.injury_proneness is not None else rng.rand_int(1, 15)

    contract = Contract(
        wage=YOUTH_CONTRACT_WAGE,
        years_left=YOUTH_CONTRACT_YEARS,
        expiry_year=year + YOUTH_CONTRACT_YEARS,
        type=ContractType.YOUTH,
        promised_role=Role.YOUTH,
    )
    player = Player(
        name=name, nationality=nationality, age=age, position=position,
        current_club=club, contract=contract,
        current_ability=ability, potential_ability=potential,
        natural_fitness=fitness, injury_prone=injury_prone,
        config=config,
    )
    player.market_value = market_value(ability, age, potential, position, YOUTH_CONTRACT_YEARS)
    return player


def must_retire(player: Player) -> bool:
    """Body load past this point ends the career."""
    return player.fatigue > FORCED_RETIREMENT_LOAD


# ---------------------------------------------------------------------------
# End of season
# ---------------------------------------------------------------------------

@dataclass
class SeasonOutcome:
    record: SeasonRecord
    awards: List[str]
    growth_log: str
    narrative: str
    forced_retirement: bool = False


def merge_season_stats(first: SeasonStats, second: SeasonStats) -> SeasonStats:
    """Both halves as one season. Statuses and level come from the second half."""
    return SeasonStats(
        total=merge(first.total, second.total),
        youth=merge(first.youth, second.youth),
        league=merge(first.league, second.league),
        cup=merge(first.cup, second.cup),
        europe=merge(first.europe, second.europe),
        international=merge(first.international, second.international),
        international_breakdown=merge_breakdowns(first.international_breakdown, second.international_breakdown),
        level=second.level,
        injuries=list(first.injuries) + list(second.injuries),
        weeks_out=first.weeks_out + second.weeks_out,
        cup_status=second.cup_status,
        europe_status=second.europe_status,
        europe_competition=second.europe_competition or first.europe_competition,
    )


def _tick_contract(contract: Contract, year: int) -> Contract:
    years_left = max(0, contract.years_left - 1)
    wage = contract.wage
    if contract.years_left > 0 and contract.yearly_wage_rise > 0:
        wage = round_half_up(wage * (1 + contract.yearly_wage_rise / 100))
    return Contract(
        wage=wage,
        years_left=years_left,
        expiry_year=year + 1 + years_left if years_left > 0 else 0,
        type=contract.type,
        promised_role=contract.promised_role,
        yearly_wage_rise=contract.yearly_wage_rise,
    )


def finalize_season(
    player: Player,
    year: int,
    first: SeasonPerformance,
    second: SeasonPerformance,
    *,
    world_tables: Optional[WorldTables] = None,
    roster: Optional[ClubRoster] = None,
    rng: SimRNG,
) -> SeasonOutcome:
    """
    Close the books on a season and move the player on a year (in place).

    Order: merge halves -> awards -> growth on everything played -> form ->
    age/contract/value -> record -> loan return or club progression -> cabinets.
    """
    stats = merge_season_stats(first.stats, second.stats)
    trophies = list(second.trophies)
    events = list(first.events) + list(second.events)

    awards = calculate_awards(player, stats, trophies, rng=rng)
    stats.awards = list(awards)

    # total already carries international games
    played = merge_many(stats.total, stats.youth)
    growth = calculate_growth(player, played, stats.level, events, stats.injuries, rng=rng)
    form = calculate_form(stats.total, player.position)

    club = player.current_club
    position = second.league_position
    record = SeasonRecord(
        year=year,
        age=player.age,
        club=club,
        is_loan=player.on_loan,
        stats=stats,
        trophies=trophies,
        events=events,
        league_position=position,
        world_state=world_tables,
    )
    narrative = season_narrative(stats, trophies, club.name, rng=rng)

    player.age += 1
    player.current_ability = growth.new_ability
    player.fatigue = growth.new_fatigue
    player.form = form
    player.contract = _tick_contract(player.contract, year)

    if player.parent_club is not None:
        player.current_club = player.parent_club
        player.parent_club = None
    elif not is_free_agent(club):
        player.current_club = club_progression(club, position, rng=rng, roster=roster)

    player.market_value = player_market_value(player)
    player.history.append(record)
    player.trophy_cabinet.extend(trophies)
    player.awards_cabinet.extend(awards)

    logger.debug("season %s finalized for %s: %s apps, %s trophies, awards=%s",
                 year, player.name, stats.total.matches, len(trophies), awards)
    return SeasonOutcome(
        record=record, awards=awards, growth_log=growth.growth_log,
        narrative=narrative, forced_retirement=must_retire(player),
    )


# ---------------------------------------------------------------------------
# Career loop
# ---------------------------------------------------------------------------

@dataclass
class Career:
    """
    Plain-English:
      - One player's career against a fixed club roster, seeded for replay.
      - A season is two calls: play_first_half() then play_second_half().
        The first half is stashed in `mid_season` so a save can sit in the
        winter window.
      - Every stage draws from its own child RNG keyed on (seed, year, stage).
    """
    player: Player
    roster: ClubRoster = field(default_factory=ClubRoster.default)
    seed: int = DEFAULT_SEED
    year: int = START_YEAR
    world_tables: WorldTables = field(default_factory=dict)
    mid_season: Optional[SeasonPerformance] = None
    retired: bool = False

    # -----------------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------------

    @classmethod
    def new(
        cls,
        name: str,
        age: int,
        nationality: str,
        position: Position,
        *,
        roster: Optional[ClubRoster] = None,
        config: Optional[GameConfig] = None,
        seed: int = DEFAULT_SEED,
        year: int = START_YEAR,
    ) -> "Career":
        roster = roster if roster is not None else ClubRoster.default()
        player = new_player(name, age, nationality, position, roster=roster,
                            rng=child_rng(seed, "create"), config=config, year=year)
        tables = generate_world_tables(roster, 0, rng=child_rng(seed, "world", year, "start"))
        return cls(player=player, roster=roster, seed=seed, year=year, world_tables=tables)

    def _rng(self, stage: str) -> SimRNG:
        return child_rng(self.seed, "season", self.year, stage)

    @property
    def last_season(self) -> Optional[SeasonRecord]:
        return self.player.history[-1] if self.player.history else None

    @property
    def in_winter_window(self) -> bool:
        return self.mid_season is not None

    # -----------------------------------------------------------------------
    # Windows
    # -----------------------------------------------------------------------

    def preseason(self, *, force_loan: bool = False) -> List[Offer]:
        """Refresh the surplus flag and list this window's offers."""
        last = self.last_season
        last_stats = last.stats if last else None
        if not is_free_agent(self.player.current_club):
            self.player.is_surplus = is_surplus(self.player, last_stats)
        self.player.market_value = player_market_value(self.player)
        return preseason_offers(self.player, self.roster, rng=self._rng("window"),
                                year=self.year, last_stats=last_stats, force_loan=force_loan)

    def sign(self, offer: Offer, **terms: Any) -> Player:
        return accept_offer(self.player, offer, year=self.year, **terms)

    # -----------------------------------------------------------------------
    # Season
    # -----------------------------------------------------------------------

    def _with_player_table(self, tables: WorldTables, perf: SeasonPerformance) -> WorldTables:
        if perf.league_table:
            tables[self.player.current_club.league] = perf.league_table
        return tables

    def play_first_half(self) -> SeasonPerformance:
        require(not self.retired, "career is over")
        require(self.mid_season is None, "first half already played this season")
        perf = simulate_season_performance(
            self.player, self.year, SeasonHalf.FIRST, rng=self._rng("first"), roster=self.roster,
        )
        tables = generate_world_tables(self.roster, GAMES_HALF_SEASON, rng=self._rng("world-first"))
        self.world_tables = self._with_player_table(tables, perf)
        self.mid_season = perf
        return perf

    def play_second_half(self, *, summer_tournament: Optional[str] = None, nations: Sequence[str] = ()) -> SeasonOutcome:
        require(not self.retired, "career is over")
        require(self.mid_season is not None, "play_first_half() must run before the second half")
        first = self.mid_season
        second = simulate_season_performance(
            self.player, self.year, SeasonHalf.SECOND, rng=self._rng("second"), roster=self.roster,
            previous=first, summer_tournament=summer_tournament, nations=nations,
        )
        tables = generate_world_tables(self.roster, GAMES_FULL_SEASON, rng=self._rng("world-final"))
        self.world_tables = self._with_player_table(tables, second)

        outcome = finalize_season(self.player, self.year, first, second,
                                  world_tables=self.world_tables, roster=self.roster,
                                  rng=self._rng("finalize"))
        self.mid_season = None
        self.year += 1
        return outcome

    def play_season(self, **kwargs: Any) -> SeasonOutcome:
        self.play_first_half()
        return self.play_second_half(**kwargs)

    def retire(self) -> None:
        self.retired = True

    # -----------------------------------------------------------------------
    # Save / Load
    # -----------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "year": self.year,
            "retired": self.retired,
            "player": self.player.to_dict(),
            "clubs": [c.to_dict() for c in self.roster],
            "world_tables": world_tables_to_dict(self.world_tables),
            "mid_season": self.mid_season.to_dict() if self.mid_season else None,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Career":
        mid = d.get("mid_season")
        return cls(
            player=Player.from_dict(d["player"]),
            roster=ClubRoster.from_dicts(d.get("clubs", [])),
            seed=int(d.get("seed", DEFAULT_SEED)),
            year=int(d.get("year", START_YEAR)),
            world_tables=world_tables_from_dict(d.get("world_tables")),
            mid_season=SeasonPerformance.from_dict(mid) if mid else None,
            retired=bool(d.get("retired", False)),
        )
