import math

from procareer.competitions import CompetitionState
from procareer.rng import SimRNG
from procareer.roster import FREE_AGENT_CLUB
from procareer.season import (
    FREE_AGENT_EVENT, availability, injury_risk, roll_injury, simulate_season_performance,
)
from procareer.types import ContractType, SeasonHalf, SeasonLevel, StatSet


class SeqRNG(SimRNG):
    """Replays a fixed list of uniform() values."""

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)

    def uniform(self) -> float:
        return self.values.pop(0)


def test_full_season_important_starter(make_player, roster, rng, quiet):
    # ability 70 at strength 80 is a senior regular; promised 38 of 45 apps
    p = make_player(modifiers=quiet)
    perf = simulate_season_performance(p, 2025, SeasonHalf.FULL, rng=rng, roster=roster)
    s = perf.stats
    assert s.level is SeasonLevel.SENIOR
    assert s.league.matches == math.floor(38 * 38 / 45)
    assert 33 <= s.total.matches <= 36
    assert 5.5 <= s.total.rating <= 9.9
    assert s.youth == StatSet()
    assert s.europe.matches == 0 and s.europe_status == "Not Qualified"
    assert s.total.matches == s.league.matches + s.cup.matches


def test_free_agent_season_is_empty(make_player, roster, rng):
    p = make_player(current_club=FREE_AGENT_CLUB)
    perf = simulate_season_performance(p, 2025, SeasonHalf.FULL, rng=rng, roster=roster)
    s = perf.stats
    for bucket in (s.total, s.youth, s.league, s.cup, s.europe, s.international):
        assert bucket == StatSet()
    assert s.level is SeasonLevel.FREE_AGENT
    assert perf.trophies == []
    assert perf.events == [FREE_AGENT_EVENT]
    assert "Free Agent" in perf.events[0]
    assert perf.league_table == []


def test_first_half_hands_out_nothing(make_player, roster):
    for seed in range(25):
        p = make_player(current_ability=92)
        perf = simulate_season_performance(p, 2025, SeasonHalf.FIRST, rng=SimRNG(seed), roster=roster)
        assert perf.trophies == []
        assert perf.cup.state is not CompetitionState.WINNER
        assert all(r.played == 19 for r in perf.league_table)


def test_knocked_out_cup_stays_out(make_player, roster, quiet, fixed_rng):
    p = make_player(modifiers=quiet)
    first = simulate_season_performance(p, 2025, SeasonHalf.FIRST, rng=fixed_rng(u=0.99), roster=roster)
    assert first.cup.state is CompetitionState.ELIMINATED
    second = simulate_season_performance(p, 2025, SeasonHalf.SECOND, rng=SimRNG(3), roster=roster, previous=first)
    assert second.stats.cup.matches == 0
    assert second.stats.cup_status == "Eliminated in Round 3"
    assert "Domestic Cup Winner" not in second.trophies


def test_cup_run_is_not_carried_to_a_new_club(make_player, roster, quiet, fixed_rng, clubs):
    p = make_player(modifiers=quiet)
    first = simulate_season_performance(p, 2025, SeasonHalf.FIRST, rng=fixed_rng(u=0.99), roster=roster)
    p.current_club = clubs["eastvale"]
    second = simulate_season_performance(p, 2025, SeasonHalf.SECOND, rng=SimRNG(3), roster=roster, previous=first)
    assert second.stats.cup.matches >= 1


def test_continental_club_plays_in_europe(make_player, roster, quiet, clubs):
    p = make_player(modifiers=quiet, current_club=clubs["harbour"], current_ability=85)
    perf = simulate_season_performance(p, 2025, SeasonHalf.FIRST, rng=SimRNG(8), roster=roster)
    assert perf.stats.europe_competition == "Champions League"
    assert 2 <= perf.stats.europe.matches <= 6


def test_youth_contract_under_18_plays_u18(make_player, roster, quiet):
    p = make_player(modifiers=quiet, age=17, current_ability=50)
    p.contract.type = ContractType.YOUTH
    perf = simulate_season_performance(p, 2025, SeasonHalf.FULL, rng=SimRNG(2), roster=roster)
    s = perf.stats
    assert s.level is SeasonLevel.U18
    assert s.total.matches == 0
    assert s.youth.matches == 16
    assert s.cup.matches == 0


def test_strict_youth_modifier_keeps_under_21s_out(make_player, roster):
    from procareer.config import Modifiers
    p = make_player(modifiers=Modifiers(no_starts_under_21=True, injuries_off=True), age=19)
    perf = simulate_season_performance(p, 2025, SeasonHalf.FULL, rng=SimRNG(2), roster=roster)
    assert perf.stats.level is SeasonLevel.U21


def test_surplus_player_is_frozen_out(make_player, roster, quiet):
    p = make_player(modifiers=quiet, is_surplus=True)
    perf = simulate_season_performance(p, 2025, SeasonHalf.FULL, rng=SimRNG(4), roster=roster)
    assert "Frozen out of squad" in perf.events
    assert perf.stats.league.matches == 0
    assert perf.stats.youth.matches == 19


def test_summer_tournament_only_at_season_end(make_player, roster, quiet):
    p = make_player(modifiers=quiet, current_ability=80)
    nations = ["France", "Spain", "Brazil", "Japan"]
    first = simulate_season_performance(p, 2026, SeasonHalf.FIRST, rng=SimRNG(5), roster=roster,
                                        summer_tournament="World Cup", nations=nations)
    assert first.stats.international == StatSet()
    second = simulate_season_performance(p, 2026, SeasonHalf.SECOND, rng=SimRNG(5), roster=roster,
                                         previous=first, summer_tournament="World Cup", nations=nations)
    s = second.stats
    assert 3 <= s.international.matches <= 7
    assert s.international_breakdown["World Cup"] == s.international
    assert "Participated in World Cup" in second.events


def test_injury_weeks_capped_in_half_seasons(make_player):
    p = make_player(injury_prone=20, fatigue=90)
    # hit, then an ACL-grade severity roll
    full = roll_injury(p, SeasonHalf.FULL, rng=SeqRNG([0.0, 0.95]))
    half = roll_injury(p, SeasonHalf.SECOND, rng=SeqRNG([0.0, 0.95]))
    assert full.weeks == 24 and full.headline == "Serious Injury: ACL Tear"
    assert half.weeks == 12
    minor = roll_injury(p, SeasonHalf.FULL, rng=SeqRNG([0.0, 0.1]))
    assert minor.weeks == 2 and minor.headline is None
    assert roll_injury(p, SeasonHalf.FULL, rng=SeqRNG([0.999])) is None


def test_injury_risk_and_availability():
    assert injury_risk(10, 50) == 10 * 0.5 + 50 * 0.8
    assert injury_risk(10, 90) == (10 * 0.5 + 90 * 0.8) * 1.5
    assert availability(0) == 1.0
    assert availability(12) == 0.5
    assert availability(30) == 0.0


def test_no_negative_or_nan_output(make_player, roster):
    for seed in range(30):
        p = make_player(current_ability=40 + seed, fatigue=seed * 3, injury_prone=15)
        for half in SeasonHalf:
            s = simulate_season_performance(p, 2025, half, rng=SimRNG(seed), roster=roster).stats
            for bucket in (s.total, s.youth, s.league, s.cup, s.europe):
                assert bucket.matches >= 0 and bucket.goals >= 0
                assert bucket.rating == bucket.rating
            assert s.weeks_out >= 0
