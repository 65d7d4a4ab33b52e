import pytest

from procareer.career import (
    Career, finalize_season, merge_season_stats, must_retire, new_player,
)
from procareer.config import Modifiers
from procareer.rng import SimRNG
from procareer.season import simulate_season_performance
from procareer.types import (
    ContractType, GameConfig, Offer, OfferType, Position, Role, SeasonHalf, SeasonStats, StatSet,
)

def test_three_seasons_advance_age_year_and_history(roster):
    car = Career.new("Alex", 17, "England", Position.MID, roster=roster, seed=42, year=2025)
    for i in range(3):
        out = car.play_season()
        assert out.record.year == 2025 + i
        assert out.record.age == 17 + i
        assert out.narrative
    assert car.year == 2028
    assert car.player.age == 20
    assert len(car.player.history) == 3
    assert not car.in_winter_window
    assert car.world_tables

def test_same_seed_same_career(roster):
    a = Career.new("Sam", 16, "England", Position.FWD, roster=roster, seed=7)
    b = Career.new("Sam", 16, "England", Position.FWD, roster=roster, seed=7)
    for _ in range(2):
        a.play_season()
        b.play_season()
    assert a.to_dict() == b.to_dict()

def test_winter_window_save_resumes_identically(roster):
    car = Career.new("Jo", 19, "England", Position.DEF, roster=roster, seed=11)
    car.play_first_half()
    assert car.in_winter_window
    restored = Career.from_dict(car.to_dict())
    assert restored.to_dict() == car.to_dict()
    assert restored.in_winter_window

    mine = car.play_second_half()
    theirs = restored.play_second_half()
    assert mine.record.to_dict() == theirs.record.to_dict()
    assert car.player.to_dict() == restored.player.to_dict()

def test_halves_must_run_in_order(roster):
    car = Career.new("Kim", 18, "England", Position.GK, roster=roster, seed=3)
    with pytest.raises(ValueError):
        car.play_second_half()
    car.play_first_half()
    with pytest.raises(ValueError):
        car.play_first_half()

def test_retired_career_does_not_play(roster):
    car = Career.new("Lee", 36, "England", Position.GK, roster=roster, seed=3)
    car.retire()
    with pytest.raises(ValueError):
        car.play_season()

def test_loan_returns_to_parent_club(make_player, roster, clubs):
    p = make_player(modifiers=Modifiers(injuries_off=True))
    car = Career(player=p, roster=roster, seed=5, year=2025)
    car.sign(Offer(id="l", type=OfferType.LOAN, club=clubs["kestrel"], wage=1000, years=1,
                   transfer_fee=0, description="", negotiable=False, promised_role=Role.STAR))
    out = car.play_season()
    assert out.record.is_loan
    assert out.record.club.name == "Kestrel FC"
    assert car.player.current_club.name == "Northbridge City"
    assert car.player.parent_club is None

def test_contract_runs_down_each_season(make_player, roster):
    p = make_player(modifiers=Modifiers(injuries_off=True))
    p.contract.yearly_wage_rise = 10.0
    car = Career(player=p, roster=roster, seed=5, year=2025)
    car.play_season()
    assert car.player.contract.years_left == 2
    assert car.player.contract.wage == 1100
    assert car.player.contract.expiry_year == 2028

def test_finalize_collects_cabinets_and_market_value(make_player, roster):
    p = make_player(modifiers=Modifiers(injuries_off=True, random_life_events=False), current_ability=82)
    first = simulate_season_performance(p, 2025, SeasonHalf.FIRST, rng=SimRNG(1), roster=roster)
    second = simulate_season_performance(p, 2025, SeasonHalf.SECOND, rng=SimRNG(2), roster=roster, previous=first)
    out = finalize_season(p, 2025, first, second, rng=SimRNG(3))
    assert p.age == 21
    assert p.trophy_cabinet == second.trophies
    assert p.awards_cabinet == out.awards
    assert out.record.stats.total.matches == first.stats.total.matches + second.stats.total.matches
    assert out.record.events == first.events + second.events
    assert p.market_value >= 25_000
    assert p.history == [out.record]

def test_merge_season_stats_takes_status_from_second_half():
    a = SeasonStats(total=StatSet(matches=10, starts=9, minutes=800, rating=7.0), cup_status="Quarter Final (Active)",
                    injuries=["Ankle Sprain (2 weeks)"], weeks_out=2)
    b = SeasonStats(total=StatSet(matches=10, starts=9, minutes=800, rating=6.0), cup_status="Winner")
    m = merge_season_stats(a, b)
    assert m.total.matches == 20 and m.total.rating == pytest.approx(6.5)
    assert m.cup_status == "Winner"
    assert m.injuries == ["Ankle Sprain (2 weeks)"] and m.weeks_out == 2

def test_forced_retirement_threshold(make_player):
    assert not must_retire(make_player(fatigue=110))
    assert must_retire(make_player(fatigue=111))

def test_new_player_rolls_in_range(roster):
    for seed in range(40):
        p = new_player("Gen", 16, "England", Position.MID, roster=roster, rng=SimRNG(seed), year=2025)
        assert 35 <= p.current_ability <= 70
        assert p.potential_ability >= min(99, p.current_ability + 20)
        assert p.potential_ability <= 99
        assert 50 <= p.natural_fitness <= 99
        assert 1 <= p.injury_prone <= 15
        assert p.contract.type is ContractType.YOUTH
        assert p.contract.wage == 100 and p.contract.expiry_year == 2028
        assert p.contract.promised_role is Role.YOUTH
        assert p.current_club.name in {c.name for c in roster}
        assert p.market_value >= 25_000

def test_new_player_honours_config(roster, clubs):
    cfg = GameConfig(starting_ability=60, potential_ability=90, injury_proneness=3,
                     starting_club=clubs["kestrel"], modifiers=Modifiers(no_transfers=True))
    p = new_player("Cfg", 18, "Spain", Position.DEF, roster=roster, rng=SimRNG(1), config=cfg)
    assert (p.current_ability, p.potential_ability, p.injury_prone) == (60, 90, 3)
    assert p.current_club.name == "Kestrel FC"
    assert p.modifiers.no_transfers

def test_empty_roster_cannot_place_a_player():
    from procareer.roster import ClubRoster
    with pytest.raises(ValueError):
        new_player("Nobody", 16, "England", Position.FWD, roster=ClubRoster(), rng=SimRNG(1))

def test_expired_contract_gets_no_wage_rise(make_player, roster):
    p = make_player(modifiers=Modifiers(injuries_off=True, random_life_events=False))
    p.contract.years_left = 0
    p.contract.yearly_wage_rise = 10.0
    first = simulate_season_performance(p, 2025, SeasonHalf.FIRST, rng=SimRNG(1), roster=roster)
    second = simulate_season_performance(p, 2025, SeasonHalf.SECOND, rng=SimRNG(2), roster=roster, previous=first)
    finalize_season(p, 2025, first, second, rng=SimRNG(3))
    assert p.contract.wage == 1000
    assert p.contract.years_left == 0
    assert p.contract.expiry_year == 0

def test_top_four_finish_carries_into_next_season(make_player, roster):
    from dataclasses import replace
    from procareer.types import ContinentalTier, LeagueRow
    p = make_player(modifiers=Modifiers(injuries_off=True, random_life_events=False))
    assert p.current_club.continental_tier is ContinentalTier.NONE
    first = simulate_season_performance(p, 2025, SeasonHalf.FIRST, rng=SimRNG(1), roster=roster)
    second = simulate_season_performance(p, 2025, SeasonHalf.SECOND, rng=SimRNG(2), roster=roster, previous=first)
    third = LeagueRow(3, "Northbridge City", 38, 22, 8, 8, 25, 74, is_player_club=True)
    second = replace(second, league_table=[third])
    finalize_season(p, 2025, first, second, roster=roster, rng=SimRNG(3))
    assert p.current_club.continental_tier is ContinentalTier.CHAMPIONS
    nxt = simulate_season_performance(p, 2026, SeasonHalf.FIRST, rng=SimRNG(4), roster=roster)
    assert nxt.stats.europe_competition == "Champions League"
    assert nxt.stats.europe_status != "Not Qualified"
