import pytest

from procareer.competitions import (
    CompetitionProgress, CompetitionState, advance, continental_cup, continental_name,
    domestic_cup, enter, not_entered,
)
from procareer.config import CUP_ROUNDS

def test_domestic_cup_enters_at_round_three():
    cup = domestic_cup()
    assert cup.state is CompetitionState.ACTIVE
    assert cup.label() == "Round 3 (Active)"

def test_always_advancing_wins_the_full_season(fixed_rng):
    out = advance(domestic_cup(), 80, mid_season=False, rng=fixed_rng(u=0.0))
    assert out.state is CompetitionState.WINNER
    assert out.label() == "Winner"

def test_first_half_stops_at_quarter_final(fixed_rng):
    out = advance(domestic_cup(), 80, mid_season=True, rng=fixed_rng(u=0.0))
    assert out.state is CompetitionState.ACTIVE
    assert out.label() == "Quarter Final (Active)"
    # and picks up from there in the second half
    done = advance(out, 80, mid_season=False, rng=fixed_rng(u=0.0))
    assert done.state is CompetitionState.WINNER

def test_losing_the_first_tie_eliminates(fixed_rng):
    out = advance(domestic_cup(), 80, mid_season=False, rng=fixed_rng(u=0.99))
    assert out.state is CompetitionState.ELIMINATED
    assert out.label() == "Eliminated in Round 3"

def test_terminal_and_unentered_are_untouched(rng):
    won = CompetitionProgress(tuple(CUP_ROUNDS), CompetitionState.WINNER, len(CUP_ROUNDS) - 1)
    out = CompetitionProgress(tuple(CUP_ROUNDS), CompetitionState.ELIMINATED, 3)
    none = not_entered(CUP_ROUNDS)
    for p in (won, out, none):
        assert advance(p, 99, mid_season=False, rng=rng) == p
    assert none.label() == "Not Qualified"

def test_bad_entry_round():
    with pytest.raises(ValueError):
        enter(CUP_ROUNDS, "Round 9")
    with pytest.raises(ValueError):
        enter(CUP_ROUNDS, "Winner")

def test_continental_entry_by_tier(clubs):
    assert continental_cup(clubs["northbridge"]).state is CompetitionState.NOT_ENTERED
    europe = continental_cup(clubs["harbour"])
    assert europe.label() == "Group Stage (Active)"
    assert continental_name(clubs["harbour"]) == "Champions League"

def test_progress_dict_round_trip(rng):
    p = advance(domestic_cup(), 70, mid_season=True, rng=rng)
    assert CompetitionProgress.from_dict(p.to_dict()) == p
