# procareer/match.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .generator import clamp, generate_stat_set
from .rng import SimRNG
from .types import Player, Position, StatSet

DEFENSIVE = (Position.GK, Position.DEF)


@dataclass(frozen=True)
class MatchResult:
    my_score: int
    opp_score: int
    stats: StatSet
    extra_time: bool = False

    @property
    def won(self) -> bool:
        return self.my_score > self.opp_score

    @property
    def lost(self) -> bool:
        return self.my_score < self.opp_score

    @property
    def scoreline(self) -> str:
        return f"{self.my_score}-{self.opp_score}" + (" (aet)" if self.extra_time else "")


def win_probability(my_strength: float, opp_strength: float) -> float:
    return clamp(0.5 + (my_strength - opp_strength) * 0.015, 0.1, 0.9)


def _scoreline(win_p: float, rng: SimRNG) -> tuple[int, int]:
    if rng.uniform() < win_p:
        mine = rng.rand_int(1, 3)
        return mine, rng.rand_int(0, mine - 1)
    if rng.uniform() < 0.3:
        level = rng.rand_int(0, 2)
        return level, level
    theirs = rng.rand_int(1, 3)
    return rng.rand_int(0, theirs - 1), theirs


def _nudge_rating(stats: StatSet, position: Position, my_score: int, opp_score: int) -> float:
    r = stats.rating
    if stats.goals > 0 and r < 7.5:
        r += 1.0
    if stats.assists > 0 and r < 7.0:
        r += 0.5
    if stats.clean_sheets > 0 and position in DEFENSIVE and r < 7.0:
        r += 0.5

    if opp_score > my_score + 2:
        r -= 1.0
    elif opp_score > my_score:
        r -= 0.3
    if my_score > opp_score:
        r += 0.3
    return clamp(round(r, 2), 5.0, 10.0)


def simulate_match(player: Player, opponent_strength: float, *, rng: SimRNG,
                   extra_time_possible: bool = False, team_strength: Optional[float] = None) -> MatchResult:
    """
    One fixture with a real scoreline.

    The generic one-match stat line is produced first, then bent to fit the
    score: no more goals than the team scored, clean sheets only when nothing
    was conceded, and a rating nudge for the result.
    """
    mine_strength = player.current_club.strength if team_strength is None else team_strength
    my_score, opp_score = _scoreline(win_probability(mine_strength, opponent_strength), rng)

    minutes = rng.rand_int(60, 90)
    went_long = False
    if extra_time_possible and my_score == opp_score:
        minutes += 30
        went_long = True
        if rng.uniform() < 0.5:
            my_score += 1
        else:
            opp_score += 1

    stats = generate_stat_set(1, player.current_ability, player.position, opponent_strength, rng=rng)
    stats = replace(stats, minutes=minutes, starts=1, goals=min(stats.goals, my_score))

    if opp_score > 0:
        stats = replace(stats, clean_sheets=0)
    elif player.position in DEFENSIVE:
        stats = replace(stats, clean_sheets=1)

    rating = _nudge_rating(stats, player.position, my_score, opp_score)
    stats = replace(stats, rating=rating, motm=1 if rating > 8.5 else 0)
    return MatchResult(my_score=my_score, opp_score=opp_score, stats=stats, extra_time=went_long)
