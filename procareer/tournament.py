# procareer/tournament.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .config import (
    ELITE_NATION_STRENGTH, ELITE_NATIONS, NATION_STRENGTH,
    SELECTION_ABILITY, U21_SELECTION_ABILITY,
)
from .match import MatchResult, simulate_match
from .rng import SimRNG
from .stats import merge
from .types import Player, StatSet

KNOCKOUT_STAGES: Tuple[str, ...] = ("Round of 16", "Quarter Final", "Semi Final", "Final")
GROUP_STAGE = "Group Stage"
GROUP_MATCHES = 3
GROUP_QUALIFIERS = 2


def nation_strength(nation: str) -> int:
    return ELITE_NATION_STRENGTH if nation in ELITE_NATIONS else NATION_STRENGTH


def is_selected(player: Player, tournament: str) -> bool:
    """Call-up rule: senior tournaments want 60+, youth ones 50+."""
    threshold = U21_SELECTION_ABILITY if "U21" in tournament else SELECTION_ABILITY
    return player.current_ability >= threshold


@dataclass
class GroupRow:
    name: str
    p: int = 0
    w: int = 0
    d: int = 0
    l: int = 0
    gd: int = 0
    pts: int = 0

    def record(self, scored: int, conceded: int) -> None:
        self.p += 1
        self.gd += scored - conceded
        if scored > conceded:
            self.w += 1
            self.pts += 3
        elif scored == conceded:
            self.d += 1
            self.pts += 1
        else:
            self.l += 1


@dataclass
class TournamentResult:
    name: str
    stats: StatSet
    stage_reached: str
    won: bool
    trophies: List[str] = field(default_factory=list)
    events: List[str] = field(default_factory=list)
    fixtures: List[Tuple[str, str, MatchResult]] = field(default_factory=list)   # (stage, opponent, result)


def _opponent_pool(player: Player, nations: Sequence[str]) -> List[str]:
    pool = [n for n in nations if n != player.nationality]
    if not pool:
        pool = [f"Nation {chr(65 + i)}" for i in range(GROUP_MATCHES)]
    return pool


def simulate_tournament(player: Player, name: str, nations: Sequence[str], *, rng: SimRNG,
                        team_strength: Optional[float] = None) -> TournamentResult:
    """
    Summer international tournament: three group games (top two of four go
    through), then single knockout ties with extra time until a loss or the final.
    """
    pool = _opponent_pool(player, nations)
    group_opps = rng.shuffled(pool)[:GROUP_MATCHES]
    while len(group_opps) < GROUP_MATCHES:
        group_opps.append(rng.pick(pool))

    me = GroupRow(player.nationality)
    table = {player.nationality: me}
    for opp in group_opps:
        table.setdefault(opp, GroupRow(opp))

    stats = StatSet()
    fixtures: List[Tuple[str, str, MatchResult]] = []

    def play(stage: str, opp: str, knockout: bool) -> MatchResult:
        nonlocal stats
        res = simulate_match(player, nation_strength(opp), rng=rng,
                             extra_time_possible=knockout, team_strength=team_strength)
        stats = merge(stats, res.stats)
        fixtures.append((stage, opp, res))
        return res

    for opp in group_opps:
        res = play(GROUP_STAGE, opp, False)
        me.record(res.my_score, res.opp_score)
        table[opp].record(res.opp_score, res.my_score)

    ranked = sorted(table.values(), key=lambda r: (r.pts, r.gd), reverse=True)
    stage_reached = GROUP_STAGE
    won = False
    events = [f"Participated in {name}"]

    if ranked.index(me) < GROUP_QUALIFIERS:
        for stage in KNOCKOUT_STAGES:
            stage_reached = stage
            res = play(stage, rng.pick(pool), True)
            if res.lost:
                break
        else:
            won = True
            stage_reached = "Winner"

    trophies: List[str] = []
    if won:
        trophies.append(f"{name} Winner")
        events.append(f"Won the {name}!")
    elif stage_reached == "Final":
        events.append(f"Runner-up in {name}")
    if stats.goals >= 5:
        events.append(f"{name} Golden Boot Contender")
    if stats.rating > 8.0:
        events.append(f"{name} Best Player Contender")

    return TournamentResult(
        name=name, stats=stats, stage_reached=stage_reached, won=won,
        trophies=trophies, events=events, fixtures=fixtures,
    )
